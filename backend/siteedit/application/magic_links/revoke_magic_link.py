from siteedit.models.magic_link import MagicLink
from siteedit.models.site import Site
from siteedit.errors import Forbidden, NotFound
from siteedit.utils.audit import log_action
from siteedit.utils.transaction import transactional


def revoke_magic_link(
    *,
    site: Site,
    link_id: str,
    requesting_user_id: str,
) -> MagicLink:
    """
    Deactivate a magic link. Only the site owner may revoke, and a revoked
    link is never reactivated.
    """
    if not site.is_owned_by(requesting_user_id):
        raise Forbidden("Only the site owner can revoke links")

    link = MagicLink.query.filter_by(id=link_id, site_id=site.id).first()
    if not link:
        raise NotFound("Link not found")

    if not link.is_active:
        return link

    with transactional():
        link.is_active = False

        log_action(
            action="magic_link.revoke",
            entity_type="magic_link",
            entity_id=link.id,
            payload={"name": link.name, "usage_count": link.usage_count},
        )

    return link
