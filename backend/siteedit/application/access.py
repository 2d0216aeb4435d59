# siteedit/application/access.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from siteedit.domain.capabilities import Capabilities
from siteedit.errors import Unauthorized
from siteedit.models.magic_link import MagicLink
from siteedit.models.site import Site
from .magic_links.validate_magic_link import validate_magic_link

OWNER = "owner"
MAGIC_LINK = "magic_link"


@dataclass(frozen=True)
class Access:
    """Who is making a request against a site, and what they may do."""
    access_type: str
    capabilities: Capabilities
    user_id: Optional[str] = None
    magic_link: Optional[MagicLink] = None

    @property
    def is_owner(self) -> bool:
        return self.access_type == OWNER

    @property
    def actor_id(self) -> Optional[str]:
        if self.magic_link is not None:
            return self.magic_link.id
        return self.user_id


def resolve_access(
    *,
    site: Site,
    token: Optional[str],
    user_id: Optional[str],
    now=None,
) -> Access:
    """
    Resolve a request to owner or magic-link access.

    A magic link token is tried first; when it does not validate, an owner
    session still grants access. Neither yields Unauthorized.
    """
    link_error: Optional[Unauthorized] = None

    if token:
        try:
            link = validate_magic_link(site_id=site.id, token=token, now=now)
            return Access(
                access_type=MAGIC_LINK,
                capabilities=link.capabilities,
                magic_link=link,
            )
        except Unauthorized as exc:
            link_error = exc

    if site.is_owned_by(user_id):
        return Access(
            access_type=OWNER,
            capabilities=Capabilities.owner(),
            user_id=str(user_id),
        )

    if link_error is not None:
        raise link_error
    raise Unauthorized("Unauthorized")
