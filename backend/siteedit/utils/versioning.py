from siteedit.models.page_version import PageVersion


def snapshot_page(page, *, status, change_summary=None, created_by=None):
    """
    Record the page's current content as an immutable PageVersion.

    Must run before the content is replaced: the snapshot carries the
    version number of the content it preserves.
    """
    version = PageVersion()
    version.site_id = page.site_id
    version.page_id = page.id
    version.version = page.version or 1
    version.status = status
    version.snapshot = {
        "page": {
            "id": page.id,
            "title": page.title,
            "slug": page.slug,
        },
        "content": page.content,
    }
    version.change_summary = change_summary
    version.created_by = created_by
    return version


def next_version(page):
    return (page.version or 1) + 1
