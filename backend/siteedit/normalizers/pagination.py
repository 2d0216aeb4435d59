# siteedit/normalizers/pagination.py
from typing import Callable, Any, List, Dict


def normalize_pagination(
    items: List[Any],
    normalize_fn: Callable[[Any], Dict[str, Any]],
    *,
    total: int,
    limit: int,
    offset: int,
    key: str = "items",
) -> Dict[str, Any]:
    """
    Normalize offset-paginated API responses.

    `hasMore` is true when rows exist beyond this page.
    """

    # Normalize ORM objects → dicts
    normalized_items = [normalize_fn(item) for item in items]

    return {
        key: normalized_items,
        "pagination": {
            "total": total,
            "limit": limit,
            "offset": offset,
            "hasMore": total > offset + limit,
        },
    }
