"""Page/limit windowing over repository queries."""

from typing import Any

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10


def page_window(page: int, limit: int) -> tuple[int, int]:
    """Translate a 1-based page and page size into (offset, limit)."""
    if page < 1 or limit < 1:
        raise ValueError("page and limit must be numbers greater than 0")
    return (page - 1) * limit, limit


def paginate(query, page: int = DEFAULT_PAGE, limit: int = DEFAULT_LIMIT):
    """Return one page of a Protean queryset as a ResultSet (`items`, `total`)."""
    offset, limit = page_window(page, limit)
    return query.offset(offset).limit(limit).all()


def page_links(path: str, page: int, limit: int) -> dict[str, Any]:
    """Previous/next links for a listing.

    `prev` is None on the first page. `next` always points one page ahead,
    even past the last record.
    """
    return {
        "current_page": page,
        "limit": limit,
        "prev": f"{path}?page={page - 1}&limit={limit}" if page > 1 else None,
        "next": f"{path}?page={page + 1}&limit={limit}",
    }
