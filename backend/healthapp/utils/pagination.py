"""Pagination helpers shared by the list services."""
from typing import Any, Callable, Dict, Tuple

DEFAULT_LIMIT = 20
MAX_LIMIT = 100


def normalize_pagination(page: int = None, limit: int = None,
                         max_limit: int = MAX_LIMIT, default_limit: int = DEFAULT_LIMIT) -> Tuple[int, int]:
    """Clamp a 1-based page number and page size into their accepted ranges."""
    if page is None:
        page = 1
    if limit is None:
        limit = default_limit

    page = max(1, int(page))
    limit = min(max_limit, max(1, int(limit)))
    return page, limit


def paginate_query(query, page: int, limit: int):
    """Apply pagination to a SQLAlchemy query and return the Flask-SQLAlchemy pagination object."""
    return query.paginate(
        page=page,
        per_page=limit,
        error_out=False  # Return empty list instead of 404 for out-of-range pages
    )


def paginated_response(pagination, serialize: Callable[[Any], Dict[str, Any]]) -> Dict[str, Any]:
    return {
        'items': [serialize(item) for item in pagination.items],
        'page': pagination.page,
        'limit': pagination.per_page,
        'total': pagination.total,
        'total_pages': pagination.pages
    }
