# ================================
# PAGINATION UTILITIES (utils/pagination.py)
# ================================

from typing import Dict, Any, Optional
from urllib.parse import parse_qsl, urlencode

from starlette.datastructures import URL

def _page_url(url: URL, page: int) -> str:
    params = [(key, value) for key, value in parse_qsl(url.query, keep_blank_values=True) if key != "page"]
    params.append(("page", str(page)))
    return f"{url.replace(query='')}?{urlencode(params)}"

def build_pagination(url: URL, page: int, per_page: int, total: int, count: int) -> Dict[str, Any]:
    """
    Build the links and meta blocks of a paginated response.

    Args:
        url: Request URL; its other query parameters are kept in the links
        page: Current page (1-based)
        per_page: Page size
        total: Number of matching rows across all pages
        count: Number of rows on the current page

    Returns:
        {"links": {...}, "meta": {...}}
    """
    last_page = max(1, (total + per_page - 1) // per_page)
    first_item: Optional[int] = (page - 1) * per_page + 1 if count else None
    last_item: Optional[int] = first_item + count - 1 if count else None

    return {
        "links": {
            "first": _page_url(url, 1),
            "last": _page_url(url, last_page),
            "prev": _page_url(url, page - 1) if page > 1 else None,
            "next": _page_url(url, page + 1) if page < last_page else None,
        },
        "meta": {
            "current_page": page,
            "from": first_item,
            "last_page": last_page,
            "path": str(url.replace(query="")),
            "per_page": per_page,
            "to": last_item,
            "total": total,
        },
    }
