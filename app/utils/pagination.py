from typing import Any, Dict
from math import ceil


def paginate(page: int, limit: int, total: int) -> Dict[str, Any]:
    """
    Create pagination metadata for a page of ``limit`` items out of ``total``
    """
    total_pages = ceil(total / limit) if limit > 0 else 0

    return {
        "currentPage": page,
        "totalPages": total_pages,
        "totalItems": total,
        "itemsPerPage": limit,
        "hasNext": page < total_pages,
        "hasPrev": page > 1
    }
