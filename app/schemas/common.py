"""
Common Response Schemas
"""
import re
from typing import Any

from atams.schemas import ResponseBase, DataResponse, PaginationResponse

_PG_SHORT_TZ = re.compile(r'([+-]\d{2})$')


def fix_pg_timezone(v: Any) -> Any:
    """
    Fix datetime timezone format from PostgreSQL
    PostgreSQL returns: '2025-10-01 09:17:39.587802+00'
    Pydantic expects: '2025-10-01 09:17:39.587802+00:00'
    """
    if v == '' or v is None:
        return None

    if isinstance(v, str) and _PG_SHORT_TZ.search(v):
        v = v + ':00'

    return v


def page_meta(total: int, skip: int, limit: int) -> dict:
    """Pagination fields for PaginationResponse"""
    return {
        "total": total,
        "page": skip // limit + 1,
        "size": limit,
        "pages": (total + limit - 1) // limit,
    }


__all__ = [
    "ResponseBase",
    "DataResponse",
    "PaginationResponse",
    "fix_pg_timezone",
    "page_meta",
]
