# church_admin/services/listing.py
"""
Shared list plumbing for every collection endpoint.

Filtering is built by each service as a list of SQLAlchemy conditions (the
same `conds` style the routers always used); this module only turns those
conditions plus a sort order into a page of rows and a total count.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from fastapi import HTTPException, status
from sqlalchemy import func, select
from sqlalchemy.orm import Session

SORT_DIRECTIONS = ("asc", "desc")
MAX_PAGE_SIZE = 200


@dataclass
class ListParams:
    page: int = 1
    page_size: int = 10
    sort: Optional[str] = None        # "field:direction"
    sort_by: Optional[str] = None
    sort_order: Optional[str] = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def parse_sort(
    params: ListParams,
    default_field: str = "createdAt",
    default_direction: str = "desc",
) -> Tuple[str, str]:
    """Return (field, direction). `sort` wins over `sortBy`/`sortOrder`."""
    if params.sort:
        field, _, direction = params.sort.partition(":")
        direction = direction or "asc"
    elif params.sort_by:
        field, direction = params.sort_by, (params.sort_order or "asc")
    else:
        return default_field, default_direction

    direction = direction.strip().lower()
    if direction not in SORT_DIRECTIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid sort direction: {direction}",
        )
    return field.strip(), direction


def order_by_clause(model, columns: Dict[str, Any], params: ListParams) -> List[Any]:
    field, direction = parse_sort(params)
    col = columns.get(field)
    if col is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid sort field: {field}",
        )
    if direction == "desc":
        return [col.desc(), model.id.desc()]
    return [col.asc(), model.id.asc()]


def date_range(
    column,
    start: Optional[Union[date, datetime]],
    end: Optional[Union[date, datetime]],
) -> List[Any]:
    conds = []
    if start is not None:
        conds.append(column >= start)
    if end is not None:
        conds.append(column <= end)
    return conds


def contains(column, value: Optional[str]) -> List[Any]:
    if not value:
        return []
    return [column.icontains(value, autoescape=True)]


def equals(column, value: Any) -> List[Any]:
    if value is None:
        return []
    return [column == value]


def paginate(
    db: Session,
    model,
    conds: Sequence[Any],
    order_by: Sequence[Any],
    params: ListParams,
    options: Iterable[Any] = (),
) -> Tuple[List[Any], int]:
    """Run the page query and a separate count under the same predicate."""
    total = db.execute(
        select(func.count()).select_from(model).where(*conds)
    ).scalar_one()

    stmt = (
        select(model)
        .options(*options)
        .where(*conds)
        .order_by(*order_by)
        .offset(params.offset)
        .limit(params.page_size)
    )
    rows = db.execute(stmt).unique().scalars().all()
    return list(rows), int(total)


def page_envelope(data: List[Any], total: int, params: ListParams) -> Dict[str, Any]:
    return {
        "data": data,
        "total": total,
        "page": params.page,
        "page_size": params.page_size,
        "total_pages": math.ceil(total / params.page_size) if params.page_size else 0,
    }
