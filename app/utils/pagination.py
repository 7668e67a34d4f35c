"""페이지 단위 조회 헬퍼.

Page envelope and count-then-slice helper for list endpoints that can
grow without bound (operation logs).
"""

import math
from typing import Any, Generic, Sequence, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class Page(BaseModel, Generic[T]):
    """한 페이지 분량의 결과.

    Attributes:
        items: 이 페이지의 항목 (Rows on this page)
        total: 필터에 맞는 전체 행 수 (Matching rows across all pages)
        page: 1부터 시작하는 페이지 번호
        per_page: 페이지 크기 (Page size)
        pages: 전체 페이지 수, 결과가 없으면 0
    """

    items: list[T]
    total: int
    page: int
    per_page: int
    pages: int

    @classmethod
    def build(cls, items: list[T], total: int, page: int, per_page: int) -> "Page[T]":
        pages: int = math.ceil(total / per_page) if per_page > 0 else 0
        return cls(items=items, total=total, page=page, per_page=per_page, pages=pages)


async def paginate(
    db: AsyncSession,
    query: Select[Any],
    page: int = 1,
    per_page: int = 20,
) -> tuple[Sequence[Any], int]:
    """쿼리의 전체 개수와 요청한 페이지의 행을 함께 반환합니다.

    Returns ``(rows, total)``. Ordering is dropped for the count so the
    database does not sort rows it only counts.
    """
    unordered = query.order_by(None).subquery()
    total: int = (await db.execute(select(func.count()).select_from(unordered))).scalar() or 0

    window = query.offset(max(page - 1, 0) * per_page).limit(per_page)
    rows: Sequence[Any] = (await db.execute(window)).scalars().all()
    return rows, total
