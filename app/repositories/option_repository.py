"""시스템 파라미터 레포지토리.

Option Repository — Queries for the global sys_options table.
"""

from typing import Iterable

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.option import Option
from app.repositories.base import BaseRepository


class OptionRepository(BaseRepository[Option]):
    """시스템 파라미터 테이블 레포지토리 (Repository for sys_options)."""

    def __init__(self) -> None:
        super().__init__(Option)

    async def get_by_codes(
        self,
        db: AsyncSession,
        codes: Iterable[str] | None = None,
    ) -> list[Option]:
        """코드 목록으로 파라미터를 조회합니다. None이면 전체 조회.

        Retrieve options whose code is in ``codes`` (all options when
        ``codes`` is None), ordered by code.
        """
        query: Select = select(Option)
        if codes is not None:
            code_list: list[str] = list(codes)
            if not code_list:
                return []
            query = query.where(Option.code.in_(code_list))
        result = await db.execute(query.order_by(Option.code))
        return list(result.scalars().all())


# 싱글턴 인스턴스 — Singleton instance
option_repository: OptionRepository = OptionRepository()
