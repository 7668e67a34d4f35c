"""시스템 파라미터 서비스 — 파라미터 조회/수정/기본값 복원.

Option Service — List, batch-update and reset-to-default of global
system parameters.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.option import Option
from app.repositories.option_repository import option_repository
from app.schemas.option import OptionResponse, OptionValueUpdate
from app.utils.exceptions import NotFoundError


class OptionService:
    """시스템 파라미터 비즈니스 로직 서비스 (Service for system options)."""

    def _to_response(self, option: Option) -> OptionResponse:
        return OptionResponse(
            id=str(option.id),
            code=option.code,
            name=option.name,
            value=option.effective_value,
            default_value=option.default_value,
            description=option.description,
            updated_at=option.updated_at,
        )

    async def _get_all_or_404(self, db: AsyncSession, codes: list[str]) -> dict[str, Option]:
        # 요청한 코드가 모두 존재해야 함 — Every requested code must exist
        options: list[Option] = await option_repository.get_by_codes(db, codes)
        by_code: dict[str, Option] = {o.code: o for o in options}
        missing: list[str] = [c for c in dict.fromkeys(codes) if c not in by_code]
        if missing:
            raise NotFoundError(f"Unknown option code: {', '.join(missing)}")
        return by_code

    async def list_options(
        self,
        db: AsyncSession,
        codes: list[str] | None = None,
    ) -> list[OptionResponse]:
        """파라미터 목록을 조회합니다. codes가 주어지면 해당 코드만.

        List options, optionally restricted to ``codes``.
        """
        options: list[Option] = await option_repository.get_by_codes(db, codes)
        return [self._to_response(o) for o in options]

    async def update_options(
        self,
        db: AsyncSession,
        user_id: UUID,
        items: list[OptionValueUpdate],
    ) -> list[OptionResponse]:
        """파라미터 값을 일괄 수정합니다.

        Batch-update option values. Nothing is written when any code is
        unknown.

        Raises:
            NotFoundError: 존재하지 않는 코드가 포함된 경우 (Unknown code)
        """
        codes: list[str] = [item.code for item in items]
        by_code: dict[str, Option] = await self._get_all_or_404(db, codes)

        for item in items:
            option: Option = by_code[item.code]
            option.value = item.value
            option.updated_by = user_id
        await db.flush()

        return [self._to_response(by_code[code]) for code in dict.fromkeys(codes)]

    async def reset_options(
        self,
        db: AsyncSession,
        user_id: UUID,
        codes: list[str],
    ) -> list[OptionResponse]:
        """파라미터 값을 기본값으로 복원합니다.

        Clear the stored value of the given options so their default
        applies again.

        Raises:
            NotFoundError: 존재하지 않는 코드가 포함된 경우 (Unknown code)
        """
        by_code: dict[str, Option] = await self._get_all_or_404(db, codes)
        for option in by_code.values():
            option.value = None
            option.updated_by = user_id
        await db.flush()

        return [self._to_response(by_code[code]) for code in dict.fromkeys(codes)]


# 싱글턴 인스턴스 — Singleton instance
option_service: OptionService = OptionService()
