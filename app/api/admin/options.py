"""관리자 시스템 파라미터 라우터.

Admin Option Router — List, batch-update and reset system parameters.

Permission Matrix:
    - 조회: Supervisor 이상
    - 수정/기본값 복원: Owner만
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_owner, require_supervisor
from app.database import get_db
from app.models.user import User
from app.schemas.option import OptionBatchUpdate, OptionReset, OptionResponse
from app.services.option_service import option_service

router: APIRouter = APIRouter(tags=["Options"])


@router.get("", response_model=list[OptionResponse], summary="List options")
async def list_options(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_supervisor)],
    code: Annotated[list[str] | None, Query()] = None,
) -> list[OptionResponse]:
    """시스템 파라미터 목록을 조회합니다 (``?code=A&code=B``로 필터)."""
    return await option_service.list_options(db, code)


@router.put("", response_model=list[OptionResponse], summary="Update options")
async def update_options(
    data: OptionBatchUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_owner)],
) -> list[OptionResponse]:
    """시스템 파라미터 값을 일괄 수정합니다. Owner만 가능."""
    result: list[OptionResponse] = await option_service.update_options(
        db, current_user.id, data.options
    )
    await db.commit()
    return result


@router.patch("/reset", response_model=list[OptionResponse], summary="Reset options")
async def reset_options(
    data: OptionReset,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_owner)],
) -> list[OptionResponse]:
    """시스템 파라미터를 기본값으로 복원합니다. Owner만 가능."""
    result: list[OptionResponse] = await option_service.reset_options(
        db, current_user.id, data.codes
    )
    await db.commit()
    return result
