"""관리자 작업 로그 라우터 — 작업 로그 검색 및 상세 조회.

Admin Operation Log Router — Search and detail views over the current
organization's operation logs. Owner only.
"""

from datetime import datetime
from typing import Annotated, Any
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_owner
from app.database import get_db
from app.models.log import LogLevel
from app.models.user import User
from app.schemas.log import OperationLogDetailResponse, OperationLogResponse
from app.services.log_service import log_service
from app.utils.pagination import Page

router: APIRouter = APIRouter(tags=["Logs"])


@router.get("", response_model=Page[OperationLogResponse], summary="List operation logs")
async def list_logs(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_owner)],
    description: str | None = None,
    module: str | None = None,
    level: LogLevel | None = None,
    request_ip: str | None = None,
    created_by: UUID | None = None,
    start_time: datetime | None = None,
    end_time: datetime | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    per_page: Annotated[int, Query(ge=1, le=100)] = 20,
) -> Page[OperationLogResponse]:
    """작업 로그를 최신순으로 페이지 조회합니다.

    Paginated operation log search, newest first.
    """
    filters: dict[str, Any] = {
        "description": description,
        "module": module,
        "level": level,
        "request_ip": request_ip,
        "created_by": created_by,
        "start_time": start_time,
        "end_time": end_time,
    }
    return await log_service.list_logs(db, current_user.organization_id, filters, page, per_page)


@router.get("/{log_id}", response_model=OperationLogDetailResponse, summary="Get operation log")
async def get_log(
    log_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_owner)],
) -> OperationLogDetailResponse:
    """작업 로그 상세(헤더/본문/예외 포함)를 조회합니다."""
    return await log_service.get_log(db, log_id, current_user.organization_id)
