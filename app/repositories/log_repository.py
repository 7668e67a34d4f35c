"""작업 로그 레포지토리 — 로그 기록 및 검색 쿼리.

Operation Log Repository — Insert and filtered, paginated search over
the sys_log table.
"""

from datetime import datetime
from typing import Any, Sequence
from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.log import LogLevel, OperationLog
from app.repositories.base import BaseRepository
from app.utils.pagination import paginate


class LogRepository(BaseRepository[OperationLog]):
    """작업 로그 테이블 레포지토리 (Repository for sys_log)."""

    def __init__(self) -> None:
        super().__init__(OperationLog)

    async def search(
        self,
        db: AsyncSession,
        organization_id: UUID,
        filters: dict[str, Any],
        page: int = 1,
        per_page: int = 20,
    ) -> tuple[Sequence[OperationLog], int]:
        """조건에 맞는 작업 로그를 최신순으로 페이지 조회합니다.

        Search operation logs of an organization, newest first.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            organization_id: 조직 ID (Organization UUID)
            filters: description, module, level, request_ip, created_by,
                     start_time, end_time (None 값은 무시, None values ignored)
            page: 페이지 번호 (Page number, 1-based)
            per_page: 페이지 크기 (Page size)

        Returns:
            tuple[Sequence[OperationLog], int]: (로그 목록, 전체 개수)
        """
        query: Select = select(OperationLog).where(OperationLog.organization_id == organization_id)

        description: str | None = filters.get("description")
        if description:
            query = query.where(OperationLog.description.ilike(f"%{description}%"))
        module: str | None = filters.get("module")
        if module:
            query = query.where(OperationLog.module == module)
        level: LogLevel | None = filters.get("level")
        if level is not None:
            query = query.where(OperationLog.level == level)
        request_ip: str | None = filters.get("request_ip")
        if request_ip:
            query = query.where(OperationLog.request_ip.ilike(f"%{request_ip}%"))
        created_by: UUID | None = filters.get("created_by")
        if created_by is not None:
            query = query.where(OperationLog.created_by == created_by)
        start_time: datetime | None = filters.get("start_time")
        if start_time is not None:
            query = query.where(OperationLog.created_at >= start_time)
        end_time: datetime | None = filters.get("end_time")
        if end_time is not None:
            query = query.where(OperationLog.created_at <= end_time)

        query = query.order_by(OperationLog.created_at.desc())
        return await paginate(db, query, page, per_page)


# 싱글턴 인스턴스 — Singleton instance
log_repository: LogRepository = LogRepository()
