"""작업 로그 서비스 — 로그 기록 및 조회.

Operation Log Service — Persists log entries produced by the operation
log middleware and serves the organization-scoped log views.
"""

from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.log import OperationLog
from app.repositories.log_repository import log_repository
from app.schemas.log import OperationLogDetailResponse, OperationLogResponse
from app.utils.exceptions import NotFoundError
from app.utils.pagination import Page


def _str_or_none(value: UUID | None) -> str | None:
    return str(value) if value is not None else None


class LogService:
    """작업 로그 비즈니스 로직 서비스 (Service for operation logs)."""

    def _to_response(self, log: OperationLog) -> OperationLogResponse:
        return OperationLogResponse(
            id=str(log.id),
            level=log.level,
            description=log.description,
            module=log.module,
            request_method=log.request_method,
            request_url=log.request_url,
            status_code=log.status_code,
            elapsed_time=log.elapsed_time,
            request_ip=log.request_ip,
            location=log.location,
            browser=log.browser,
            created_by=_str_or_none(log.created_by),
            created_at=log.created_at,
        )

    async def record(self, db: AsyncSession, entry: dict[str, Any]) -> OperationLog:
        """작업 로그 한 건을 저장합니다 (flush only; caller commits).

        Persist one operation log entry built by the middleware.
        """
        log: OperationLog = OperationLog(**entry)
        db.add(log)
        await db.flush()
        return log

    async def list_logs(
        self,
        db: AsyncSession,
        organization_id: UUID,
        filters: dict[str, Any],
        page: int = 1,
        per_page: int = 20,
    ) -> Page[OperationLogResponse]:
        """작업 로그를 필터 조건으로 페이지 조회합니다.

        Paginated, newest-first search over the organization's logs.
        """
        items, total = await log_repository.search(db, organization_id, filters, page, per_page)
        return Page[OperationLogResponse].build(
            [self._to_response(log) for log in items], total, page, per_page
        )

    async def get_log(
        self,
        db: AsyncSession,
        log_id: UUID,
        organization_id: UUID,
    ) -> OperationLogDetailResponse:
        """작업 로그 상세를 조회합니다.

        Raises:
            NotFoundError: 로그가 없거나 다른 조직의 로그일 때
                           (Missing, or owned by another organization)
        """
        log: OperationLog | None = await log_repository.get_by_id(db, log_id, organization_id)
        if log is None:
            raise NotFoundError("Log not found")

        return OperationLogDetailResponse(
            **self._to_response(log).model_dump(),
            request_headers=log.request_headers,
            request_body=log.request_body,
            response_headers=log.response_headers,
            response_body=log.response_body,
            exception=log.exception,
        )


# 싱글턴 인스턴스 — Singleton instance
log_service: LogService = LogService()
