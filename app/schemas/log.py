"""작업 로그 Pydantic 스키마 정의.

Operation log Pydantic schema definitions.
"""

from datetime import datetime

from pydantic import BaseModel

from app.models.log import LogLevel


class OperationLogResponse(BaseModel):
    """작업 로그 목록 항목 스키마.

    Operation log list item (headers and bodies omitted).
    """

    id: str
    level: LogLevel
    description: str | None
    module: str | None
    request_method: str
    request_url: str
    status_code: int
    elapsed_time: int  # ms
    request_ip: str | None
    location: str | None
    browser: str | None
    created_by: str | None
    created_at: datetime


class OperationLogDetailResponse(OperationLogResponse):
    """작업 로그 상세 스키마 — 헤더/본문/예외 포함.

    Operation log detail including headers, bodies and exception.
    """

    request_headers: str | None
    request_body: str | None
    response_headers: str | None
    response_body: str | None
    exception: str | None
