"""작업 로그 SQLAlchemy ORM 모델 정의.

Operation log SQLAlchemy ORM model definition.
One row per API request, written by OperationLogMiddleware.

Tables:
    - sys_log: 작업 로그 (Operation log)
"""

import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Text, DateTime, Integer, BigInteger, Uuid, Enum
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class LogLevel(str, enum.Enum):
    """로그 레벨 — Log level of an operation log entry."""

    INFO = "INFO"
    ERROR = "ERROR"


class OperationLog(Base):
    """작업 로그 모델 — 요청/응답 기록.

    Operation log model — Records a single request/response exchange.
    Headers and bodies are stored masked and truncated.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        organization_id: 요청자 조직 (Caller's organization, from JWT; NULL if anonymous)
        level: 로그 레벨 (INFO or ERROR)
        description: 작업 설명 (Operation description, from route summary)
        module: 모듈 이름 (Module name, from router tag)
        request_url: 요청 URL (Full request URL)
        request_method: HTTP 메서드 (HTTP method)
        request_headers: 요청 헤더 JSON (Masked request headers as JSON)
        request_body: 요청 본문 (Masked request body)
        status_code: 응답 상태 코드 (Response status code)
        response_headers: 응답 헤더 JSON (Response headers as JSON)
        response_body: 응답 본문 (Truncated response body)
        elapsed_time: 처리 시간 ms (Elapsed time in milliseconds)
        request_ip: 요청 IP (Client IP address)
        location: 위치 (Location; "Intranet IP" for private addresses)
        browser: 브라우저 (User-Agent)
        exception: 예외 정보 (Exception detail when the handler raised)
        created_by: 요청자 UUID (Caller user id, from JWT)
        created_at: 기록 일시 UTC (Timestamp)
    """

    __tablename__ = "sys_log"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    organization_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True, index=True)
    level: Mapped[LogLevel] = mapped_column(Enum(LogLevel, name="log_level", native_enum=False, length=10), default=LogLevel.INFO)
    description: Mapped[str | None] = mapped_column(String(255), nullable=True)
    module: Mapped[str | None] = mapped_column(String(100), nullable=True)
    request_url: Mapped[str] = mapped_column(String(512), nullable=False)
    request_method: Mapped[str] = mapped_column(String(10), nullable=False)
    request_headers: Mapped[str | None] = mapped_column(Text, nullable=True)
    request_body: Mapped[str | None] = mapped_column(Text, nullable=True)
    status_code: Mapped[int] = mapped_column(Integer, nullable=False)
    response_headers: Mapped[str | None] = mapped_column(Text, nullable=True)
    response_body: Mapped[str | None] = mapped_column(Text, nullable=True)
    elapsed_time: Mapped[int] = mapped_column(BigInteger, default=0)
    request_ip: Mapped[str | None] = mapped_column(String(64), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    browser: Mapped[str | None] = mapped_column(String(255), nullable=True)
    exception: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), index=True)
