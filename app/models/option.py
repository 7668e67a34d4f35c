"""시스템 파라미터(옵션) SQLAlchemy ORM 모델 정의.

System option (parameter) SQLAlchemy ORM model definition.
Options are global key/value pairs with a default; a NULL value means
the default applies.

Tables:
    - sys_options: 시스템 파라미터 (System parameters)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Text, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Option(Base):
    """시스템 파라미터 모델.

    System parameter model.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        code: 파라미터 키 (Unique parameter key, e.g. "SITE_TITLE")
        name: 표시 이름 (Display name)
        value: 설정값, NULL이면 기본값 사용 (Override value, NULL = use default)
        default_value: 기본값 (Default value)
        description: 설명 (Description)
        updated_by: 수정자 UUID (Last modifier user id)
        updated_at: 수정 일시 UTC (Last update timestamp)
    """

    __tablename__ = "sys_options"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    code: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    value: Mapped[str | None] = mapped_column(Text, nullable=True)
    default_value: Mapped[str | None] = mapped_column(Text, nullable=True)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)
    updated_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, onupdate=lambda: datetime.now(timezone.utc))

    @property
    def effective_value(self) -> str | None:
        """설정값이 없으면 기본값을 반환합니다 (Value, falling back to the default)."""
        return self.value if self.value is not None else self.default_value
