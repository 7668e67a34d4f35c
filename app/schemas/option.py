"""시스템 파라미터 Pydantic 스키마 정의.

System option Pydantic schema definitions.
"""

from datetime import datetime

from pydantic import BaseModel, Field


class OptionResponse(BaseModel):
    """시스템 파라미터 응답 스키마.

    Option response schema. ``value`` is the effective value: the stored
    override, or the default when no override is set.
    """

    id: str
    code: str
    name: str
    value: str | None
    default_value: str | None
    description: str | None
    updated_at: datetime | None


class OptionValueUpdate(BaseModel):
    """단일 파라미터 값 변경 항목 (One code/value pair)."""

    code: str = Field(min_length=1, max_length=100)
    value: str | None = None


class OptionBatchUpdate(BaseModel):
    """파라미터 일괄 수정 요청 스키마 (Batch update request)."""

    options: list[OptionValueUpdate] = Field(min_length=1)


class OptionReset(BaseModel):
    """파라미터 기본값 복원 요청 스키마 (Reset-to-default request)."""

    codes: list[str] = Field(min_length=1)
