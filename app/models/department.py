"""부서 SQLAlchemy ORM 모델 정의.

Department SQLAlchemy ORM model definition.
Departments form a per-organization hierarchy through a nullable
self-referencing parent_id (NULL = top-level department).

Tables:
    - departments: 조직 내 부서 (Hierarchical departments within an organization)
"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import String, Boolean, DateTime, Integer, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.database import Base

# 기본 정렬값 — Default sort weight for new departments
DEFAULT_DEPARTMENT_SORT: int = 999


class Department(Base):
    """부서 모델 — 조직 내 계층형 부서.

    Department model — Hierarchical organizational unit.
    Names are unique among siblings (same organization and same parent);
    the service layer enforces that rule before insert/update.

    Attributes:
        id: 고유 식별자 UUID (Unique identifier)
        organization_id: 소속 조직 FK (Parent organization foreign key)
        parent_id: 상위 부서 FK, 최상위는 NULL (Parent department, NULL for top-level)
        name: 부서 이름 (Department name)
        description: 설명 (Description, optional)
        sort: 정렬 순서 (Sort weight, ascending)
        is_active: 활성 상태 (Enabled flag)
        created_by: 생성자 UUID (Creator user id)
        updated_by: 수정자 UUID (Last modifier user id)
    """

    __tablename__ = "departments"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    organization_id: Mapped[uuid.UUID] = mapped_column(Uuid, ForeignKey("organizations.id", ondelete="CASCADE"), nullable=False, index=True)
    parent_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, ForeignKey("departments.id", ondelete="CASCADE"), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(30), nullable=False)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)
    sort: Mapped[int] = mapped_column(Integer, default=DEFAULT_DEPARTMENT_SORT)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    created_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_by: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    organization = relationship("Organization", back_populates="departments")
    users = relationship("User", back_populates="department")
