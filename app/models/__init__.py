"""SQLAlchemy ORM 모델 패키지 — 모든 도메인 모델의 중앙 임포트 지점.

SQLAlchemy ORM models package — Central import point for all domain models.
Importing from this package ensures all models are registered with the
SQLAlchemy metadata, which is required for Alembic migrations and
relationship resolution.

Modules:
    organization: 조직 (Organization)
    user: 역할 및 사용자 (Role and User)
    department: 계층형 부서 (Hierarchical departments)
    option: 시스템 파라미터 (System options)
    log: 작업 로그 (Operation log)
"""

from app.models.organization import Organization
from app.models.user import Role, User
from app.models.department import Department
from app.models.option import Option
from app.models.log import LogLevel, OperationLog

__all__ = [
    "Organization",
    "Role", "User",
    "Department",
    "Option",
    "LogLevel", "OperationLog",
]
