"""사용자 레포지토리 — 사용자 조회 및 부서 연결 쿼리.

User Repository — User lookups needed by authentication and by the
department service (department-user association checks).
"""

from typing import Iterable
from uuid import UUID

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.models.user import User
from app.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """사용자 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the users table.
    """

    def __init__(self) -> None:
        super().__init__(User)

    async def get_by_username(
        self,
        db: AsyncSession,
        username: str,
        organization_id: UUID | None = None,
    ) -> User | None:
        """사용자명으로 사용자를 역할과 함께 조회합니다.

        Retrieve a user by username with the role eagerly loaded,
        optionally scoped to an organization.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            username: 조회할 사용자명 (Username to look up)
            organization_id: 조직 범위 필터, None이면 전체 검색
                             (Organization scope filter; None searches all)

        Returns:
            User | None: 조회된 사용자 또는 None (Found user or None)
        """
        query: Select = (
            select(User)
            .options(selectinload(User.role))
            .where(User.username == username)
        )
        if organization_id is not None:
            query = query.where(User.organization_id == organization_id)

        result = await db.execute(query)
        # 조직 미지정 시 동명이인이 있을 수 있으므로 첫 번째만 사용
        return result.scalars().first()

    async def get_with_role(self, db: AsyncSession, user_id: UUID) -> User | None:
        """ID로 사용자를 역할과 함께 조회합니다 (User by id, role eager-loaded)."""
        result = await db.execute(
            select(User).options(selectinload(User.role)).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def count_by_department_ids(
        self,
        db: AsyncSession,
        department_ids: Iterable[UUID],
    ) -> int:
        """주어진 부서들에 소속된 사용자 수를 반환합니다.

        Count users attached to any of the given departments.
        """
        ids: list[UUID] = list(department_ids)
        if not ids:
            return 0
        result = await db.execute(
            select(func.count()).select_from(User).where(User.department_id.in_(ids))
        )
        return result.scalar() or 0


# 싱글턴 인스턴스 — Singleton instance
user_repository: UserRepository = UserRepository()
