"""부서 레포지토리 — 부서 CRUD 및 계층 쿼리.

Department Repository — CRUD and hierarchy queries for departments.
Extends BaseRepository with filtered listing and the (id, parent_id)
edge list used for subtree calculations.
"""

from uuid import UUID

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.department import Department
from app.repositories.base import BaseRepository


class DepartmentRepository(BaseRepository[Department]):
    """부서 테이블에 대한 데이터베이스 쿼리를 담당하는 레포지토리.

    Repository handling database queries for the departments table.
    """

    def __init__(self) -> None:
        super().__init__(Department)

    async def get_by_org(
        self,
        db: AsyncSession,
        organization_id: UUID,
        name: str | None = None,
        is_active: bool | None = None,
    ) -> list[Department]:
        """조직의 부서 목록을 필터 조건으로 조회합니다.

        Retrieve departments of an organization ordered by sort weight,
        then creation time.

        Args:
            db: 비동기 데이터베이스 세션 (Async database session)
            organization_id: 조직 ID (Organization UUID)
            name: 부서 이름 부분 일치 필터 (Case-insensitive substring filter)
            is_active: 활성 상태 필터 (Enabled flag filter)

        Returns:
            list[Department]: 부서 목록 (List of departments)
        """
        query: Select = select(Department).where(Department.organization_id == organization_id)
        if name:
            query = query.where(Department.name.ilike(f"%{name}%"))
        if is_active is not None:
            query = query.where(Department.is_active == is_active)
        query = query.order_by(Department.sort, Department.created_at)

        result = await db.execute(query)
        return list(result.scalars().all())

    async def get_edges(
        self,
        db: AsyncSession,
        organization_id: UUID,
    ) -> list[tuple[UUID, UUID | None]]:
        """조직 내 모든 (부서 ID, 상위 ID) 쌍을 조회합니다.

        Retrieve every (id, parent_id) pair of the organization.
        """
        result = await db.execute(
            select(Department.id, Department.parent_id).where(
                Department.organization_id == organization_id
            )
        )
        return [(row.id, row.parent_id) for row in result.all()]


# 싱글턴 인스턴스 — Singleton instance
department_repository: DepartmentRepository = DepartmentRepository()
