"""부서 서비스 — 부서 CRUD 및 트리 구성 비즈니스 로직.

Department Service — Business logic for department CRUD and tree building.
All operations are scoped to the caller's organization.

Tree rules:
    - 루트: 상위 부서가 목록에 없는 부서 (A root is a department whose parent
      is not in the list being built)
    - list_tree: 자식은 입력 순서 유지 (children keep query order)
    - tree: 형제는 sort(weight) 오름차순 (siblings ascend by weight)
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from app.models.department import Department
from app.repositories.department_repository import department_repository
from app.repositories.user_repository import user_repository
from app.schemas.department import (
    DepartmentCreate,
    DepartmentDetailResponse,
    DepartmentResponse,
    DepartmentUpdate,
    TreeNode,
)
from app.utils.exceptions import BadRequestError, DuplicateError, NotFoundError
from app.utils.tree import build_forest, collect_descendants

# 값이 null이면 무시하는 필드 — Non-nullable columns; explicit nulls are ignored
_NON_NULLABLE_FIELDS: tuple[str, ...] = ("name", "sort", "is_active")


def _str_or_none(value: UUID | None) -> str | None:
    return str(value) if value is not None else None


class DepartmentService:
    """부서 관련 비즈니스 로직을 처리하는 서비스.

    Service handling department business logic.
    """

    def _to_response(self, dept: Department) -> DepartmentResponse:
        """부서 모델을 응답 스키마로 변환합니다 (Model to flat response)."""
        return DepartmentResponse(
            id=str(dept.id),
            parent_id=_str_or_none(dept.parent_id),
            name=dept.name,
            description=dept.description,
            sort=dept.sort,
            is_active=dept.is_active,
            created_by=_str_or_none(dept.created_by),
            created_at=dept.created_at,
            updated_by=_str_or_none(dept.updated_by),
            updated_at=dept.updated_at,
        )

    # ------------------------------------------------------------------
    # 트리 구성 — Tree building
    # ------------------------------------------------------------------
    def build_list_tree(self, departments: list[DepartmentResponse]) -> list[DepartmentResponse]:
        """평면 부서 목록을 중첩 목록 트리로 구성합니다.

        Rebuild a nested list-tree from a flat department list.
        Roots are the departments whose parent is not in the list; each
        root gets its children attached recursively in input order.

        Args:
            departments: 평면 부서 응답 목록 (Flat department responses)

        Returns:
            list[DepartmentResponse]: 루트 부서 목록 (Roots with nested children)
        """

        def _attach(node: DepartmentResponse, children: list[DepartmentResponse]) -> None:
            node.children = children

        return build_forest(
            departments,
            key=lambda d: d.id,
            parent_key=lambda d: d.parent_id,
            to_node=lambda d: d.model_copy(update={"children": []}),
            set_children=_attach,
        )

    def build_tree(self, departments: list[DepartmentResponse]) -> list[TreeNode]:
        """평면 부서 목록을 트리 선택용 노드 트리로 구성합니다.

        Build a lightweight TreeNode forest (id, name, parent_id, weight)
        with siblings sorted by weight ascending.
        """

        def _attach(node: TreeNode, children: list[TreeNode]) -> None:
            node.children = children

        return build_forest(
            departments,
            key=lambda d: d.id,
            parent_key=lambda d: d.parent_id,
            to_node=lambda d: TreeNode(id=d.id, name=d.name, parent_id=d.parent_id, weight=d.sort),
            set_children=_attach,
            sort_key=lambda d: d.sort,
        )

    # ------------------------------------------------------------------
    # 조회 — Queries
    # ------------------------------------------------------------------
    async def list_departments(
        self,
        db: AsyncSession,
        organization_id: UUID,
        name: str | None = None,
        is_active: bool | None = None,
    ) -> list[DepartmentResponse]:
        """조건에 맞는 부서 평면 목록을 조회합니다.

        List departments (flat) ordered by sort weight, then creation time.
        """
        departments: list[Department] = await department_repository.get_by_org(
            db, organization_id, name=name, is_active=is_active
        )
        return [self._to_response(d) for d in departments]

    async def list_tree(
        self,
        db: AsyncSession,
        organization_id: UUID,
        name: str | None = None,
        is_active: bool | None = None,
    ) -> list[DepartmentResponse]:
        """부서 목록을 중첩 트리 형태로 조회합니다 (Nested list-tree view)."""
        departments = await self.list_departments(db, organization_id, name, is_active)
        return self.build_list_tree(departments)

    async def tree(
        self,
        db: AsyncSession,
        organization_id: UUID,
        name: str | None = None,
        is_active: bool | None = None,
    ) -> list[TreeNode]:
        """트리 선택용 부서 트리를 조회합니다 (Tree-select view)."""
        departments = await self.list_departments(db, organization_id, name, is_active)
        return self.build_tree(departments)

    async def get_department(
        self,
        db: AsyncSession,
        department_id: UUID,
        organization_id: UUID,
    ) -> DepartmentDetailResponse:
        """부서 상세 정보를 상위 부서 이름과 함께 조회합니다.

        Retrieve department detail including the parent's name.

        Raises:
            NotFoundError: 부서를 찾을 수 없을 때 (Department not found)
        """
        dept: Department | None = await department_repository.get_by_id(
            db, department_id, organization_id
        )
        if dept is None:
            raise NotFoundError("Department not found")

        parent_name: str | None = None
        if dept.parent_id is not None:
            parent: Department | None = await department_repository.get_by_id(
                db, dept.parent_id, organization_id
            )
            parent_name = parent.name if parent is not None else None

        return DepartmentDetailResponse(
            **self._to_response(dept).model_dump(exclude={"children"}),
            parent_name=parent_name,
        )

    # ------------------------------------------------------------------
    # 변경 — Commands
    # ------------------------------------------------------------------
    async def _ensure_parent_exists(
        self,
        db: AsyncSession,
        parent_id: UUID | None,
        organization_id: UUID,
    ) -> None:
        if parent_id is None:
            return
        parent: Department | None = await department_repository.get_by_id(
            db, parent_id, organization_id
        )
        if parent is None:
            raise BadRequestError("Parent department not found")

    async def _name_exists(
        self,
        db: AsyncSession,
        organization_id: UUID,
        name: str,
        parent_id: UUID | None,
        exclude_id: UUID | None = None,
    ) -> bool:
        # 같은 상위 부서 아래 동일 이름 확인 — Same name under the same parent
        return await department_repository.exists(
            db,
            {"organization_id": organization_id, "name": name, "parent_id": parent_id},
            exclude_id=exclude_id,
        )

    async def create_department(
        self,
        db: AsyncSession,
        organization_id: UUID,
        user_id: UUID,
        data: DepartmentCreate,
    ) -> DepartmentResponse:
        """새 부서를 생성합니다. 항상 활성 상태로 생성됩니다.

        Create a new department; it is always created enabled.

        Raises:
            BadRequestError: 상위 부서가 존재하지 않을 때 (Unknown parent)
            DuplicateError: 같은 상위 아래 동일 이름이 있을 때
                            (Same name already exists under the parent)
        """
        await self._ensure_parent_exists(db, data.parent_id, organization_id)

        if await self._name_exists(db, organization_id, data.name, data.parent_id):
            raise DuplicateError(f"Create failed, '{data.name}' already exists")

        dept: Department = await department_repository.create(
            db,
            {
                "organization_id": organization_id,
                "parent_id": data.parent_id,
                "name": data.name,
                "description": data.description,
                "sort": data.sort,
                "is_active": True,
                "created_by": user_id,
            },
        )
        return self._to_response(dept)

    async def update_department(
        self,
        db: AsyncSession,
        department_id: UUID,
        organization_id: UUID,
        user_id: UUID,
        data: DepartmentUpdate,
    ) -> DepartmentResponse:
        """부서 정보를 수정합니다.

        Update an existing department.

        Raises:
            NotFoundError: 부서를 찾을 수 없을 때 (Department not found)
            BadRequestError: 상위 부서가 없거나 자기 자신/하위 부서일 때
                             (Unknown parent, or parent inside its own subtree)
            DuplicateError: 같은 상위 아래 동일 이름이 있을 때
                            (Same name already exists under the parent)
        """
        dept: Department | None = await department_repository.get_by_id(
            db, department_id, organization_id
        )
        if dept is None:
            raise NotFoundError("Department not found")

        update_data: dict = {
            field: value
            for field, value in data.model_dump(exclude_unset=True).items()
            if not (field in _NON_NULLABLE_FIELDS and value is None)
        }

        new_parent_id: UUID | None = update_data.get("parent_id", dept.parent_id)
        if "parent_id" in update_data and new_parent_id is not None:
            if new_parent_id == department_id:
                raise BadRequestError("A department cannot be its own parent")
            await self._ensure_parent_exists(db, new_parent_id, organization_id)
            edges = await department_repository.get_edges(db, organization_id)
            if new_parent_id in collect_descendants(edges, [department_id]):
                raise BadRequestError("A department cannot be moved under its own sub-department")

        new_name: str = update_data.get("name", dept.name)
        if new_name != dept.name or new_parent_id != dept.parent_id:
            if await self._name_exists(
                db, organization_id, new_name, new_parent_id, exclude_id=department_id
            ):
                raise DuplicateError(f"Update failed, '{new_name}' already exists")

        update_data["updated_by"] = user_id
        updated: Department | None = await department_repository.update(
            db, department_id, update_data, organization_id
        )
        if updated is None:
            raise NotFoundError("Department not found")
        return self._to_response(updated)

    async def delete_departments(
        self,
        db: AsyncSession,
        organization_id: UUID,
        department_ids: list[UUID],
    ) -> int:
        """부서와 그 하위 부서 전체를 삭제합니다.

        Delete the given departments together with all their descendants.

        Returns:
            int: 삭제된 부서 수 (Number of deleted departments)

        Raises:
            NotFoundError: 해당 부서가 하나도 없을 때 (None of the ids exist)
            BadRequestError: 대상 부서에 사용자가 연결되어 있을 때
                             (Users are still attached to a target department)
        """
        found: list[Department] = list(
            await department_repository.get_by_ids(db, department_ids, organization_id)
        )
        if not found:
            raise NotFoundError("Department not found")

        root_ids: set[UUID] = {d.id for d in found}
        edges = await department_repository.get_edges(db, organization_id)
        target_ids: set[UUID] = root_ids | collect_descendants(edges, root_ids)

        if await user_repository.count_by_department_ids(db, target_ids) > 0:
            raise BadRequestError(
                "Selected departments have associated users, please detach them and retry"
            )

        return await department_repository.delete_by_ids(db, target_ids, organization_id)


# 싱글턴 인스턴스 — Singleton instance
department_service: DepartmentService = DepartmentService()
