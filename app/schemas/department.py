"""부서 관련 Pydantic 요청/응답 스키마 정의.

Department Pydantic request/response schema definitions.
Covers CRUD, the nested list-tree view and the lightweight tree-select
view of departments.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from app.models.department import DEFAULT_DEPARTMENT_SORT


class DepartmentCreate(BaseModel):
    """부서 생성 요청 스키마.

    Department creation request schema.
    New departments are always created enabled.

    Attributes:
        name: 부서 이름 (Department name, 1-30 chars)
        parent_id: 상위 부서 UUID, 최상위는 null (Parent department, null for top-level)
        description: 설명 (Description, optional)
        sort: 정렬 순서 (Sort weight, ascending)
    """

    name: str = Field(min_length=1, max_length=30)
    parent_id: UUID | None = None
    description: str | None = Field(default=None, max_length=200)
    sort: int = Field(default=DEFAULT_DEPARTMENT_SORT, ge=0)


class DepartmentUpdate(BaseModel):
    """부서 수정 요청 스키마 (부분 업데이트).

    Department update request schema (partial update).
    Sending ``parent_id: null`` moves the department to the top level.
    """

    name: str | None = Field(default=None, min_length=1, max_length=30)
    parent_id: UUID | None = None
    description: str | None = Field(default=None, max_length=200)
    sort: int | None = Field(default=None, ge=0)
    is_active: bool | None = None


class DepartmentResponse(BaseModel):
    """부서 응답 스키마.

    Department response schema. ``children`` is only populated by the
    list-tree endpoint.
    """

    id: str
    parent_id: str | None
    name: str
    description: str | None
    sort: int
    is_active: bool
    created_by: str | None
    created_at: datetime
    updated_by: str | None
    updated_at: datetime | None
    children: list["DepartmentResponse"] = []


class DepartmentDetailResponse(DepartmentResponse):
    """부서 상세 응답 스키마 — 상위 부서 이름 포함.

    Department detail response including the parent's name
    (null for top-level departments or a missing parent).
    """

    parent_name: str | None = None


class TreeNode(BaseModel):
    """트리 선택용 경량 노드 스키마.

    Lightweight tree node used by tree-select widgets.

    Attributes:
        id: 부서 UUID (Department identifier)
        name: 부서 이름 (Department name)
        parent_id: 상위 부서 UUID (Parent identifier)
        weight: 정렬 가중치 (Sort weight; siblings ascend by weight)
        children: 하위 노드 (Child nodes)
    """

    id: str
    name: str
    parent_id: str | None
    weight: int
    children: list["TreeNode"] = []


# 전방 참조 해결 — Resolve self references
DepartmentResponse.model_rebuild()
TreeNode.model_rebuild()
