"""관리자 부서 라우터 — 부서 CRUD 및 트리 조회 엔드포인트.

Admin Department Router — CRUD and tree endpoints for department management.
All endpoints are scoped to the current organization from JWT.

Permission Matrix (역할별 권한 설계):
    - 부서 목록/트리/상세 조회: Supervisor 이상
    - 부서 등록/수정/삭제: Manager 이상
"""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_manager, require_supervisor
from app.database import get_db
from app.models.user import User
from app.schemas.department import (
    DepartmentCreate,
    DepartmentDetailResponse,
    DepartmentResponse,
    DepartmentUpdate,
    TreeNode,
)
from app.services.department_service import department_service

router: APIRouter = APIRouter(tags=["Departments"])


@router.get("", response_model=list[DepartmentResponse], summary="List departments")
async def list_departments(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_supervisor)],
    name: str | None = None,
    is_active: bool | None = None,
) -> list[DepartmentResponse]:
    """부서 평면 목록을 조회합니다 (이름 부분 일치, 활성 상태 필터).

    List departments as a flat list, ordered by sort weight.
    """
    return await department_service.list_departments(
        db, current_user.organization_id, name=name, is_active=is_active
    )


@router.get("/list-tree", response_model=list[DepartmentResponse], summary="List department tree")
async def list_department_tree(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_supervisor)],
    name: str | None = None,
    is_active: bool | None = None,
) -> list[DepartmentResponse]:
    """부서 목록을 중첩 트리로 조회합니다.

    List departments as nested trees; with filters, the highest matching
    ancestors become the roots.
    """
    return await department_service.list_tree(
        db, current_user.organization_id, name=name, is_active=is_active
    )


@router.get("/tree", response_model=list[TreeNode], summary="Get department tree")
async def get_department_tree(
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_supervisor)],
    name: str | None = None,
    is_active: bool | None = None,
) -> list[TreeNode]:
    """트리 선택용 경량 부서 트리를 조회합니다 (Tree-select nodes)."""
    return await department_service.tree(
        db, current_user.organization_id, name=name, is_active=is_active
    )


@router.get("/{department_id}", response_model=DepartmentDetailResponse, summary="Get department")
async def get_department(
    department_id: UUID,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_supervisor)],
) -> DepartmentDetailResponse:
    """부서 상세 정보를 조회합니다 (상위 부서 이름 포함)."""
    return await department_service.get_department(db, department_id, current_user.organization_id)


@router.post("", response_model=DepartmentResponse, status_code=201, summary="Create department")
async def create_department(
    data: DepartmentCreate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
) -> DepartmentResponse:
    """새 부서를 생성합니다. Manager 이상 가능.

    Create a department in the current organization.
    """
    result: DepartmentResponse = await department_service.create_department(
        db, current_user.organization_id, current_user.id, data
    )
    await db.commit()
    return result


@router.put("/{department_id}", response_model=DepartmentResponse, summary="Update department")
async def update_department(
    department_id: UUID,
    data: DepartmentUpdate,
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
) -> DepartmentResponse:
    """부서 정보를 수정합니다. Manager 이상 가능."""
    result: DepartmentResponse = await department_service.update_department(
        db, department_id, current_user.organization_id, current_user.id, data
    )
    await db.commit()
    return result


@router.delete("", status_code=204, summary="Delete departments")
async def delete_departments(
    ids: Annotated[list[UUID], Query(min_length=1)],
    db: Annotated[AsyncSession, Depends(get_db)],
    current_user: Annotated[User, Depends(require_manager)],
) -> None:
    """부서를 일괄 삭제합니다 (하위 부서 포함). Manager 이상 가능.

    Delete departments (``?ids=...&ids=...``) together with their
    sub-departments.
    """
    await department_service.delete_departments(db, current_user.organization_id, ids)
    await db.commit()
