"""관리자 인증 라우터 — 로그인, 토큰 갱신, 현재 사용자 조회.

Admin Auth Router — Login, token refresh and current user endpoints.
Staff-level accounts (role level >= 4) are rejected from admin login.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_supervisor
from app.database import get_db
from app.models.user import User
from app.schemas.auth import LoginRequest, RefreshRequest, TokenResponse, UserMeResponse
from app.services.auth_service import auth_service

router: APIRouter = APIRouter(tags=["Admin Auth"])


@router.post("/login", response_model=TokenResponse, summary="Admin login")
async def admin_login(
    data: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """관리자 로그인 — 스태프 계정 접근 불가.

    Admin login endpoint. Optionally accepts company_code to scope the
    login to a specific organization.
    """
    organization_id = await auth_service.resolve_company_code(db, data.company_code)
    return await auth_service.admin_login(db, data, organization_id)


@router.post("/refresh", response_model=TokenResponse, summary="Refresh token")
async def refresh_token(
    data: RefreshRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> TokenResponse:
    """토큰 갱신 — 리프레시 토큰으로 새 토큰 쌍 발급."""
    return await auth_service.refresh_tokens(db, data)


@router.get("/me", response_model=UserMeResponse, summary="Get current user")
async def get_me(
    current_user: Annotated[User, Depends(require_supervisor)],
) -> UserMeResponse:
    """현재 사용자 프로필 조회 (Profile of the authenticated user)."""
    return auth_service.get_me(current_user)
