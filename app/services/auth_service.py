"""인증 서비스 — 로그인, 토큰 갱신, 현재 사용자 조회 비즈니스 로직.

Auth Service — Business logic for admin login, token refresh and the
current user's profile.
"""

from typing import Any
from uuid import UUID

import jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.organization import Organization
from app.models.user import Role, User
from app.repositories.user_repository import user_repository
from app.schemas.auth import LoginRequest, RefreshRequest, TokenResponse, UserMeResponse
from app.utils.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from app.utils.jwt import create_access_token, create_refresh_token, decode_token
from app.utils.password import verify_password

# 관리자 로그인 허용 최대 레벨 — Staff (level 4) cannot sign in to the admin API
ADMIN_MAX_LEVEL: int = 3


class AuthService:
    """인증 관련 비즈니스 로직을 처리하는 서비스.

    Service handling authentication business logic.
    """

    async def resolve_company_code(
        self,
        db: AsyncSession,
        company_code: str | None,
    ) -> UUID | None:
        """회사 코드를 조직 UUID로 변환합니다.

        Resolve a company code to an active organization's UUID.

        Raises:
            NotFoundError: 유효하지 않은 회사 코드일 때 (Invalid company code)
        """
        if company_code is None:
            return None
        result = await db.execute(
            select(Organization).where(
                Organization.code == company_code.upper(),
                Organization.is_active.is_(True),
            )
        )
        org: Organization | None = result.scalar_one_or_none()
        if org is None:
            raise NotFoundError("Invalid company code")
        return org.id

    def _build_jwt_payload(self, user: User, role: Role) -> dict[str, Any]:
        return {
            "sub": str(user.id),
            "org": str(user.organization_id),
            "role": role.name,
            "level": role.level,
        }

    def _generate_tokens(self, user: User, role: Role) -> TokenResponse:
        payload: dict[str, Any] = self._build_jwt_payload(user, role)
        return TokenResponse(
            access_token=create_access_token(payload),
            refresh_token=create_refresh_token(payload),
        )

    async def admin_login(
        self,
        db: AsyncSession,
        data: LoginRequest,
        organization_id: UUID | None = None,
    ) -> TokenResponse:
        """관리자 로그인을 처리합니다.

        Process admin login. Rejects staff-level accounts.

        Raises:
            UnauthorizedError: 잘못된 인증 정보 또는 비활성 계정 (Invalid credentials / inactive)
            ForbiddenError: 스태프 계정이 관리자 로그인을 시도할 때 (Staff account)
        """
        user: User | None = await user_repository.get_by_username(
            db, data.username, organization_id
        )
        if user is None or not verify_password(data.password, user.password_hash):
            raise UnauthorizedError("Invalid username or password")
        if not user.is_active:
            raise UnauthorizedError("Account is deactivated")
        if user.role.level > ADMIN_MAX_LEVEL:
            raise ForbiddenError("Staff accounts cannot access the admin console")

        return self._generate_tokens(user, user.role)

    async def refresh_tokens(self, db: AsyncSession, data: RefreshRequest) -> TokenResponse:
        """리프레시 토큰으로 새 토큰 쌍을 발급합니다.

        Exchange a valid refresh token for a new token pair. The user is
        reloaded so role changes take effect.

        Raises:
            UnauthorizedError: 토큰이 유효하지 않거나 사용자 비활성 (Invalid token / inactive user)
        """
        try:
            payload: dict[str, Any] = decode_token(data.refresh_token)
            if payload.get("type") != "refresh":
                raise UnauthorizedError("Invalid token type")
            user_id: UUID = UUID(payload["sub"])
        except (jwt.InvalidTokenError, KeyError, ValueError):
            raise UnauthorizedError("Invalid or expired refresh token")

        user: User | None = await user_repository.get_with_role(db, user_id)
        if user is None or not user.is_active:
            raise UnauthorizedError("User not found or inactive")

        return self._generate_tokens(user, user.role)

    def get_me(self, user: User) -> UserMeResponse:
        """현재 사용자 프로필을 반환합니다 (Profile of the authenticated user)."""
        return UserMeResponse(
            id=str(user.id),
            username=user.username,
            full_name=user.full_name,
            email=user.email,
            role_name=user.role.name,
            role_level=user.role.level,
            organization_id=str(user.organization_id),
            department_id=str(user.department_id) if user.department_id else None,
            is_active=user.is_active,
        )


# 싱글턴 인스턴스 — Singleton instance
auth_service: AuthService = AuthService()
