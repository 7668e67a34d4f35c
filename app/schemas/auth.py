"""인증 관련 Pydantic 요청/응답 스키마 정의.

Authentication-related Pydantic request/response schema definitions.
Covers login, token refresh and current user info.
"""

from pydantic import BaseModel


class LoginRequest(BaseModel):
    """관리자 로그인 요청 스키마.

    Admin login request schema.

    Attributes:
        username: 사용자 로그인 아이디 (User login identifier)
        password: 비밀번호 (Plain text password, verified against bcrypt hash)
        company_code: 회사 코드 (Company code to identify organization, optional)
    """

    username: str
    password: str  # 평문, 서버에서 bcrypt 해시와 비교 (Plain text, compared to bcrypt hash)
    company_code: str | None = None


class TokenResponse(BaseModel):
    """JWT 토큰 발급 응답 스키마.

    Returned after successful login or token refresh.
    """

    access_token: str  # JWT 액세스 토큰 — 만료: 30분 기본 (Access token, default TTL: 30min)
    refresh_token: str  # JWT 리프레시 토큰 — 만료: 7일 기본 (Refresh token, default TTL: 7 days)
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    """토큰 갱신 요청 스키마 (Exchanges a refresh token for a new pair)."""

    refresh_token: str


class UserMeResponse(BaseModel):
    """현재 사용자 정보 응답 스키마 (GET /me).

    Attributes:
        id: 사용자 UUID (User unique identifier)
        username: 로그인 아이디 (Login username)
        full_name: 실명 (Full display name)
        email: 이메일 (Email, nullable)
        role_name: 역할 이름 (Role name, e.g. "owner")
        role_level: 역할 레벨 (1=owner, 4=staff)
        organization_id: 소속 조직 UUID (Organization identifier)
        department_id: 소속 부서 UUID (Department identifier, nullable)
        is_active: 활성 상태 (Account active status)
    """

    id: str
    username: str
    full_name: str
    email: str | None
    role_name: str
    role_level: int  # 낮을수록 높은 권한 (lower = more authority)
    organization_id: str
    department_id: str | None
    is_active: bool
