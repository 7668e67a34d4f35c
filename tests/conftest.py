"""테스트 인프라 — 테스트 DB, 세션, httpx 클라이언트 픽스처.

Test infrastructure — Test database, session, and httpx client fixtures.
Uses an in-memory SQLite database by default; set ``TEST_DATABASE_URL``
to run against PostgreSQL instead. Schema is created and dropped per test.
"""

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from app.database import Base, build_engine, create_schema, get_db
from app.main import app
from app.models import *  # noqa: F401,F403 — register all models with metadata
from app.seed import DEFAULT_OPTIONS
from app.utils.jwt import create_access_token
from app.utils.password import hash_password

# ---------------------------------------------------------------------------
# 테스트 DB 설정
# ---------------------------------------------------------------------------
TEST_DATABASE_URL: str = os.environ.get("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


# ---------------------------------------------------------------------------
# Function-scoped: 엔진, 세션, 클라이언트
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """테스트용 async 엔진. 테스트마다 스키마를 생성/삭제합니다."""
    eng = build_engine(TEST_DATABASE_URL)
    await create_schema(eng)

    yield eng

    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트에 격리된 DB 세션을 제공합니다."""
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def client(db: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """FastAPI 테스트 클라이언트 — DB 세션과 작업 로그 세션을 오버라이드합니다."""
    async def _override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db

    @asynccontextmanager
    async def _log_session() -> AsyncGenerator[AsyncSession, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    original_factory = app.state.log_session_factory
    app.state.log_session_factory = _log_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.state.log_session_factory = original_factory
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# 헬퍼 픽스처: 테스트용 데이터 생성
# ---------------------------------------------------------------------------
@pytest_asyncio.fixture
async def org(db: AsyncSession):
    """테스트 조직을 생성합니다."""
    from app.models.organization import Organization
    o = Organization(name="Test Corp", code="TEST01")
    db.add(o)
    await db.flush()
    await db.refresh(o)
    return o


@pytest_asyncio.fixture
async def other_org(db: AsyncSession):
    """다른 테넌트 조직을 생성합니다 (Cross-tenant checks)."""
    from app.models.organization import Organization
    o = Organization(name="Other Corp", code="OTHR01")
    db.add(o)
    await db.flush()
    await db.refresh(o)
    return o


@pytest_asyncio.fixture
async def roles(db: AsyncSession, org):
    """기본 4개 역할을 생성합니다."""
    from app.models.user import Role
    result = {}
    for name, level in [("owner", 1), ("manager", 2), ("supervisor", 3), ("staff", 4)]:
        role = Role(organization_id=org.id, name=name, level=level)
        db.add(role)
        await db.flush()
        await db.refresh(role)
        result[name] = role
    return result


async def _make_user(db: AsyncSession, org, role, username: str, password: str, **kwargs):
    from app.models.user import User
    user = User(
        organization_id=org.id,
        role_id=role.id,
        username=username,
        full_name=f"Test {username.capitalize()}",
        password_hash=hash_password(password),
        **kwargs,
    )
    db.add(user)
    await db.flush()
    await db.refresh(user)
    return user


@pytest_asyncio.fixture
async def admin_user(db: AsyncSession, org, roles):
    """오너(관리자) 사용자를 생성합니다."""
    return await _make_user(db, org, roles["owner"], "admin", "admin123!", email="admin@test.com")


@pytest_asyncio.fixture
async def manager_user(db: AsyncSession, org, roles):
    """매니저 사용자를 생성합니다."""
    return await _make_user(db, org, roles["manager"], "manager", "manager123!")


@pytest_asyncio.fixture
async def supervisor_user(db: AsyncSession, org, roles):
    """수퍼바이저 사용자를 생성합니다."""
    return await _make_user(db, org, roles["supervisor"], "supervisor", "supervisor123!")


@pytest_asyncio.fixture
async def staff_user(db: AsyncSession, org, roles):
    """스태프 사용자를 생성합니다."""
    return await _make_user(db, org, roles["staff"], "staff", "staff123!")


@pytest_asyncio.fixture
async def department(db: AsyncSession, org):
    """최상위 테스트 부서를 생성합니다."""
    from app.models.department import Department
    d = Department(organization_id=org.id, name="Headquarters", sort=1)
    db.add(d)
    await db.flush()
    await db.refresh(d)
    return d


@pytest_asyncio.fixture
async def options(db: AsyncSession):
    """기본 시스템 파라미터를 생성합니다."""
    from app.models.option import Option
    result = {}
    for code, name, default_value, description in DEFAULT_OPTIONS:
        o = Option(code=code, name=name, default_value=default_value, description=description)
        db.add(o)
        await db.flush()
        await db.refresh(o)
        result[code] = o
    return result


def make_token(user, role_name: str, role_level: int) -> str:
    """테스트용 JWT 액세스 토큰을 생성합니다."""
    return create_access_token({
        "sub": str(user.id),
        "org": str(user.organization_id),
        "role": role_name,
        "level": role_level,
    })


@pytest.fixture
def admin_token(admin_user, roles) -> str:
    return make_token(admin_user, "owner", 1)


@pytest.fixture
def manager_token(manager_user, roles) -> str:
    return make_token(manager_user, "manager", 2)


@pytest.fixture
def supervisor_token(supervisor_user, roles) -> str:
    return make_token(supervisor_user, "supervisor", 3)


@pytest.fixture
def staff_token(staff_user, roles) -> str:
    return make_token(staff_user, "staff", 4)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
