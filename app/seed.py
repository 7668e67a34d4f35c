"""초기 데이터 시드 스크립트 — 조직, 역할, 관리자 계정, 부서, 시스템 파라미터 생성.

Seed script — Creates the initial organization, roles, admin user,
root department and default system options.
Run this script once to bootstrap the database with required initial data.

Usage:
    python -m app.seed

Creates:
    - 1개 조직: "Default Organization" (1 organization)
    - 4개 역할: owner(1), manager(2), supervisor(3), staff(4) (4 roles)
    - 1개 최상위 부서 (1 top-level department)
    - 1개 관리자 계정: admin / admin123 (1 owner user)
    - 기본 시스템 파라미터 (Default site options)
"""

import asyncio

from sqlalchemy import select

from app.database import async_session, create_schema, engine
from app.models import Department, Option, Organization, Role, User
from app.utils.password import hash_password

# 기본 시스템 파라미터 — (code, name, default_value, description)
DEFAULT_OPTIONS: list[tuple[str, str, str, str]] = [
    ("SITE_TITLE", "Site title", "System Admin", "Title shown in the browser and login page"),
    ("SITE_COPYRIGHT", "Copyright", "Copyright © 2026 System Admin", "Footer copyright line"),
    ("SITE_LOGO", "Site logo", "/logo.svg", "Logo image URL"),
    ("SITE_FAVICON", "Favicon", "/favicon.ico", "Favicon URL"),
]


async def seed() -> None:
    """데이터베이스를 초기 데이터로 시드합니다.

    Seed the database with initial data.
    Creates tables if they don't exist, then inserts the initial
    organization, role hierarchy, root department, admin user and options.

    Idempotent: 이미 시드된 경우 건너뜁니다 (Skips if already seeded).
    """
    await create_schema(engine)

    async with async_session() as db:
        # 시스템 파라미터는 조직과 무관하게 누락된 코드만 추가
        # (Options are global; insert only the missing codes)
        existing = await db.execute(select(Option.code))
        existing_codes: set[str] = set(existing.scalars().all())
        for code, name, default_value, description in DEFAULT_OPTIONS:
            if code not in existing_codes:
                db.add(Option(code=code, name=name, default_value=default_value, description=description))
        await db.flush()

        # 이미 시드되었는지 확인 — 조직이 하나라도 있으면 건너뜀
        # (Check if already seeded by looking for any existing organization)
        result = await db.execute(select(Organization).limit(1))
        if result.scalar_one_or_none():
            await db.commit()
            print("Already seeded. Skipping.")
            return

        # 기본 조직 생성 — Default organization (tenant)
        org: Organization = Organization(name="Default Organization")
        db.add(org)
        await db.flush()  # flush로 org.id 생성 (Flush to generate org.id)

        # 역할 계층 생성 — Create role hierarchy (level 1=owner ~ 4=staff)
        roles_data: list[tuple[str, int]] = [
            ("owner", 1),
            ("manager", 2),
            ("supervisor", 3),
            ("staff", 4),
        ]
        roles: dict[str, Role] = {}
        for name, level in roles_data:
            role: Role = Role(organization_id=org.id, name=name, level=level)
            db.add(role)
            await db.flush()
            roles[name] = role

        # 최상위 부서 — Top-level department
        root: Department = Department(organization_id=org.id, name="Headquarters", sort=1)
        db.add(root)
        await db.flush()

        # 관리자 계정 생성 — Create initial owner user (admin/admin123)
        admin: User = User(
            organization_id=org.id,
            role_id=roles["owner"].id,
            department_id=root.id,
            username="admin",
            full_name="System Admin",
            email="admin@example.com",
            password_hash=hash_password("admin123"),
            is_active=True,
        )
        db.add(admin)

        await db.commit()
        print(f"Seeded: org={org.id} (code={org.code}), admin user=admin/admin123")


if __name__ == "__main__":
    asyncio.run(seed())
