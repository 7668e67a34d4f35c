"""관리자 API 라우터 패키지 — 모든 관리자 엔드포인트 통합.

Admin API Router package — Aggregates all admin-facing endpoints
into a single router for inclusion in the FastAPI application.

Included routers:
    - auth: 관리자 인증 (Admin authentication)
    - departments: 부서 관리 (Department management and trees)
    - options: 시스템 파라미터 (System options)
    - logs: 작업 로그 (Operation logs)
"""

from fastapi import APIRouter

from app.api.admin.auth import router as auth_router
from app.api.admin.departments import router as departments_router
from app.api.admin.options import router as options_router
from app.api.admin.logs import router as logs_router

admin_router: APIRouter = APIRouter()

admin_router.include_router(auth_router, prefix="/auth")
admin_router.include_router(departments_router, prefix="/departments")
admin_router.include_router(options_router, prefix="/options")
admin_router.include_router(logs_router, prefix="/logs")
