"""작업 로그 테스트 — 미들웨어 기록 및 로그 조회 API.

Operation log tests — Middleware recording, masking, helper functions,
and the paginated log query endpoints.
"""

import json
import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import select
from starlette.requests import Request

from app.config import settings
from app.middleware.axiom_logging import build_event, error_reason
from app.middleware.operation_log import should_record
from app.middleware.request_info import (
    INTRANET_LOCATION,
    client_ip,
    describe_route,
    resolve_location,
    serialize_body,
)
from app.models.log import LogLevel, OperationLog
from app.services.option_service import option_service
from app.utils.masking import mask_sensitive
from tests.conftest import auth_header

URL = "/api/v1/admin/logs"
DEPARTMENTS = "/api/v1/admin/departments"


async def _logs(db) -> list[OperationLog]:
    result = await db.execute(select(OperationLog).order_by(OperationLog.created_at))
    return list(result.scalars().all())


class TestOperationLogRecording:
    """미들웨어 로그 기록 테스트."""

    async def test_write_request_recorded(self, client: AsyncClient, db, admin_user, admin_token, org):
        """부서 생성 요청이 작업 로그로 저장됨."""
        res = await client.post(DEPARTMENTS, json={"name": "Audit"}, headers=auth_header(admin_token))
        assert res.status_code == 201

        logs = await _logs(db)
        assert len(logs) == 1
        log = logs[0]
        assert log.description == "Create department"
        assert log.module == "Departments"
        assert log.request_method == "POST"
        assert log.status_code == 201
        assert log.level == LogLevel.INFO
        assert log.organization_id == org.id
        assert log.created_by == admin_user.id
        assert json.loads(log.request_body) == {"name": "Audit"}
        assert json.loads(log.response_body)["name"] == "Audit"
        assert log.request_ip == "127.0.0.1"
        assert log.location == INTRANET_LOCATION
        assert log.elapsed_time >= 0

    async def test_sensitive_fields_masked(self, client: AsyncClient, db, admin_user):
        """비밀번호와 토큰은 마스킹되어 저장됨."""
        res = await client.post("/api/v1/admin/auth/login", json={
            "username": "admin",
            "password": "admin123!",
        })
        assert res.status_code == 200

        log = (await _logs(db))[0]
        assert json.loads(log.request_body)["password"] == "***"
        assert "admin123!" not in log.request_body
        response = json.loads(log.response_body)
        assert response["access_token"] == "***"
        assert response["refresh_token"] == "***"
        # 로그인 요청에는 호출자 정보 없음 — Anonymous caller
        assert log.created_by is None

    async def test_authorization_header_masked(self, client: AsyncClient, db, admin_token, department):
        """Authorization 헤더는 마스킹됨."""
        await client.get(DEPARTMENTS, headers=auth_header(admin_token))
        log = (await _logs(db))[0]
        assert json.loads(log.request_headers)["authorization"] == "***"
        assert admin_token not in log.request_headers

    async def test_failed_request_recorded(self, client: AsyncClient, db, staff_token):
        """권한 없는 요청도 상태 코드와 함께 기록됨."""
        res = await client.get(DEPARTMENTS, headers=auth_header(staff_token))
        assert res.status_code == 403

        log = (await _logs(db))[0]
        assert log.status_code == 403
        assert log.level == LogLevel.INFO
        assert log.description == "List departments"

    async def test_log_queries_not_recorded(self, client: AsyncClient, db, admin_token):
        """로그 조회 API와 헬스 체크는 기록하지 않음."""
        await client.get(URL, headers=auth_header(admin_token))
        await client.get("/health")
        assert await _logs(db) == []

    async def test_handler_exception_recorded_as_error(self, client: AsyncClient, db, admin_token, monkeypatch):
        """핸들러 예외는 ERROR 레벨, 500, 스택 트레이스로 기록되고 예외는 그대로 전파됨."""
        async def _boom(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(option_service, "list_options", _boom)
        with pytest.raises(RuntimeError):
            await client.get("/api/v1/admin/options", headers=auth_header(admin_token))

        logs = await _logs(db)
        assert len(logs) == 1
        log = logs[0]
        assert log.level == LogLevel.ERROR
        assert log.status_code == 500
        assert "RuntimeError: boom" in log.exception
        assert log.module == "Options"
        assert log.description == "List options"

    async def test_invalid_forwarded_for_falls_back_to_peer(self, client: AsyncClient, db, admin_token, department):
        """잘못된 X-Forwarded-For 값은 저장하지 않고 접속 주소를 사용."""
        headers = {**auth_header(admin_token), "X-Forwarded-For": "a" * 100}
        res = await client.get(DEPARTMENTS, headers=headers)
        assert res.status_code == 200

        log = (await _logs(db))[0]
        assert log.request_ip == "127.0.0.1"
        assert log.location == INTRANET_LOCATION

    async def test_disabled_by_setting(self, client: AsyncClient, db, admin_token, monkeypatch):
        """OPERATION_LOG_ENABLED=False이면 기록하지 않음."""
        monkeypatch.setattr(settings, "OPERATION_LOG_ENABLED", False)
        await client.get(DEPARTMENTS, headers=auth_header(admin_token))
        assert await _logs(db) == []


class TestOperationLogHelpers:
    """미들웨어 헬퍼 함수 테스트."""

    def test_should_record(self):
        assert should_record("POST", "/api/v1/admin/departments")
        assert not should_record("OPTIONS", "/api/v1/admin/departments")
        assert not should_record("GET", "/health")
        assert not should_record("GET", "/api/v1/admin/logs/abc")

    def test_client_ip_prefers_forwarded_for(self):
        request = Request({
            "type": "http",
            "headers": [(b"x-forwarded-for", b"203.0.113.7, 10.0.0.1")],
            "client": ("127.0.0.1", 5000),
        })
        assert client_ip(request) == "203.0.113.7"

    def test_client_ip_ignores_invalid_forwarded_for(self):
        request = Request({
            "type": "http",
            "headers": [(b"x-forwarded-for", b"not-an-ip, 10.0.0.1")],
            "client": ("10.1.2.3", 5000),
        })
        assert client_ip(request) == "10.1.2.3"

    def test_client_ip_falls_back_to_peer(self):
        request = Request({"type": "http", "headers": [], "client": ("10.1.2.3", 5000)})
        assert client_ip(request) == "10.1.2.3"

    def test_resolve_location(self):
        assert resolve_location("192.168.0.10") == INTRANET_LOCATION
        assert resolve_location("127.0.0.1") == INTRANET_LOCATION
        assert resolve_location("172.20.1.1") == INTRANET_LOCATION
        assert resolve_location("fd00::1") == INTRANET_LOCATION
        assert resolve_location("8.8.8.8") is None
        # 문서용 대역은 사설망 아님 — documentation range
        assert resolve_location("203.0.113.7") is None
        assert resolve_location("not-an-ip") is None
        assert resolve_location(None) is None

    def test_serialize_body(self):
        assert serialize_body(b"", 100) is None
        assert serialize_body(b"plain text", 100) == "plain text"
        masked = json.loads(serialize_body(b'{"secret": "s", "name": "n"}', 100))
        assert masked == {"secret": "***", "name": "n"}

    def test_serialize_body_truncates(self):
        body = serialize_body(b"x" * 50, 10)
        assert body.startswith("x" * 10)
        assert len(body) < 50

    def test_mask_sensitive_nested(self):
        data = {"user": {"name": "a", "api_key": "k"}, "items": [{"token": "t"}], "Cookie": "c"}
        assert mask_sensitive(data) == {
            "user": {"name": "a", "api_key": "***"},
            "items": [{"token": "***"}],
            "Cookie": "***",
        }

    def test_describe_route_without_match(self):
        assert describe_route({"type": "http"}) == (None, None)


class TestAxiomEvent:
    """Axiom 이벤트 구성 테스트."""

    async def test_build_event_masks_query_and_reads_caller(self, admin_user, admin_token):
        request = Request({
            "type": "http",
            "method": "GET",
            "path": "/api/v1/admin/departments",
            "query_string": b"name=ops&token=abc",
            "headers": [(b"authorization", f"Bearer {admin_token}".encode())],
            "client": ("127.0.0.1", 5000),
            "server": ("test", 80),
            "scheme": "http",
        })
        event = build_event(request, 200, 12.5)
        assert event["method"] == "GET"
        assert event["path"] == "/api/v1/admin/departments"
        assert event["duration_ms"] == 12.5
        assert event["user_id"] == str(admin_user.id)
        assert event["query_params"] == {"name": "ops", "token": "***"}
        assert "description" not in event

    def test_error_reason(self):
        assert error_reason(b'{"detail": "Department not found"}') == "Department not found"
        assert error_reason(b"boom") == "boom"


class TestOperationLogApi:
    """작업 로그 조회 API 테스트."""

    async def test_list_logs_paginated(self, client: AsyncClient, admin_token):
        """로그 목록 페이지 조회 — 최신순."""
        for name in ("A", "B", "C"):
            await client.post(DEPARTMENTS, json={"name": name}, headers=auth_header(admin_token))

        res = await client.get(URL, params={"per_page": 2}, headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["total"] == 3
        assert data["page"] == 1
        assert data["per_page"] == 2
        assert data["pages"] == 2
        assert len(data["items"]) == 2
        assert "request_body" not in data["items"][0]

        res = await client.get(URL, params={"per_page": 2, "page": 2}, headers=auth_header(admin_token))
        assert len(res.json()["items"]) == 1

    async def test_list_logs_filtered(self, client: AsyncClient, admin_token, staff_token):
        """모듈/설명 필터."""
        await client.post(DEPARTMENTS, json={"name": "A"}, headers=auth_header(admin_token))
        await client.get("/api/v1/admin/options", headers=auth_header(admin_token))

        res = await client.get(URL, params={"module": "Options"}, headers=auth_header(admin_token))
        items = res.json()["items"]
        assert [i["description"] for i in items] == ["List options"]

        res = await client.get(URL, params={"description": "create"}, headers=auth_header(admin_token))
        assert [i["module"] for i in res.json()["items"]] == ["Departments"]

    async def test_list_logs_scoped_to_org(self, client: AsyncClient, db, admin_token, other_org):
        """다른 조직의 로그는 보이지 않음."""
        db.add(OperationLog(
            organization_id=other_org.id,
            request_url="http://test/x",
            request_method="GET",
            status_code=200,
        ))
        await db.flush()

        res = await client.get(URL, headers=auth_header(admin_token))
        assert res.json()["total"] == 0

    async def test_get_log_detail(self, client: AsyncClient, db, admin_token):
        """로그 상세 — 헤더/본문 포함."""
        await client.post(DEPARTMENTS, json={"name": "Detail"}, headers=auth_header(admin_token))
        log = (await _logs(db))[0]

        res = await client.get(f"{URL}/{log.id}", headers=auth_header(admin_token))
        assert res.status_code == 200
        data = res.json()
        assert data["id"] == str(log.id)
        assert data["level"] == "INFO"
        assert json.loads(data["request_body"]) == {"name": "Detail"}
        assert data["exception"] is None

    async def test_get_log_not_found(self, client: AsyncClient, admin_token):
        """존재하지 않는 로그 조회 시 404."""
        res = await client.get(f"{URL}/{uuid.uuid4()}", headers=auth_header(admin_token))
        assert res.status_code == 404

    async def test_manager_forbidden(self, client: AsyncClient, manager_token):
        """매니저는 로그 조회 불가 (Owner만)."""
        res = await client.get(URL, headers=auth_header(manager_token))
        assert res.status_code == 403
