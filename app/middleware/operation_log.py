"""작업 로그 미들웨어 — 요청/응답을 sys_log 테이블에 기록.

Operation log middleware.
Persists one OperationLog row per API request: route description and
module, masked headers/bodies, status code, elapsed time, client IP,
user agent, caller (from the bearer token) and exception text.

The session factory is read from ``app.state.log_session_factory`` so
tests can point it at their own database.
"""

import time
import traceback
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.middleware.request_info import (
    SKIP_PATHS,
    client_ip,
    describe_route,
    read_body,
    resolve_location,
    serialize_body,
    serialize_headers,
)
from app.models.log import LogLevel
from app.services.log_service import log_service
from app.utils.jwt import read_caller
from app.utils.masking import truncate


def should_record(method: str, path: str) -> bool:
    """기록 대상 요청인지 판단합니다.

    Preflight requests, ``SKIP_PATHS`` and the configured excluded
    prefixes (the log query routes by default) are not recorded.
    """
    if method == "OPTIONS" or path in SKIP_PATHS:
        return False
    return not any(path.startswith(prefix) for prefix in settings.OPERATION_LOG_EXCLUDED_PREFIXES)


async def _drain(response: Response) -> tuple[Response, bytes]:
    # 스트리밍 응답 본문을 모두 읽고 새 응답으로 감쌈 — Buffer body and re-wrap
    body = b""
    async for chunk in response.body_iterator:
        body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
    wrapped = Response(
        content=body,
        status_code=response.status_code,
        headers=dict(response.headers),
        media_type=response.media_type,
    )
    return wrapped, body


class OperationLogMiddleware(BaseHTTPMiddleware):
    """모든 API 요청을 작업 로그로 저장하는 미들웨어.

    Middleware that records every API request as an operation log row.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if not settings.OPERATION_LOG_ENABLED or not should_record(request.method, request.url.path):
            return await call_next(request)

        started = time.perf_counter()
        max_len: int = settings.OPERATION_LOG_MAX_BODY_LENGTH
        request_body: str | None = await read_body(request, max_len)

        entry: dict[str, Any] = {"status_code": 500}
        try:
            response, body = await _drain(await call_next(request))
            entry.update(
                status_code=response.status_code,
                response_headers=serialize_headers(response.headers),
                response_body=serialize_body(body, max_len),
            )
        except Exception:
            entry["exception"] = truncate(traceback.format_exc(), max_len * 4)
            raise
        finally:
            entry.update(self._describe(request, request_body))
            entry["level"] = (
                LogLevel.ERROR if entry.get("exception") or entry["status_code"] >= 500 else LogLevel.INFO
            )
            entry["elapsed_time"] = int((time.perf_counter() - started) * 1000)
            await self._persist(request, entry)

        return response

    def _describe(self, request: Request, request_body: str | None) -> dict[str, Any]:
        description, module = describe_route(request.scope)
        user_id, organization_id = read_caller(request.headers.get("authorization"))
        ip: str | None = client_ip(request)
        user_agent: str | None = request.headers.get("user-agent")
        return {
            "organization_id": organization_id,
            "created_by": user_id,
            "description": description,
            "module": module,
            "request_url": truncate(str(request.url), 480),
            "request_method": request.method,
            "request_headers": serialize_headers(request.headers),
            "request_body": request_body,
            "request_ip": ip,
            "location": resolve_location(ip),
            "browser": user_agent[:255] if user_agent else None,
        }

    async def _persist(self, request: Request, entry: dict[str, Any]) -> None:
        session_factory = getattr(request.app.state, "log_session_factory", None)
        if session_factory is None:
            return
        try:
            async with session_factory() as session:
                await log_service.record(session, entry)
                await session.commit()
        except Exception:
            pass  # 로그 저장 실패가 요청 처리에 영향주지 않도록 — Never break request on log failure
