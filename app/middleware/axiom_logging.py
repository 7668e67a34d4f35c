"""Axiom API 로깅 미들웨어.

Axiom API logging middleware.
Ships one structured event per request to Axiom: route description and
module, caller, client IP, masked query/body, status code, duration and
the error reason for failed requests. Pass-through when
``AXIOM_API_TOKEN`` / ``AXIOM_DATASET`` are not configured.
"""

import json
import time
from typing import Any

from axiom_py import Client as AxiomClient
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.config import settings
from app.middleware.request_info import SKIP_PATHS, client_ip, describe_route, read_body
from app.utils.jwt import read_caller
from app.utils.masking import mask_sensitive, truncate


def error_reason(body: bytes) -> str:
    """에러 응답 본문에서 사유를 추출합니다 (``detail`` field when JSON)."""
    try:
        data: Any = json.loads(body)
        return truncate(str(data.get("detail", data)), 500)
    except (json.JSONDecodeError, UnicodeDecodeError, AttributeError):
        return body.decode("utf-8", errors="replace")[:500]


def build_event(request: Request, status_code: int, duration_ms: float) -> dict[str, Any]:
    """요청 정보로 Axiom 이벤트 기본 필드를 구성합니다 (Base event fields)."""
    description, module = describe_route(request.scope)
    user_id, organization_id = read_caller(request.headers.get("authorization"))
    event: dict[str, Any] = {
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "duration_ms": round(duration_ms, 2),
        "ip": client_ip(request),
    }
    optional: dict[str, Any] = {
        "description": description,
        "module": module,
        "user_id": str(user_id) if user_id else None,
        "organization_id": str(organization_id) if organization_id else None,
        "query_params": mask_sensitive(dict(request.query_params)) if request.query_params else None,
    }
    event.update({k: v for k, v in optional.items() if v is not None})
    return event


class AxiomLoggingMiddleware(BaseHTTPMiddleware):
    """모든 API 요청/응답을 Axiom에 로깅하는 미들웨어.

    Middleware that logs all API requests and responses to Axiom.
    """

    def __init__(self, app: Any) -> None:
        super().__init__(app)
        self._client: AxiomClient | None = None
        self._dataset: str = settings.AXIOM_DATASET
        if settings.axiom_enabled:
            self._client = AxiomClient(token=settings.AXIOM_API_TOKEN)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if self._client is None or request.url.path in SKIP_PATHS:
            return await call_next(request)

        started = time.perf_counter()
        request_body: str | None = await read_body(request, 2000)

        status_code: int = 500
        error: str | None = None
        try:
            response = await call_next(request)
            status_code = response.status_code
            if status_code >= 400:
                body = b""
                async for chunk in response.body_iterator:
                    body += chunk if isinstance(chunk, bytes) else chunk.encode("utf-8")
                error = error_reason(body)
                response = Response(
                    content=body,
                    status_code=status_code,
                    headers=dict(response.headers),
                    media_type=response.media_type,
                )
        except Exception as exc:
            error = f"{type(exc).__name__}: {str(exc)[:300]}"
            raise
        finally:
            event = build_event(request, status_code, (time.perf_counter() - started) * 1000)
            if request_body is not None:
                event["request_body"] = request_body
            if error:
                event["error"] = error
            try:
                self._client.ingest_events(self._dataset, [event])
            except Exception:
                pass  # 로깅 실패가 요청 처리에 영향주지 않도록 — Never break request on log failure

        return response
