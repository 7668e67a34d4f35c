"""요청 정보 추출 헬퍼 — 두 로깅 미들웨어가 공유.

Request inspection helpers shared by the Axiom and operation log
middlewares: which paths to skip, client IP and coarse location, the
matched route's description/module, and masked header/body text.
"""

import ipaddress
import json
from typing import Any

from starlette.requests import Request

from app.utils.masking import mask_sensitive, truncate

# 로깅 제외 경로 — Paths never logged by either middleware
SKIP_PATHS: set[str] = {"/health", "/docs", "/redoc", "/openapi.json"}

INTRANET_LOCATION: str = "Intranet IP"

# RFC 1918 사설 대역 + IPv6 ULA — documentation/reserved ranges are not intranet
_PRIVATE_NETWORKS = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
    ipaddress.ip_network("fc00::/7"),
)


def _parse_ip(value: str | None) -> ipaddress.IPv4Address | ipaddress.IPv6Address | None:
    if not value:
        return None
    try:
        return ipaddress.ip_address(value)
    except ValueError:
        return None


def client_ip(request: Request) -> str | None:
    """클라이언트 IP — X-Forwarded-For 첫 번째 값 우선.

    The first X-Forwarded-For hop wins only when it is a valid address;
    anything else falls back to the socket peer.
    """
    forwarded: str | None = request.headers.get("x-forwarded-for")
    if forwarded:
        hop = _parse_ip(forwarded.split(",")[0].strip())
        if hop is not None:
            return str(hop)
    return request.client.host if request.client else None


def resolve_location(ip: str | None) -> str | None:
    """사설/루프백 주소면 "Intranet IP", 그 외 None (No geo lookup)."""
    address = _parse_ip(ip)
    if address is None:
        return None
    if address.is_loopback or any(
        network.version == address.version and address in network for network in _PRIVATE_NETWORKS
    ):
        return INTRANET_LOCATION
    return None


def serialize_body(raw: bytes, max_len: int) -> str | None:
    """본문을 마스킹/절단된 문자열로 변환합니다 (Masked, truncated body text)."""
    if not raw:
        return None
    try:
        text: str = json.dumps(mask_sensitive(json.loads(raw)), ensure_ascii=False)
    except (json.JSONDecodeError, UnicodeDecodeError):
        text = raw.decode("utf-8", errors="replace")
    return truncate(text, max_len)


def serialize_headers(headers: Any) -> str:
    return json.dumps(mask_sensitive(dict(headers)), ensure_ascii=False)


def describe_route(scope: dict[str, Any]) -> tuple[str | None, str | None]:
    """라우트에서 (설명, 모듈)을 추출합니다.

    Return (description, module) for the matched route: the route summary
    (or its humanized endpoint name) and the first router tag. Both are
    None when no route matched.
    """
    route = scope.get("route")
    if route is None:
        return None, None

    description: str | None = getattr(route, "summary", None)
    if not description:
        route_name: str | None = getattr(route, "name", None)
        description = route_name.replace("_", " ").capitalize() if route_name else None
    tags: list[Any] = list(getattr(route, "tags", None) or [])
    module: str | None = str(tags[0]) if tags else None
    return description, module


async def read_body(request: Request, max_len: int) -> str | None:
    """본문이 있는 메서드만 요청 본문을 읽습니다 (Body of POST/PUT/PATCH/DELETE only)."""
    if request.method not in ("POST", "PUT", "PATCH", "DELETE"):
        return None
    return serialize_body(await request.body(), max_len)
