"""민감 정보 마스킹 및 길이 제한 유틸리티.

Masking and truncation helpers shared by the Axiom and operation log
middlewares. Keys matching ``SENSITIVE_KEYS`` are replaced with ``***``
at any nesting depth (up to ``MAX_DEPTH``).
"""

import re
from typing import Any

SENSITIVE_KEYS = re.compile(
    r"(password|passwd|secret|token|authorization|cookie|api_key|apikey|credential)",
    re.IGNORECASE,
)

MASK: str = "***"
MAX_DEPTH: int = 5
MAX_LIST_ITEMS: int = 20


def mask_sensitive(data: Any, depth: int = 0) -> Any:
    """dict/list를 재귀적으로 순회하며 민감 키의 값을 가립니다.

    Recursively mask sensitive keys. Lists are cut to ``MAX_LIST_ITEMS``
    entries; anything deeper than ``MAX_DEPTH`` is returned as is.
    """
    if depth > MAX_DEPTH:
        return data
    if isinstance(data, dict):
        return {
            k: MASK if SENSITIVE_KEYS.search(str(k)) else mask_sensitive(v, depth + 1)
            for k, v in data.items()
        }
    if isinstance(data, list):
        return [mask_sensitive(item, depth + 1) for item in data[:MAX_LIST_ITEMS]]
    return data


def truncate(value: Any, max_len: int = 2000) -> Any:
    """문자열이 max_len보다 길면 잘라서 표시합니다 (Non-strings pass through)."""
    if isinstance(value, str) and len(value) > max_len:
        return value[:max_len] + "...(truncated)"
    return value
