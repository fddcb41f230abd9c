"""
In-memory, per-IP rate limiting for the public donation form.

Configure via RATE_LIMIT_ENABLED (default: 1) and
RATE_LIMIT_DONATIONS_PER_MINUTE (default: 30). Counters live in the process,
so each worker enforces its own budget.
"""

from __future__ import annotations

import os
import time
from collections import deque
from functools import wraps
from threading import Lock

from flask import current_app, jsonify, request

_lock = Lock()
_hits: dict[str, deque[float]] = {}
_window = 60  # seconds
_sweep_at = 1024  # tracked keys before idle ones are dropped


def is_rate_limited(key: str, limit: int, now: float | None = None) -> bool:
    """Return True if the key has used up its limit within the window."""
    if limit <= 0:
        return False
    now = time.time() if now is None else now
    with _lock:
        if len(_hits) >= _sweep_at:
            _sweep(now)
        hits = _hits.setdefault(key, deque())
        while hits and hits[0] <= now - _window:
            hits.popleft()
        if len(hits) >= limit:
            return True
        hits.append(now)
        return False


def _sweep(now: float) -> None:
    # caller holds _lock; a key whose newest hit left the window is idle
    for key in [k for k, hits in _hits.items() if not hits or hits[-1] <= now - _window]:
        del _hits[key]


def tracked_keys() -> int:
    with _lock:
        return len(_hits)


def reset() -> None:
    with _lock:
        _hits.clear()


def client_key() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.remote_addr or "unknown"


def _enabled() -> bool:
    flag = current_app.config.get("RATE_LIMIT_ENABLED")
    if flag is None:
        flag = os.getenv("RATE_LIMIT_ENABLED", "1") == "1"
    return bool(flag)


def rate_limited(config_key: str, default: int, key_prefix: str):
    """Limit a route to `config_key` requests per minute per client IP."""

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            if not _enabled():
                return fn(*args, **kwargs)
            limit = int(current_app.config.get(config_key) or default)
            if is_rate_limited(f"{key_prefix}:{client_key()}", limit):
                current_app.logger.warning(
                    "rate limit hit on %s for %s", key_prefix, client_key()
                )
                return jsonify({"error": "rate limit exceeded", "retry_after": _window}), 429
            return fn(*args, **kwargs)

        return wrapper

    return decorator
