"""Prometheus metrics definitions for cookie sessions."""
from __future__ import annotations

from prometheus_client import Counter, Histogram

SESSIONS_LOADED = Counter(
    "cookie_sessions_loaded_total",
    "Sessions materialized from requests",
    ["result"],  # new/loaded/rejected
)

SESSION_WRITES = Counter(
    "cookie_session_writes_total",
    "Session cookies written to responses",
    ["action"],  # write/extend/destroy
)

SESSION_COOKIE_BYTES = Histogram(
    "cookie_session_cookie_bytes",
    "Size of sealed session cookie values",
    buckets=[128, 256, 512, 1024, 2048, 3072, 4096],
)
