"""CORS origin allow-list."""
from collections.abc import Iterable

from utils.config import ALLOWED_ORIGINS

_ALLOWED: frozenset[str] = frozenset(ALLOWED_ORIGINS)


def is_allowed_origin(origin: str | None, allowed: Iterable[str] | None = None) -> bool:
    """
    Return True if a request with this Origin header may proceed.
    No Origin (curl, server-to-server) is always allowed; otherwise the origin must match exactly.
    """
    if not origin:
        return True
    pool = _ALLOWED if allowed is None else frozenset(allowed)
    return origin in pool
