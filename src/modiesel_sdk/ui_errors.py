from __future__ import annotations

from dataclasses import dataclass

from .exceptions import ApiError, TransportError

GENERIC_FALLBACK = "No se pudo completar la operación"


@dataclass(frozen=True)
class UserFacingError:
    message: str
    details: str | None = None
    trace_id: str | None = None


def to_user_facing_error(exc: ApiError, fallback: str = GENERIC_FALLBACK) -> UserFacingError:
    """Backend text goes to the user as-is; ``fallback`` only when there is none."""
    if isinstance(exc, TransportError):
        primary = fallback
    else:
        primary = (exc.message or "").strip() or fallback
    details = f"{exc.code} (HTTP {exc.status_code})"
    if exc.details:
        details = f"{details}: {exc.details}"
    return UserFacingError(message=primary, details=details, trace_id=exc.trace_id)
