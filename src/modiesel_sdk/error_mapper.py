from __future__ import annotations

from typing import Mapping

from .exceptions import (
    ApiError,
    AuthError,
    ConflictError,
    NotFoundError,
    PermissionError,
    RateLimitError,
    ServerError,
    ValidationError,
)

_BY_STATUS: dict[int, type[ApiError]] = {
    400: ValidationError,
    401: AuthError,
    403: PermissionError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
    429: RateLimitError,
}

# The backend is not consistent about where it puts the human readable text.
_MESSAGE_KEYS = ("message", "mensaje", "error", "detail")


def extract_message(payload: Mapping[str, object]) -> str | None:
    for key in _MESSAGE_KEYS:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def error_class_for(status_code: int) -> type[ApiError]:
    if status_code >= 500:
        return ServerError
    return _BY_STATUS.get(status_code, ApiError)


def map_error(status_code: int, payload: Mapping[str, object] | None, trace_id: str | None) -> ApiError:
    """Turn an error response into the matching :class:`ApiError` subclass.

    ``message`` is left empty when the body has no text, so callers can pick
    their own fallback.
    """
    body = dict(payload or {})
    body_trace = body.get("trace_id")
    return error_class_for(status_code)(
        code=str(body.get("code") or body.get("status_text") or "HTTP_ERROR"),
        message=extract_message(body) or "",
        details=body.get("details") or body.get("errors"),
        trace_id=str(body_trace) if body_trace is not None else trace_id,
        status_code=status_code,
        raw_payload=body,
    )
