from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Mapping

TRACE_HEADER = "X-Trace-ID"
_INBOUND_HEADERS = (TRACE_HEADER, "X-Trace-Id", "X-Request-ID")


@dataclass
class TraceContext:
    """Correlation id shared by every call made through one session.

    The backend may hand back its own id in a header or an error body; that
    id replaces ours so later calls and log lines line up with server logs.
    """

    trace_id: str | None = None

    def ensure(self) -> str:
        self.trace_id = self.trace_id or uuid.uuid4().hex
        return self.trace_id

    def update_from_headers(self, headers: Mapping[str, str]) -> None:
        found = next((headers.get(name) for name in _INBOUND_HEADERS if headers.get(name)), None)
        if found:
            self.trace_id = found

    def update_from_payload(self, payload: Mapping[str, object]) -> None:
        value = payload.get("trace_id")
        if isinstance(value, str) and value:
            self.trace_id = value
