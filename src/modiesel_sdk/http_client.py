from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping

import requests
from requests.adapters import HTTPAdapter

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import ApiError, TransportError
from .tracing import TRACE_HEADER, TraceContext

logger = logging.getLogger(__name__)

REQUEST_CANCELLED = "REQUEST_CANCELLED"
IDEMPOTENT_METHODS = frozenset({"GET", "HEAD"})

ResponseHook = Callable[[requests.Response], None]
RequestHook = Callable[[str, str, dict[str, Any]], None]


@dataclass(frozen=True)
class NormalizedError:
    code: str
    message: str
    trace_id: str | None
    type: str


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    trace_id: str | None


class _GetCache:
    """Short-lived GET responses keyed by url, params and bearer token."""

    def __init__(self, ttl_seconds: float) -> None:
        self.ttl_seconds = ttl_seconds
        self._entries: dict[str, tuple[float, Any]] = {}

    @staticmethod
    def key(url: str, headers: Mapping[str, str], params: Mapping[str, Any] | None) -> str:
        return json.dumps(
            {"url": url, "auth": headers.get("Authorization"), "params": dict(params or {})},
            sort_keys=True,
        )

    def get(self, key: str) -> Any:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, payload = entry
        if time.monotonic() >= expires_at:
            del self._entries[key]
            return None
        return payload

    def put(self, key: str, payload: Any) -> None:
        if self.ttl_seconds > 0:
            self._entries[key] = (time.monotonic() + self.ttl_seconds, payload)

    def drop_collections(self, paths: list[str]) -> None:
        # "/ventas/3" also drops the "/ventas" listing.
        roots = {"/" + path.strip("/").split("/")[0] for path in paths if path.strip("/")}
        for key in [k for k in self._entries if any(root in k for root in roots)]:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()


@dataclass
class HttpClient:
    """JSON transport shared by every client of one session.

    Only GET/HEAD are retried; a mutation is sent once and its failure is
    reported to the caller. A request tagged with ``context_key`` and
    ``context_version`` is dropped with a ``REQUEST_CANCELLED``
    :class:`TransportError` when the context moved on while it was in flight.
    """

    config: ClientConfig
    trace: TraceContext = field(default_factory=TraceContext)
    session: requests.Session | None = None
    before_request: RequestHook | None = None
    after_response: ResponseHook | None = None
    enable_get_cache: bool = True
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.trace is None:
            self.trace = TraceContext()
        if self.session is None:
            self.session = requests.Session()
            adapter = HTTPAdapter(
                pool_connections=self.config.max_connections,
                pool_maxsize=self.config.max_connections,
            )
            self.session.mount("http://", adapter)
            self.session.mount("https://", adapter)
        self._cache = _GetCache(self.config.cache_ttl_seconds)
        self._contexts: dict[str, int] = {}

    def url_for(self, path: str) -> str:
        return f"{self.config.api_base_url.rstrip('/')}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
        module: str = "unknown",
        operation: str = "unknown",
        use_get_cache: bool = True,
        context_key: str | None = None,
        context_version: int | None = None,
        invalidate_paths: list[str] | None = None,
    ) -> Any:
        method = method.upper()
        url = self.url_for(path)
        request_headers = {"Accept": "application/json", **(headers or {})}
        request_headers[TRACE_HEADER] = self.trace.ensure()
        if self.before_request:
            self.before_request(method, url, {"headers": request_headers, "json_body": json_body, "params": params})

        cache_key = None
        if method == "GET" and self.enable_get_cache and use_get_cache:
            cache_key = _GetCache.key(url, request_headers, params)
            cached = self._cache.get(cache_key)
            if cached is not None:
                self.last_operation = LastOperation(module, operation, 0, "success(cache)", self.trace.trace_id)
                return cached

        if context_key and context_version is None:
            context_version = self.get_context_version(context_key)
        if context_key and not self._is_current(context_key, context_version):
            raise self._cancelled("Request cancelled before dispatch")

        started = time.monotonic()
        try:
            response = self._send(method, url, request_headers, json_body, params)
        except TransportError:
            self._record(module, operation, started, "error")
            raise

        if self.after_response:
            self.after_response(response)
        if context_key and not self._is_current(context_key, context_version):
            raise self._cancelled("Request cancelled due to context switch")

        self.trace.update_from_headers(response.headers)
        if not response.ok:
            self._record(module, operation, started, "error")
            raise self._error_from(response)

        self._record(module, operation, started, "success")
        if method not in IDEMPOTENT_METHODS:
            self._cache.drop_collections(invalidate_paths or [path])
        body = _decode(response)
        if cache_key is not None and body is not None:
            self._cache.put(cache_key, body)
        return body

    def _send(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        json_body: Any,
        params: dict[str, Any] | None,
    ) -> requests.Response:
        attempts = self.config.retries + 1 if method in IDEMPOTENT_METHODS else 1
        for attempt in range(1, attempts + 1):
            last = attempt == attempts
            try:
                response = self.session.request(
                    method=method,
                    url=url,
                    headers=headers,
                    json=json_body,
                    params=params,
                    timeout=(self.config.connect_timeout_seconds, self.config.read_timeout_seconds),
                    verify=self.config.verify_ssl,
                )
            except requests.RequestException as exc:
                if last:
                    raise TransportError(
                        code="TRANSPORT_ERROR",
                        message=str(exc),
                        details={"type": type(exc).__name__},
                        trace_id=self.trace.trace_id,
                        status_code=0,
                    ) from exc
                reason: dict[str, Any] = {"reason": type(exc).__name__}
            else:
                if response.status_code < 500 or last:
                    return response
                reason = {"status": response.status_code}
            logger.warning("http_retry", extra={"method": method, "url": url, "attempt": attempt, **reason})
            time.sleep(self.config.retry_backoff_seconds * (2 ** (attempt - 1)))
        raise RuntimeError("unreachable")

    def _error_from(self, response: requests.Response) -> ApiError:
        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text} if response.text else {}
        if not isinstance(payload, dict):
            payload = {"message": str(payload)}
        self.trace.update_from_payload(payload)
        return map_error(response.status_code, payload, self.trace.trace_id)

    def normalize_error(self, error: Exception) -> NormalizedError:
        if isinstance(error, TransportError):
            return NormalizedError(code=error.code, message=error.message, trace_id=error.trace_id, type="network")
        status = int(getattr(error, "status_code", 0) or 0)
        return NormalizedError(
            code=str(getattr(error, "code", "UNKNOWN_ERROR")),
            message=str(getattr(error, "message", error)),
            trace_id=getattr(error, "trace_id", None),
            type=_error_type(status),
        )

    def switch_context(self, context_key: str) -> int:
        version = self.get_context_version(context_key) + 1
        self._contexts[context_key] = version
        self.clear_cache()
        return version

    def get_context_version(self, context_key: str) -> int:
        return self._contexts.get(context_key, 0)

    def clear_cache(self) -> None:
        self._cache.clear()

    def _is_current(self, context_key: str, version: int | None) -> bool:
        return version is None or self.get_context_version(context_key) == version

    def _cancelled(self, message: str) -> TransportError:
        return TransportError(
            code=REQUEST_CANCELLED,
            message=message,
            details={"type": "context_switched"},
            trace_id=self.trace.trace_id,
            status_code=0,
        )

    def _record(self, module: str, operation: str, started: float, result: str) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            trace_id=self.trace.trace_id,
        )


def _decode(response: requests.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_type(status: int) -> str:
    if status <= 0:
        return "network"
    if status in (401, 403):
        return "auth"
    if status in (400, 404, 422):
        return "validation"
    if status == 409:
        return "conflict"
    return "internal"
