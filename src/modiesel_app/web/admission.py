from __future__ import annotations

import logging
from dataclasses import dataclass

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from ..config import AdmissionConfig
from ..logging import log_json
from .csp import build_csp, generate_nonce

logger = logging.getLogger("modiesel.admission")

NO_STORE = "no-store, no-cache, must-revalidate, proxy-revalidate, max-age=0"


@dataclass(frozen=True)
class AdmissionDecision:
    allowed: bool
    redirect_to: str | None = None


def _under(path: str, prefix: str) -> bool:
    return path == prefix or path.startswith(prefix.rstrip("/") + "/")


def decide_admission(path: str, authenticated: bool, config: AdmissionConfig) -> AdmissionDecision:
    if _under(path, config.protected_prefix) and not authenticated:
        return AdmissionDecision(allowed=False, redirect_to=config.login_path)
    if _under(path, config.login_path) and authenticated:
        return AdmissionDecision(allowed=False, redirect_to=config.dashboard_path)
    return AdmissionDecision(allowed=True)


class AdmissionMiddleware(BaseHTTPMiddleware):
    """Cookie-based route admission plus per-response CSP nonce."""

    def __init__(self, app: ASGIApp, config: AdmissionConfig | None = None) -> None:
        super().__init__(app)
        self.config = config or AdmissionConfig()

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        token = request.cookies.get(self.config.cookie_name)
        decision = decide_admission(path, bool(token), self.config)
        if decision.allowed:
            response: Response = await call_next(request)
        else:
            response = RedirectResponse(url=decision.redirect_to, status_code=307)
        log_json(
            logger,
            {
                "event": "admission",
                "path": path,
                "method": request.method,
                "authenticated": bool(token),
                "redirect_to": decision.redirect_to,
                "status_code": response.status_code,
            },
        )

        nonce = generate_nonce()
        response.headers["Content-Security-Policy"] = build_csp(
            nonce,
            dev_mode=self.config.dev_mode,
            connect_src=self.config.connect_src,
        )
        response.headers["X-Nonce"] = nonce
        if _under(path, self.config.login_path) or _under(path, self.config.protected_prefix):
            response.headers["Cache-Control"] = NO_STORE
            response.headers["Pragma"] = "no-cache"
            response.headers["Expires"] = "0"
        return response


def set_session_cookie(response: Response, token: str, config: AdmissionConfig, *, secure: bool = True) -> None:
    response.set_cookie(
        config.cookie_name,
        token,
        max_age=7 * 24 * 3600,
        path="/",
        samesite="strict",
        secure=secure,
    )


def clear_session_cookie(response: Response, config: AdmissionConfig) -> None:
    response.delete_cookie(config.cookie_name, path="/")
