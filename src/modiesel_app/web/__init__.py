from .admission import (
    AdmissionDecision,
    AdmissionMiddleware,
    clear_session_cookie,
    decide_admission,
    set_session_cookie,
)
from .app import create_app
from .csp import build_csp, generate_nonce

__all__ = [
    "AdmissionDecision",
    "AdmissionMiddleware",
    "build_csp",
    "clear_session_cookie",
    "create_app",
    "decide_admission",
    "generate_nonce",
    "set_session_cookie",
]
