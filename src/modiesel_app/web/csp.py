from __future__ import annotations

import base64
import secrets
from typing import Iterable

VERCEL_SCRIPTS = "https://va.vercel-scripts.com"
VERCEL_INSIGHTS = "https://vitals.vercel-insights.com"


def generate_nonce() -> str:
    return base64.b64encode(secrets.token_bytes(16)).decode("ascii")


def build_csp(nonce: str, *, dev_mode: bool = False, connect_src: Iterable[str] = ()) -> str:
    script_src = ["'self'", f"'nonce-{nonce}'", "'strict-dynamic'", VERCEL_SCRIPTS]
    if dev_mode:
        script_src.insert(1, "'unsafe-eval'")
    connect = ["'self'", *connect_src, VERCEL_INSIGHTS]
    if dev_mode:
        connect += ["ws://localhost:3000", "ws://localhost:*"]

    directives = [
        "default-src 'self'",
        "script-src " + " ".join(script_src),
        f"style-src 'self' 'nonce-{nonce}'",
        "img-src 'self' data: https:",
        "font-src 'self' data:",
        "connect-src " + " ".join(connect),
        "frame-ancestors 'none'",
        "base-uri 'self'",
        "form-action 'self'",
        "object-src 'none'",
    ]
    if not dev_mode:
        directives.append("upgrade-insecure-requests")
    return "; ".join(directives)
