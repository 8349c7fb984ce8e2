from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


class AppConfigError(ValueError):
    """Raised when the web boundary configuration is unusable."""


@dataclass(frozen=True)
class AdmissionConfig:
    login_path: str = "/login"
    protected_prefix: str = "/dashboard"
    dashboard_path: str = "/dashboard"
    cookie_name: str = "auth-storage"
    dev_mode: bool = False
    connect_src: tuple[str, ...] = ("http://localhost:8080",)


def _path(name: str, default: str) -> str:
    value = (os.getenv(name) or default).strip()
    if not value.startswith("/"):
        raise AppConfigError(f"Invalid {name}: expected an absolute path, got {value!r}")
    return value.rstrip("/") or "/"


def load_admission_config(env_file: str | None = None) -> AdmissionConfig:
    load_dotenv(env_file)
    connect_src = tuple(
        part.strip() for part in (os.getenv("MODIESEL_CSP_CONNECT_SRC") or "http://localhost:8080").split(",")
        if part.strip()
    )
    return AdmissionConfig(
        login_path=_path("MODIESEL_LOGIN_PATH", "/login"),
        protected_prefix=_path("MODIESEL_PROTECTED_PREFIX", "/dashboard"),
        dashboard_path=_path("MODIESEL_DASHBOARD_PATH", "/dashboard"),
        cookie_name=(os.getenv("MODIESEL_AUTH_COOKIE") or "auth-storage").strip(),
        dev_mode=(os.getenv("MODIESEL_DEV_MODE") or "").strip().lower() in {"1", "true", "yes", "on"},
        connect_src=connect_src,
    )
