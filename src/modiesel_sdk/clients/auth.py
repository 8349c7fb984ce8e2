from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..exceptions import MissingTokenError
from ..models import LoginRequest, User, to_wire
from .base import BaseClient

_TOKEN_KEYS = ("token", "access_token", "accessToken")


@dataclass(frozen=True)
class LoginResult:
    token: str
    user: User


def extract_token(data: Any) -> str | None:
    if isinstance(data, str):
        return data.strip() or None
    if not isinstance(data, dict):
        return None
    for key in _TOKEN_KEYS:
        value = data.get(key)
        if isinstance(value, str) and value:
            return value
    return None


def extract_user(data: Any, email: str) -> User:
    """Build the session user from a login body.

    The API nests the user under ``usuario`` on some deployments and flattens
    it into the top level on others.
    """
    body = data if isinstance(data, dict) else {}
    nested = body.get("usuario") if isinstance(body.get("usuario"), dict) else {}
    return User(
        id=nested.get("id") or body.get("id"),
        name=nested.get("nombre") or body.get("nombre") or email.split("@")[0],
        email=email,
        role=nested.get("rol") or body.get("rol"),
    )


class AuthClient(BaseClient):
    def login(self, email: str, password: str) -> LoginResult:
        payload = to_wire(LoginRequest(email=email, password=password))
        data = self.http.request(
            "POST",
            "/auth/login",
            json_body=payload,
            module="auth",
            operation="login",
        )
        token = extract_token(data)
        if not token:
            raise MissingTokenError(
                code="MISSING_TOKEN",
                message="No se recibió token del servidor",
                details=None,
                trace_id=None,
                status_code=200,
                raw_payload=data,
            )
        return LoginResult(token=token, user=extract_user(data, email))
