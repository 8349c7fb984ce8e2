from __future__ import annotations

import logging

from modiesel_sdk import ApiSession, LoginResult, to_user_facing_error
from modiesel_sdk.exceptions import ApiError, AuthError, MissingTokenError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

LOGIN_FALLBACK = "Credenciales inválidas"


class InvalidCredentials(RuntimeError):
    def __init__(self, message: str, trace_id: str | None = None) -> None:
        self.message = message
        self.trace_id = trace_id
        super().__init__(message)


class AuthService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def has_active_session(self) -> bool:
        return self.session.is_authenticated

    def login(self, email: str, password: str) -> LoginResult:
        logger.info("login_attempt", extra={"user": email})
        try:
            result = self.session.auth_client().login(email, password)
        except (AuthError, ValidationError, NotFoundError, MissingTokenError) as exc:
            logger.warning("login_rejected", extra={"user": email, "code": exc.code, "status": exc.status_code})
            message = to_user_facing_error(exc, fallback=LOGIN_FALLBACK).message
            raise InvalidCredentials(message, trace_id=exc.trace_id) from exc
        except ApiError:
            logger.exception("login_failure", extra={"user": email})
            raise
        self.session.establish(result.token, result.user)
        logger.info("login_success", extra={"user": email, "role": result.user.role})
        return result

    def logout(self) -> None:
        logger.info("logout", extra={"was_authenticated": self.session.is_authenticated})
        self.session.logout()
