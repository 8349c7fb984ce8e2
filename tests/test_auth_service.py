from __future__ import annotations

import pytest
import requests
import responses

from modiesel_app.services.auth_service import LOGIN_FALLBACK, AuthService, InvalidCredentials
from modiesel_sdk import ApiSession, AuthStore, TransportError

from conftest import api_url


@responses.activate
def test_login_establishes_and_persists_session(session: ApiSession, auth_store: AuthStore) -> None:
    responses.add(
        responses.POST,
        api_url("auth/login"),
        json={"token": "abc", "usuario": {"id": 3, "nombre": "Ana", "rol": "ADMIN"}},
        status=200,
    )
    service = AuthService(session)

    result = service.login("ana@modiesel.pe", "secret")

    assert result.token == "abc"
    assert service.has_active_session()
    assert session.role == "ADMIN"
    assert auth_store.load().access_token == "abc"
    assert auth_store.read_marker() == "abc"


@responses.activate
def test_rejected_login_shows_backend_message(session: ApiSession) -> None:
    responses.add(responses.POST, api_url("auth/login"), json={"message": "Usuario o clave incorrectos"}, status=401)

    with pytest.raises(InvalidCredentials) as excinfo:
        AuthService(session).login("ana@modiesel.pe", "bad")

    assert excinfo.value.message == "Usuario o clave incorrectos"
    assert not session.is_authenticated


@responses.activate
def test_rejected_login_without_message_uses_fallback(session: ApiSession) -> None:
    responses.add(responses.POST, api_url("auth/login"), status=400)

    with pytest.raises(InvalidCredentials) as excinfo:
        AuthService(session).login("ana@modiesel.pe", "bad")
    assert excinfo.value.message == LOGIN_FALLBACK


@responses.activate
def test_login_without_token_is_invalid_credentials(session: ApiSession) -> None:
    responses.add(responses.POST, api_url("auth/login"), json={"mensaje": "ok"}, status=200)

    with pytest.raises(InvalidCredentials):
        AuthService(session).login("ana@modiesel.pe", "secret")
    assert not session.is_authenticated


@responses.activate
def test_network_failure_propagates(session: ApiSession) -> None:
    responses.add(responses.POST, api_url("auth/login"), body=requests.ConnectionError("down"))

    with pytest.raises(TransportError):
        AuthService(session).login("ana@modiesel.pe", "secret")


def test_logout_clears_session(authed_session: ApiSession) -> None:
    service = AuthService(authed_session)
    service.logout()
    service.logout()
    assert not service.has_active_session()
