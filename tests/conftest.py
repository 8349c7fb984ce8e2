from __future__ import annotations

from pathlib import Path

import pytest

from modiesel_sdk import ApiSession, AuthStore, ClientConfig, User

BASE_URL = "https://api.example.com/api"


def api_url(path: str) -> str:
    return f"{BASE_URL}/{path.lstrip('/')}"


@pytest.fixture()
def config() -> ClientConfig:
    return ClientConfig(
        env_name="test",
        api_base_url=BASE_URL,
        retries=0,
        retry_backoff_seconds=0,
    )


@pytest.fixture()
def auth_store(tmp_path: Path) -> AuthStore:
    return AuthStore(base_dir=tmp_path / "store")


@pytest.fixture()
def session(config: ClientConfig, auth_store: AuthStore) -> ApiSession:
    return ApiSession(config=config, auth_store=auth_store)


@pytest.fixture()
def authed_session(session: ApiSession) -> ApiSession:
    session.establish("token-1", User(id=3, name="ana", email="ana@modiesel.pe", role="ADMIN"))
    return session


def client_row(client_id: int, name: str = "Transportes Andinos SAC") -> dict:
    return {
        "id": client_id,
        "ruc": "20123456789",
        "razonSocial": name,
        "estado": True,
        "correo": "ventas@andinos.pe",
        "telefono": "999888777",
    }


def product_row(product_id: int, price: float, stock: int, name: str | None = None) -> dict:
    return {
        "id": product_id,
        "nombre": name or f"Producto {product_id}",
        "marca": "Cummins",
        "descripcion": "",
        "precio": price,
        "stock": stock,
        "proveedorId": 1,
    }
