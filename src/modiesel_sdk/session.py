from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, TypeVar

import requests

from .auth_store import AuthStore
from .clients.auth import AuthClient
from .clients.resources import (
    ClientsClient,
    ImagesClient,
    InventoryClient,
    ProductsClient,
    ResourceClient,
    SparePartsClient,
    SuppliersClient,
    UsersClient,
    VehiclesClient,
)
from .clients.sales_client import SalesClient
from .config import ClientConfig
from .http_client import HttpClient
from .models import SessionData, User
from .tracing import TraceContext

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=ResourceClient)

UnauthorizedListener = Callable[[str], None]


class SessionState(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATED = "authenticated"


@dataclass
class ApiSession:
    """Process-wide session: token lifecycle plus the clients that need it.

    Every client handed out shares one :class:`HttpClient`, and that client
    reports each response back here, so a 401 from any call site ends the
    session through :meth:`handle_unauthorized` and nowhere else.
    """

    config: ClientConfig
    auth_store: AuthStore | None = None
    trace: TraceContext | None = None
    token: str | None = None
    user: User | None = None
    http: HttpClient | None = None
    _listeners: list[UnauthorizedListener] = field(default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.auth_store = self.auth_store or AuthStore()
        self.trace = self.trace or TraceContext()
        if self.http is None:
            self.http = HttpClient(config=self.config, trace=self.trace)
        self.http.after_response = self._watch_response
        stored = self.auth_store.load()
        if stored and not self.token:
            self.token = stored.access_token
            self.user = stored.user

    @property
    def state(self) -> SessionState:
        return SessionState.AUTHENTICATED if self.token else SessionState.ANONYMOUS

    @property
    def is_authenticated(self) -> bool:
        return self.state is SessionState.AUTHENTICATED

    @property
    def role(self) -> str | None:
        return self.user.role if self.user else None

    def on_unauthorized(self, listener: UnauthorizedListener) -> None:
        self._listeners.append(listener)

    def establish(self, token: str, user: User | None) -> None:
        self.token = token
        self.user = user
        self.auth_store.save(SessionData(access_token=token, user=user, env_name=self.config.env_name))
        self.http.clear_cache()

    def clear(self) -> None:
        self.token = None
        self.user = None
        self.auth_store.clear()
        self.http.clear_cache()

    def logout(self) -> None:
        self.clear()

    def handle_unauthorized(self, reason: str = "unauthorized") -> None:
        was_authenticated = self.is_authenticated
        self.clear()
        if not was_authenticated:
            return
        logger.warning("session_revoked", extra={"reason": reason, "trace_id": self.trace.trace_id})
        for listener in list(self._listeners):
            listener(reason)

    def _watch_response(self, response: requests.Response) -> None:
        if response.status_code == 401:
            self.handle_unauthorized(f"HTTP 401 on {response.request.method} {response.url}")

    def auth_client(self) -> AuthClient:
        return AuthClient(http=self.http, access_token=self.token)

    def sales_client(self) -> SalesClient:
        return SalesClient(http=self.http, access_token=self.token)

    def resource(self, client_type: type[R]) -> R:
        return client_type(http=self.http, access_token=self.token)

    def clients_client(self) -> ClientsClient:
        return self.resource(ClientsClient)

    def products_client(self) -> ProductsClient:
        return self.resource(ProductsClient)

    def vehicles_client(self) -> VehiclesClient:
        return self.resource(VehiclesClient)

    def suppliers_client(self) -> SuppliersClient:
        return self.resource(SuppliersClient)

    def spare_parts_client(self) -> SparePartsClient:
        return self.resource(SparePartsClient)

    def inventory_client(self) -> InventoryClient:
        return self.resource(InventoryClient)

    def users_client(self) -> UsersClient:
        return self.resource(UsersClient)

    def images_client(self) -> ImagesClient:
        return self.resource(ImagesClient)
