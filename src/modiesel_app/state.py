from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from modiesel_sdk import ApiSession

from .config import AdmissionConfig
from .web.admission import decide_admission

logger = logging.getLogger(__name__)

SESSION_EXPIRED_MESSAGE = "Tu sesión expiró, inicia sesión nuevamente"


class Route(str, Enum):
    LOGIN = "/login"
    DASHBOARD = "/dashboard"
    CLIENTS = "/dashboard/clientes"
    VEHICLES = "/dashboard/vehiculos"
    SUPPLIERS = "/dashboard/proveedores"
    PRODUCTS = "/dashboard/productos"
    SPARE_PARTS = "/dashboard/repuestos"
    INVENTORY = "/dashboard/inventario"
    SALES = "/dashboard/ventas"
    IMAGES = "/dashboard/imagenes"
    USERS = "/dashboard/usuarios"


@dataclass
class AppState:
    """In-process navigation state for a UI shell driving the SDK."""

    session: ApiSession
    config: AdmissionConfig = field(default_factory=AdmissionConfig)
    route: str = Route.LOGIN.value
    error_message: str | None = None

    def __post_init__(self) -> None:
        self.session.on_unauthorized(self._on_unauthorized)
        if self.has_admission_token():
            self.route = Route.DASHBOARD.value

    def has_admission_token(self) -> bool:
        """Same input the web middleware uses: the persisted marker, not memory."""
        return bool(self.session.auth_store.read_marker())

    def navigate(self, target: Route | str) -> str:
        path = target.value if isinstance(target, Route) else target
        decision = decide_admission(path, self.has_admission_token(), self.config)
        self.route = path if decision.allowed else decision.redirect_to
        return self.route

    def _on_unauthorized(self, reason: str) -> None:
        logger.info("redirect_to_login", extra={"reason": reason, "from_route": self.route})
        self.error_message = SESSION_EXPIRED_MESSAGE
        self.route = self.config.login_path
