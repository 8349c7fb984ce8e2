from __future__ import annotations

import logging
from dataclasses import dataclass, field

from modiesel_sdk import ApiSession, Client, Product, to_user_facing_error
from modiesel_sdk.exceptions import ApiError

logger = logging.getLogger(__name__)


class CatalogUnavailable(RuntimeError):
    def __init__(self, message: str, trace_id: str | None = None) -> None:
        self.message = message
        self.trace_id = trace_id
        super().__init__(message)


@dataclass(frozen=True)
class Catalog:
    """Clients and products as they were when the compose flow opened."""

    clients: tuple[Client, ...] = ()
    products: tuple[Product, ...] = ()
    _products_by_id: dict[int, Product] = field(default_factory=dict, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._products_by_id.update({p.id: p for p in self.products if p.id is not None})

    @property
    def products_by_id(self) -> dict[int, Product]:
        return self._products_by_id

    def client(self, client_id: int) -> Client | None:
        return next((c for c in self.clients if c.id == client_id), None)


class CatalogCache:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def load(self) -> Catalog:
        # Both lists or nothing.
        try:
            clients = self.session.clients_client().list(use_cache=False)
            products = self.session.products_client().list(use_cache=False)
        except ApiError as exc:
            user_error = to_user_facing_error(exc, fallback="No se pudo cargar el catálogo")
            logger.error("catalog_load_failed", extra={"code": exc.code, "trace_id": exc.trace_id})
            raise CatalogUnavailable(user_error.message, trace_id=exc.trace_id) from exc
        except ValueError as exc:
            logger.error("catalog_load_failed", extra={"code": "BAD_PAYLOAD"})
            raise CatalogUnavailable("No se pudo cargar el catálogo") from exc
        logger.info("catalog_loaded", extra={"clients": len(clients), "products": len(products)})
        return Catalog(clients=tuple(clients), products=tuple(products))
