from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Iterable

from modiesel_sdk import ApiSession, Sale
from modiesel_sdk.exceptions import ApiError, AuthError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSummary:
    clients: int = 0
    vehicles: int = 0
    products: int = 0
    sales: int = 0
    spare_parts: int = 0
    suppliers: int = 0
    inventory_rows: int = 0
    sales_this_month: int = 0


def count_sales_in_month(sales: Iterable[Sale], now: datetime) -> int:
    """Sales dated in the same calendar year and month as ``now``."""
    count = 0
    for sale in sales:
        if sale.date is None:
            continue
        stamp = sale.date
        if stamp.tzinfo is not None and now.tzinfo is not None:
            stamp = stamp.astimezone(now.tzinfo)
        if (stamp.year, stamp.month) == (now.year, now.month):
            count += 1
    return count


class DashboardService:
    def __init__(self, session: ApiSession) -> None:
        self.session = session

    def summary(self, now: datetime | None = None) -> DashboardSummary:
        """Counts per module. A failing list counts as zero, except a 401."""
        sales = self._safe("ventas", self.session.sales_client().list_sales)
        return DashboardSummary(
            clients=len(self._safe("clientes", self.session.clients_client().list)),
            vehicles=len(self._safe("vehiculos", self.session.vehicles_client().list)),
            products=len(self._safe("productos", self.session.products_client().list)),
            sales=len(sales),
            spare_parts=len(self._safe("repuestos", self.session.spare_parts_client().list)),
            suppliers=len(self._safe("proveedores", self.session.suppliers_client().list)),
            inventory_rows=len(self._safe("inventario", self.session.inventory_client().list)),
            sales_this_month=count_sales_in_month(sales, now or datetime.now(timezone.utc)),
        )

    @staticmethod
    def _safe(name: str, fetch: Callable[[], list]) -> list:
        try:
            return fetch()
        except AuthError:
            raise
        except (ApiError, ValueError) as exc:
            logger.warning("dashboard_list_failed", extra={"resource": name, "error": str(exc)})
            return []
