from .auth_service import AuthService, InvalidCredentials
from .catalog_service import Catalog, CatalogCache, CatalogUnavailable
from .dashboard_service import DashboardService, DashboardSummary, count_sales_in_month
from .sale_compose_service import (
    ComposeFlowError,
    ComposeNotOpen,
    DraftLocked,
    OrderConfirmation,
    SaleComposeFlow,
    SubmissionFailed,
)

__all__ = [
    "AuthService",
    "Catalog",
    "CatalogCache",
    "CatalogUnavailable",
    "ComposeFlowError",
    "ComposeNotOpen",
    "DashboardService",
    "DashboardSummary",
    "DraftLocked",
    "InvalidCredentials",
    "OrderConfirmation",
    "SaleComposeFlow",
    "SubmissionFailed",
    "count_sales_in_month",
]
