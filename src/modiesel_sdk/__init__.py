from .auth_store import AuthStore
from .clients import AuthClient, LoginResult, SalesClient
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthError,
    ForbiddenError,
    NotFoundError,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import REQUEST_CANCELLED, HttpClient
from .models import (
    Client,
    Image,
    InventoryMovement,
    Invoice,
    Product,
    Sale,
    SaleCreateRequest,
    SaleLine,
    SaleLineCreate,
    SessionData,
    SparePart,
    Supplier,
    User,
    Vehicle,
)
from .sale_draft import (
    DraftLine,
    DraftOrder,
    EmptyOrder,
    InsufficientStock,
    InvalidQuantity,
    LineIndexError,
    MissingClient,
    SaleDraftError,
    UnknownProduct,
    add_line,
    compute_order_total,
    remove_line,
)
from .sale_validation import build_sale_request, validate_submission
from .session import ApiSession, SessionState
from .tracing import TraceContext
from .ui_errors import UserFacingError, to_user_facing_error

__all__ = [
    "ApiError",
    "ApiSession",
    "AuthClient",
    "AuthError",
    "AuthStore",
    "Client",
    "ClientConfig",
    "ConfigError",
    "ForbiddenError",
    "HttpClient",
    "Image",
    "InventoryMovement",
    "Invoice",
    "LoginResult",
    "NotFoundError",
    "Product",
    "REQUEST_CANCELLED",
    "Sale",
    "SaleCreateRequest",
    "SaleLine",
    "SaleLineCreate",
    "SalesClient",
    "SessionData",
    "SessionState",
    "SparePart",
    "Supplier",
    "TraceContext",
    "TransportError",
    "UnauthorizedError",
    "User",
    "UserFacingError",
    "ValidationError",
    "Vehicle",
    "load_config",
    "to_user_facing_error",
    "DraftLine",
    "DraftOrder",
    "EmptyOrder",
    "InsufficientStock",
    "InvalidQuantity",
    "LineIndexError",
    "MissingClient",
    "SaleDraftError",
    "UnknownProduct",
    "add_line",
    "build_sale_request",
    "compute_order_total",
    "remove_line",
    "validate_submission",
]
