from .auth import AuthClient, LoginResult
from .resources import (
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
from .sales_client import SalesClient

__all__ = [
    "AuthClient",
    "ClientsClient",
    "ImagesClient",
    "InventoryClient",
    "LoginResult",
    "ProductsClient",
    "ResourceClient",
    "SalesClient",
    "SparePartsClient",
    "SuppliersClient",
    "UsersClient",
    "VehiclesClient",
]
