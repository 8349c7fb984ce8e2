from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar, Generic, Mapping, TypeVar

from ..models import (
    Client,
    Image,
    InventoryMovement,
    Product,
    SparePart,
    Supplier,
    UserWrite,
    Vehicle,
    WireModel,
    to_wire,
)
from .base import BaseClient, expect_list, expect_object

M = TypeVar("M", bound=WireModel)


@dataclass
class ResourceClient(BaseClient, Generic[M]):
    """List/detail/create/update/delete over one ``/{resource}`` collection."""

    path: ClassVar[str] = ""
    model: ClassVar[type[WireModel]] = WireModel

    def list(self, *, use_cache: bool = True) -> list[M]:
        data = self._request("GET", self.path, module=self._module, operation="list", use_get_cache=use_cache)
        return [self.model.model_validate(row) for row in expect_list(data, f"{self._module} list")]

    def get(self, item_id: int) -> M:
        data = self._request("GET", f"{self.path}/{item_id}", module=self._module, operation="get")
        return self.model.model_validate(expect_object(data, f"{self._module} detail"))

    def create(self, payload: M | Mapping[str, Any]) -> M:
        body = to_wire(self._coerce(payload))
        data = self._request("POST", self.path, json_body=body, module=self._module, operation="create")
        return self.model.model_validate(expect_object(data, f"{self._module} create"))

    def update(self, item_id: int, payload: M | Mapping[str, Any]) -> M:
        body = to_wire(self._coerce(payload))
        data = self._request(
            "PUT",
            f"{self.path}/{item_id}",
            json_body=body,
            module=self._module,
            operation="update",
        )
        if data is None:
            return self.model.model_validate(body)
        return self.model.model_validate(expect_object(data, f"{self._module} update"))

    def delete(self, item_id: int) -> None:
        self._request("DELETE", f"{self.path}/{item_id}", module=self._module, operation="delete")

    @property
    def _module(self) -> str:
        return self.path.strip("/")

    def _coerce(self, payload: M | Mapping[str, Any]) -> M:
        if isinstance(payload, self.model):
            return payload
        return self.model.model_validate(payload)


class ClientsClient(ResourceClient[Client]):
    path = "/clientes"
    model = Client


class VehiclesClient(ResourceClient[Vehicle]):
    path = "/vehiculos"
    model = Vehicle


class SuppliersClient(ResourceClient[Supplier]):
    path = "/proveedores"
    model = Supplier


class ProductsClient(ResourceClient[Product]):
    path = "/productos"
    model = Product


class SparePartsClient(ResourceClient[SparePart]):
    path = "/repuestos"
    model = SparePart


class InventoryClient(ResourceClient[InventoryMovement]):
    path = "/inventario"
    model = InventoryMovement


class UsersClient(ResourceClient[UserWrite]):
    path = "/usuarios"
    model = UserWrite


class ImagesClient(ResourceClient[Image]):
    path = "/imagenes"
    model = Image
