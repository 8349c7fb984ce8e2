from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer


def _money_to_json(value: Decimal) -> float:
    return float(value)


# The backend expects plain JSON numbers for amounts, not decimal strings.
Money = Annotated[Decimal, PlainSerializer(_money_to_json, return_type=float, when_used="json")]


class WireModel(BaseModel):
    model_config = ConfigDict(extra="allow", populate_by_name=True)


class User(WireModel):
    id: int | str | None = None
    name: str | None = Field(default=None, alias="nombre")
    email: str | None = Field(default=None, alias="correo")
    role: str | None = Field(default=None, alias="rol")


class UserWrite(User):
    password: str | None = None


class LoginRequest(WireModel):
    email: str = Field(alias="correo")
    password: str


class SessionData(BaseModel):
    access_token: str
    user: Optional[User] = None
    env_name: str | None = None


class Client(WireModel):
    id: int | None = None
    tax_id: str | None = Field(default=None, alias="ruc")
    business_name: str = Field(default="", alias="razonSocial")
    active: bool | None = Field(default=None, alias="estado")
    email: str | None = Field(default=None, alias="correo")
    phone: str | None = Field(default=None, alias="telefono")

    @property
    def display_name(self) -> str:
        return self.business_name or f"Cliente #{self.id}"


class Vehicle(WireModel):
    id: int | None = None
    plate: str = Field(alias="placa")
    brand: str | None = Field(default=None, alias="marca")
    model: str | None = Field(default=None, alias="modelo")
    year: int | None = Field(default=None, alias="año")
    client_id: Optional[int] = Field(default=None, alias="clienteId")


class Supplier(WireModel):
    id: int | None = None
    tax_id: str | None = Field(default=None, alias="ruc")
    name: str = Field(alias="nombre")
    email: str | None = Field(default=None, alias="correo")
    phone: str | None = Field(default=None, alias="telefono")
    address: str | None = Field(default=None, alias="direccion")


class Product(WireModel):
    id: int | None = None
    name: str = Field(alias="nombre")
    brand: str | None = Field(default=None, alias="marca")
    description: str | None = Field(default=None, alias="descripcion")
    unit_price: Money = Field(alias="precio", ge=0)
    stock: int = Field(default=0, ge=0)
    supplier_id: Optional[int] = Field(default=None, alias="proveedorId")


class SparePart(WireModel):
    id: int | None = None
    name: str = Field(alias="nombre")
    brand: str | None = Field(default=None, alias="marca")
    unit_price: Money = Field(alias="precio", ge=0)
    stock: int = Field(default=0, ge=0)
    supplier_id: Optional[int] = Field(default=None, alias="proveedorId")
    vehicle_id: Optional[int] = Field(default=None, alias="vehiculoId")


class InventoryMovement(WireModel):
    id: int | None = None
    code: str = Field(alias="codigo")
    name: str = Field(alias="nombre")
    brand: str | None = Field(default=None, alias="marca")
    quantity: int = Field(alias="cantidad", ge=0)
    price: Money | None = Field(default=None, alias="precio")
    unit_price: Money | None = Field(default=None, alias="precioUnitario")
    movement_type: Literal["ENTRADA", "SALIDA"] = Field(alias="tipoMovimiento")
    movement_description: str | None = Field(default=None, alias="descripcionMovimiento")
    supplier_id: Optional[int] = Field(default=None, alias="proveedorId")


class Image(WireModel):
    id: int | None = None
    name: str | None = Field(default=None, alias="nombre")
    url: str | None = None
    type: str | None = Field(default=None, alias="tipo")
    uploaded_at: datetime | str | None = Field(default=None, alias="fechaSubida")
    user_id: Optional[int] = Field(default=None, alias="usuarioId")


class Invoice(WireModel):
    id: int | None = None
    number: str | None = Field(default=None, alias="numero")
    issued_at: datetime | str | None = Field(default=None, alias="fechaEmision")
    total: Money | None = None


class SaleLineCreate(WireModel):
    product_id: int = Field(alias="productoId")
    quantity: int = Field(alias="cantidad", ge=1)
    subtotal: Money


class SaleCreateRequest(WireModel):
    client_id: int = Field(alias="clienteId")
    employee_id: int | str | None = Field(default=None, alias="empleadoId")
    date: datetime = Field(alias="fecha")
    total: Money
    lines: List[SaleLineCreate] = Field(alias="detalles")


class SaleLine(WireModel):
    id: int | None = None
    product_id: int | None = Field(default=None, alias="productoId")
    product: Product | None = Field(default=None, alias="producto")
    quantity: int = Field(alias="cantidad")
    subtotal: Money


class Sale(WireModel):
    id: int | None = None
    date: datetime | None = Field(default=None, alias="fecha")
    total: Money = Decimal("0")
    client_id: int | None = Field(default=None, alias="clienteId")
    client: Client | None = Field(default=None, alias="cliente")
    employee_id: int | str | None = Field(default=None, alias="empleadoId")
    employee: User | None = Field(default=None, alias="empleado")
    lines: List[SaleLine] = Field(default_factory=list, alias="detalles")
    invoice: Invoice | None = Field(default=None, alias="factura")

    @property
    def invoice_number(self) -> str | None:
        return self.invoice.number if self.invoice else None


def to_wire(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(by_alias=True, exclude_none=True, mode="json")
