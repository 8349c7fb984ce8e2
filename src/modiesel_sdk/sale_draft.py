"""Client-side sale draft: lines, merge rules and totals.

Stock checks here are advisory. The snapshot comes from the catalog loaded when
the compose flow opened and the backend re-validates on commit.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Mapping

from .models import Product

ZERO = Decimal("0")


class SaleDraftError(ValueError):
    code = "SALE_DRAFT_ERROR"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidQuantity(SaleDraftError):
    code = "INVALID_QUANTITY"


class UnknownProduct(SaleDraftError):
    code = "UNKNOWN_PRODUCT"

    def __init__(self, product_id: int) -> None:
        self.product_id = product_id
        super().__init__(f"Producto {product_id} no existe en el catálogo")


class InsufficientStock(SaleDraftError):
    code = "INSUFFICIENT_STOCK"

    def __init__(self, product_id: int, requested: int, available: int) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(f"Solo hay {available} unidades disponibles")


class LineIndexError(SaleDraftError):
    code = "LINE_INDEX_OUT_OF_RANGE"

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        super().__init__(f"No existe la línea {index} (el borrador tiene {size})")


class MissingClient(SaleDraftError):
    code = "MISSING_CLIENT"

    def __init__(self) -> None:
        super().__init__("Cliente es requerido")


class EmptyOrder(SaleDraftError):
    code = "EMPTY_ORDER"

    def __init__(self) -> None:
        super().__init__("Agrega al menos un producto a la venta")


@dataclass
class DraftLine:
    product_id: int
    unit_price: Decimal
    quantity: int
    product_name: str = ""

    @property
    def subtotal(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass
class DraftOrder:
    client_id: int | None = None
    lines: list[DraftLine] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return compute_order_total(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def index_of(self, product_id: int) -> int | None:
        for idx, line in enumerate(self.lines):
            if line.product_id == product_id:
                return idx
        return None


def compute_order_total(lines: Iterable[DraftLine]) -> Decimal:
    return sum((line.subtotal for line in lines), ZERO)


def add_line(
    draft: DraftOrder,
    products: Mapping[int, Product],
    product_id: int,
    quantity: int,
) -> DraftLine:
    """Add ``quantity`` of a product, merging into an existing line.

    On any failure the draft is left exactly as it was.
    """
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise InvalidQuantity("Selecciona un producto y cantidad válida")
    product = products.get(product_id)
    if product is None:
        raise UnknownProduct(product_id)

    existing_idx = draft.index_of(product_id)
    existing_qty = draft.lines[existing_idx].quantity if existing_idx is not None else 0
    effective = existing_qty + quantity
    if effective > product.stock:
        raise InsufficientStock(product_id, requested=effective, available=product.stock)

    if existing_idx is not None:
        line = draft.lines[existing_idx]
        line.quantity = effective
        return line
    line = DraftLine(
        product_id=product_id,
        unit_price=product.unit_price,
        quantity=quantity,
        product_name=product.name,
    )
    draft.lines.append(line)
    return line


def remove_line(draft: DraftOrder, index: int) -> DraftLine:
    if not 0 <= index < len(draft.lines):
        raise LineIndexError(index, len(draft.lines))
    return draft.lines.pop(index)
