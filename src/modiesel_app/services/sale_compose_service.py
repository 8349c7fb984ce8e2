from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from modiesel_sdk import (
    REQUEST_CANCELLED,
    ApiSession,
    DraftLine,
    DraftOrder,
    Sale,
    TransportError,
    add_line,
    build_sale_request,
    remove_line,
    to_user_facing_error,
)
from modiesel_sdk.exceptions import ApiError, AuthError

from .catalog_service import Catalog, CatalogCache

logger = logging.getLogger(__name__)

SALE_COMPOSE_CONTEXT = "sale_compose"
SUBMIT_FALLBACK = "No se pudo registrar la venta"


class ComposeFlowError(RuntimeError):
    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ComposeNotOpen(ComposeFlowError):
    def __init__(self) -> None:
        super().__init__("La venta no está abierta")


class DraftLocked(ComposeFlowError):
    def __init__(self) -> None:
        super().__init__("La venta se está registrando")


class SubmissionFailed(ComposeFlowError):
    def __init__(
        self,
        reason: str,
        *,
        code: str | None = None,
        details: str | None = None,
        trace_id: str | None = None,
        unauthorized: bool = False,
    ) -> None:
        self.reason = reason
        self.code = code
        self.details = details
        self.trace_id = trace_id
        self.unauthorized = unauthorized
        super().__init__(reason)


@dataclass(frozen=True)
class OrderConfirmation:
    sale_id: int | None
    total: Decimal
    invoice_number: str | None = None
    sale: Sale | None = None


class SaleComposeFlow:
    """One "new sale" dialog: catalog snapshot, draft and submit.

    The draft is locked while a submit is outstanding. ``close()`` discards
    the draft and moves the HTTP context forward, so a create-sale response
    that lands afterwards is dropped instead of touching a newer draft.
    """

    def __init__(self, session: ApiSession, catalog_cache: CatalogCache | None = None) -> None:
        self.session = session
        self.catalog_cache = catalog_cache or CatalogCache(session)
        self.catalog: Catalog | None = None
        self.draft: DraftOrder | None = None
        self._submitting = False
        self._context_version: int | None = None

    @property
    def is_open(self) -> bool:
        return self.catalog is not None and self.draft is not None

    @property
    def is_submitting(self) -> bool:
        return self._submitting

    @property
    def total(self) -> Decimal:
        return self.draft.total if self.draft else Decimal("0")

    def open(self) -> Catalog:
        self._reset()
        catalog = self.catalog_cache.load()
        self.catalog = catalog
        self.draft = DraftOrder()
        logger.info("sale_compose_opened", extra={"products": len(catalog.products)})
        return catalog

    def close(self) -> None:
        if self.draft is not None:
            logger.info("sale_compose_closed", extra={"lines": len(self.draft.lines), "submitting": self._submitting})
        self._reset()

    def select_client(self, client_id: int | None) -> None:
        draft = self._mutable_draft()
        draft.client_id = client_id

    def add_line(self, product_id: int, quantity: int) -> DraftLine:
        draft = self._mutable_draft()
        return add_line(draft, self.catalog.products_by_id, product_id, quantity)

    def remove_line(self, index: int) -> DraftLine:
        draft = self._mutable_draft()
        return remove_line(draft, index)

    def submit(self, client_id: int | None = None, actor_id: int | str | None = None) -> OrderConfirmation | None:
        """Create the sale; returns ``None`` if the flow was closed mid-flight."""
        draft = self._mutable_draft()
        if client_id is None:
            client_id = draft.client_id
        if actor_id is None and self.session.user is not None:
            actor_id = self.session.user.id
        request = build_sale_request(client_id, draft, actor_id)

        version = self._context_version
        self._submitting = True
        logger.info(
            "sale_submit_attempt",
            extra={"client_id": client_id, "lines": len(draft.lines), "total": str(request.total)},
        )
        try:
            sale = self.session.sales_client().create_sale(
                request,
                context_key=SALE_COMPOSE_CONTEXT,
                context_version=version,
            )
        except TransportError as exc:
            if exc.code == REQUEST_CANCELLED:
                logger.info("sale_submit_discarded", extra={"trace_id": exc.trace_id})
                return None
            raise self._failure(exc) from exc
        except ApiError as exc:
            raise self._failure(exc) from exc
        finally:
            if self.draft is draft:
                self._submitting = False

        if self.draft is not draft:
            logger.info("sale_submit_discarded", extra={"sale_id": sale.id if sale else None})
            return None

        if sale is None:
            # Created on the backend; only the echo is missing.
            confirmation = OrderConfirmation(sale_id=None, total=request.total)
        else:
            confirmation = OrderConfirmation(
                sale_id=sale.id,
                total=sale.total if "total" in sale.model_fields_set else request.total,
                invoice_number=sale.invoice_number,
                sale=sale,
            )
        logger.info(
            "sale_submit_success",
            extra={"sale_id": confirmation.sale_id, "invoice": confirmation.invoice_number, "total": str(confirmation.total)},
        )
        self._reset()
        return confirmation

    def _mutable_draft(self) -> DraftOrder:
        if not self.is_open:
            raise ComposeNotOpen()
        if self._submitting:
            raise DraftLocked()
        return self.draft

    def _reset(self) -> None:
        self._context_version = self.session.http.switch_context(SALE_COMPOSE_CONTEXT)
        self.catalog = None
        self.draft = None
        self._submitting = False

    @staticmethod
    def _failure(exc: ApiError) -> SubmissionFailed:
        user_error = to_user_facing_error(exc, fallback=SUBMIT_FALLBACK)
        logger.warning(
            "sale_submit_failed",
            extra={"code": exc.code, "status": exc.status_code, "trace_id": exc.trace_id},
        )
        return SubmissionFailed(
            user_error.message,
            code=exc.code,
            details=user_error.details,
            trace_id=exc.trace_id,
            unauthorized=isinstance(exc, AuthError),
        )
