from __future__ import annotations

from datetime import datetime, timezone

from .models import SaleCreateRequest, SaleLineCreate
from .sale_draft import DraftOrder, EmptyOrder, MissingClient


def validate_submission(client_id: int | None, draft: DraftOrder) -> None:
    """Pre-submit checks, in order; the first failure wins."""
    if not client_id:
        raise MissingClient()
    if draft.is_empty:
        raise EmptyOrder()


def build_sale_request(
    client_id: int,
    draft: DraftOrder,
    actor_id: int | str | None,
    *,
    now: datetime | None = None,
) -> SaleCreateRequest:
    validate_submission(client_id, draft)
    return SaleCreateRequest(
        client_id=client_id,
        employee_id=actor_id,
        date=now or datetime.now(timezone.utc),
        total=draft.total,
        lines=[
            SaleLineCreate(product_id=line.product_id, quantity=line.quantity, subtotal=line.subtotal)
            for line in draft.lines
        ],
    )
