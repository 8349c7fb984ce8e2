from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from modiesel_sdk.sale_draft import DraftLine, DraftOrder, EmptyOrder, MissingClient
from modiesel_sdk.sale_validation import build_sale_request, validate_submission


def _draft() -> DraftOrder:
    return DraftOrder(
        client_id=1,
        lines=[
            DraftLine(product_id=7, unit_price=Decimal("10"), quantity=2),
            DraftLine(product_id=8, unit_price=Decimal("5"), quantity=3),
        ],
    )


def test_missing_client_reported_before_empty_order() -> None:
    with pytest.raises(MissingClient):
        validate_submission(None, DraftOrder())
    with pytest.raises(MissingClient):
        validate_submission(0, _draft())


def test_empty_order_rejected() -> None:
    with pytest.raises(EmptyOrder) as excinfo:
        validate_submission(1, DraftOrder(client_id=1))
    assert excinfo.value.code == "EMPTY_ORDER"


def test_build_sale_request_maps_every_line() -> None:
    now = datetime(2026, 5, 2, 9, 0, tzinfo=timezone.utc)
    request = build_sale_request(1, _draft(), 3, now=now)

    assert request.client_id == 1
    assert request.employee_id == 3
    assert request.date == now
    assert request.total == Decimal("35")
    assert [(line.product_id, line.quantity, line.subtotal) for line in request.lines] == [
        (7, 2, Decimal("20")),
        (8, 3, Decimal("15")),
    ]


def test_build_sale_request_validates_first() -> None:
    with pytest.raises(EmptyOrder):
        build_sale_request(1, DraftOrder(), 3)
