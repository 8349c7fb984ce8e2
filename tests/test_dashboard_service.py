from __future__ import annotations

from datetime import datetime, timezone

import pytest
import responses

from modiesel_app.services.dashboard_service import DashboardService, count_sales_in_month
from modiesel_sdk import ApiSession, AuthError, Sale

from conftest import api_url, client_row, product_row

NOW = datetime(2026, 3, 20, 12, 0, tzinfo=timezone.utc)


def _sale(stamp: str | None) -> Sale:
    return Sale.model_validate({"id": 1, "total": 10, "fecha": stamp})


def test_count_sales_in_month_compares_year_and_month() -> None:
    sales = [
        _sale("2026-03-01T08:00:00+00:00"),
        _sale("2026-03-31T23:00:00+00:00"),
        _sale("2025-03-15T10:00:00+00:00"),
        _sale("2026-02-28T10:00:00+00:00"),
        _sale(None),
    ]
    assert count_sales_in_month(sales, NOW) == 2


def _mock_lists(sales_status: int = 200) -> None:
    responses.add(responses.GET, api_url("clientes"), json=[client_row(1), client_row(2)], status=200)
    responses.add(responses.GET, api_url("vehiculos"), json=[{"id": 1, "placa": "ABC-123"}], status=200)
    responses.add(responses.GET, api_url("productos"), json=[product_row(7, 10, 5)], status=200)
    responses.add(responses.GET, api_url("repuestos"), json=[], status=200)
    responses.add(responses.GET, api_url("proveedores"), json=[], status=200)
    responses.add(responses.GET, api_url("inventario"), json={"message": "Error"}, status=500)
    if sales_status == 200:
        responses.add(
            responses.GET,
            api_url("ventas"),
            json=[{"id": 1, "total": 10, "fecha": "2026-03-02T10:00:00+00:00"}],
            status=200,
        )
    else:
        responses.add(responses.GET, api_url("ventas"), json={"message": "expired"}, status=sales_status)


@responses.activate
def test_summary_counts_each_module(authed_session: ApiSession) -> None:
    _mock_lists()

    summary = DashboardService(authed_session).summary(now=NOW)

    assert summary.clients == 2
    assert summary.vehicles == 1
    assert summary.products == 1
    assert summary.sales == 1
    assert summary.sales_this_month == 1
    assert summary.inventory_rows == 0


@responses.activate
def test_summary_stops_on_unauthorized(authed_session: ApiSession) -> None:
    _mock_lists(sales_status=401)

    with pytest.raises(AuthError):
        DashboardService(authed_session).summary(now=NOW)
    assert not authed_session.is_authenticated
