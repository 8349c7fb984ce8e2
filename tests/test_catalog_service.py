from __future__ import annotations

import pytest
import responses

from modiesel_app.services.catalog_service import CatalogCache, CatalogUnavailable
from modiesel_sdk import ApiSession

from conftest import api_url, client_row, product_row


@responses.activate
def test_load_returns_clients_and_products(authed_session: ApiSession) -> None:
    responses.add(responses.GET, api_url("clientes"), json=[client_row(1)], status=200)
    responses.add(responses.GET, api_url("productos"), json=[product_row(7, 10, 5), product_row(8, 5, 3)], status=200)

    catalog = CatalogCache(authed_session).load()

    assert [c.id for c in catalog.clients] == [1]
    assert set(catalog.products_by_id) == {7, 8}
    assert catalog.client(1).display_name == "Transportes Andinos SAC"
    assert catalog.client(99) is None


@responses.activate
def test_load_always_hits_the_network(authed_session: ApiSession) -> None:
    responses.add(responses.GET, api_url("clientes"), json=[], status=200)
    responses.add(responses.GET, api_url("productos"), json=[], status=200)
    cache = CatalogCache(authed_session)

    cache.load()
    cache.load()

    assert len(responses.calls) == 4


@responses.activate
def test_partial_failure_yields_no_catalog(authed_session: ApiSession) -> None:
    responses.add(responses.GET, api_url("clientes"), json=[client_row(1)], status=200)
    responses.add(responses.GET, api_url("productos"), json={"message": "Error interno"}, status=500)

    with pytest.raises(CatalogUnavailable) as excinfo:
        CatalogCache(authed_session).load()
    assert excinfo.value.message == "Error interno"


@responses.activate
def test_malformed_rows_yield_no_catalog(authed_session: ApiSession) -> None:
    responses.add(responses.GET, api_url("clientes"), json=[client_row(1)], status=200)
    responses.add(responses.GET, api_url("productos"), json=[{"id": 7, "nombre": "X", "precio": -1}], status=200)

    with pytest.raises(CatalogUnavailable):
        CatalogCache(authed_session).load()
