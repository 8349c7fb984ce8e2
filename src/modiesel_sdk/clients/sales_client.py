from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping

from pydantic import ValidationError as PydanticValidationError

from ..models import Sale, SaleCreateRequest, to_wire
from .base import BaseClient, expect_list, expect_object

SALES_PATH = "/ventas"

logger = logging.getLogger(__name__)


@dataclass
class SalesClient(BaseClient):
    def create_sale(
        self,
        payload: SaleCreateRequest | Mapping[str, Any],
        *,
        context_key: str | None = None,
        context_version: int | None = None,
    ) -> Sale | None:
        """POST the sale. A 2xx is a created sale even when the body is unusable;
        that case returns ``None`` instead of a :class:`Sale`.
        """
        request = payload if isinstance(payload, SaleCreateRequest) else SaleCreateRequest.model_validate(payload)
        data = self._request(
            "POST",
            SALES_PATH,
            json_body=to_wire(request),
            module="ventas",
            operation="create",
            context_key=context_key,
            context_version=context_version,
        )
        if not isinstance(data, dict):
            logger.warning("sale_created_without_body", extra={"body_type": type(data).__name__})
            return None
        try:
            return Sale.model_validate(data)
        except PydanticValidationError as exc:
            logger.warning("sale_created_unparsable", extra={"errors": exc.error_count()})
            return None

    def list_sales(self, *, use_cache: bool = True) -> list[Sale]:
        data = self._request("GET", SALES_PATH, module="ventas", operation="list", use_get_cache=use_cache)
        return [Sale.model_validate(row) for row in expect_list(data, "list sales")]

    def get_sale(self, sale_id: int) -> Sale:
        data = self._request("GET", f"{SALES_PATH}/{sale_id}", module="ventas", operation="get")
        return Sale.model_validate(expect_object(data, "sale detail"))

    def delete_sale(self, sale_id: int) -> None:
        self._request("DELETE", f"{SALES_PATH}/{sale_id}", module="ventas", operation="delete")
