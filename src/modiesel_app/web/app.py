from __future__ import annotations

from typing import Sequence

from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.routing import BaseRoute

from ..config import AdmissionConfig, load_admission_config
from ..logging import configure_logging
from .admission import AdmissionMiddleware


def create_app(routes: Sequence[BaseRoute] = (), config: AdmissionConfig | None = None) -> Starlette:
    configure_logging()
    config = config or load_admission_config()
    return Starlette(
        routes=list(routes),
        middleware=[Middleware(AdmissionMiddleware, config=config)],
    )
