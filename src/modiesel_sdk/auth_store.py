from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError as PydanticValidationError
from platformdirs import user_data_dir

from .models import SessionData

logger = logging.getLogger(__name__)

MARKER_FILENAME = "auth-storage"


@dataclass
class AuthStore:
    """Durable session storage under the user's data directory.

    Two files: ``session.json`` with the token and user, and a bare token
    marker that the route admission check reads without parsing JSON.
    """

    app_name: str = "modiesel"
    filename: str = "session.json"
    base_dir: Path | None = None

    def _dir(self) -> Path:
        base = self.base_dir or Path(user_data_dir(self.app_name, "MoDiesel"))
        base.mkdir(parents=True, exist_ok=True)
        return base

    def _path(self) -> Path:
        return self._dir() / self.filename

    def _marker_path(self) -> Path:
        return self._dir() / MARKER_FILENAME

    def save(self, session: SessionData) -> None:
        path = self._path()
        path.write_text(json.dumps(session.model_dump(mode="json", by_alias=True), indent=2))
        _restrict(path)
        marker = self._marker_path()
        marker.write_text(session.access_token)
        _restrict(marker)

    def load(self) -> SessionData | None:
        path = self._path()
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text())
            return SessionData.model_validate(data)
        except (json.JSONDecodeError, PydanticValidationError):
            logger.warning("auth_store_corrupt", extra={"path": str(path)})
            self.clear()
            return None

    def read_marker(self) -> str | None:
        marker = self._marker_path()
        if not marker.exists():
            return None
        return marker.read_text().strip() or None

    def clear(self) -> None:
        for path in (self._path(), self._marker_path()):
            path.unlink(missing_ok=True)


def _restrict(path: Path) -> None:
    try:
        path.chmod(0o600)
    except OSError:
        pass
