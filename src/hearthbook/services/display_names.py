"""Author id to display name resolution with a local snapshot fallback."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from ..domain.repositories import DisplayNameRepository
from ..logging_config import get_logger

logger = get_logger(__name__)


class NameSnapshot:
    """JSON file holding the last map read from the store."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def read(self) -> dict[str, str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def write(self, names: dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(names, ensure_ascii=False), encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not write name snapshot", extra={"path": str(self.path), "error": str(exc)})


class DisplayNameDirectory:
    """Loads names from the store, falling back to the snapshot when it is unreachable."""

    def __init__(self, repository: DisplayNameRepository, snapshot: Optional[NameSnapshot] = None) -> None:
        self.repository = repository
        self.snapshot = snapshot
        self._names: dict[str, str] = {}

    def refresh(self) -> dict[str, str]:
        try:
            names = self.repository.all()
        except SQLAlchemyError as exc:
            logger.warning("Display names unavailable, using snapshot", extra={"error": str(exc)})
            if self.snapshot is not None:
                self._names = self.snapshot.read()
            return dict(self._names)
        self._names = dict(names)
        if self.snapshot is not None:
            self.snapshot.write(self._names)
        return dict(self._names)

    def resolve(self, user_id: str, default: Optional[str] = None) -> str:
        """Display name for ``user_id``; falls back to ``default`` or the raw id."""

        if user_id in self._names:
            return self._names[user_id]
        return user_id if default is None else default

    def set(self, user_id: str, display_name: str) -> None:
        """Upsert a name; raises ValueError for blank input."""

        user_id, display_name = user_id.strip(), display_name.strip()
        if not user_id or not display_name:
            raise ValueError("user id and display name are required")
        self.repository.set(user_id, display_name)
        self._names[user_id] = display_name

    @property
    def names(self) -> dict[str, str]:
        return dict(self._names)


__all__ = ["DisplayNameDirectory", "NameSnapshot"]
