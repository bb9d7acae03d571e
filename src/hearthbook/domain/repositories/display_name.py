"""Display name repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.display_name import DisplayName


class DisplayNameRepository(Protocol):
    """Mapping of author ids to display names."""

    def all(self) -> dict[str, str]:
        ...

    def set(self, user_id: str, display_name: str) -> DisplayName:
        """Upsert by ``user_id``."""
        ...
