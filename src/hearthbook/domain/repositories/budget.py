"""Budget repository protocol."""

from __future__ import annotations

from typing import Optional, Protocol

from ...models.budget import Budget


class BudgetRepository(Protocol):
    """Access to the single shared budget record."""

    def get(self) -> Optional[Budget]:
        """Return the budget row, or None before one has been saved."""
        ...

    def set(self, amount: float) -> Budget:
        """Insert or update the singleton row."""
        ...
