"""Shared budget tracking."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from ..domain.repositories import BudgetRepository
from ..logging_config import get_logger
from .aggregation import entry_amount

logger = get_logger(__name__)


@dataclass(slots=True)
class BudgetStatus:
    """Budget vs. spend for one month."""

    budget: float
    spent: float

    @property
    def remaining(self) -> float:
        return remaining(self.budget, self.spent)

    @property
    def over_budget(self) -> bool:
        return self.remaining < 0


def remaining(budget: float, spent: float) -> float:
    """``budget - spent``; negative means over budget and is never clamped."""

    return budget - spent


def spent_from(entries: Iterable[Any]) -> float:
    """Total outflow: the magnitude of every negative amount; income is ignored."""

    return sum(-amount for amount in map(entry_amount, entries) if amount < 0)


class BudgetTracker:
    """Reads and writes the single household budget value."""

    def __init__(self, repository: BudgetRepository) -> None:
        self.repository = repository

    def current(self) -> float:
        """The saved budget, or 0 before one has been set."""

        record = self.repository.get()
        if record is None:
            return 0.0
        return float(record.amount)

    def set(self, amount: float) -> float:
        record = self.repository.set(float(amount))
        logger.info("Budget updated", extra={"amount": record.amount})
        return float(record.amount)

    def status(self, entries: Iterable[Any]) -> BudgetStatus:
        return BudgetStatus(budget=self.current(), spent=spent_from(entries))


__all__ = ["BudgetStatus", "BudgetTracker", "remaining", "spent_from"]
