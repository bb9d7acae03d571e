"""Budget repository backed by a single keyed row."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Optional

from sqlmodel import Session

from ...models.budget import BUDGET_SINGLETON_ID, Budget


class SQLModelBudgetRepository:
    """SQLModel-based budget repository."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def get(self) -> Optional[Budget]:
        with self.session_factory() as session:
            budget = session.get(Budget, BUDGET_SINGLETON_ID)
            if budget:
                session.expunge(budget)
            return budget

    def set(self, amount: float) -> Budget:
        with self.session_factory() as session:
            budget = session.get(Budget, BUDGET_SINGLETON_ID)
            if budget is None:
                budget = Budget(id=BUDGET_SINGLETON_ID)
            budget.amount = float(amount)
            budget.updated_at = datetime.now(timezone.utc)
            session.add(budget)
            session.commit()
            session.refresh(budget)
            session.expunge(budget)
            return budget


__all__ = ["SQLModelBudgetRepository"]
