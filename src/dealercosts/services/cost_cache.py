"""In-memory replica of a dealer's cost records with write-through persistence.

Mutations are applied to the replica first so callers see them immediately,
then forwarded to the repository. If the repository raises, the replica is
restored to its state before the mutation and the error is re-raised.

Totals are never patched incrementally: :meth:`CostCache.projection` and
:meth:`CostCache.totals` always re-derive them from the current replica.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Iterable, Optional

from ..domain.repositories.cost import CostRepository
from ..logging_config import get_logger
from ..models.cost import CostRecord, CostStatus
from .aggregation import CostTotal, summarize_totals
from .projections import ProjectionResult, project

logger = get_logger(__name__)


class CostCache:
    """Write-through replica of the cost records for one dealer."""

    def __init__(self, repo: CostRepository, *, dealer_id: str):
        self.repo = repo
        self.dealer_id = dealer_id
        self._records: list[CostRecord] = []
        self.version = 0

    @property
    def records(self) -> tuple[CostRecord, ...]:
        """Immutable snapshot of the replica."""
        return tuple(self._records)

    def load(self) -> tuple[CostRecord, ...]:
        """Replace the replica with the repository's current contents."""

        self._records = list(self.repo.list_all(dealer_id=self.dealer_id))
        self.version += 1
        return self.records

    def _rollback(self, previous: list[CostRecord], action: str, exc: Exception) -> None:
        self._records = previous
        self.version += 1
        logger.warning(
            "Rolled back optimistic %s: %s",
            action,
            exc,
            extra={"dealer_id": self.dealer_id, "action": action},
        )

    def add(self, cost: CostRecord) -> CostRecord:
        """Show ``cost`` immediately, then persist it."""

        previous = list(self._records)
        self._records.append(cost)
        self.version += 1
        try:
            saved = self.repo.create(cost, dealer_id=self.dealer_id)
        except Exception as exc:
            self._rollback(previous, "add", exc)
            raise
        self._records = [saved if item is cost else item for item in self._records]
        return saved

    def update(self, cost: CostRecord) -> CostRecord:
        """Swap in the edited ``cost`` (matched by id), then persist it."""

        previous = list(self._records)
        if not any(item.id == cost.id for item in previous):
            raise LookupError(f"Cost {cost.id} is not in the replica")
        self._records = [cost if item.id == cost.id else item for item in previous]
        self.version += 1
        try:
            saved = self.repo.update(cost, dealer_id=self.dealer_id)
        except Exception as exc:
            self._rollback(previous, "update", exc)
            raise
        self._records = [saved if item is cost else item for item in self._records]
        return saved

    def remove(self, cost_id: int) -> None:
        """Hide the cost immediately, then delete it."""

        previous = list(self._records)
        self._records = [item for item in previous if item.id != cost_id]
        self.version += 1
        try:
            self.repo.delete(cost_id, dealer_id=self.dealer_id)
        except Exception as exc:
            self._rollback(previous, "delete", exc)
            raise

    def projection(
        self,
        now: date | datetime | None = None,
        *,
        statuses: Optional[Iterable[CostStatus | str]] = None,
    ) -> ProjectionResult:
        return project(self.records, now, statuses=statuses)

    def totals(self) -> list[CostTotal]:
        return summarize_totals(self.records)
