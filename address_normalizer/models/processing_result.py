from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .address_record import AddressRecord

"""Processing result models for the batch address normalizer.

ProcessingResult is the aggregated output of one run over a RawTable. It is
built once by the orchestrator (single owner) after all rows are processed
or the run is cancelled.
"""

__all__ = [
    "RunStatus",
    "ProcessingResult",
]


class RunStatus(Enum):
    """Run lifecycle outcome.

    - COMPLETED: every row of the table was iterated
    - CANCELLED: the cancel signal was observed between rows; result is partial
    """
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results and summary metrics of one run.

    total is the RawTable length (blank rows included), so
    len(success) + len(errors) + skipped_rows == total for a completed run.
    """
    success: list[AddressRecord]  # validator passed (success / warning)
    errors: list[AddressRecord]  # validator rejected
    total: int  # row count including blank rows
    skipped_rows: int = 0  # blank rows
    status: RunStatus = RunStatus.COMPLETED
    start_time: datetime | None = None
    end_time: datetime | None = None
    elapsed_seconds: float = 0.0
    throughput_rows_per_sec: float = 0.0
    warnings: int = 0  # success records flagged by strict mode

    @property
    def processed_rows(self) -> int:
        """Rows that produced a record."""
        return len(self.success) + len(self.errors)

    @property
    def cancelled(self) -> bool:
        return self.status is RunStatus.CANCELLED

    def records(self) -> list[AddressRecord]:
        """All records in source row order."""
        return sorted([*self.success, *self.errors], key=lambda r: r.id)
