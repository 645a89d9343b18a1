from __future__ import annotations

from collections import Counter
from datetime import UTC, datetime
from pathlib import Path

from ..models.address_record import AddressRecord
from ..models.error_record import ErrorRecord

"""Rejected-address log.

Every address the validator rejects becomes one JSON Lines entry in
`logs/errors-YYYYMMDD-HHMMSS.log` (UTC). The file is named on first flush,
so a run without rejections leaves no file behind.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
    "LOGS_DIR",
    "DEFAULT_ERROR_TYPE",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"
# Used when a rejected record carries no validator code
DEFAULT_ERROR_TYPE = "invalid-address"


class ErrorLogBuffer:
    """Collects rejected addresses and writes them out in one go per input file.

    Not thread-safe: the orchestrator is the single writer.
    """

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._pending: list[ErrorRecord] = []
        self._by_type: Counter[str] = Counter()
        self._logs_dir = logs_dir or LOGS_DIR
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)
        self._by_type[record.error_type] += 1

    def add_rejected(self, file_name: str, record: AddressRecord) -> ErrorRecord:
        """Queue the log entry for one rejected address and return it."""
        entry = ErrorRecord.create(
            file=file_name,
            row=record.id,
            error_type=record.error_code or DEFAULT_ERROR_TYPE,
            message=record.error_message or "",
            original=record.original,
        )
        self.append(entry)
        return entry

    def counts_by_type(self) -> dict[str, int]:
        """Rejections per error type over the whole run, most frequent first."""
        return dict(self._by_type.most_common())

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Append pending entries; returns the log path, or None if nothing was pending."""
        if not self._pending:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            f.writelines(entry.to_json_line() + "\n" for entry in self._pending)
        self._pending.clear()
        return fp
