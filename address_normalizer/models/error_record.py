from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the rejected-rows log.

One ErrorRecord per validator rejection, serialized as a JSON Lines entry.
row=-1 is accepted as a sentinel for file-level failures where no row applies.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: input filename being processed
        row: row number (1-based record id). -1 for file-level errors
        error_type: validator code in UPPER_SNAKE_CASE (e.g. TOO_SHORT)
        message: human readable reason
        original: the row's original address text
    """
    timestamp: str  # ISO8601 UTC
    file: str
    row: int
    error_type: str  # UPPER_SNAKE
    message: str
    original: str

    @staticmethod
    def create(file: str, row: int, error_type: str, message: str, original: str = "") -> ErrorRecord:
        """Create a new ErrorRecord with current UTC timestamp.

        error_type is accepted in either kebab-case (validator codes) or
        UPPER_SNAKE_CASE and stored as UPPER_SNAKE_CASE.
        """
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            row=row,
            error_type=error_type.replace("-", "_").upper(),
            message=message,
            original=original,
        )

    def to_json_line(self) -> str:
        """Serialize to a JSON Lines entry (no extra keys)."""
        return json.dumps(asdict(self), ensure_ascii=False)
