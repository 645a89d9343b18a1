from __future__ import annotations

import logging
import random
import threading
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import RawRow, RawTable, TableReadError, read_table
from ..logging.error_log import ErrorLogBuffer
from ..models.address_record import AddressRecord, RecordStatus
from ..models.processing_result import ProcessingResult, RunStatus
from ..normalization.pipeline import NormalizationContext, process_address
from .progress import ProgressTracker

"""Batch orchestration: RawTable -> ProcessingResult.

Rows are processed strictly in source order. A row's id is its 1-based
position in the table, so blank rows leave gaps in the id sequence but still
count toward the total. Per-row work is pure; the result lists are owned by
process_table alone and frozen into a ProcessingResult at the end.

Cancellation is cooperative: the event is checked between rows, never in the
middle of one, and a cancelled run returns the rows finished so far.
"""

__all__ = [
    "ProcessingError",
    "ProgressCallback",
    "row_text",
    "process_table",
    "process_file",
]

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


class ProcessingError(Exception):
    """Fatal batch-level failure; no row has been processed."""


def row_text(row: RawRow) -> str:
    """Join the non-empty trimmed cells of a row with ", "."""
    return ", ".join(cell.strip() for cell in row if cell and cell.strip())


def process_table(
    table: RawTable,
    context: NormalizationContext,
    *,
    on_progress: ProgressCallback | None = None,
    cancel_event: threading.Event | None = None,
    show_progress: bool = True,
    rng: random.Random | None = None,
) -> ProcessingResult:
    """Normalize every row of the table.

    Args:
        table: rows of cell strings, header-less
        context: shared dictionary / fuzzy index / settings
        on_progress: called once per iterated row (blank rows included)
            with round(100 * (i + 1) / total)
        cancel_event: when set, iteration stops before the next row
        show_progress: allow the tqdm bar (it still needs a TTY)
        rng: pseudo GUID source, for reproducible runs

    Returns:
        ProcessingResult; status CANCELLED when stopped early
    """
    start_time = datetime.now(UTC)
    total = len(table)
    success: list[AddressRecord] = []
    errors: list[AddressRecord] = []
    skipped = 0
    warnings = 0
    status = RunStatus.COMPLETED

    with ProgressTracker(total, enabled=show_progress) as progress:
        for i, row in enumerate(table):
            if cancel_event is not None and cancel_event.is_set():
                status = RunStatus.CANCELLED
                logger.warning(f"cancelled after {i} of {total} rows")
                break

            original = row_text(row)
            if not original:
                skipped += 1
            else:
                record = process_address(i + 1, original, context, rng=rng)
                if record.is_success:
                    success.append(record)
                    if record.status is RecordStatus.WARNING:
                        warnings += 1
                else:
                    errors.append(record)
                    logger.debug(f"row {record.id} rejected ({record.error_code}): {original!r}")

            if on_progress is not None:
                on_progress(round(100 * (i + 1) / total))
            progress.advance()
            progress.set_postfix(success=len(success), errors=len(errors))

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    processed = len(success) + len(errors)
    throughput = processed / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success=success,
        errors=errors,
        total=total,
        skipped_rows=skipped,
        status=status,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput,
        warnings=warnings,
    )


def process_file(
    path: Path,
    context: NormalizationContext,
    *,
    error_log: ErrorLogBuffer | None = None,
    on_progress: ProgressCallback | None = None,
    cancel_event: threading.Event | None = None,
    show_progress: bool = True,
    rng: random.Random | None = None,
) -> ProcessingResult:
    """Read a table file and normalize it.

    Rejected rows are appended to the error log, which is flushed once at
    the end of the file.

    Raises:
        ProcessingError: the file could not be read (nothing was processed)
    """
    path = Path(path)
    reader = context.config.reader
    try:
        table = read_table(
            path,
            sheet=reader.sheet,
            encoding=reader.csv_encoding,
            delimiter=reader.csv_delimiter,
        )
    except TableReadError as e:
        raise ProcessingError(str(e)) from e

    logger.info(f"read {len(table)} rows from {path.name}")
    result = process_table(
        table,
        context,
        on_progress=on_progress,
        cancel_event=cancel_event,
        show_progress=show_progress,
        rng=rng,
    )

    if error_log is None:
        error_log = ErrorLogBuffer(Path(context.config.logs_dir))
    for record in result.errors:
        error_log.add_rejected(path.name, record)
    log_path = error_log.flush()
    if log_path is not None:
        by_type = " ".join(f"{name}={count}" for name, count in error_log.counts_by_type().items())
        logger.info(f"{len(result.errors)} rejected rows logged to {log_path} ({by_type})")
    return result
