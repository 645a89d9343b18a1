from __future__ import annotations

from ..models.processing_result import ProcessingResult

"""SUMMARY line rendering.

Format:
SUMMARY rows={total} success={success} errors={errors} skipped={skipped}
status={completed|cancelled} elapsed_sec={elapsed} throughput_rps={throughput}
"""

__all__ = [
    "format_number",
    "render_summary_line",
]


def format_number(value: float) -> str:
    """Render a metric without scientific notation; integral values drop the fraction."""
    if value == 0:
        return "0"
    if value == int(value):
        return str(int(value))
    if value < 0.01:
        return f"{value:.6f}".rstrip("0").rstrip(".")
    return str(round(value, 3))


def render_summary_line(result: ProcessingResult) -> str:
    """Render the SUMMARY line for one run.

    Examples:
        >>> result = ProcessingResult(
        ...     success=[], errors=[], total=3, skipped_rows=3,
        ...     elapsed_seconds=2.0, throughput_rows_per_sec=0.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY rows=3 success=0 errors=0 skipped=3 status=completed elapsed_sec=2 throughput_rps=0'
    """
    return (
        f"SUMMARY rows={result.total} "
        f"success={len(result.success)} "
        f"errors={len(result.errors)} "
        f"skipped={result.skipped_rows} "
        f"status={result.status.value} "
        f"elapsed_sec={format_number(result.elapsed_seconds)} "
        f"throughput_rps={format_number(result.throughput_rows_per_sec)}"
    )
