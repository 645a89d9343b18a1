from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from ..models.address_record import AddressRecord, RecordStatus
from ..models.processing_result import ProcessingResult
from .reader import UnsupportedFormatError

"""Result export: .xlsx workbook (two sheets) or a flat .csv table.

Column headers are the operator-facing Russian labels. The CSV is written
with a UTF-8 BOM so that spreadsheet programs detect the encoding.
"""

__all__ = [
    "SUCCESS_SHEET",
    "ERROR_SHEET",
    "EXPORT_SUFFIXES",
    "ExportError",
    "export_excel",
    "export_csv",
    "check_output_path",
    "export_result",
]

logger = logging.getLogger(__name__)

SUCCESS_SHEET = "Нормализованные"
ERROR_SHEET = "Ошибки"
EXPORT_SUFFIXES = (".xlsx", ".csv")

SUCCESS_COLUMNS = [
    "ID",
    "Исходный адрес",
    "Нормализованный адрес",
    "Регион",
    "Муниципальный район",
    "Населенный пункт",
    "Улица",
    "Дом",
    "Квартира",
    "Уровень точности",
    "Статус",
    "Уверенность (%)",
]
ERROR_COLUMNS = ["ID", "Адрес", "Ошибка"]
CSV_COLUMNS = ["ID", "Исходный адрес", "Нормализованный адрес", "Статус", "Ошибка", "Уверенность (%)"]

STATUS_LABELS = {
    RecordStatus.SUCCESS: "Успешно",
    RecordStatus.WARNING: "Предупреждение",
    RecordStatus.ERROR: "Ошибка",
}


class ExportError(Exception):
    """Raised when the result file cannot be written."""


def _success_row(r: AddressRecord) -> list[object]:
    return [
        r.id,
        r.original,
        r.normalized,
        r.region,
        r.municipal_district,
        r.settlement,
        r.street,
        r.house,
        r.apartment,
        r.accuracy_level.value,
        STATUS_LABELS[r.status],
        r.confidence,
    ]


def _csv_row(r: AddressRecord) -> list[object]:
    if r.status is RecordStatus.ERROR:
        return [r.id, r.original, "", STATUS_LABELS[r.status], r.error_message or "", 0]
    return [r.id, r.original, r.normalized, STATUS_LABELS[r.status], r.error_message or "", r.confidence]


def export_excel(result: ProcessingResult, path: Path) -> Path:
    """Write the success and error sheets to an .xlsx workbook."""
    success_df = pd.DataFrame([_success_row(r) for r in result.success], columns=SUCCESS_COLUMNS)
    error_df = pd.DataFrame(
        [[r.id, r.original, r.error_message or ""] for r in result.errors],
        columns=ERROR_COLUMNS,
    )
    try:
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            success_df.to_excel(writer, sheet_name=SUCCESS_SHEET, index=False)
            error_df.to_excel(writer, sheet_name=ERROR_SHEET, index=False)
    except OSError as e:
        raise ExportError(f"cannot write {path}: {e}") from e
    logger.info(f"exported {len(success_df)} normalized / {len(error_df)} rejected rows to {path}")
    return path


def export_csv(result: ProcessingResult, path: Path) -> Path:
    """Write one flat table (success rows first, then errors) with a status column."""
    rows = [_csv_row(r) for r in result.success] + [_csv_row(r) for r in result.errors]
    df = pd.DataFrame(rows, columns=CSV_COLUMNS)
    try:
        df.to_csv(path, index=False, encoding="utf-8-sig")
    except OSError as e:
        raise ExportError(f"cannot write {path}: {e}") from e
    logger.info(f"exported {len(df)} rows to {path}")
    return path


def check_output_path(path: Path) -> Path:
    """Raise UnsupportedFormatError unless path ends in .xlsx or .csv."""
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in EXPORT_SUFFIXES:
        raise UnsupportedFormatError(
            f"unsupported output format '{suffix or path.name}' (expected one of {', '.join(EXPORT_SUFFIXES)})"
        )
    return path


def export_result(result: ProcessingResult, path: Path) -> Path:
    """Dispatch on the output suffix (.xlsx or .csv)."""
    path = check_output_path(path)
    if path.suffix.lower() == ".xlsx":
        return export_excel(result, path)
    return export_csv(result, path)
