from __future__ import annotations

import csv
import zipfile
from pathlib import Path
from typing import Any

import pandas as pd

"""Row reader: turns a .csv / .xlsx / .xls file into a RawTable.

A RawTable is an ordered list of rows, each an ordered list of cell strings.
Empty cells become "". Rows may have different widths: a free-form address
file often has one cell on some lines and several on others.

Fully empty CSV lines are dropped; rows whose cells are all empty or
whitespace are kept and counted as blank by the orchestrator.

Any failure here is fatal for the run: the orchestrator never starts.
"""

__all__ = [
    "RawRow",
    "RawTable",
    "SUPPORTED_SUFFIXES",
    "TableReadError",
    "UnsupportedFormatError",
    "read_table",
]

RawRow = list[str]
RawTable = list[RawRow]

SUPPORTED_SUFFIXES = (".csv", ".xlsx", ".xls")


class TableReadError(Exception):
    """Raised when the input file cannot be turned into a RawTable."""


class UnsupportedFormatError(TableReadError):
    """Raised when the file extension is not a supported table format."""


def _cell_text(value: Any) -> str:
    if value is None or (not isinstance(value, str) and pd.isna(value)):
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _frame_to_table(df: pd.DataFrame) -> RawTable:
    return [[_cell_text(v) for v in row] for row in df.itertuples(index=False, name=None)]


def _read_excel_sheet(path: Path, sheet: str | int) -> pd.DataFrame:
    with pd.ExcelFile(path) as xls:
        names = [str(n) for n in xls.sheet_names]
        if isinstance(sheet, int):
            if not 0 <= sheet < len(names):
                raise TableReadError(f"sheet index {sheet} out of range in {path.name} ({len(names)} sheets)")
            name = names[sheet]
        else:
            if sheet not in names:
                raise TableReadError(f"sheet '{sheet}' not found in {path.name}: {names}")
            name = sheet
        # no header row: every row is address data
        return xls.parse(name, header=None, dtype=object)


def _read_csv(path: Path, encoding: str, delimiter: str) -> RawTable:
    # pandas fixes the column count from the first line and rejects wider
    # rows, so ragged address files go through the csv module instead
    with path.open(newline="", encoding=encoding) as f:
        return [row for row in csv.reader(f, delimiter=delimiter) if row]


def read_table(
    path: Path,
    *,
    sheet: str | int = 0,
    encoding: str = "utf-8-sig",
    delimiter: str = ",",
) -> RawTable:
    """Read a table file into a RawTable.

    Parameters
    ----------
    path: input file (.csv, .xlsx or .xls)
    sheet: sheet name or 0-based index (spreadsheets only)
    encoding / delimiter: CSV options

    Raises
    ------
    UnsupportedFormatError: unknown extension
    TableReadError: missing file, unreadable or malformed content
    """
    path = Path(path)
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise UnsupportedFormatError(
            f"unsupported file format '{suffix or path.name}' (expected one of {', '.join(SUPPORTED_SUFFIXES)})"
        )
    if not path.is_file():
        raise TableReadError(f"input file not found: {path}")

    if suffix == ".csv":
        try:
            return _read_csv(path, encoding, delimiter)
        except (OSError, UnicodeDecodeError, csv.Error) as e:
            raise TableReadError(f"cannot read {path.name}: {e}") from e

    try:
        df = _read_excel_sheet(path, sheet)
    except ImportError as e:
        raise TableReadError(f"no reader engine available for {suffix}: {e}") from e
    except (OSError, ValueError, zipfile.BadZipFile) as e:
        raise TableReadError(f"cannot read {path.name}: {e}") from e

    return _frame_to_table(df)
