from __future__ import annotations
import json
import re
from dataclasses import replace
from pathlib import Path
from address_normalizer.logging.error_log import DEFAULT_ERROR_TYPE, ErrorLogBuffer, ErrorRecord
from address_normalizer.normalization import process_address


def _rec(row: int) -> ErrorRecord:
    return ErrorRecord.create("f1.xlsx", row, "too-short", "Адрес слишком короткий", "x")


def test_error_log_buffer_flush(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(_rec(1))
    buf.append(_rec(2))
    assert len(buf) == 2
    path = buf.flush()
    assert path is not None and path.exists()
    assert path.parent == Path("logs")
    assert re.match(r"^errors-\d{8}-\d{6}\.log$", path.name)
    lines = path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    for raw in lines:
        obj = json.loads(raw)
        assert set(obj.keys()) == {"timestamp", "file", "row", "error_type", "message", "original"}
        assert obj["error_type"] == "TOO_SHORT"
    # buffer cleared after flush
    assert len(buf) == 0


def test_error_log_buffer_multiple_flushes_append(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(_rec(1))
    path = buf.flush()
    buf.append(_rec(2))
    path2 = buf.flush()
    assert path == path2
    assert len(path.read_text(encoding="utf-8").splitlines()) == 2


def test_empty_flush_creates_nothing(temp_workdir: Path):
    logs = temp_workdir / "custom_logs"
    buf = ErrorLogBuffer(logs)
    assert buf.flush() is None
    assert not logs.exists()


def test_add_rejected_builds_entry_from_address(temp_workdir: Path, context, rng):
    buf = ErrorLogBuffer()
    record = process_address(7, "hello world", context, rng=rng)
    entry = buf.add_rejected("addresses.csv", record)
    assert (entry.file, entry.row, entry.original) == ("addresses.csv", 7, "hello world")
    assert entry.error_type == "MISSING_NAME"
    assert entry.message == "Адрес должен содержать название"
    assert len(buf) == 1


def test_add_rejected_without_code_uses_default_type(context, rng):
    buf = ErrorLogBuffer()
    record = replace(process_address(1, "x", context, rng=rng), error_code=None)
    assert DEFAULT_ERROR_TYPE == "invalid-address"
    assert buf.add_rejected("f.xlsx", record).error_type == "INVALID_ADDRESS"


def test_counts_by_type_survive_flush(temp_workdir: Path):
    buf = ErrorLogBuffer()
    buf.append(_rec(1))
    buf.append(ErrorRecord.create("f1.xlsx", 2, "missing-name", "m", "hello"))
    buf.append(_rec(3))
    buf.flush()
    assert buf.counts_by_type() == {"TOO_SHORT": 2, "MISSING_NAME": 1}
    assert list(buf.counts_by_type()) == ["TOO_SHORT", "MISSING_NAME"]
