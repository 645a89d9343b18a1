from __future__ import annotations

import json
from pathlib import Path

import pandas as pd  # type: ignore

from address_normalizer.cli import main as cli_main
from address_normalizer.logging.init import reset_logging

"""Integration test: a workbook with junk rows.

Rejected rows go to the Ошибки sheet and to the JSON Lines error log; valid
rows are still exported; exit code 2.
"""


def test_cli_partial_failure(temp_workdir: Path, write_xlsx, capsys):
    reset_logging()
    path = write_xlsx([
        ["мск, ул. Мира, д. 5"],
        ["x"],
        ["hello world"],
        ["спб, Невский, д. 1"],
    ])
    out_path = temp_workdir / "result.xlsx"

    code = cli_main([str(path), "--output", str(out_path)])

    out = capsys.readouterr().out
    assert code == 2
    assert "SUMMARY rows=4 success=2 errors=2 skipped=0 status=completed" in out
    assert "2 rejected rows logged to" in out
    assert "(TOO_SHORT=1 MISSING_NAME=1)" in out

    errors = pd.read_excel(out_path, sheet_name="Ошибки", engine="openpyxl")
    assert errors["ID"].tolist() == [2, 3]
    assert errors["Адрес"].tolist() == ["x", "hello world"]
    assert errors["Ошибка"].tolist() == ["Адрес слишком короткий", "Адрес должен содержать название"]

    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    entries = [json.loads(line) for line in logs[0].read_text(encoding="utf-8").splitlines()]
    assert [e["row"] for e in entries] == [2, 3]
    assert {e["error_type"] for e in entries} == {"TOO_SHORT", "MISSING_NAME"}


def test_cli_dictionary_mode_rejects_unknown_places(temp_workdir: Path, write_xlsx, capsys):
    reset_logging()
    path = write_xlsx([["Абвгд, Йцукен"], ["мск, ул. Мира"]])
    code = cli_main([str(path), "--validation-mode", "dictionary"])
    out = capsys.readouterr().out
    assert code == 2
    assert "errors=1" in out
    entries = [
        json.loads(line)
        for log in (temp_workdir / "logs").glob("errors-*.log")
        for line in log.read_text(encoding="utf-8").splitlines()
    ]
    assert [e["error_type"] for e in entries] == ["NOT_IN_DICTIONARY"]
