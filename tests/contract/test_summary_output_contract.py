from __future__ import annotations

import re

from address_normalizer.cli import main as cli_main
from address_normalizer.logging.init import reset_logging

"""SUMMARY line format contract.

Exactly one SUMMARY line per run, matching SUMMARY_PATTERN, with counters
consistent with the input (rows = success + errors + skipped for a completed run).
"""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+rows=([0-9]+)\s+success=([0-9]+)\s+errors=([0-9]+)\s+skipped=([0-9]+)\s+"
    r"status=(completed|cancelled)\s+elapsed_sec=([0-9]+\.?[0-9]*)\s+throughput_rps=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_lines():
    for line in [
        "SUMMARY rows=4 success=3 errors=1 skipped=0 status=completed elapsed_sec=0.84 throughput_rps=4761.9",
        "SUMMARY rows=0 success=0 errors=0 skipped=0 status=completed elapsed_sec=0 throughput_rps=0",
        "SUMMARY rows=10 success=2 errors=0 skipped=0 status=cancelled elapsed_sec=0.01 throughput_rps=200",
    ]:
        assert SUMMARY_PATTERN.match(line), line


def test_cli_emits_single_consistent_summary(write_csv, capsys):
    reset_logging()
    path = write_csv(["мск, ул. Мира", ",", "x", "Казань, ул. Баумана, д. 1"])
    cli_main([str(path)])
    lines = [line for line in capsys.readouterr().out.splitlines() if line.startswith("SUMMARY")]
    assert len(lines) == 1
    m = SUMMARY_PATTERN.match(lines[0])
    assert m, lines[0]
    rows, success, errors, skipped = (int(m.group(i)) for i in range(1, 5))
    assert (rows, success, errors, skipped) == (4, 2, 1, 1)
    assert rows == success + errors + skipped
    assert float(m.group(7)) >= 0
