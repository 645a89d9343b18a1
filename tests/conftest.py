# Shared pytest fixtures
from __future__ import annotations
import logging
import random
import tempfile
from pathlib import Path

import pandas as pd
import pytest

from address_normalizer.logging.init import LOGGER_NAME, reset_logging
from address_normalizer.normalization import build_context


@pytest.fixture(autouse=True)
def isolated_logging():
    """Drop handlers bound to a previous test's captured stdout."""
    yield
    reset_logging()
    logger = logging.getLogger(LOGGER_NAME)
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.delenv("ADDRESS_NORMALIZER_CONFIG", raising=False)
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """validation:
  mode: structured
  min_length: 3
fuzzy:
  max_distance: 0.2
  confidence_floor: 85
defaults:
  street: ул. Примерная
strict_defaults: false
logs_dir: ./logs
dictionary:
  canonical_entries: [Ивантеевка]
  city_abbreviations:
    ивн: Ивантеевка
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "normalizer.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture(scope="session")
def context():
    """Default normalization context (built-in dictionary, default settings)."""
    return build_context()


@pytest.fixture()
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture()
def write_xlsx(temp_workdir: Path):
    """Write header-less rows to data/<name> as a single-sheet workbook."""
    def _write(rows: list[list[object]], name: str = "addresses.xlsx", sheet: str = "Адреса") -> Path:
        path = temp_workdir / "data" / name
        with pd.ExcelWriter(path, engine="openpyxl") as writer:
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
        return path
    return _write


@pytest.fixture()
def write_csv(temp_workdir: Path):
    def _write(lines: list[str], name: str = "addresses.csv") -> Path:
        path = temp_workdir / "data" / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path
    return _write
