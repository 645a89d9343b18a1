from __future__ import annotations

import argparse
from pathlib import Path
from unittest.mock import patch

import pytest

from address_normalizer.cli import main as cli_main
from address_normalizer.cli.__main__ import _apply_overrides, _parse_args
from address_normalizer.config.loader import CONFIG_ENV_VAR
from address_normalizer.logging.init import reset_logging
from address_normalizer.models.config_models import NormalizerConfig, ValidationMode


def test_parse_args_defaults():
    args = _parse_args(["in.xlsx"])
    assert args.input == Path("in.xlsx")
    assert args.output is None
    assert args.config is None
    assert args.strict is False
    assert args.validation_mode is None
    assert args.debug is False


def test_parse_args_rejects_unknown_validation_mode():
    with pytest.raises(SystemExit):
        _parse_args(["in.xlsx", "--validation-mode", "loose"])


def test_overrides_applied_on_top_of_config():
    args = argparse.Namespace(strict=True, validation_mode="dictionary")
    cfg = _apply_overrides(NormalizerConfig(), args)
    assert cfg.strict_defaults is True
    assert cfg.validation.mode is ValidationMode.DICTIONARY
    assert cfg.validation.min_length == 3


def test_no_overrides_keeps_config():
    cfg = NormalizerConfig()
    assert _apply_overrides(cfg, argparse.Namespace(strict=False, validation_mode=None)) is cfg


def test_cli_debug_mode(write_csv, capsys):
    reset_logging()
    path = write_csv(["x"])
    code = cli_main([str(path), "--debug"])
    out = capsys.readouterr().out
    assert code == 2
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG row 1 rejected (too-short)" in out


def test_cli_without_debug_hides_debug_lines(write_csv, capsys):
    reset_logging()
    path = write_csv(["x"])
    cli_main([str(path)])
    assert "DEBUG" not in capsys.readouterr().out


def test_config_path_from_dotenv(temp_workdir: Path, write_csv, capsys, monkeypatch):
    reset_logging()
    (temp_workdir / "custom.yml").write_text("validation:\n  min_length: 50\n", encoding="utf-8")
    (temp_workdir / ".env").write_text(f"{CONFIG_ENV_VAR}=custom.yml\n", encoding="utf-8")
    path = write_csv(["мск, ул. Мира, д. 5"])
    try:
        code = cli_main([str(path)])
    finally:
        monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    capsys.readouterr()
    # min_length 50 rejects the only row
    assert code == 2


def test_cli_config_flag_wins_over_environment(temp_workdir: Path, write_csv, capsys, monkeypatch):
    reset_logging()
    monkeypatch.setenv(CONFIG_ENV_VAR, "missing-from-env.yml")
    (temp_workdir / "cli.yml").write_text("strict_defaults: false\n", encoding="utf-8")
    path = write_csv(["мск, ул. Мира, д. 5"])
    assert cli_main([str(path), "--config", "cli.yml"]) == 0
    capsys.readouterr()


def test_unsupported_output_rejected_before_processing(write_csv, capsys):
    reset_logging()
    path = write_csv(["мск, ул. Мира, д. 5"])
    with patch("address_normalizer.cli.__main__.process_file") as process:
        code = cli_main([str(path), "-o", "out.txt"])
    out = capsys.readouterr().out
    assert code == 1
    process.assert_not_called()
    assert "ERROR export: unsupported output format '.txt'" in out
    assert "SUMMARY" not in out
