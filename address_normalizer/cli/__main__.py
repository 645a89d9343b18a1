from __future__ import annotations

import argparse
import signal
import sys
import threading
from dataclasses import replace
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import ConfigError, load_config_or_default
from ..excel.reader import TableReadError
from ..excel.writer import ExportError, check_output_path, export_result
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.config_models import NormalizerConfig, ValidationMode
from ..normalization.pipeline import build_context
from ..services.orchestrator import ProcessingError, process_file
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- load .env, then the YAML config (CLI flags override it)
- read INPUT, normalize every row, log rejected rows as JSON Lines
- optionally export the result (.xlsx / .csv)
- print one SUMMARY line

Exit codes: 0 every row normalized, 2 some rows rejected, 1 fatal error,
3 cancelled by Ctrl+C.
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2
EXIT_CANCELLED = 3


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv (process variables win unless override)."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="address-normalizer",
        description="Batch normalizer for Russian postal addresses (.csv / .xlsx / .xls)",
    )
    p.add_argument("input", type=Path, help="Input table file")
    p.add_argument("-o", "--output", type=Path, help="Write results to this .xlsx or .csv file")
    p.add_argument("-c", "--config", type=Path, help="YAML config (default: config/normalizer.yml)")
    p.add_argument("--strict", action="store_true", help="Mark records with defaulted components as warnings")
    p.add_argument(
        "--validation-mode",
        choices=[m.value for m in ValidationMode],
        help="Override validation.mode from the config",
    )
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _apply_overrides(cfg: NormalizerConfig, args: argparse.Namespace) -> NormalizerConfig:
    if args.strict:
        cfg = replace(cfg, strict_defaults=True)
    if args.validation_mode:
        cfg = replace(cfg, validation=replace(cfg.validation, mode=ValidationMode(args.validation_mode)))
    return cfg


def _exit_code(result) -> int:
    if result.cancelled:
        return EXIT_CANCELLED
    if result.errors:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] from tests must not pick up pytest's argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    if args.output is not None:
        try:
            check_output_path(args.output)
        except TableReadError as e:
            logger.error(f"export: {e}")
            return EXIT_FATAL

    try:
        cfg = _apply_overrides(load_config_or_default(args.config), args)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    context = build_context(cfg)
    logger.info(
        f"Normalizing {args.input} (validation={cfg.validation.mode.value} strict={cfg.strict_defaults})"
    )

    cancel_event = threading.Event()

    def _on_sigint(signum, frame):  # pragma: no cover - signal delivery
        logger.warning("interrupt received, stopping after the current row")
        cancel_event.set()

    previous = None
    if threading.current_thread() is threading.main_thread():
        previous = signal.signal(signal.SIGINT, _on_sigint)
    try:
        result = process_file(args.input, context, cancel_event=cancel_event)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL
    finally:
        if previous is not None:
            signal.signal(signal.SIGINT, previous)

    if result.warnings:
        logger.warning(f"{result.warnings} records use default components")

    if args.output is not None:
        try:
            export_result(result, args.output)
        except (ExportError, TableReadError) as e:
            logger.error(f"export: {e}")
            return EXIT_FATAL

    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))
    return _exit_code(result)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
