#!/usr/bin/env python3
"""Generate synthetic noisy address tables for manual and performance testing.

Each row is a Russian postal address written the way operators type them:
city shorthands (мск, спб, екб), missing punctuation, random case, the odd
typo, sometimes split across two cells. A share of rows is junk (too short,
Latin only) and a share is blank, so a run exercises every outcome.

Output is .xlsx (single sheet, no header row) or .csv, by suffix.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

import numpy as np
import pandas as pd

CITIES = ["мск", "Москва", "г. Москва", "спб", "питер", "екб", "Екатеринбург", "нн", "Казань", "ростов"]
REGIONS = ["", "", "", "мо", "ло", "Московская обл."]
STREETS = ["Ленина", "Советская", "Мира", "Кирова", "Гагарина", "Пушкина", "Тверская", "Невский"]
STREET_TYPES = ["ул.", "ул", "улица", "пр.", "проспект", "пер."]
JUNK = ["x", "ab", "hello world", "12345"]


def _typo(word: str, rng: np.random.Generator) -> str:
    """Drop one inner letter."""
    if len(word) < 5:
        return word
    pos = int(rng.integers(1, len(word) - 1))
    return word[:pos] + word[pos + 1:]


def _random_case(text: str, rng: np.random.Generator) -> str:
    roll = rng.random()
    if roll < 0.2:
        return text.upper()
    if roll < 0.4:
        return text.lower()
    return text


def generate_addresses(
    rows: int,
    *,
    seed: int = 42,
    junk_share: float = 0.05,
    blank_share: float = 0.02,
    typo_share: float = 0.1,
) -> pd.DataFrame:
    """Build a two-column, header-less frame of address cells.

    The second column is filled only when an address is split across cells.
    """
    rng = np.random.default_rng(seed)
    first: list[str] = []
    second: list[str] = []
    for _ in range(rows):
        roll = rng.random()
        if roll < blank_share:
            first.append("")
            second.append("")
            continue
        if roll < blank_share + junk_share:
            first.append(str(rng.choice(JUNK)))
            second.append("")
            continue

        region = str(rng.choice(REGIONS))
        city = str(rng.choice(CITIES))
        street = str(rng.choice(STREETS))
        if rng.random() < typo_share:
            street = _typo(street, rng)
        street_part = f"{rng.choice(STREET_TYPES)} {street} д. {int(rng.integers(1, 200))}"
        if rng.random() < 0.5:
            street_part += f" кв. {int(rng.integers(1, 400))}"

        place = ", ".join(p for p in (region, city) if p)
        if rng.random() < 0.3:
            # split across two cells
            first.append(_random_case(place, rng))
            second.append(_random_case(street_part, rng))
        else:
            first.append(_random_case(f"{place}, {street_part}", rng))
            second.append("")
    return pd.DataFrame({0: first, 1: second})


def write_dataset(output_path: Path, df: pd.DataFrame) -> None:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    if output_path.suffix.lower() == ".csv":
        df.to_csv(output_path, header=False, index=False, encoding="utf-8")
    else:
        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            df.to_excel(writer, sheet_name="Адреса", header=False, index=False)
    print(f"Created dataset: {output_path} ({len(df):,} rows)")


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate synthetic noisy address tables",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s addresses.xlsx
  %(prog)s addresses.csv --rows 100000 --seed 7
  %(prog)s clean.xlsx --junk-share 0 --typo-share 0
        """,
    )
    parser.add_argument("output", type=Path, help="Output .xlsx or .csv path")
    parser.add_argument("--rows", type=int, default=10_000, help="Number of rows (default: 10,000)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--junk-share", type=float, default=0.05, help="Share of invalid rows (default: 0.05)")
    parser.add_argument("--blank-share", type=float, default=0.02, help="Share of blank rows (default: 0.02)")
    parser.add_argument("--typo-share", type=float, default=0.1, help="Share of street typos (default: 0.1)")
    args = parser.parse_args()

    if args.rows <= 0:
        print("Error: --rows must be positive", file=sys.stderr)
        return 1
    if args.output.suffix.lower() not in (".xlsx", ".csv"):
        print("Error: output must end with .xlsx or .csv", file=sys.stderr)
        return 1

    df = generate_addresses(
        args.rows,
        seed=args.seed,
        junk_share=args.junk_share,
        blank_share=args.blank_share,
        typo_share=args.typo_share,
    )
    try:
        write_dataset(args.output, df)
    except OSError as e:
        print(f"Error writing dataset: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
