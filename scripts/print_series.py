"""Utility script to print a generated cash flow series as JSON."""

from __future__ import annotations

import argparse
import json

from cashflow import synth


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=synth.DEFAULT_SEED, help="Deterministic RNG seed")
    parser.add_argument("--csv-dir", default=None, help="Also write both periods as CSV to this directory")
    args = parser.parse_args()

    series = synth.generate_series(seed=args.seed)
    print(json.dumps(series.to_dict(), indent=2))

    if args.csv_dir:
        for path in synth.write_series_csv(series, args.csv_dir):
            print(f"Wrote {path}")


if __name__ == "__main__":
    main()
