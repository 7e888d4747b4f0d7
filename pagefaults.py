#!/usr/bin/env python3
"""
Command line driver: generate one trace, sweep frame counts, write the CSV.

Usage:
    pagefaults N P [--seed SEED] [--output PATH] [--legacy-clock]
"""

import argparse
import csv
import io
import sys
from typing import List, Optional, Sequence

from config import REPORT_FILENAME, REPORT_HEADER, SweepConfig, UsageError
from engine import SweepResult, generate_trace, run_sweep


class ArgumentParser(argparse.ArgumentParser):
    """argparse parser that reports usage problems with exit status 1."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"ERROR: {message}\n")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="pagefaults",
        description="Count page faults of the second-chance (clock) algorithm "
                    "over a random page trace, for every frame count from 4 to P.")
    parser.add_argument("n", type=int, help="page trace length (>= 16)")
    parser.add_argument("p", type=int, help="page count (>= 8)")
    parser.add_argument("--seed", type=int, default=None,
                        help="random seed (default: system clock)")
    parser.add_argument("--output", default=REPORT_FILENAME,
                        help=f"CSV report path (default: {REPORT_FILENAME})")
    parser.add_argument("--legacy-clock", action="store_true",
                        help="keep one clock hand across all frame counts")
    return parser


def format_report(results: Sequence[SweepResult]) -> str:
    """Render the sweep as `Frames,Page Faults` CSV text."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(REPORT_HEADER)
    for result in results:
        writer.writerow([result.frames, result.page_faults])
    return buf.getvalue()


def write_report(results: Sequence[SweepResult], path: str):
    with open(path, "w", newline="") as f:
        f.write(format_report(results))


def run(config: SweepConfig) -> List[SweepResult]:
    """Validate the config, run the sweep and write its report."""
    config.validate()
    rng = config.make_rng()
    trace = generate_trace(config.trace_length, config.page_count, rng)
    results = run_sweep(trace, config.page_count,
                        first_frame_count=config.first_frame_count,
                        legacy_clock=config.legacy_clock)
    write_report(results, config.output_path)
    return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = SweepConfig(trace_length=args.n, page_count=args.p, seed=args.seed,
                         output_path=args.output, legacy_clock=args.legacy_clock)
    try:
        results = run(config)
    except UsageError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {len(results)} rows to {config.output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
