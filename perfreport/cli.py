#!/usr/bin/env python3
"""Command-line entry point: aggregate measurements into reports."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from perfreport.aggregator import aggregate
from perfreport.errors import PerfReportError, SourceFormatError
from perfreport.formatting import FormatOptions
from perfreport.logging import bcolors, configure_logging, print_status
from perfreport.schemas import AssemblyModelCollection
from perfreport.serializer import render_assemblies, render_benchmark, write_report
from perfreport.sources import load_measurements, load_registry_json
from perfreport.table import get_statistics
from perfreport.units import UnitTable, infer_unit

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="perfreport",
        description="Aggregate per-iteration performance measurements into reports",
    )

    parser.add_argument(
        "registry",
        help="JSON file listing the test cases ([{name, type, method}, ...])"
    )

    parser.add_argument(
        "measurements",
        help="Measurement file (.json or .csv)"
    )

    parser.add_argument(
        "--name",
        help="Benchmark name (default: measurement file stem)"
    )

    parser.add_argument(
        "--namespace",
        default="",
        help="Namespace written on the benchmark element"
    )

    parser.add_argument(
        "--layout",
        choices=["scenario", "assembly"],
        default="scenario",
        help="Hierarchical report layout (default: scenario)"
    )

    parser.add_argument(
        "--xml",
        help="Write the hierarchical report to this file"
    )

    parser.add_argument(
        "--csv",
        help="Write the statistics table to this CSV file"
    )

    parser.add_argument(
        "--units",
        help="JSON file mapping metric names to unit labels"
    )

    parser.add_argument(
        "--decimal-point",
        default=".",
        help="Decimal point character used in numeric output (default: '.')"
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log join decisions"
    )

    return parser


def _load_unit_policy(path: Optional[str]):
    if not path:
        return infer_unit

    try:
        with open(path, "r", encoding="utf-8") as f:
            units = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SourceFormatError(path, f"cannot load unit table ({e})") from e

    if not isinstance(units, dict) or not all(isinstance(v, str) for v in units.values()):
        raise SourceFormatError(path, "unit table must map metric names to strings")
    return UnitTable(units)


def run(args: argparse.Namespace) -> int:
    try:
        options = FormatOptions(decimal_point=args.decimal_point)
    except ValueError as e:
        print_status(f"Invalid --decimal-point: {args.decimal_point!r}", bcolors.FAIL)
        logger.debug("Format options rejected: %s", e)
        return 2

    registry = load_registry_json(args.registry)
    source = load_measurements(args.measurements)
    unit_policy = _load_unit_policy(args.units)
    name = args.name or Path(args.measurements).stem

    benchmark = aggregate(registry, source, name, namespace=args.namespace, unit_policy=unit_policy)
    print_status(f"Aggregated {len(benchmark.tests)} tests for {name}", bcolors.SYSTEM)

    if args.xml:
        if args.layout == "assembly":
            root = render_assemblies(AssemblyModelCollection(assemblies=[benchmark]), options)
        else:
            root = render_benchmark(benchmark, options)
        write_report(root, args.xml)
        print_status(f"✓ Report saved to {args.xml}", bcolors.OKGREEN)

    table = get_statistics(benchmark, options)
    if args.csv:
        table.write_csv(args.csv)
        print_status(f"✓ Statistics saved to {args.csv}", bcolors.OKGREEN)

    print()
    print(table.to_markdown())
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    try:
        return run(args)
    except PerfReportError as e:
        print_status(f"❌ {e}", bcolors.FAIL)
        return 1


if __name__ == "__main__":
    sys.exit(main())
