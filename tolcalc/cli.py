#!/usr/bin/env python3
"""
Command-line tolerance calculator.

Usage:
    tolcalc general 3 --class m
    tolcalc fit 10 --category shaft --class h6
    tolcalc classes --mode fit --category hole
    tolcalc table --mode general --dimension 50
    tolcalc remap h6 --to hole
    tolcalc pair 25 H7 g6
    tolcalc fit 25 --json
"""

import argparse
import json
import sys
from typing import List, Optional

from tolcalc.core.config import get_settings
from tolcalc.core.knowledge.tolerance import (
    FitResult,
    GeneralResult,
    Mode,
    evaluate_fit,
    find_range_index,
    format_cell,
    get_reference_table,
    list_fit_classes,
    list_general_classes,
    parse_dimension,
    parse_fit_category,
    parse_tolerance_class,
    remap_fit_class,
    resolve_fit,
    resolve_general,
)

EXIT_OK = 0
EXIT_INPUT_ERROR = 2

AWAITING_INPUT = "Awaiting valid input: no tabulated value applies to this dimension and class."


def _print_general(result: GeneralResult) -> None:
    data = result.to_dict()
    print(f"{data['nominal']:g} {data['tolerance_text']} {data['unit']}")
    print(f"  General: {result.tolerance_class.value.upper()} ({result.tolerance_class.label})")
    print(f"  Range:   {data['range_text']} mm")
    print(f"  Max:     {data['upper_limit_text']} mm")
    print(f"  Min:     {data['lower_limit_text']} mm")


def _print_fit(result: FitResult) -> None:
    data = result.to_dict()
    print(f"{data['nominal']:g} {result.fit_class} ({data['upper_dev_text']} / {data['lower_dev_text']} μm)")
    print(f"  Fit:     {result.category.value} {result.fit_class}")
    print(f"  Range:   {data['range_text']} mm")
    print(f"  Max:     {data['upper_limit_text']} mm")
    print(f"  Min:     {data['lower_limit_text']} mm")


def _emit(result, as_json: bool) -> int:
    if result is None:
        if as_json:
            print(json.dumps({"found": False, "result": None, "message": AWAITING_INPUT}))
        else:
            print(AWAITING_INPUT)
        return EXIT_OK

    if as_json:
        print(json.dumps({"found": True, "result": result.to_dict()}, ensure_ascii=False))
    elif isinstance(result, GeneralResult):
        _print_general(result)
    else:
        _print_fit(result)
    return EXIT_OK


def cmd_general(args: argparse.Namespace) -> int:
    tol_class = parse_tolerance_class(args.tolerance_class or get_settings().DEFAULT_GENERAL_CLASS)
    return _emit(resolve_general(args.dimension, tol_class), args.json)


def cmd_fit(args: argparse.Namespace) -> int:
    settings = get_settings()
    category = parse_fit_category(args.category or settings.DEFAULT_FIT_CATEGORY)
    fit_class = args.fit_class or settings.DEFAULT_FIT_CLASS
    return _emit(resolve_fit(args.dimension, category, fit_class), args.json)


def cmd_classes(args: argparse.Namespace) -> int:
    mode = Mode(args.mode or get_settings().DEFAULT_MODE)
    if mode is Mode.GENERAL:
        for tol_class in list_general_classes():
            print(f"{tol_class.value}  {tol_class.label}")
    else:
        category = parse_fit_category(args.category or get_settings().DEFAULT_FIT_CATEGORY)
        print(" ".join(list_fit_classes(category)))
    return EXIT_OK


def cmd_table(args: argparse.Namespace) -> int:
    mode = Mode(args.mode or get_settings().DEFAULT_MODE)
    category = None
    if mode is Mode.FIT:
        category = parse_fit_category(args.category or get_settings().DEFAULT_FIT_CATEGORY)
    table = get_reference_table(mode, category)

    active = None
    value = parse_dimension(args.dimension)
    if value is not None:
        active = find_range_index(table.ranges, value)

    headers = [f"[{h}]" if i == active else h for i, h in enumerate(table.headers)]
    width = max(len(h) for h in headers + ["Range"]) + 1
    print("Range".ljust(8) + "".join(h.rjust(width) for h in headers))
    for row in table.rows:
        print(row.label.ljust(8) + "".join(format_cell(cell).rjust(width) for cell in row.cells))
    return EXIT_OK


def cmd_remap(args: argparse.Namespace) -> int:
    print(remap_fit_class(args.fit_class, parse_fit_category(args.to)))
    return EXIT_OK


def cmd_pair(args: argparse.Namespace) -> int:
    result = evaluate_fit(args.dimension, args.hole, args.shaft)
    if result is None:
        print(AWAITING_INPUT)
        return EXIT_OK
    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False))
        return EXIT_OK
    print(f"{result.fit_code} @ {result.nominal_size_mm:g} mm ({result.range_text} mm): {result.fit_type.value}")
    print(f"  Hole:  {result.hole.upper:+g} / {result.hole.lower:+g} μm")
    print(f"  Shaft: {result.shaft.upper:+g} / {result.shaft.lower:+g} μm")
    print(f"  Clearance: {result.min_clearance_um:g} .. {result.max_clearance_um:g} μm")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tolcalc",
        description="General tolerance and ISO fit calculator",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("general", help="General tolerance (JIS B 0405 / ISO 2768-1)")
    p.add_argument("dimension", help="Nominal size in mm")
    p.add_argument("--class", dest="tolerance_class", help="f, m, c or v (default from settings)")
    p.add_argument("--json", action="store_true", help="Print JSON")
    p.set_defaults(func=cmd_general)

    p = sub.add_parser("fit", help="Hole/shaft fit limits (ISO 286-2)")
    p.add_argument("dimension", help="Nominal size in mm")
    p.add_argument("--category", choices=["hole", "shaft"], help="Default from settings")
    p.add_argument("--class", dest="fit_class", help="e.g. H7, g6 (default from settings)")
    p.add_argument("--json", action="store_true", help="Print JSON")
    p.set_defaults(func=cmd_fit)

    p = sub.add_parser("classes", help="List available classes")
    p.add_argument("--mode", choices=["general", "fit"])
    p.add_argument("--category", choices=["hole", "shaft"])
    p.set_defaults(func=cmd_classes)

    p = sub.add_parser("table", help="Print the reference table")
    p.add_argument("--mode", choices=["general", "fit"])
    p.add_argument("--category", choices=["hole", "shaft"])
    p.add_argument("--dimension", help="Mark the bracket of this size")
    p.set_defaults(func=cmd_table)

    p = sub.add_parser("remap", help="Equivalent class after switching category")
    p.add_argument("fit_class")
    p.add_argument("--to", required=True, choices=["hole", "shaft"])
    p.set_defaults(func=cmd_remap)

    p = sub.add_parser("pair", help="Evaluate a hole/shaft pairing")
    p.add_argument("dimension", help="Nominal size in mm")
    p.add_argument("hole", help="Hole class, e.g. H7")
    p.add_argument("shaft", help="Shaft class, e.g. g6")
    p.add_argument("--json", action="store_true", help="Print JSON")
    p.set_defaults(func=cmd_pair)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return args.func(args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return EXIT_INPUT_ERROR


if __name__ == "__main__":
    sys.exit(main())
