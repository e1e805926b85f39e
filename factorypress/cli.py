#!/usr/bin/env python3
#
# Copyright 2022 Max Planck Insitute Magdeburg
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
#
#
"""Command line interface: solve a file of machine descriptions and print the totals"""

from argparse import ArgumentParser
from argparse import RawDescriptionHelpFormatter
import logging
import sys
import time

from factorypress.errors import MachineError, ParseError
from factorypress.names import *
from factorypress.parse_machine import parse_input
from factorypress.solver import press_report, total_counter_presses, total_toggle_presses


def format_duration(ns: int) -> str:
    """Render a duration given in nanoseconds with a unit that suits its size"""
    if ns < 10000:
        return f"{ns} ns"
    elif ns < 1_000_000:
        return f"{(ns + 500) // 1_000} µs"
    elif ns < 1_000_000_000:
        return f"{(ns + 500_000) // 1_000_000} ms"
    return f"{ns / 1e9:.3f} s"


def pad_newlines(text: str) -> str:
    """Indent continuation lines so that multi-line answers stay aligned after 'A: '"""
    return text.replace('\n', '\n   ')


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(description="Minimum button presses for factory machines.\n\n"
                            "Part A lights each machine's indicator pattern (toggle semantics),\n"
                            "part B raises each machine's counters to their requirements (additive semantics).",
                            formatter_class=RawDescriptionHelpFormatter)
    parser.add_argument('input', nargs='?', default='-', help="input file, one machine per line (default: stdin)")
    parser.add_argument('--part', choices=[PART_A, PART_B, BOTH], default=BOTH, help="part(s) to solve")
    parser.add_argument('--processes', type=int, default=DEFAULTS[PROCESSES], help="worker processes")
    parser.add_argument('--search-budget', type=int, default=DEFAULTS[SEARCH_BUDGET],
                        help="maximum assignments evaluated per machine in part B")
    parser.add_argument('--no-early-exit', action='store_true', help="run every breadth-first search to exhaustion")
    parser.add_argument('--report', action='store_true', help="print a per-machine table")
    parser.add_argument('-v', '--verbose', action='count', default=0, help="log progress (-vv for details)")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG if args.verbose > 1 else logging.INFO)

    try:
        if args.input == '-':
            text = sys.stdin.read()
        else:
            with open(args.input, 'r') as f:
                text = f.read()
    except OSError as e:
        print(f"error: Failed to open input file: {e}", file=sys.stderr)
        return 1

    start = time.perf_counter_ns()
    try:
        machines = parse_input(text)
        answers = []
        if args.part in (PART_A, BOTH):
            answers.append(('A', total_toggle_presses(machines, early_exit=not args.no_early_exit,
                                                      processes=args.processes)))
        if args.part in (PART_B, BOTH):
            answers.append(('B', total_counter_presses(machines, search_budget=args.search_budget,
                                                       processes=args.processes)))
        report = press_report(machines, early_exit=not args.no_early_exit,
                              search_budget=args.search_budget) if args.report else None
    except (MachineError, ParseError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    elapsed = time.perf_counter_ns() - start

    for name, value in answers:
        print(f"{name}: {pad_newlines(str(value))}")
    if report is not None:
        print()
        print(report.to_string())
    print()
    print(f"Time: {format_duration(elapsed)}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
