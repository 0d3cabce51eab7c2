"""Command-line entry point for the LS-8 virtual machine."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pyls8.loader import LS8FormatError
from pyls8.system import MachineConfig, create_machine


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ls8",
        description="LS-8 8-bit virtual machine",
    )
    parser.add_argument(
        "program",
        type=Path,
        help="Path to an .ls8 program (one binary byte per line)",
    )
    parser.add_argument(
        "--tick-interval",
        type=float,
        default=0.001,
        help="Seconds between instruction ticks (default: 0.001)",
    )
    parser.add_argument(
        "--timer-interval",
        type=float,
        default=1.0,
        help="Seconds between timer interrupts (default: 1.0)",
    )
    parser.add_argument(
        "--trace",
        type=int,
        default=0,
        metavar="N",
        help="Keep the last N ticks and print them if the program faults",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.program.exists():
        parser.error(f"Program file not found: {args.program}")
    if args.tick_interval <= 0 or args.timer_interval <= 0:
        parser.error("intervals must be positive")
    if args.trace < 0:
        parser.error("--trace must not be negative")

    config = MachineConfig(
        tick_interval=args.tick_interval,
        timer_interval=args.timer_interval,
        trace_capacity=args.trace,
    )
    machine = create_machine(config)
    try:
        machine.load_program(args.program)
    except LS8FormatError as exc:
        parser.error(f"{args.program}: {exc}")

    try:
        machine.run()
    except KeyboardInterrupt:
        machine.cpu.stop_clock()
        return 130

    if machine.cpu.fault is not None:
        if machine.trace is not None:
            for line in machine.trace.format_entries():
                print(line, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
