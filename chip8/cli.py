"""Command line entry point: ``chip8 PROGRAM``."""

import argparse
import sys

from chip8.errors import Chip8Error, LoadError, UsageError
from chip8.logging import ConsoleLogger


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="chip8",
        description="CHIP-8 interpreter",
        add_help=False,
    )
    parser.add_argument("program", help="Path to a CHIP-8 program file")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"{parser.prog}: error: {e}", file=sys.stderr)
        return 2

    logger = ConsoleLogger(stream=sys.stderr)

    from chip8.host import run_emulator

    try:
        run_emulator(args.program, logger=logger)
    except LoadError as e:
        logger.error(str(e))
        return 1
    except Chip8Error as e:
        logger.critical(f"{type(e).__name__}: {e}")
        return 1
    return 0

