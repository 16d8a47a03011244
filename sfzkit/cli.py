from __future__ import annotations

import argparse
import logging
import os
from typing import Sequence

from rich.console import Console
from rich.table import Table

from .config import ParserSettings
from .logging_utils import configure_logging, log_exception
from .models import Query, Region
from .parser import ParseResult, load_sfz
from .resolver import resolve
from .spread import spread_layer

_LOGGER = logging.getLogger("sfzkit.cli")
_CONSOLE = Console()


def _optional(value: object) -> str:
    return "-" if value is None else str(value)


def _region_table(regions: Sequence[Region]) -> Table:
    table = Table(title="Regions")
    for column in ("#", "sample", "pitch", "keys", "velocity", "seq", "group"):
        table.add_column(column)
    for index, region in enumerate(regions):
        table.add_row(
            str(index),
            region.sample_name,
            str(region.midi_pitch),
            f"{_optional(region.midi_low)}..{_optional(region.midi_high)}",
            f"{_optional(region.vel_low)}..{_optional(region.vel_high)}",
            f"{_optional(region.seq_position)}/{_optional(region.seq_length)}",
            _optional(region.group),
        )
    return table


def _print_errors(result: ParseResult) -> None:
    for error in result.errors:
        _CONSOLE.print(f"[red]error[/red] {error}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sfzkit")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    inspect = sub.add_parser("inspect", help="List the regions of an instrument file.")
    inspect.add_argument("path", type=str)

    find = sub.add_parser("resolve", help="Show which samples sound for a note.")
    find.add_argument("path", type=str)
    find.add_argument("note", type=int)
    find.add_argument("--velocity", type=int, default=None)
    find.add_argument(
        "--spread",
        action="store_true",
        help="Split the keyboard between regions that have no key range.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.WARNING)
    try:
        settings = ParserSettings.from_env()
        result = load_sfz(args.path, settings=settings)

        if args.command == "inspect":
            _CONSOLE.print(_region_table(result.layer.regions))
            _print_errors(result)
            return 0 if result.ok else 1

        if args.command == "resolve":
            layer = result.layer
            if args.spread:
                spread_layer(layer)
            matches = resolve(layer, Query(note=args.note, velocity=args.velocity))
            if not matches:
                _CONSOLE.print(f"No region covers note {args.note}")
            for match in matches:
                _CONSOLE.print(match.as_dict())
            _print_errors(result)
            return 0

        parser.print_help()
        return 1
    except Exception as exc:
        debug = bool(os.environ.get("SFZKIT_DEBUG"))
        _LOGGER.warning("sfzkit CLI failed: %s", exc, exc_info=debug)
        log_exception("sfzkit CLI", exc)
        _CONSOLE.print(f"[red]sfzkit failed:[/red] {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
