"""Command-line front end: expand directive files into plain Vim script."""

from __future__ import annotations

import argparse
import re
import sys
from typing import Iterable, Optional, Sequence, TextIO

from vim_multimap.config import MultimapSettings
from vim_multimap.directives import (
    DirectiveParser,
    DirectiveTable,
    UnknownDirectiveError,
)
from vim_multimap.keymaps import (
    CommandSink,
    InvalidLabelError,
    MappingBuilder,
    StreamSink,
)
from vim_multimap.runtime import telemetry

_DIRECTIVE_LINE = re.compile(r"^(\d+(?:\.\d+)*)?([A-Z][A-Za-z]*)(?:\s+(.*))?$")


def build_table(
    sink: CommandSink, settings: Optional[MultimapSettings] = None
) -> DirectiveTable:
    """Wire a builder, parser and directive table around ``sink``."""

    builder = MappingBuilder(sink, settings=settings, logger_name="vim_multimap.cli")
    parser = DirectiveParser(builder, logger_name="vim_multimap.cli")
    return DirectiveTable(parser, logger_name="vim_multimap.cli")


def run_lines(
    table: DirectiveTable, lines: Iterable[str], *, source: str, errors: TextIO
) -> int:
    """Run every directive in ``lines``; returns the number of failed lines."""

    failures = 0
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith('"'):
            continue
        match = _DIRECTIVE_LINE.match(line)
        try:
            if match is None:
                raise UnknownDirectiveError(line.split(None, 1)[0])
            count, name, args = match.groups()
            table.run(name, args or "", count)
        except (InvalidLabelError, UnknownDirectiveError) as exc:
            failures += 1
            errors.write(f"{source}:{lineno}: {exc}\n")
    return failures


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="vim-multimap",
        description="Expand multi-mode map and menu directives into Vim commands.",
    )
    parser.add_argument(
        "files",
        nargs="*",
        help="Directive files to expand (default: read standard input)",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print every known directive name and its descriptor, then exit",
    )
    parser.add_argument(
        "--preset",
        choices=telemetry.PRESET_NAMES,
        help="Telemetry preset to use instead of the environment defaults",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    if args.preset:
        telemetry.configure(preset=args.preset)

    table = build_table(StreamSink(sys.stdout), MultimapSettings.from_env())
    if args.list:
        for name, spec in sorted(table.specs.items()):
            line = f"{name}\t{spec.descriptor}\t{spec.canonical_letters}"
            sys.stdout.write(line + "\n")
        return 0

    failures = 0
    if not args.files:
        failures += run_lines(table, sys.stdin, source="<stdin>", errors=sys.stderr)
    for path in args.files:
        with open(path, encoding="utf-8") as handle:
            failures += run_lines(table, handle, source=path, errors=sys.stderr)
    return 1 if failures else 0


if __name__ == "__main__":  # pragma: no cover - manual entry point
    sys.exit(main())
