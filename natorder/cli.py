"""Command line interface: sort lines, compare strings and print lookup keys."""
from __future__ import annotations

import argparse
import locale
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from natorder.comparison.collation import BACKEND_NAMES, create_collator
from natorder.comparison.errors import NaturalOrderError
from natorder.comparison.locale_profile import NumericProfile
from natorder.comparison.natural_order import NaturalOrderComparator, group_equal, natural_sorted
from natorder.config.settings import get_settings
from natorder.utils.logging import configure_logging

logger = logging.getLogger("natorder.cli")


def _build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--locale", help="Locale for numeric symbols, e.g. de_DE (default: system)")
    common.add_argument(
        "--strength",
        choices=["primary", "secondary", "tertiary", "identical"],
        help="Collation strength for text parts",
    )
    common.add_argument("--backend", choices=list(BACKEND_NAMES), help="Collator implementation")
    common.add_argument("--log-level", help="Logging level (default from settings)")
    common.add_argument("--log-file", help="Also write logs to this file")

    parser = argparse.ArgumentParser(prog="natorder", description="Natural order string comparison")
    commands = parser.add_subparsers(dest="command", required=True)

    sort_cmd = commands.add_parser("sort", parents=[common], help="Sort lines in natural order")
    sort_cmd.add_argument("file", nargs="?", help="Input file (default: stdin)")
    sort_cmd.add_argument("-r", "--reverse", action="store_true", help="Sort descending")
    sort_cmd.add_argument("-u", "--unique", action="store_true", help="Drop lines that compare equal")

    compare_cmd = commands.add_parser("compare", parents=[common], help="Print -1, 0 or 1")
    compare_cmd.add_argument("lhs")
    compare_cmd.add_argument("rhs")

    key_cmd = commands.add_parser("key", parents=[common], help="Print the normalization key")
    key_cmd.add_argument("text")
    key_cmd.add_argument("--bytes", action="store_true", help="Print the lookup key as hex")

    return parser


def _build_comparator(args: argparse.Namespace) -> NaturalOrderComparator:
    settings = get_settings()
    backend = args.backend or settings.collator_backend
    if backend == "locale":
        try:
            locale.setlocale(locale.LC_COLLATE, "")
        except locale.Error as exc:
            logger.warning("Could not apply system collation locale: %s", exc)

    identifier = args.locale or settings.default_locale
    collator = create_collator(args.strength or settings.collation_strength, backend, identifier)
    profile = NumericProfile.from_locale(args.locale) if args.locale else None
    return NaturalOrderComparator(collator, profile)


def _read_lines(path: Optional[str]) -> List[str]:
    if path is None:
        return sys.stdin.read().splitlines()
    return Path(path).read_text(encoding="utf-8").splitlines()


def _run_sort(comparator: NaturalOrderComparator, lines: List[str], args: argparse.Namespace) -> None:
    if args.unique:
        lines = [group[0] for group in group_equal(lines, comparator)]
    for line in natural_sorted(lines, reverse=args.reverse, comparator=comparator):
        print(line)
    logger.info("Sorted %d lines", len(lines))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        settings = get_settings()
        configure_logging(args.log_level or settings.log_level, args.log_file or settings.log_file)
        comparator = _build_comparator(args)
    except (NaturalOrderError, ValueError, OSError) as exc:
        print(f"natorder: {exc}", file=sys.stderr)
        return 2

    if args.command == "sort":
        try:
            lines = _read_lines(args.file)
        except (OSError, UnicodeDecodeError) as exc:
            print(f"natorder: cannot read {args.file or 'standard input'}: {exc}", file=sys.stderr)
            return 2
        _run_sort(comparator, lines, args)
    elif args.command == "compare":
        print(comparator.compare(args.lhs, args.rhs))
    elif args.command == "key":
        if args.bytes:
            print(comparator.normalize_for_lookup(args.text).hex())
        else:
            print(comparator.normalize(args.text))
    return 0


if __name__ == "__main__":
    sys.exit(main())
