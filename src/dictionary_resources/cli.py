"""Command line management of Hunspell dictionaries.

Usage:
  rspell-dic info fr_FR
  rspell-dic ensure fr_FR
  rspell-dic remove fr_FR
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from .config import Config, load_config
from .dirs import ProjectDirs
from .errors import SpellError
from .fetch import Fetcher
from .providers import LangProvider

LOGGER = logging.getLogger(__name__)

_LABEL_WIDTH = 18


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s - %(message)s")


def _line(label: str, value: object) -> str:
    return f"{label.ljust(_LABEL_WIDTH)}: {value}"


def _paths_block(label: str, paths: List[Path]) -> List[str]:
    lines: List[str] = []
    for index, path in enumerate(paths):
        lines.append(_line(label if index == 0 else "", path))
    return lines


def info_lines(provider: LangProvider) -> List[str]:
    """Describe the state of the dictionaries of ``provider``'s language."""

    source = provider.source
    lines = [
        _line("language code", provider.lang),
        _line("language tag", provider.language_tag or ""),
        _line("aff file exists", str(provider.aff.exists()).lower()),
        _line("dic file exists", str(provider.dic.exists()).lower()),
        _line("aff file url", source.aff if source else ""),
        _line("dic file url", source.dic if source else ""),
    ]
    lines.extend(_paths_block("aff files on disk", provider.aff_on_disk()))
    lines.extend(_paths_block("dic files on disk", provider.dic_on_disk()))
    return lines


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rspell-dic", description="Manage Hunspell dictionaries")
    parser.add_argument("--config", help="Path to the TOML config file (default: platform config dir)")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    subparsers = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("info", "Prints information about the given language"),
        ("ensure", "Ensures the files for the given language are available"),
        ("remove", "Removes the files for the given language"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("lang", help="Language code, e.g. fr_FR")
    return parser


def run(
    args: argparse.Namespace,
    config: Config,
    dirs: ProjectDirs,
    fetcher: Optional[Fetcher] = None,
    out: Optional[TextIO] = None,
) -> None:
    """Execute one parsed subcommand; errors propagate as :class:`SpellError`."""

    provider = LangProvider(args.lang, config, dirs=dirs, fetcher=fetcher)
    if args.command == "info":
        for line in info_lines(provider):
            print(line, file=out)
    elif args.command == "ensure":
        provider.ensure_data()
    elif args.command == "remove":
        provider.remove_data()
    else:  # pragma: no cover - argparse restricts choices
        raise ValueError(f"unknown command {args.command!r}")


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    dirs: Optional[ProjectDirs] = None,
    fetcher: Optional[Fetcher] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)

    dirs = dirs or ProjectDirs.default()
    try:
        config = load_config(dirs, path=args.config)
        run(args, config, dirs, fetcher=fetcher, out=out)
    except SpellError as exc:
        LOGGER.debug("Command %s failed", args.command, exc_info=True)
        print(f"Error: {exc!r}", file=err or sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
