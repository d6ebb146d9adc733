"""
Command-line entry point.

    gen-interface -s ./internal/dao -d ./internal/dao/iface -r -m

Options may also come from a TOML file given with --config; flags on the
command line override file values.
"""

import argparse
import logging
import sys
from enum import IntEnum
from pathlib import Path
from typing import Any

from .config import (
    DEFAULT_GOFMT,
    DEFAULT_INCLUDE,
    DEFAULT_INTERFACE_PREFIX,
    DEFAULT_MOCK_PATH,
    DEFAULT_STRUCT_PATTERN,
    GenerationConfig,
    RunOptions,
    load_config_file,
    split_patterns,
)
from .errors import ConfigError
from .generate import generate_tree

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ExitCode(IntEnum):
    SUCCESS = 0
    FILE_ERRORS = 1
    CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gen-interface",
        description="Generate Go interfaces from the exported methods of matching structs.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-s", "--src", help="source directory")
    parser.add_argument("-d", "--dst", help="target directory")
    parser.add_argument("-e", "--exclude", help="files or directories to exclude, comma separated globs")
    parser.add_argument("-i", "--include", help=f"files to include, comma separated globs (default: {','.join(DEFAULT_INCLUDE)})")
    parser.add_argument(
        "-p", "--stPattern", dest="stPattern",
        help=f"regular expression struct names must fully match (default: {DEFAULT_STRUCT_PATTERN})",
    )
    parser.add_argument("-f", "--prefix", help=f"interface name prefix (default: {DEFAULT_INTERFACE_PREFIX})")
    parser.add_argument(
        "-r", "--generateRegister", dest="generateRegister", action="store_true", default=None,
        help="generate the implementation variable and register function",
    )
    parser.add_argument(
        "-m", "--generateMock", dest="generateMock", action="store_true", default=None,
        help="generate a mockgen directive",
    )
    parser.add_argument("-k", "--mockPath", dest="mockPath", help=f"mock output directory (default: {DEFAULT_MOCK_PATH})")
    parser.add_argument("-c", "--config", type=Path, help="TOML file with option values")
    parser.add_argument("--gofmt", help=f"gofmt executable (default: {DEFAULT_GOFMT})")
    parser.add_argument("--no-gofmt", dest="gofmt", action="store_false", default=None, help="skip the gofmt pass")
    parser.add_argument("--fail-fast", dest="failFast", action="store_true", default=None, help="stop at the first failing file")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="only log warnings and errors")
    return parser


def merge_options(args: argparse.Namespace) -> dict[str, Any]:
    """Combine config file values with command-line flags (flags win)."""
    values: dict[str, Any] = {}
    if args.config is not None:
        values.update(load_config_file(args.config))
    # Config files may use the long option names from the data model
    for long_name, short_name in (("structNamePattern", "stPattern"), ("interfacePrefix", "prefix")):
        if long_name not in values:
            continue
        if short_name in values:
            raise ConfigError(f"config file {args.config} sets both {short_name!r} and {long_name!r}")
        values[short_name] = values.pop(long_name)

    for key in ("src", "dst", "exclude", "include", "stPattern", "prefix",
                "generateRegister", "generateMock", "mockPath", "gofmt", "failFast"):
        value = getattr(args, key, None)
        if value is not None:
            values[key] = value
    return values


def build_config(values: dict[str, Any]) -> GenerationConfig:
    gofmt = values.get("gofmt", DEFAULT_GOFMT)
    if gofmt is True:
        gofmt = DEFAULT_GOFMT
    return GenerationConfig.create(
        struct_name_pattern=values.get("stPattern", DEFAULT_STRUCT_PATTERN),
        interface_prefix=values.get("prefix", DEFAULT_INTERFACE_PREFIX),
        generate_register=bool(values.get("generateRegister", False)),
        generate_mock=bool(values.get("generateMock", False)),
        mock_path=values.get("mockPath", DEFAULT_MOCK_PATH),
        gofmt_command=gofmt or None,
    )


def configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose, args.quiet)

    try:
        values = merge_options(args)
        config = build_config(values)
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    if not values.get("src") or not values.get("dst"):
        print("error: both a source (-s) and a target (-d) directory are required", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return ExitCode.CONFIG_ERROR

    src = Path(values["src"])
    if not src.is_dir():
        print(f"error: source directory {src} does not exist", file=sys.stderr)
        return ExitCode.CONFIG_ERROR

    options = RunOptions(
        src=src,
        dst=Path(values["dst"]),
        include=split_patterns(values.get("include")) or DEFAULT_INCLUDE,
        exclude=split_patterns(values.get("exclude")),
        fail_fast=bool(values.get("failFast", False)),
    )
    logger.debug("generating from %s into %s with %s", options.src, options.dst, config)

    report = generate_tree(options, config)
    return ExitCode.SUCCESS if report.ok else ExitCode.FILE_ERRORS


if __name__ == "__main__":
    sys.exit(main())
