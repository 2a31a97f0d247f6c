#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Command-line interface for html2anf.

Examples
--------
Convert a post body with default settings::

    $ html2anf post.html

Read from stdin, use a settings file and override one value::

    $ cat post.html | html2anf - --settings html2anf.toml --set layout_columns=9

Skip nodes that fail to build and pretty-print the result::

    $ html2anf post.html --errors skip --rich

"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from html2anf import __version__
from html2anf.api import convert_html
from html2anf.config import load_settings_file, parse_setting_overrides
from html2anf.constants import (
    EXIT_BUILD_ERROR,
    EXIT_ERROR,
    EXIT_FILE_ERROR,
    EXIT_SUCCESS,
    EXIT_VALIDATION_ERROR,
)
from html2anf.context import ConversionContext
from html2anf.exceptions import BuildError, ValidationError
from html2anf.logging_utils import configure_logging
from html2anf.settings import Settings

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="html2anf",
        description="Convert HTML post content into article JSON components.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("input", help="HTML file to convert, or '-' for stdin")
    parser.add_argument("-o", "--out", help="Write JSON to this file instead of stdout")
    parser.add_argument("--settings", help="Settings file (.json, .toml, .yaml)")
    parser.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override a setting (repeatable)",
    )
    parser.add_argument(
        "--errors",
        choices=["raise", "skip"],
        default="raise",
        help="Abort on the first failing node (raise) or log and skip it (skip)",
    )
    parser.add_argument(
        "--skip-probe",
        action="store_true",
        help="Assume every referenced image exists instead of checking it",
    )
    parser.add_argument("--remote-images", action="store_true", help="Reference image URLs instead of bundling")
    parser.add_argument("--indent", type=int, default=2, help="JSON indentation (default: 2)")
    parser.add_argument("--rich", action="store_true", help="Pretty-print JSON with rich")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument("--log-file", help="Also write log output to this file")
    parser.add_argument("--trace", action="store_true", help="Timestamps and logger names in log output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _build_settings(args: argparse.Namespace) -> Settings:
    values = load_settings_file(args.settings) if args.settings else {}
    values.update(parse_setting_overrides(args.overrides))
    if args.remote_images:
        values["use_remote_images"] = "yes"
    return Settings.from_mapping(values)


def _read_input(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def _write_output(payload: dict, args: argparse.Namespace) -> None:
    text = json.dumps(payload, indent=args.indent, ensure_ascii=False)
    if args.out:
        Path(args.out).write_text(text + "\n", encoding="utf-8")
    elif args.rich:
        from rich.console import Console

        Console().print_json(text, indent=args.indent)
    else:
        print(text)


def main(args: list[str] | None = None) -> int:
    """Run the command line interface, returning an exit code."""
    parser = create_parser()
    parsed_args = parser.parse_args(args)

    configure_logging(parsed_args.log_level, log_file=parsed_args.log_file, trace_mode=parsed_args.trace)

    try:
        settings = _build_settings(parsed_args)
    except ValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_VALIDATION_ERROR

    try:
        html = _read_input(parsed_args.input)
    except OSError as e:
        print(f"Error reading {parsed_args.input}: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR

    probe = (lambda url: True) if parsed_args.skip_probe else None
    context = ConversionContext.create(settings, probe=probe)

    try:
        result = convert_html(html, context=context, errors=parsed_args.errors)
    except BuildError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_BUILD_ERROR

    if result.warnings:
        logger.info(f"Conversion finished with {len(result.warnings)} warning(s)")

    try:
        _write_output(result.to_dict(), parsed_args)
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return EXIT_FILE_ERROR
    except ImportError as e:
        print(f"Error: --rich requires the 'rich' package ({e})", file=sys.stderr)
        return EXIT_ERROR

    return EXIT_SUCCESS


__all__ = ["create_parser", "main"]
