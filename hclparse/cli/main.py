"""
Command-line entry point: parse one input and dump its syntax tree.

Exit status is 0 on success, 1 when the input cannot be read or parsed,
and 2 when no input was given.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from hclparse.cli.parser import build_parser
from hclparse.diagnostics import format_snippet
from hclparse.parser import ParseResult, parse_config, parse_expression, parse_template
from hclparse.printer import render

logger = logging.getLogger(__name__)


def configure_logging(log_level: str, verbose: bool = False) -> None:
    logging_level = getattr(logging, log_level)
    if verbose and logging_level > logging.DEBUG:
        logging_level = logging.DEBUG
    logging.basicConfig(level=logging_level, format="%(levelname)s: %(message)s")


def report_failure(what: str, result: ParseResult) -> None:
    print(f"error parsing {what}: {result.diagnostics}", file=sys.stderr)
    for diagnostic in result.diagnostics.errors():
        snippet = format_snippet(diagnostic, result.source, sys.stderr)
        if snippet:
            print(snippet, file=sys.stderr)


def main(args=None) -> int:
    """Return CLI exit codes so automation can distinguish success from failure."""
    parser = build_parser()
    args = parser.parse_args(args)
    configure_logging(args.log_level, args.verbose)

    if args.file:
        logger.debug(f"Reading {args.file}")
        try:
            source = Path(args.file).read_bytes()
        except OSError as exc:
            print(f"error reading file: {exc}", file=sys.stderr)
            return 1
        what, result = "file", parse_config(source, filename=args.file)
    elif args.expr:
        what, result = "expression", parse_expression(args.expr)
    elif args.template:
        what, result = "template", parse_template(args.template)
    else:
        parser.print_help(sys.stderr)
        return 2

    if result.node is None:
        report_failure(what, result)
        return 1

    render(result.node, result.source, sys.stdout)
    return 0
