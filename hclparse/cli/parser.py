from __future__ import annotations

import argparse

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hclparse",
        description="Print the syntax tree of an HCL file, expression or template.",
        epilog="When several inputs are given, -f wins over -e, which wins over -t.",
    )
    parser.add_argument("-f", "--file", default="", help="file to parse")
    parser.add_argument("-e", "--expr", default="", help="expression to parse")
    parser.add_argument("-t", "--template", default="", help="template to parse")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default="WARNING",
        help="Set the logging level (default: WARNING)",
    )
    return parser


__all__ = ["LOG_LEVELS", "build_parser"]
