"""CLI package for the hclparse entrypoint."""

from hclparse.cli.main import main
from hclparse.cli.parser import build_parser

__all__ = ["build_parser", "main"]
