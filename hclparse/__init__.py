"""
hclparse

Parse HCL configuration files, expressions and templates with tree-sitter
and print their syntax trees as an indented, parenthesized dump.
"""

from hclparse.parser import (ParseResult, parse_config, parse_expression,
                             parse_file, parse_template)
from hclparse.printer import render, render_to_string

__all__ = [
    "ParseResult",
    "parse_config",
    "parse_expression",
    "parse_file",
    "parse_template",
    "render",
    "render_to_string",
]
