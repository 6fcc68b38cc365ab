"""
Front door: parse a configuration file, a bare expression, or a template.

tree-sitter-hcl only knows whole configuration files, so expressions and
templates are parsed inside a small synthetic document. Offsets and
positions are mapped back so that nodes and diagnostics refer to the
caller's text only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import tree_sitter_hcl as ts_hcl
from tree_sitter import Language, Node, Parser

from hclparse.diagnostics import (Diagnostic, Diagnostics, PositionMapper,
                                  Severity, collect_syntax_diagnostics)
from hclparse.exceptions import HCLSyntaxError, UnsupportedSyntaxError
from hclparse.mapping import CstConverter
from hclparse.syntax.body import Body
from hclparse.syntax.node import Range, SyntaxNode
from hclparse.syntax.template import build_template, template_content_bounds, template_part_nodes

logger = logging.getLogger(__name__)

# Initialize the tree-sitter parser only once for efficiency.
HCL_LANGUAGE = Language(ts_hcl.language())
PARSER = Parser(HCL_LANGUAGE)

EXPRESSION_PREFIX = b"__expression__ = "
EXPRESSION_SUFFIX = b"\n"
TEMPLATE_MARKER = b"END_OF_TEMPLATE"


@dataclass(slots=True)
class ParseResult:
    """Outcome of a parse; ``node`` is ``None`` whenever errors were reported."""

    node: SyntaxNode | None
    source: bytes
    diagnostics: Diagnostics

    def raise_for_errors(self) -> SyntaxNode:
        if self.node is None or self.diagnostics.has_errors():
            raise HCLSyntaxError(self.diagnostics)
        return self.node


def _encode(source_code: bytes | str) -> bytes:
    return source_code.encode("utf-8") if isinstance(source_code, str) else source_code


def parse_to_ast(source_code: bytes | str) -> Node:
    """Parse HCL source code and return the root of its tree-sitter tree."""
    tree = PARSER.parse(_encode(source_code))
    return tree.root_node


def template_wrapping(source: bytes) -> tuple[bytes, bytes]:
    """Heredoc opener and closer around ``source``, with a marker it does not contain."""
    marker = TEMPLATE_MARKER
    counter = 0
    while marker in source:
        counter += 1
        marker = b"%s_%d" % (TEMPLATE_MARKER, counter)
    return b"__template__ = <<" + marker + b"\n", b"\n" + marker + b"\n"


def _content(node: Node) -> list[Node]:
    return [child for child in node.named_children if child.type != "comment"]


def _finish(
    mode: str,
    document: bytes,
    source: bytes,
    mapper: PositionMapper,
    build: Callable[[Node, CstConverter], SyntaxNode | None],
) -> ParseResult:
    root = parse_to_ast(document)
    diagnostics = collect_syntax_diagnostics(root, source, mapper)
    node = None
    if not diagnostics.has_errors():
        converter = CstConverter(source, mapper, document)
        try:
            node = build(root, converter)
        except UnsupportedSyntaxError as exc:
            converter.diagnostics.append(
                Diagnostic(severity=Severity.ERROR, summary="Unsupported syntax", detail=str(exc))
            )
        diagnostics.extend(converter.diagnostics)
        if diagnostics.has_errors():
            node = None
    logger.debug(
        f"Parsed {mode} {mapper.filename}: {len(source)} bytes, {len(diagnostics)} diagnostic(s)"
    )
    return ParseResult(node=node, source=source, diagnostics=diagnostics)


def _wrapped_value(root: Node, converter: CstConverter) -> Node | None:
    """Return the value of the single synthetic attribute, reporting leftovers."""
    content = _content(root)
    items = _content(content[0]) if content and content[0].type == "body" else []
    if not items or items[0].type != "attribute":
        converter.error("Missing expression", "Expected the start of an expression.", root)
        return None
    if len(items) > 1:
        converter.error(
            "Extra characters after expression",
            "An expression was successfully parsed, but extra characters were found after it.",
            items[1],
        )
        return None
    return _content(items[0])[-1]


def _build_config(root: Node, converter: CstConverter) -> SyntaxNode | None:
    content = _content(root)
    if not content:
        return Body(src_range=Range(0, len(converter.source)))
    if content[0].type != "body":
        converter.error(
            "Unsupported top-level object",
            "A configuration file must contain attributes and blocks, not a bare object.",
            content[0],
        )
        return None
    return converter.convert(content[0])


def _build_expression(root: Node, converter: CstConverter) -> SyntaxNode | None:
    value = _wrapped_value(root, converter)
    return converter.convert(value) if value is not None else None


def _build_template(root: Node, converter: CstConverter) -> SyntaxNode | None:
    node = _wrapped_value(root, converter)
    if node is None:
        return None
    while node.type != "heredoc_template":
        content = _content(node)
        if len(content) != 1:
            converter.error("Invalid template", "The template could not be read.", node)
            return None
        node = content[0]
    start, end = template_content_bounds(node, converter)
    return build_template(template_part_nodes(node), start, end, converter)


def parse_config(source_code: bytes | str, filename: str = "<input>") -> ParseResult:
    """Parse a full configuration document into a :class:`Body`."""
    source = _encode(source_code)
    mapper = PositionMapper(filename=filename, source=source)
    return _finish("config", source, source, mapper, _build_config)


def parse_file(path: str | Path) -> ParseResult:
    path = Path(path)
    return parse_config(path.read_bytes(), filename=str(path))


def parse_expression(source_code: bytes | str, filename: str = "<expr>") -> ParseResult:
    """Parse a standalone expression such as ``var.count * 2``."""
    source = _encode(source_code)
    mapper = PositionMapper(filename=filename, source=source, prefix=EXPRESSION_PREFIX)
    document = EXPRESSION_PREFIX + source + EXPRESSION_SUFFIX
    return _finish("expression", document, source, mapper, _build_expression)


def parse_template(source_code: bytes | str, filename: str = "<template>") -> ParseResult:
    """Parse a bare template, where text is literal and ``${...}`` interpolates."""
    source = _encode(source_code)
    prefix, suffix = template_wrapping(source)
    mapper = PositionMapper(filename=filename, source=source, prefix=prefix)
    return _finish("template", prefix + source + suffix, source, mapper, _build_template)


__all__ = [
    "HCL_LANGUAGE",
    "PARSER",
    "ParseResult",
    "parse_config",
    "parse_expression",
    "parse_file",
    "parse_template",
    "parse_to_ast",
    "template_wrapping",
]
