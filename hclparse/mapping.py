from __future__ import annotations

from tree_sitter import Node

from hclparse.diagnostics import Diagnostic, Diagnostics, PositionMapper, Severity, SourceRange
from hclparse.exceptions import UnsupportedSyntaxError
from hclparse.syntax.body import Attribute, Block, Body
from hclparse.syntax.collection import ObjectConsExpr, TupleConsExpr
from hclparse.syntax.for_expr import ForExpr
from hclparse.syntax.function import FunctionCallExpr
from hclparse.syntax.literal import LiteralValueExpr
from hclparse.syntax.node import Range, SyntaxNode, TypedSyntaxNode, significant_children
from hclparse.syntax.operation import BinaryOpExpr, ConditionalExpr, UnaryOpExpr
from hclparse.syntax.template import TemplateExpr, TemplateJoinExpr
from hclparse.syntax.traversal import ScopeTraversalExpr, build_term

SYNTAX_TYPES: set[type[TypedSyntaxNode]] = {
    Attribute,
    BinaryOpExpr,
    Block,
    Body,
    ConditionalExpr,
    ForExpr,
    FunctionCallExpr,
    LiteralValueExpr,
    ObjectConsExpr,
    ScopeTraversalExpr,
    TemplateExpr,
    TemplateJoinExpr,
    TupleConsExpr,
    UnaryOpExpr,
}

TREE_SITTER_TYPE_TO_SYNTAX: dict[str, type[TypedSyntaxNode]] = {
    tree_sitter_type: syntax_type
    for syntax_type in SYNTAX_TYPES
    for tree_sitter_type in syntax_type.tree_sitter_types
}

# Grammar nodes that only group a term and its postfix steps.
TRANSPARENT_TYPES = frozenset(
    {
        "expression",
        "expr_term",
        "literal_value",
        "template_expr",
        "collection_value",
        "for_expr",
        "operation",
        "template_directive",
    }
)


class CstConverter:
    """Turn a tree-sitter HCL tree into syntax nodes.

    ``source`` is the caller's buffer and ``document`` the buffer tree-sitter
    actually parsed, which wraps ``source`` for expressions and templates;
    ``mapper`` translates offsets from the latter into the former.
    Problems the grammar accepts but HCL rejects are collected in
    ``diagnostics`` rather than raised.
    """

    def __init__(self, source: bytes, mapper: PositionMapper, document: bytes | None = None):
        self.source = source
        self.document = document if document is not None else source
        self.mapper = mapper
        self.diagnostics = Diagnostics()

    def convert(self, node: Node) -> SyntaxNode:
        if node.type in TRANSPARENT_TYPES:
            return build_term(significant_children(node), self)
        syntax_type = TREE_SITTER_TYPE_TO_SYNTAX.get(node.type)
        if syntax_type is None:
            raise UnsupportedSyntaxError(f"Unsupported node type: {node.type}")
        return syntax_type.from_cst(node, self)

    def range(self, start_byte: int, end_byte: int) -> Range:
        return self.mapper.range(start_byte, end_byte)

    def range_of(self, node: Node) -> Range:
        return self.mapper.range_of(node)

    def source_range(self, node: Node) -> SourceRange:
        return self.mapper.source_range(node)

    def text(self, node: Node) -> str:
        return node.text.decode("utf-8") if node.text is not None else ""

    def error(self, summary: str, detail: str, node: Node) -> None:
        self.diagnostics.append(
            Diagnostic(
                severity=Severity.ERROR,
                summary=summary,
                detail=detail,
                subject=self.source_range(node),
            )
        )


__all__ = ["CstConverter", "SYNTAX_TYPES", "TRANSPARENT_TYPES", "TREE_SITTER_TYPE_TO_SYNTAX"]
