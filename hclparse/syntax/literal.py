from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from tree_sitter import Node

from hclparse.syntax.node import Range, SyntaxNode, TypedSyntaxNode, first_child_of_type

if TYPE_CHECKING:
    from hclparse.mapping import CstConverter


@dataclass(slots=True)
class LiteralValueExpr(TypedSyntaxNode):
    """A number, bool, null, or string without interpolations."""

    tree_sitter_types: ClassVar[set[str]] = {
        "numeric_lit",
        "bool_lit",
        "null_lit",
        "string_lit",
    }

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> LiteralValueExpr:
        if node.type == "string_lit":
            return cls(src_range=quoted_content_range(node, ctx))
        return cls(src_range=ctx.range_of(node))


@dataclass(slots=True)
class AnonSymbolExpr(SyntaxNode):
    """Placeholder for the current element inside a splat."""


def quoted_content_bounds(node: Node) -> tuple[int, int]:
    """Raw offsets just inside the quotes of a quoted string or template.

    Whitespace is an extra in the grammar, so ``template_literal`` nodes do
    not cover leading or trailing blanks; the quotes are the only reliable
    edges.
    """
    opening = first_child_of_type(node, "quoted_template_start")
    closing = first_child_of_type(node, "quoted_template_end")
    start = opening.end_byte if opening is not None else node.start_byte
    end = closing.start_byte if closing is not None else node.end_byte
    return start, max(start, end)


def quoted_content_range(node: Node, ctx: CstConverter) -> Range:
    """Range between the quotes of a quoted string or template."""
    return ctx.range(*quoted_content_bounds(node))


__all__ = ["AnonSymbolExpr", "LiteralValueExpr", "quoted_content_bounds", "quoted_content_range"]
