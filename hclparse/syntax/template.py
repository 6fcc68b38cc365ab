"""
Templates: quoted strings with interpolations, heredocs, and directives.

Literal text is never taken from tree-sitter's ``template_literal`` nodes:
the grammar treats whitespace as extras, so those nodes stop short of
leading and trailing blanks. Literal parts are the byte gaps between the
edges of the template and its interpolations and directives instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from tree_sitter import Node

from hclparse.exceptions import UnsupportedSyntaxError
from hclparse.syntax.for_expr import ForExpr, loop_variables
from hclparse.syntax.literal import LiteralValueExpr, quoted_content_bounds
from hclparse.syntax.node import Range, SyntaxNode, TypedSyntaxNode, first_child_of_type, named_children_of_type
from hclparse.syntax.operation import ConditionalExpr

if TYPE_CHECKING:
    from hclparse.mapping import CstConverter

TEMPLATE_DELIMITERS = {
    "quoted_template_start",
    "quoted_template_end",
    "heredoc_start",
    "heredoc_identifier",
    "strip_marker",
    "template_literal",
    "comment",
}


@dataclass(slots=True)
class TemplateExpr(TypedSyntaxNode):
    tree_sitter_types: ClassVar[set[str]] = {"quoted_template", "heredoc_template"}
    parts: list[SyntaxNode] = field(default_factory=list)

    def children(self) -> tuple[SyntaxNode, ...]:
        return tuple(self.parts)

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> SyntaxNode:
        nodes = template_part_nodes(node)
        start, end = template_content_bounds(node, ctx)
        if node.type == "quoted_template" and not nodes:
            return LiteralValueExpr(src_range=ctx.range(start, end))
        return build_template(nodes, start, end, ctx, src_range=ctx.range_of(node))


@dataclass(slots=True)
class TemplateWrapExpr(SyntaxNode):
    """A template made of exactly one interpolation, e.g. ``"${var.name}"``."""

    wrapped: SyntaxNode

    def children(self) -> tuple[SyntaxNode, ...]:
        return (self.wrapped,)


@dataclass(slots=True)
class TemplateJoinExpr(TypedSyntaxNode):
    """A ``%{ for }`` directive: the results of ``tuple_expr`` joined into one string."""

    tree_sitter_types: ClassVar[set[str]] = {"template_for"}
    tuple_expr: ForExpr

    def children(self) -> tuple[SyntaxNode, ...]:
        return (self.tuple_expr,)

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> TemplateJoinExpr:
        start = first_child_of_type(node, "template_for_start")
        end = first_child_of_type(node, "template_for_end")
        if start is None:
            raise UnsupportedSyntaxError("for directive without an introduction")
        coll_nodes = named_children_of_type(start, "expression")
        if not coll_nodes:
            raise UnsupportedSyntaxError("for directive without a collection")
        key_var, val_var = loop_variables(start, ctx)
        body_nodes = [
            child
            for child in template_part_nodes(node)
            if child.type not in ("template_for_start", "template_for_end")
        ]
        body_end = end.start_byte if end is not None else node.end_byte
        body = TemplateExpr(
            parts=template_parts(body_nodes, start.end_byte, body_end, ctx),
            src_range=ctx.range(start.end_byte, body_end),
        )
        return cls(
            tuple_expr=ForExpr(
                coll_expr=ctx.convert(coll_nodes[0]),
                val_expr=body,
                key_var=key_var,
                val_var=val_var,
                src_range=ctx.range_of(node),
            ),
            src_range=ctx.range_of(node),
        )


def template_part_nodes(node: Node) -> list[Node]:
    """Interpolations and directives of a template, without the literal text."""
    return [child for child in node.named_children if child.type not in TEMPLATE_DELIMITERS]


def heredoc_content_bounds(node: Node, document: bytes) -> tuple[int, int]:
    """Raw offsets of a heredoc body.

    The body starts on the line after the opening marker and ends with the
    newline that precedes the closing marker's line, so the indentation of
    the closing marker is not part of it.
    """
    markers = named_children_of_type(node, "heredoc_identifier")
    if not markers:
        return node.start_byte, node.end_byte
    start = markers[0].end_byte
    if document.startswith(b"\r\n", start):
        start += 2
    elif document.startswith(b"\n", start):
        start += 1
    if len(markers) < 2:
        return start, max(start, node.end_byte)
    newline = document.rfind(b"\n", start, markers[-1].start_byte)
    return start, newline + 1 if newline >= 0 else start


def template_content_bounds(node: Node, ctx: CstConverter) -> tuple[int, int]:
    if node.type == "heredoc_template":
        return heredoc_content_bounds(node, ctx.document)
    return quoted_content_bounds(node)


def template_segments(nodes: list[Node], start: int, end: int, ctx: CstConverter) -> list[Range | Node]:
    """Split the raw span ``[start, end)`` into literal ranges and part nodes.

    Literal ranges are already mapped into the caller's buffer; empty ones,
    including those lying wholly inside wrapping text, are dropped.
    """
    segments: list[Range | Node] = []
    cursor = start
    for node in nodes:
        literal = ctx.range(cursor, node.start_byte)
        if len(literal):
            segments.append(literal)
        segments.append(node)
        cursor = max(cursor, node.end_byte)
    tail = ctx.range(cursor, end)
    if len(tail):
        segments.append(tail)
    return segments


def interpolated_expression(node: Node, ctx: CstConverter) -> SyntaxNode | None:
    expressions = named_children_of_type(node, "expression")
    if not expressions:
        ctx.error(
            "Invalid template interpolation",
            "Expected an expression inside the interpolation sequence.",
            node,
        )
        return None
    return ctx.convert(expressions[0])


def _segment_parts(segments: list[Range | Node], ctx: CstConverter) -> list[SyntaxNode]:
    parts: list[SyntaxNode] = []
    for segment in segments:
        if isinstance(segment, Range):
            parts.append(LiteralValueExpr(src_range=segment))
        elif segment.type == "template_interpolation":
            expr = interpolated_expression(segment, ctx)
            if expr is not None:
                parts.append(expr)
        else:
            parts.append(ctx.convert(segment))
    return parts


def template_parts(nodes: list[Node], start: int, end: int, ctx: CstConverter) -> list[SyntaxNode]:
    return _segment_parts(template_segments(nodes, start, end, ctx), ctx)


def build_template(
    nodes: list[Node],
    start: int,
    end: int,
    ctx: CstConverter,
    src_range: Range | None = None,
) -> SyntaxNode:
    """A lone interpolation wraps its expression; anything else is a TemplateExpr."""
    if src_range is None:
        src_range = ctx.range(start, end)
    segments = template_segments(nodes, start, end, ctx)
    if len(segments) == 1 and isinstance(segments[0], Node) and segments[0].type == "template_interpolation":
        wrapped = interpolated_expression(segments[0], ctx)
        if wrapped is None:
            return TemplateExpr(src_range=src_range)
        return TemplateWrapExpr(wrapped=wrapped, src_range=src_range)
    return TemplateExpr(parts=_segment_parts(segments, ctx), src_range=src_range)


def template_conditional(node: Node, ctx: CstConverter) -> ConditionalExpr:
    """Turn ``%{ if }``/``%{ else }``/``%{ endif }`` into a conditional of templates."""
    intro = first_child_of_type(node, "template_if_intro")
    else_intro = first_child_of_type(node, "template_else_intro")
    end = first_child_of_type(node, "template_if_end")
    if intro is None:
        raise UnsupportedSyntaxError("if directive without a condition")
    conditions = named_children_of_type(intro, "expression")
    if not conditions:
        raise UnsupportedSyntaxError("if directive without a condition")

    true_nodes: list[Node] = []
    false_nodes: list[Node] = []
    target = true_nodes
    for child in template_part_nodes(node):
        if child.type == "template_else_intro":
            target = false_nodes
        elif child.type not in ("template_if_intro", "template_if_end"):
            target.append(child)

    end_byte = end.start_byte if end is not None else node.end_byte
    true_end = else_intro.start_byte if else_intro is not None else end_byte
    true_result = TemplateExpr(
        parts=template_parts(true_nodes, intro.end_byte, true_end, ctx),
        src_range=ctx.range(intro.end_byte, true_end),
    )
    if else_intro is not None:
        false_result = TemplateExpr(
            parts=template_parts(false_nodes, else_intro.end_byte, end_byte, ctx),
            src_range=ctx.range(else_intro.end_byte, end_byte),
        )
    else:
        # Without an else branch the result is the empty string.
        empty = ctx.range(end_byte, end_byte)
        false_result = TemplateExpr(parts=[LiteralValueExpr(src_range=empty)], src_range=empty)
    return ConditionalExpr(
        condition=ctx.convert(conditions[0]),
        true_result=true_result,
        false_result=false_result,
        src_range=ctx.range_of(node),
    )


__all__ = [
    "TemplateExpr",
    "TemplateJoinExpr",
    "TemplateWrapExpr",
    "build_template",
    "heredoc_content_bounds",
    "template_conditional",
    "template_content_bounds",
    "template_part_nodes",
    "template_parts",
    "template_segments",
]
