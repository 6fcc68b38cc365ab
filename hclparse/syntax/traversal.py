"""
Traversals and the postfix-step folding of expression terms.

A term such as ``aws_instance.web[0].id`` arrives from tree-sitter as a flat
sequence: a primary node followed by ``get_attr``/``index``/``splat`` steps.
Steps are folded the way HCL's native syntax does it:

* steps on a variable extend a :class:`ScopeTraversalExpr`;
* steps on any other expression start (or extend) a
  :class:`RelativeTraversalExpr` wrapping that expression;
* an index whose key is not a literal produces an :class:`IndexExpr`;
* a splat produces a :class:`SplatExpr` whose ``each`` is built over an
  :class:`AnonSymbolExpr` standing for the current element.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from tree_sitter import Node

from hclparse.exceptions import UnsupportedSyntaxError
from hclparse.syntax.literal import AnonSymbolExpr, LiteralValueExpr
from hclparse.syntax.node import Range, SyntaxNode, TypedSyntaxNode, first_child_of_type
from hclparse.syntax.parentheses import ParenthesesExpr

if TYPE_CHECKING:
    from hclparse.mapping import CstConverter

STEP_TYPES = {
    "index",
    "new_index",
    "legacy_index",
    "get_attr",
    "splat",
    "attr_splat",
    "full_splat",
}

# Steps that keep extending the element expression once a splat has started.
_SPLAT_CONTINUATIONS = {
    False: {"get_attr", "legacy_index"},
    True: {"get_attr", "legacy_index", "new_index"},
}


@dataclass(frozen=True, slots=True)
class Traverser:
    # "root", "attr" or "index"
    kind: str
    name: str
    src_range: Range


def traversal_range(traversal: list[Traverser]) -> Range:
    if not traversal:
        return Range()
    return Range(traversal[0].src_range.start, traversal[-1].src_range.end)


@dataclass(slots=True)
class ScopeTraversalExpr(TypedSyntaxNode):
    tree_sitter_types: ClassVar[set[str]] = {"variable_expr"}
    traversal: list[Traverser] = field(default_factory=list)

    @property
    def root_name(self) -> str:
        return self.traversal[0].name if self.traversal else ""

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> ScopeTraversalExpr:
        identifier = first_child_of_type(node, "identifier") or node
        src_range = ctx.range_of(node)
        return cls(
            traversal=[Traverser(kind="root", name=ctx.text(identifier), src_range=src_range)],
            src_range=src_range,
        )


@dataclass(slots=True)
class RelativeTraversalExpr(SyntaxNode):
    source: SyntaxNode
    traversal: list[Traverser] = field(default_factory=list)

    def children(self) -> tuple[SyntaxNode, ...]:
        return (self.source,)


@dataclass(slots=True)
class IndexExpr(SyntaxNode):
    collection: SyntaxNode
    key: SyntaxNode

    def children(self) -> tuple[SyntaxNode, ...]:
        return (self.collection, self.key)


@dataclass(slots=True)
class SplatExpr(SyntaxNode):
    source: SyntaxNode
    each: SyntaxNode
    item: AnonSymbolExpr
    full: bool = False

    def children(self) -> tuple[SyntaxNode, ...]:
        return (self.source, self.each)


def extend_traversal(expr: SyntaxNode, step: Traverser) -> SyntaxNode:
    """Append a step to an existing traversal, or start a relative one."""
    match expr:
        case ScopeTraversalExpr() | RelativeTraversalExpr():
            expr.traversal = [*expr.traversal, step]
            expr.src_range = expr.src_range.union(step.src_range)
            return expr
        case _:
            return RelativeTraversalExpr(
                source=expr,
                traversal=[step],
                src_range=expr.src_range.union(step.src_range),
            )


def apply_step(expr: SyntaxNode, step: Node, ctx: CstConverter) -> SyntaxNode:
    """Fold one postfix step into the expression built so far."""
    if step.type in ("index", "splat"):
        inner = [child for child in step.named_children if child.type != "comment"]
        if not inner:
            raise UnsupportedSyntaxError(f"Empty {step.type} step")
        return apply_step(expr, inner[0], ctx)

    step_range = ctx.range_of(step)
    if isinstance(expr, SplatExpr) and step.type in _SPLAT_CONTINUATIONS[expr.full]:
        expr.each = apply_step(expr.each, step, ctx)
        expr.src_range = expr.src_range.union(step_range)
        return expr

    match step.type:
        case "get_attr":
            identifier = first_child_of_type(step, "identifier") or step
            return extend_traversal(
                expr, Traverser(kind="attr", name=ctx.text(identifier), src_range=step_range)
            )
        case "legacy_index":
            return extend_traversal(
                expr,
                Traverser(kind="index", name=ctx.text(step).lstrip("."), src_range=step_range),
            )
        case "new_index":
            key_nodes = [child for child in step.named_children if child.type != "comment"]
            if not key_nodes:
                raise UnsupportedSyntaxError("Index without a key")
            key = ctx.convert(key_nodes[0])
            if isinstance(key, LiteralValueExpr):
                return extend_traversal(
                    expr,
                    Traverser(kind="index", name=ctx.text(key_nodes[0]), src_range=step_range),
                )
            return IndexExpr(collection=expr, key=key, src_range=expr.src_range.union(step_range))
        case "attr_splat" | "full_splat":
            marker = next((child for child in step.children if not child.is_named), step)
            anon = AnonSymbolExpr(src_range=ctx.range_of(marker))
            splat = SplatExpr(
                source=expr,
                each=anon,
                item=anon,
                full=step.type == "full_splat",
                src_range=expr.src_range.union(step_range),
            )
            for child in step.named_children:
                if child.type != "comment":
                    splat.each = apply_step(splat.each, child, ctx)
            return splat
        case _:
            raise UnsupportedSyntaxError(f"Unsupported traversal step: {step.type}")


def build_term(children: list[Node], ctx: CstConverter) -> SyntaxNode:
    """Build one expression from a primary node and its trailing steps."""
    expr: SyntaxNode | None = None
    index = 0
    while index < len(children):
        child = children[index]
        if child.type == "(":
            if expr is not None or index + 2 >= len(children):
                raise UnsupportedSyntaxError("Unbalanced parentheses")
            inner, closing = children[index + 1], children[index + 2]
            expr = ParenthesesExpr(
                expression=ctx.convert(inner),
                src_range=ctx.range(child.start_byte, closing.end_byte),
            )
            index += 3
            continue
        if child.type in STEP_TYPES:
            if expr is None:
                raise UnsupportedSyntaxError(f"Traversal step without a source: {child.type}")
            expr = apply_step(expr, child, ctx)
        elif child.is_named:
            if expr is not None:
                raise UnsupportedSyntaxError(f"Unexpected {child.type} after expression")
            expr = ctx.convert(child)
        index += 1
    if expr is None:
        raise UnsupportedSyntaxError("Empty expression")
    return expr


__all__ = [
    "IndexExpr",
    "RelativeTraversalExpr",
    "STEP_TYPES",
    "ScopeTraversalExpr",
    "SplatExpr",
    "Traverser",
    "apply_step",
    "build_term",
    "extend_traversal",
    "traversal_range",
]
