from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from tree_sitter import Node

from hclparse.syntax.node import SyntaxNode, TypedSyntaxNode, named_children_of_type
from hclparse.syntax.traversal import ScopeTraversalExpr

if TYPE_CHECKING:
    from hclparse.mapping import CstConverter

_DELIMITERS = {"tuple_start", "tuple_end", "object_start", "object_end", "comment"}


@dataclass(slots=True)
class TupleConsExpr(TypedSyntaxNode):
    tree_sitter_types: ClassVar[set[str]] = {"tuple"}
    exprs: list[SyntaxNode] = field(default_factory=list)

    def children(self) -> tuple[SyntaxNode, ...]:
        return tuple(self.exprs)

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> TupleConsExpr:
        return cls(
            exprs=[ctx.convert(child) for child in node.named_children if child.type not in _DELIMITERS],
            src_range=ctx.range_of(node),
        )


@dataclass(slots=True)
class ObjectConsKeyExpr(SyntaxNode):
    """Object key; a bare name is taken literally rather than as a variable."""

    wrapped: SyntaxNode

    @property
    def literal_name(self) -> str:
        if isinstance(self.wrapped, ScopeTraversalExpr) and len(self.wrapped.traversal) == 1:
            return self.wrapped.root_name
        return ""

    def children(self) -> tuple[SyntaxNode, ...]:
        if self.literal_name:
            return ()
        return (self.wrapped,)


@dataclass(slots=True)
class ObjectConsItem:
    key_expr: ObjectConsKeyExpr
    value_expr: SyntaxNode


@dataclass(slots=True)
class ObjectConsExpr(TypedSyntaxNode):
    tree_sitter_types: ClassVar[set[str]] = {"object"}
    items: list[ObjectConsItem] = field(default_factory=list)

    def children(self) -> tuple[SyntaxNode, ...]:
        return tuple(
            expr for item in self.items for expr in (item.key_expr, item.value_expr)
        )

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> ObjectConsExpr:
        items = []
        for element in named_children_of_type(node, "object_elem"):
            key_node = element.child_by_field_name("key")
            value_node = element.child_by_field_name("val")
            if key_node is None or value_node is None:
                parts = [child for child in element.named_children if child.type != "comment"]
                key_node, value_node = parts[0], parts[-1]
            key = ctx.convert(key_node)
            items.append(
                ObjectConsItem(
                    key_expr=ObjectConsKeyExpr(wrapped=key, src_range=key.src_range),
                    value_expr=ctx.convert(value_node),
                )
            )
        return cls(items=items, src_range=ctx.range_of(node))


__all__ = ["ObjectConsExpr", "ObjectConsItem", "ObjectConsKeyExpr", "TupleConsExpr"]
