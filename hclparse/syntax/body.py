from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from tree_sitter import Node

from hclparse.exceptions import UnsupportedSyntaxError
from hclparse.syntax.literal import quoted_content_range
from hclparse.syntax.node import SyntaxNode, TypedSyntaxNode, first_child_of_type, named_children_of_type

if TYPE_CHECKING:
    from hclparse.mapping import CstConverter


@dataclass(slots=True)
class Attribute(TypedSyntaxNode):
    tree_sitter_types: ClassVar[set[str]] = {"attribute"}
    name: str
    expr: SyntaxNode

    def children(self) -> tuple[SyntaxNode, ...]:
        return (self.expr,)

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> Attribute:
        parts = [child for child in node.named_children if child.type != "comment"]
        if len(parts) < 2:
            raise UnsupportedSyntaxError("Attribute without a value")
        return cls(
            name=ctx.text(parts[0]),
            expr=ctx.convert(parts[-1]),
            src_range=ctx.range_of(node),
        )


@dataclass(slots=True)
class Body(TypedSyntaxNode):
    """Attributes and blocks of a document or block, in source order."""

    tree_sitter_types: ClassVar[set[str]] = {"body"}
    items: list[Attribute | Block] = field(default_factory=list)

    def children(self) -> tuple[SyntaxNode, ...]:
        return tuple(self.items)

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> Body:
        items: list[Attribute | Block] = []
        seen: dict[str, Node] = {}
        for child in named_children_of_type(node, "attribute", "block"):
            item = ctx.convert(child)
            if isinstance(item, Attribute):
                if item.name in seen:
                    ctx.error(
                        "Attribute redefined",
                        f'The argument "{item.name}" was already set at '
                        f"{ctx.source_range(seen[item.name])}. "
                        "Each argument may be set only once.",
                        child,
                    )
                else:
                    seen[item.name] = child
            items.append(item)
        return cls(items=items, src_range=ctx.range_of(node))


@dataclass(slots=True)
class Block(TypedSyntaxNode):
    tree_sitter_types: ClassVar[set[str]] = {"block"}
    type: str
    labels: list[str] = field(default_factory=list)
    body: Body = field(default_factory=Body)

    def children(self) -> tuple[SyntaxNode, ...]:
        return self.body.children()

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> Block:
        parts = [child for child in node.named_children if child.type != "comment"]
        if not parts or parts[0].type != "identifier":
            raise UnsupportedSyntaxError("Block without a type")

        labels: list[str] = []
        for child in parts[1:]:
            if child.type == "block_start":
                break
            if child.type == "string_lit":
                labels.append(quoted_content_range(child, ctx).slice_bytes(ctx.source).decode("utf-8"))
            elif child.type == "identifier":
                labels.append(ctx.text(child))

        body_node = first_child_of_type(node, "body")
        if body_node is not None:
            body = Body.from_cst(body_node, ctx)
        else:
            start = first_child_of_type(node, "block_start") or node
            end = first_child_of_type(node, "block_end") or node
            body = Body(src_range=ctx.range(start.end_byte, end.start_byte))
        return cls(
            type=ctx.text(parts[0]),
            labels=labels,
            body=body,
            src_range=ctx.range_of(node),
        )


__all__ = ["Attribute", "Block", "Body"]
