from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from tree_sitter import Node

from hclparse.exceptions import UnsupportedSyntaxError
from hclparse.syntax.node import SyntaxNode, TypedSyntaxNode, first_child_of_type, named_children_of_type

if TYPE_CHECKING:
    from hclparse.mapping import CstConverter


@dataclass(slots=True)
class ForExpr(TypedSyntaxNode):
    """``[for v in coll : val]`` or ``{for k, v in coll : key => val}``.

    With a single variable only ``val_var`` is bound. ``key_expr`` is set for
    object results, and ``group`` when the value is followed by ``...``.
    """

    tree_sitter_types: ClassVar[set[str]] = {"for_tuple_expr", "for_object_expr"}
    coll_expr: SyntaxNode
    val_expr: SyntaxNode
    key_var: str = ""
    val_var: str = ""
    key_expr: SyntaxNode | None = None
    cond_expr: SyntaxNode | None = None
    group: bool = False

    def children(self) -> tuple[SyntaxNode, ...]:
        nodes = [self.coll_expr]
        if self.key_expr is not None:
            nodes.append(self.key_expr)
        nodes.append(self.val_expr)
        if self.cond_expr is not None:
            nodes.append(self.cond_expr)
        return tuple(nodes)

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> ForExpr:
        intro = first_child_of_type(node, "for_intro")
        if intro is None:
            raise UnsupportedSyntaxError("for expression without an introduction")
        key_var, val_var = loop_variables(intro, ctx)
        coll_nodes = named_children_of_type(intro, "expression")
        bodies = named_children_of_type(node, "expression")
        if not coll_nodes or not bodies:
            raise UnsupportedSyntaxError("for expression is incomplete")

        cond = first_child_of_type(node, "for_cond")
        cond_nodes = named_children_of_type(cond, "expression") if cond is not None else []

        key_expr = None
        if node.type == "for_object_expr":
            if len(bodies) < 2:
                raise UnsupportedSyntaxError("for expression is missing its value")
            key_expr = ctx.convert(bodies[0])
            val_node = bodies[1]
        else:
            val_node = bodies[0]

        return cls(
            coll_expr=ctx.convert(coll_nodes[0]),
            val_expr=ctx.convert(val_node),
            key_var=key_var,
            val_var=val_var,
            key_expr=key_expr,
            cond_expr=ctx.convert(cond_nodes[0]) if cond_nodes else None,
            group=first_child_of_type(node, "ellipsis") is not None,
            src_range=ctx.range_of(node),
        )


def loop_variables(intro: Node, ctx: CstConverter) -> tuple[str, str]:
    """Return ``(key_var, val_var)``; a lone variable binds the value."""
    names = [ctx.text(child) for child in named_children_of_type(intro, "identifier")]
    if len(names) == 1:
        return "", names[0]
    if len(names) == 2:
        return names[0], names[1]
    raise UnsupportedSyntaxError(f"for expression declares {len(names)} variables")


__all__ = ["ForExpr", "loop_variables"]
