from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from tree_sitter import Node

from hclparse.syntax.node import SyntaxNode, TypedSyntaxNode, first_child_of_type

if TYPE_CHECKING:
    from hclparse.mapping import CstConverter


@dataclass(slots=True)
class FunctionCallExpr(TypedSyntaxNode):
    tree_sitter_types: ClassVar[set[str]] = {"function_call"}
    name: str
    args: list[SyntaxNode] = field(default_factory=list)
    # Set when the final argument is followed by "..." and expands into arguments.
    expand_final: bool = False

    def children(self) -> tuple[SyntaxNode, ...]:
        return tuple(self.args)

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> FunctionCallExpr:
        identifier = first_child_of_type(node, "identifier")
        arguments = first_child_of_type(node, "function_arguments")
        args: list[SyntaxNode] = []
        expand_final = False
        if arguments is not None:
            for child in arguments.named_children:
                if child.type == "ellipsis":
                    expand_final = True
                elif child.type != "comment":
                    args.append(ctx.convert(child))
        return cls(
            name=ctx.text(identifier) if identifier is not None else "",
            args=args,
            expand_final=expand_final,
            src_range=ctx.range_of(node),
        )


__all__ = ["FunctionCallExpr"]
