from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from tree_sitter import Node

from hclparse.exceptions import UnsupportedSyntaxError
from hclparse.operators import BINARY_OPERATIONS, UNARY_OPERATIONS, Operation
from hclparse.syntax.node import SyntaxNode, TypedSyntaxNode, significant_children
from hclparse.syntax.traversal import build_term

if TYPE_CHECKING:
    from hclparse.mapping import CstConverter

_GROUPING_TOKENS = {"(", ")"}


def split_on_tokens(children: list[Node], tokens: set[str]) -> tuple[list[list[Node]], list[Node]]:
    """Split a child sequence at the anonymous tokens in ``tokens``."""
    segments: list[list[Node]] = [[]]
    separators: list[Node] = []
    for child in children:
        if not child.is_named and child.type in tokens:
            separators.append(child)
            segments.append([])
        else:
            segments[-1].append(child)
    return segments, separators


@dataclass(slots=True)
class BinaryOpExpr(TypedSyntaxNode):
    tree_sitter_types: ClassVar[set[str]] = {"binary_operation"}
    lhs: SyntaxNode
    op: Operation
    rhs: SyntaxNode

    def children(self) -> tuple[SyntaxNode, ...]:
        return (self.lhs, self.rhs)

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> BinaryOpExpr:
        children = significant_children(node)
        operator_index = next(
            (
                position
                for position, child in enumerate(children)
                if not child.is_named and child.type not in _GROUPING_TOKENS
            ),
            None,
        )
        if operator_index is None:
            raise UnsupportedSyntaxError("Binary operation without an operator")
        token = children[operator_index].type
        if token not in BINARY_OPERATIONS:
            raise UnsupportedSyntaxError(f"Unsupported operator: {token}")
        return cls(
            lhs=build_term(children[:operator_index], ctx),
            op=BINARY_OPERATIONS[token],
            rhs=build_term(children[operator_index + 1 :], ctx),
            src_range=ctx.range_of(node),
        )


@dataclass(slots=True)
class UnaryOpExpr(TypedSyntaxNode):
    tree_sitter_types: ClassVar[set[str]] = {"unary_operation"}
    op: Operation
    val: SyntaxNode

    def children(self) -> tuple[SyntaxNode, ...]:
        return (self.val,)

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> UnaryOpExpr:
        children = significant_children(node)
        if len(children) < 2:
            raise UnsupportedSyntaxError("Unary operation is incomplete")
        token = children[0].type
        if token not in UNARY_OPERATIONS:
            raise UnsupportedSyntaxError(f"Unsupported operator: {token}")
        return cls(
            op=UNARY_OPERATIONS[token],
            val=build_term(children[1:], ctx),
            src_range=ctx.range_of(node),
        )


@dataclass(slots=True)
class ConditionalExpr(TypedSyntaxNode):
    tree_sitter_types: ClassVar[set[str]] = {"conditional", "template_if"}
    condition: SyntaxNode
    true_result: SyntaxNode
    false_result: SyntaxNode

    def children(self) -> tuple[SyntaxNode, ...]:
        return (self.condition, self.true_result, self.false_result)

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> ConditionalExpr:
        if node.type == "template_if":
            from hclparse.syntax.template import template_conditional

            return template_conditional(node, ctx)

        segments, _ = split_on_tokens(significant_children(node), {"?", ":"})
        if len(segments) != 3:
            raise UnsupportedSyntaxError("Conditional expression is incomplete")
        condition, true_result, false_result = (build_term(segment, ctx) for segment in segments)
        if isinstance(condition, ConditionalExpr):
            # The grammar nests chains to the left; HCL binds them to the right.
            return attach_alternative(condition, true_result, false_result)
        return cls(
            condition=condition,
            true_result=true_result,
            false_result=false_result,
            src_range=ctx.range_of(node),
        )


def attach_alternative(
    chain: ConditionalExpr, true_result: SyntaxNode, false_result: SyntaxNode
) -> ConditionalExpr:
    """Rebuild ``(a ? b : c) ? d : e`` as ``a ? b : (c ? d : e)``.

    The innermost false branch of ``chain`` becomes the condition of a new
    conditional; parenthesized branches are ParenthesesExpr and stop the
    descent.
    """
    path = [chain]
    while isinstance(path[-1].false_result, ConditionalExpr):
        path.append(path[-1].false_result)
    last = path[-1]
    last.false_result = ConditionalExpr(
        condition=last.false_result,
        true_result=true_result,
        false_result=false_result,
        src_range=last.false_result.src_range.union(false_result.src_range),
    )
    for conditional in path:
        conditional.src_range = conditional.src_range.union(false_result.src_range)
    return chain


__all__ = ["BinaryOpExpr", "ConditionalExpr", "UnaryOpExpr", "attach_alternative", "split_on_tokens"]
