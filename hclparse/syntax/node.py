from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from tree_sitter import Node

if TYPE_CHECKING:
    from hclparse.mapping import CstConverter


@dataclass(frozen=True, slots=True)
class Range:
    """Half-open byte range into the buffer the tree was parsed from."""

    start: int = 0
    end: int = 0

    def slice_bytes(self, source: bytes) -> bytes:
        return source[self.start : self.end]

    def union(self, other: Range) -> Range:
        return Range(min(self.start, other.start), max(self.end, other.end))

    def __len__(self) -> int:
        return self.end - self.start


@dataclass(kw_only=True, slots=True)
class SyntaxNode:
    """Base class for all HCL syntax nodes."""

    src_range: Range = field(default_factory=Range)

    def children(self) -> tuple[SyntaxNode, ...]:
        """Child nodes in the order the grammar defines them."""
        return ()


class TypedSyntaxNode(SyntaxNode):
    """Base class for syntax nodes built from a tree-sitter type."""

    tree_sitter_types: ClassVar[set[str]]

    @classmethod
    def from_cst(cls, node: Node, ctx: CstConverter) -> SyntaxNode:
        """Construct a syntax node from a CST node."""
        raise NotImplementedError


def significant_children(node: Node) -> list[Node]:
    """Children without comments, keeping anonymous tokens."""
    return [child for child in node.children if child.type != "comment"]


def named_children_of_type(node: Node, *types: str) -> list[Node]:
    return [child for child in node.named_children if child.type in types]


def first_child_of_type(node: Node, *types: str) -> Node | None:
    return next((child for child in node.children if child.type in types), None)


__all__ = [
    "Range",
    "SyntaxNode",
    "TypedSyntaxNode",
    "first_child_of_type",
    "named_children_of_type",
    "significant_children",
]
