"""
Tree printer: an indented, parenthesized dump of a syntax tree.

Every node opens a line ``(<Kind> ...`` one level deeper than its parent.
Container nodes are closed by a ``)`` line at their own indentation once
their children have been printed; leaf nodes close on their opening line.

    (Body
      (Block "resource" [aws_instance web]
        (Attribute "ami"
          (LiteralValueExpr "ami-123")
        )
      )
    )
"""

from __future__ import annotations

import io
import logging
import sys
from typing import Iterator, Protocol, TextIO

from hclparse.exceptions import LeafNodeError
from hclparse.operators import operation_symbol
from hclparse.syntax.body import Attribute, Block
from hclparse.syntax.for_expr import ForExpr
from hclparse.syntax.function import FunctionCallExpr
from hclparse.syntax.literal import AnonSymbolExpr, LiteralValueExpr
from hclparse.syntax.node import Range, SyntaxNode
from hclparse.syntax.operation import BinaryOpExpr, UnaryOpExpr
from hclparse.syntax.traversal import RelativeTraversalExpr, ScopeTraversalExpr, traversal_range

logger = logging.getLogger(__name__)

INDENT_STEP = 2

# Kinds that never have children and close on their opening line.
LEAF_KINDS: tuple[type[SyntaxNode], ...] = (LiteralValueExpr, ScopeTraversalExpr, AnonSymbolExpr)


class Walker(Protocol):
    def enter(self, node: SyntaxNode) -> None: ...

    def exit(self, node: SyntaxNode) -> None: ...


def walk(node: SyntaxNode, walker: Walker) -> None:
    """Depth-first walk calling ``enter`` before and ``exit`` after the children.

    Uses an explicit stack so that deeply nested trees do not hit the
    interpreter's recursion limit.
    """
    walker.enter(node)
    stack: list[tuple[SyntaxNode, Iterator[SyntaxNode]]] = [(node, iter(node.children()))]
    while stack:
        current, children = stack[-1]
        child = next(children, None)
        if child is None:
            stack.pop()
            walker.exit(current)
            continue
        walker.enter(child)
        stack.append((child, iter(child.children())))


def is_leaf(node: SyntaxNode) -> bool:
    return isinstance(node, LEAF_KINDS)


def _source_text(src_range: Range, source: bytes) -> str:
    return src_range.slice_bytes(source).decode("utf-8", errors="replace")


def opening_fragment(node: SyntaxNode, source: bytes) -> str:
    kind = type(node).__name__
    match node:
        case Attribute():
            return f'({kind} "{node.name}"'
        case Block():
            return f'({kind} "{node.type}" [{" ".join(node.labels)}]'
        case LiteralValueExpr() | ScopeTraversalExpr():
            return f'({kind} "{_source_text(node.src_range, source)}")'
        case RelativeTraversalExpr():
            return f'({kind} "{_source_text(traversal_range(node.traversal), source)}"'
        case FunctionCallExpr():
            return f'({kind} "{node.name}"'
        case ForExpr():
            fragment = f"({kind}"
            if node.key_var:
                fragment += f' key="{node.key_var}"'
            if node.val_var:
                fragment += f' val="{node.val_var}"'
            return fragment
        case AnonSymbolExpr():
            return f"({kind})"
        case BinaryOpExpr() | UnaryOpExpr():
            return f'({kind} "{operation_symbol(node.op)}"'
        case _:
            return f"({kind}"


class TreePrinter:
    """Walker writing one line per node to ``out``.

    State is per instance: ``indent`` counts spaces and ``leaf`` records that
    the node entered last closed itself, so its exit writes nothing.
    """

    def __init__(self, source: bytes, out: TextIO):
        self.source = source
        self.out = out
        self.indent = 0
        self.leaf = False
        self.lines = 0

    def _write(self, text: str) -> None:
        self.out.write(f"{' ' * self.indent}{text}\n")
        self.lines += 1

    def enter(self, node: SyntaxNode) -> None:
        if self.leaf:
            raise LeafNodeError(f"leaf node should not have children: {type(node).__name__}")
        self._write(opening_fragment(node, self.source))
        if is_leaf(node):
            self.leaf = True
        self.indent += INDENT_STEP

    def exit(self, node: SyntaxNode) -> None:
        self.indent -= INDENT_STEP
        if self.leaf:
            self.leaf = False
            return
        self._write(")")


def render(root: SyntaxNode, source: bytes, out: TextIO | None = None) -> None:
    """Write the dump of ``root`` to ``out`` (standard output by default)."""
    printer = TreePrinter(source, out if out is not None else sys.stdout)
    walk(root, printer)
    logger.debug(f"Rendered {type(root).__name__}: {printer.lines} line(s)")


def render_to_string(root: SyntaxNode, source: bytes) -> str:
    buffer = io.StringIO()
    render(root, source, buffer)
    return buffer.getvalue()


__all__ = [
    "INDENT_STEP",
    "LEAF_KINDS",
    "TreePrinter",
    "Walker",
    "is_leaf",
    "opening_fragment",
    "render",
    "render_to_string",
    "walk",
]
