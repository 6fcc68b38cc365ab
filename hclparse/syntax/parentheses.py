from __future__ import annotations

from dataclasses import dataclass

from hclparse.syntax.node import SyntaxNode


@dataclass(slots=True)
class ParenthesesExpr(SyntaxNode):
    expression: SyntaxNode

    def children(self) -> tuple[SyntaxNode, ...]:
        return (self.expression,)


__all__ = ["ParenthesesExpr"]
