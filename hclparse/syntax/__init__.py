from .body import Attribute, Block, Body
from .collection import ObjectConsExpr, ObjectConsItem, ObjectConsKeyExpr, TupleConsExpr
from .for_expr import ForExpr
from .function import FunctionCallExpr
from .literal import AnonSymbolExpr, LiteralValueExpr
from .node import Range, SyntaxNode, TypedSyntaxNode
from .operation import BinaryOpExpr, ConditionalExpr, UnaryOpExpr
from .parentheses import ParenthesesExpr
from .template import TemplateExpr, TemplateJoinExpr, TemplateWrapExpr
from .traversal import IndexExpr, RelativeTraversalExpr, ScopeTraversalExpr, SplatExpr, Traverser

__all__ = [
    "AnonSymbolExpr",
    "Attribute",
    "BinaryOpExpr",
    "Block",
    "Body",
    "ConditionalExpr",
    "ForExpr",
    "FunctionCallExpr",
    "IndexExpr",
    "LiteralValueExpr",
    "ObjectConsExpr",
    "ObjectConsItem",
    "ObjectConsKeyExpr",
    "ParenthesesExpr",
    "Range",
    "RelativeTraversalExpr",
    "ScopeTraversalExpr",
    "SplatExpr",
    "SyntaxNode",
    "TemplateExpr",
    "TemplateJoinExpr",
    "TemplateWrapExpr",
    "Traverser",
    "TupleConsExpr",
    "TypedSyntaxNode",
    "UnaryOpExpr",
]
