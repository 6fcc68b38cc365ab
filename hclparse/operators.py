from __future__ import annotations

from enum import Enum, auto

from hclparse.exceptions import UnknownOperationError


class Operation(Enum):
    LOGICAL_OR = auto()
    LOGICAL_AND = auto()
    LOGICAL_NOT = auto()
    EQUAL = auto()
    NOT_EQUAL = auto()
    GREATER_THAN = auto()
    GREATER_THAN_OR_EQUAL = auto()
    LESS_THAN = auto()
    LESS_THAN_OR_EQUAL = auto()
    ADD = auto()
    SUBTRACT = auto()
    MULTIPLY = auto()
    DIVIDE = auto()
    MODULO = auto()
    NEGATE = auto()


OPERATION_SYMBOLS: dict[Operation, str] = {
    Operation.LOGICAL_OR: "||",
    Operation.LOGICAL_AND: "&&",
    Operation.LOGICAL_NOT: "!",
    Operation.EQUAL: "==",
    Operation.NOT_EQUAL: "!=",
    Operation.GREATER_THAN: ">",
    Operation.GREATER_THAN_OR_EQUAL: ">=",
    Operation.LESS_THAN: "<",
    Operation.LESS_THAN_OR_EQUAL: "<=",
    Operation.ADD: "+",
    Operation.SUBTRACT: "-",
    Operation.MULTIPLY: "*",
    Operation.DIVIDE: "/",
    Operation.MODULO: "%",
    Operation.NEGATE: "-",
}

_missing = set(Operation) - set(OPERATION_SYMBOLS)
if _missing:
    raise RuntimeError(f"Operations without a symbol: {sorted(op.name for op in _missing)}")

# Operator tokens as they appear in the tree-sitter grammar.
BINARY_OPERATIONS: dict[str, Operation] = {
    "||": Operation.LOGICAL_OR,
    "&&": Operation.LOGICAL_AND,
    "==": Operation.EQUAL,
    "!=": Operation.NOT_EQUAL,
    ">": Operation.GREATER_THAN,
    ">=": Operation.GREATER_THAN_OR_EQUAL,
    "<": Operation.LESS_THAN,
    "<=": Operation.LESS_THAN_OR_EQUAL,
    "+": Operation.ADD,
    "-": Operation.SUBTRACT,
    "*": Operation.MULTIPLY,
    "/": Operation.DIVIDE,
    "%": Operation.MODULO,
}

UNARY_OPERATIONS: dict[str, Operation] = {
    "!": Operation.LOGICAL_NOT,
    "-": Operation.NEGATE,
}


def operation_symbol(op: Operation) -> str:
    """Return the canonical symbol, failing loudly when the table is out of sync."""
    try:
        return OPERATION_SYMBOLS[op]
    except KeyError:
        raise UnknownOperationError(f"unknown operation type: {op!r}") from None


__all__ = [
    "BINARY_OPERATIONS",
    "OPERATION_SYMBOLS",
    "Operation",
    "UNARY_OPERATIONS",
    "operation_symbol",
]
