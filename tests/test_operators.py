"""Check the operation symbol table and the grammar token maps."""

import pytest

from hclparse.exceptions import PrinterContractError, UnknownOperationError
from hclparse.operators import (BINARY_OPERATIONS, OPERATION_SYMBOLS,
                                UNARY_OPERATIONS, Operation, operation_symbol)


@pytest.mark.parametrize(
    "op, symbol",
    [
        (Operation.LOGICAL_OR, "||"),
        (Operation.LOGICAL_AND, "&&"),
        (Operation.LOGICAL_NOT, "!"),
        (Operation.EQUAL, "=="),
        (Operation.NOT_EQUAL, "!="),
        (Operation.GREATER_THAN, ">"),
        (Operation.GREATER_THAN_OR_EQUAL, ">="),
        (Operation.LESS_THAN, "<"),
        (Operation.LESS_THAN_OR_EQUAL, "<="),
        (Operation.ADD, "+"),
        (Operation.SUBTRACT, "-"),
        (Operation.MULTIPLY, "*"),
        (Operation.DIVIDE, "/"),
        (Operation.MODULO, "%"),
        (Operation.NEGATE, "-"),
    ],
)
def test_operation_symbol(op, symbol):
    assert operation_symbol(op) == symbol


def test_every_operation_has_a_symbol():
    """The table is total over the enumeration."""
    assert set(OPERATION_SYMBOLS) == set(Operation)
    assert len(Operation) == 15


def test_binary_tokens_print_as_themselves():
    for token, op in BINARY_OPERATIONS.items():
        assert OPERATION_SYMBOLS[op] == token


def test_unary_tokens_print_as_themselves():
    assert UNARY_OPERATIONS == {"!": Operation.LOGICAL_NOT, "-": Operation.NEGATE}
    for token, op in UNARY_OPERATIONS.items():
        assert OPERATION_SYMBOLS[op] == token


def test_unknown_operation_raises():
    with pytest.raises(UnknownOperationError, match="unknown operation type"):
        operation_symbol("**")


def test_unknown_operation_is_a_contract_error():
    """Printer contract failures are not ordinary runtime problems to recover from."""
    assert issubclass(UnknownOperationError, PrinterContractError)
