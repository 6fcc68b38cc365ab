from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hclparse.diagnostics import Diagnostics


class HCLSyntaxError(SyntaxError):
    """Raised for callers that want parse diagnostics as an exception."""

    def __init__(self, diagnostics: Diagnostics):
        super().__init__(str(diagnostics))
        self.diagnostics = diagnostics


class UnsupportedSyntaxError(ValueError):
    pass


class PrinterContractError(RuntimeError):
    """The syntax tree or the printer tables broke an invariant of the printer."""

    pass


class LeafNodeError(PrinterContractError):
    pass


class UnknownOperationError(PrinterContractError):
    pass
