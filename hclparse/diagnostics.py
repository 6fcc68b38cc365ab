"""
Parse diagnostics: the error model shared by the front door and the CLI.

Positions follow HCL conventions: lines and columns are 1-based, bytes are
0-based offsets into the buffer the caller handed in.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TextIO

from tree_sitter import Node

from hclparse.color import colorize_hcl
from hclparse.syntax.node import Range


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True, slots=True)
class Pos:
    line: int
    column: int
    byte: int


@dataclass(frozen=True, slots=True)
class SourceRange:
    filename: str
    start: Pos
    end: Pos

    def __str__(self) -> str:
        if self.start.line == self.end.line:
            return f"{self.filename}:{self.start.line},{self.start.column}-{self.end.column}"
        return (
            f"{self.filename}:{self.start.line},{self.start.column}"
            f"-{self.end.line},{self.end.column}"
        )


@dataclass(frozen=True, slots=True)
class Diagnostic:
    severity: Severity
    summary: str
    detail: str = ""
    subject: SourceRange | None = None

    def __str__(self) -> str:
        text = f"{self.subject}: {self.summary}" if self.subject else self.summary
        return f"{text}; {self.detail}" if self.detail else text


class Diagnostics(list[Diagnostic]):
    def has_errors(self) -> bool:
        return any(diag.severity is Severity.ERROR for diag in self)

    def errors(self) -> list[Diagnostic]:
        return [diag for diag in self if diag.severity is Severity.ERROR]

    def __str__(self) -> str:
        if not self:
            return "no diagnostics"
        if len(self) == 1:
            return str(self[0])
        return f"{self[0]}, and {len(self) - 1} other diagnostic(s)"


@dataclass(frozen=True, slots=True)
class PositionMapper:
    """Map coordinates of a wrapped parse buffer back onto the caller's buffer.

    Expression and template inputs are parsed inside a synthetic document;
    ``prefix`` is the text placed before the caller's ``source``. Offsets
    and positions falling outside the input are clamped to its edges.
    """

    filename: str
    source: bytes
    prefix: bytes = b""

    @property
    def limit(self) -> int:
        return len(self.source)

    def byte(self, raw: int) -> int:
        return min(max(raw - len(self.prefix), 0), self.limit)

    def range(self, start_byte: int, end_byte: int) -> Range:
        start = self.byte(start_byte)
        return Range(start, max(self.byte(end_byte), start))

    def range_of(self, node: Node) -> Range:
        return self.range(node.start_byte, node.end_byte)

    def pos(self, raw_byte: int, point) -> Pos:
        row, column = point
        row -= self.prefix.count(b"\n")
        if row < 0:
            row, column = 0, 0
        elif row == 0:
            column = max(column - (len(self.prefix) - (self.prefix.rfind(b"\n") + 1)), 0)
        last_row = self.source.count(b"\n")
        if row >= last_row:
            last_line = len(self.source) - (self.source.rfind(b"\n") + 1)
            column = last_line if row > last_row else min(column, last_line)
            row = last_row
        return Pos(line=row + 1, column=column + 1, byte=self.byte(raw_byte))

    def source_range(self, node: Node) -> SourceRange:
        return SourceRange(
            filename=self.filename,
            start=self.pos(node.start_byte, node.start_point),
            end=self.pos(node.end_byte, node.end_point),
        )


def collect_syntax_diagnostics(root: Node, source: bytes, mapper: PositionMapper) -> Diagnostics:
    """Report tree-sitter ERROR and MISSING nodes as error diagnostics."""
    diagnostics = Diagnostics()
    stack = [root]
    while stack:
        node = stack.pop()
        if node.is_missing:
            diagnostics.append(
                Diagnostic(
                    severity=Severity.ERROR,
                    summary="Missing token",
                    detail=f"Expected {node.type}.",
                    subject=mapper.source_range(node),
                )
            )
        elif node.is_error:
            snippet = mapper.range_of(node).slice_bytes(source).decode("utf-8", errors="replace")
            snippet = snippet.strip().split("\n", 1)[0][:40]
            diagnostics.append(
                Diagnostic(
                    severity=Severity.ERROR,
                    summary="Invalid syntax",
                    detail=f'Unexpected "{snippet}".' if snippet else "The input is not valid at this position.",
                    subject=mapper.source_range(node),
                )
            )
        elif node.has_error:
            stack.extend(reversed(node.children))
    return diagnostics


def format_snippet(diagnostic: Diagnostic, source: bytes, stream: TextIO) -> str:
    """Show the source line a diagnostic points at, with a caret marker."""
    subject = diagnostic.subject
    if subject is None:
        return ""
    lines = source.split(b"\n")
    index = subject.start.line - 1
    if not 0 <= index < len(lines):
        return ""
    raw_line = lines[index].rstrip(b"\r")
    line = raw_line.decode("utf-8", errors="replace")
    lead = len(raw_line[: subject.start.column - 1].decode("utf-8", errors="replace"))
    if subject.end.line == subject.start.line:
        width = subject.end.column - subject.start.column
    else:
        width = len(line) - lead
    gutter = f"{subject.start.line:>4} | "
    marker = " " * (len(gutter) + lead) + "^" * max(width, 1)
    return f"{gutter}{colorize_hcl(line, stream)}\n{marker}"


__all__ = [
    "Diagnostic",
    "Diagnostics",
    "Pos",
    "PositionMapper",
    "Severity",
    "SourceRange",
    "collect_syntax_diagnostics",
    "format_snippet",
]
