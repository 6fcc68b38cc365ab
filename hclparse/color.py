from __future__ import annotations

import os
from typing import TextIO

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import TerraformLexer


def colorize_hcl(code: str, stream: TextIO) -> str:
    """Highlight HCL snippets when they are written to a terminal."""
    if (not code) or (os.getenv("NO_COLOR") == "1") or (not stream.isatty()):
        return code
    return highlight(code, TerraformLexer(), TerminalFormatter()).rstrip("\n")


__all__ = ["colorize_hcl"]
