from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[3]


def run_cli(arguments: list[str]) -> subprocess.CompletedProcess:
    """Run ``python -m hclparse`` in a fresh interpreter."""
    cli_args = [sys.executable, "-m", "hclparse", *arguments]

    env = os.environ.copy()
    env.pop("NO_COLOR", None)
    pythonpath_entries = [str(PROJECT_ROOT)]
    if env.get("PYTHONPATH"):
        pythonpath_entries.append(env["PYTHONPATH"])
    env["PYTHONPATH"] = os.pathsep.join(pythonpath_entries)

    return subprocess.run(
        cli_args,
        text=True,
        capture_output=True,
        cwd=PROJECT_ROOT,
        check=False,
        env=env,
    )


def dump_with_cli(arguments: list[str]) -> str:
    """Return the tree dump, raising with the CLI's own error text on failure."""
    result = run_cli(arguments)
    if result.returncode != 0:
        stderr = result.stderr.strip()
        stdout = result.stdout.strip()
        details = stderr or stdout or f"exit code {result.returncode}"
        raise RuntimeError(f"hclparse {' '.join(arguments)} failed: {details}")

    return result.stdout.rstrip("\n")
