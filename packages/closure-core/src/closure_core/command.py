"""Command line construction for the Closure Compiler.

The argument shape is the contract with the compiler jar: one ``--js=``
flag per source file in insertion order, followed by exactly one
``--js_output_file=`` flag.
"""

from __future__ import annotations

import shlex
from collections.abc import Sequence

JS_FLAG = "--js="
OUTPUT_FLAG = "--js_output_file="


def build_arguments(source_files: Sequence[str], target_file: str) -> list[str]:
    """Build the compiler flags for a set of sources and a target.

    Args:
        source_files: Resolved source paths, in order.
        target_file: Resolved target path.

    Returns:
        Flag list, e.g. ``["--js=x.js", "--js=y.js", "--js_output_file=out.js"]``.
    """
    arguments = [f"{JS_FLAG}{path}" for path in source_files]
    arguments.append(f"{OUTPUT_FLAG}{target_file}")
    return arguments


def build_command(
    binary: Sequence[str],
    source_files: Sequence[str],
    target_file: str,
) -> list[str]:
    """Build the full argv for one compiler run.

    Args:
        binary: Launch prefix, e.g. ``["java", "-jar", "/opt/compiler.jar"]``.
        source_files: Resolved source paths, in order.
        target_file: Resolved target path.

    Returns:
        Complete argument vector.
    """
    return [*binary, *build_arguments(source_files, target_file)]


def format_command(argv: Sequence[str]) -> str:
    """Render an argv as a shell-quoted string for display."""
    return shlex.join(argv)
