"""Rich console output utilities for closure-cli.

Provides colored success/error/warning messages and respects the
NO_COLOR environment variable as well as the --no-color flag.
"""

from __future__ import annotations

import json
import os
from typing import Any

from rich.console import Console

# Rich respects NO_COLOR itself; the flag is tracked so --no-color can match it
_force_no_color = os.environ.get("NO_COLOR") is not None


def create_console(no_color: bool = False) -> Console:
    """Create a Rich Console instance with appropriate color settings.

    Args:
        no_color: If True, disable colored output. Also respects NO_COLOR env var.

    Returns:
        Configured Console instance.
    """
    force_terminal = None
    if no_color or _force_no_color:
        force_terminal = False
    return Console(force_terminal=force_terminal, no_color=no_color or _force_no_color)


# Default console instance
console = create_console()


def success(message: str, **kwargs: Any) -> None:
    """Print a success message with green checkmark.

    Example:
        >>> success("Compiled to dist/app.min.js")
        ✓ Compiled to dist/app.min.js
    """
    console.print(f"[green]✓[/green] {message}", **kwargs)


def error(message: str, **kwargs: Any) -> None:
    """Print an error message with red X.

    Example:
        >>> error("The path 'src/missing.js' does not seem to exist.")
        ✗ The path 'src/missing.js' does not seem to exist.
    """
    console.print(f"[red]✗[/red] {message}", **kwargs)


def warning(message: str, **kwargs: Any) -> None:
    """Print a warning message with yellow triangle."""
    console.print(f"[yellow]⚠[/yellow] {message}", **kwargs)


def plain(text: str) -> None:
    """Print text verbatim, without markup or highlighting.

    Compiler diagnostics contain brackets that Rich would otherwise read
    as markup.
    """
    console.print(text, markup=False, highlight=False, soft_wrap=True)


def print_json(data: dict[str, Any], **kwargs: Any) -> None:
    """Print JSON data with syntax highlighting.

    Example:
        >>> print_json({"exit_code": 0, "target_file": "dist/app.min.js"})
        {
          "exit_code": 0,
          "target_file": "dist/app.min.js"
        }
    """
    console.print_json(json.dumps(data), **kwargs)


def set_no_color(no_color: bool) -> None:
    """Update the global console to enable/disable colors.

    Note:
        This updates the module-level console instance.
    """
    global console
    console = create_console(no_color=no_color)
