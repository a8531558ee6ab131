"""CLI entry point for closure-runtime.

Defines the main CLI group. Subcommands are loaded lazily so that
``closure --help`` does not import pydantic-settings and friends.
"""

from __future__ import annotations

import importlib
from typing import Any

import click
import rich_click as rclick

from closure_cli import __version__
from closure_cli.output import set_no_color

# Configure rich-click for better help formatting
rclick.rich_click.TEXT_MARKUP = "markdown"
rclick.rich_click.SHOW_ARGUMENTS = True
rclick.rich_click.GROUP_ARGUMENTS_OPTIONS = True


class LazyGroup(rclick.RichGroup):
    """Click group that loads commands lazily.

    Attributes:
        lazy_subcommands: Mapping of command names to "module.attribute" paths.
    """

    def __init__(
        self,
        *args: Any,
        lazy_subcommands: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.lazy_subcommands: dict[str, str] = lazy_subcommands or {}

    def list_commands(self, ctx: click.Context) -> list[str]:
        """Return the sorted names of registered and lazy commands."""
        commands = set(super().list_commands(ctx))
        commands.update(self.lazy_subcommands.keys())
        return sorted(commands)

    def get_command(self, ctx: click.Context, cmd_name: str) -> click.Command | None:
        """Get a command by name, importing its module on first use."""
        cmd = super().get_command(ctx, cmd_name)  # type: ignore[arg-type]
        if cmd is not None:
            return cmd

        if cmd_name not in self.lazy_subcommands:
            return None

        module_path = self.lazy_subcommands[cmd_name]
        module_name, attr_name = module_path.rsplit(".", 1)
        mod = importlib.import_module(module_name)
        return getattr(mod, attr_name)  # type: ignore[no-any-return]


LAZY_COMMANDS = {
    "compile": "closure_cli.commands.compile.compile_cmd",
    "preflight": "closure_cli.commands.preflight.preflight",
}


@click.command(cls=LazyGroup, lazy_subcommands=LAZY_COMMANDS)
@click.version_option(version=__version__, prog_name="closure")
@click.option(
    "--no-color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
    is_eager=True,
    expose_value=False,
    callback=lambda ctx, param, value: set_no_color(value) if value else None,
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    help="Log level for diagnostics written to stderr [default: WARNING]",
)
def cli(log_level: str) -> None:
    """Closure Runtime - run Google Closure Compiler over JavaScript sources.

    **Getting Started:**

    - `closure preflight` - Check the Java runtime and compiler jar
    - `closure compile a.js b.js -o app.min.js` - Minify sources into one file

    The compiler jar defaults to `compiler-latest/compiler.jar` under the
    current directory. Override it with `--compiler-jar` or the
    `CLOSURE_COMPILER_JAR` environment variable.
    """
    from closure_core.observability import configure_logging

    configure_logging(log_level=log_level, json_format=False)


if __name__ == "__main__":
    cli()
