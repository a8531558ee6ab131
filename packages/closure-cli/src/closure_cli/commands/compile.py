"""closure compile command - Minify JavaScript sources with Closure Compiler."""

from __future__ import annotations

import click

from closure_cli.errors import (
    cli_exit_code,
    handle_compilation_error,
    handle_configuration_error,
)
from closure_cli.options import build_settings
from closure_cli.output import plain, print_json, success


@click.command("compile")
@click.argument("sources", nargs=-1, required=True)
@click.option(
    "-o",
    "--output",
    "target",
    default=None,
    help="Target file name, resolved against --target-base-dir [default: compiled.js]",
)
@click.option(
    "--source-base-dir",
    default="",
    help="Directory the source file names are relative to",
)
@click.option(
    "--target-base-dir",
    default="",
    help="Directory the target file name is relative to",
)
@click.option(
    "--compiler-jar",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to compiler.jar [env: CLOSURE_COMPILER_JAR]",
)
@click.option(
    "--java",
    "java_binary",
    default=None,
    help="Java runtime executable [env: CLOSURE_JAVA_BINARY, default: java]",
)
@click.option(
    "--timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Give up after this many seconds [env: CLOSURE_TIMEOUT_SECONDS]",
)
@click.option(
    "--dry-run",
    is_flag=True,
    default=False,
    help="Print the compiler command instead of running it",
)
@click.option(
    "--json",
    "as_json",
    is_flag=True,
    default=False,
    help="Print the compile result as JSON",
)
def compile_cmd(
    sources: tuple[str, ...],
    target: str | None,
    source_base_dir: str,
    target_base_dir: str,
    compiler_jar: str | None,
    java_binary: str | None,
    timeout: float | None,
    dry_run: bool,
    as_json: bool,
) -> None:
    """Compile JavaScript SOURCES into a single minified file.

    Sources are passed to the compiler in the order given; repeated
    sources are passed once.

    Examples:

        closure compile functions.js library.js -o minified.js

        closure compile --source-base-dir src --target-base-dir dist app.js

        closure compile app.js --dry-run
    """
    from closure_core.command import format_command
    from closure_core.compiler import ClosureCompiler
    from closure_core.errors import CompilationError, ConfigurationError

    compiler = ClosureCompiler(settings=build_settings(compiler_jar, java_binary, timeout))

    try:
        compiler.set_source_base_dir(source_base_dir)
        compiler.set_target_base_dir(target_base_dir)
        compiler.set_source_files(sources)
        if target is not None:
            compiler.set_target_file(target)

        if dry_run:
            plain(format_command(compiler.build_command()))
            return

        result = compiler.run()
    except ConfigurationError as e:
        handle_configuration_error(e)

    if as_json:
        print_json(result.model_dump(mode="json"))
        if not result.succeeded:
            raise SystemExit(cli_exit_code(result.exit_code))
        return

    try:
        result.raise_for_status()
    except CompilationError as e:
        handle_compilation_error(e)

    if result.output:
        plain(result.output.rstrip())
    success(f"Compiled {len(compiler.config.source_files)} file(s) to {result.target_file}")
