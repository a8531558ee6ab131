"""closure preflight command - Check that the compiler can be launched.

Verifies the Java runtime is on PATH and the compiler jar exists before
any compile is attempted.
"""

from __future__ import annotations

import shutil

import click

from closure_cli import output
from closure_cli.options import build_settings
from closure_cli.output import error, success, warning


@click.command()
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
def preflight(compiler_jar: str | None, java_binary: str | None) -> None:
    """Check the Java runtime and the compiler jar.

    Exits 0 when both are available, 1 otherwise.

    Examples:

        closure preflight

        closure preflight --compiler-jar /opt/closure/compiler.jar
    """
    from rich.table import Table

    settings = build_settings(compiler_jar, java_binary)

    java_path = shutil.which(settings.java_binary)
    jar_path = settings.resolve_compiler_jar()

    checks = [
        ("java", java_path is not None, java_path or f"'{settings.java_binary}' not found on PATH"),
        ("compiler.jar", jar_path.is_file(), str(jar_path)),
    ]

    table = Table(title="Preflight Checks")
    table.add_column("Check")
    table.add_column("Status")
    table.add_column("Details")
    for name, passed, details in checks:
        status = "[green]PASSED[/green]" if passed else "[red]FAILED[/red]"
        table.add_row(name, status, details)
    output.console.print(table)

    if java_path is None:
        warning("Install a Java runtime or point --java at one")
    if not jar_path.is_file():
        warning("Download compiler.jar or point --compiler-jar / CLOSURE_COMPILER_JAR at it")

    if all(passed for _, passed, _ in checks):
        success("Preflight checks passed")
        raise SystemExit(0)
    error("Preflight checks failed")
    raise SystemExit(1)
