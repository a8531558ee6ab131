"""Unit tests for CompilerSettings."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from closure_core.settings import DEFAULT_COMPILER_JAR, CompilerSettings


class TestCompilerJarResolution:
    """Tests for locating compiler.jar."""

    def test_default_jar_is_relative_to_install_root(self, tmp_path: Path) -> None:
        settings = CompilerSettings(install_root=tmp_path)
        assert settings.resolve_compiler_jar() == (tmp_path / DEFAULT_COMPILER_JAR).resolve()
        assert settings.resolve_compiler_jar().parts[-2:] == ("compiler-latest", "compiler.jar")

    def test_default_install_root_is_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.chdir(tmp_path)
        settings = CompilerSettings()
        assert settings.resolve_compiler_jar() == (tmp_path / DEFAULT_COMPILER_JAR).resolve()

    def test_explicit_jar_wins_over_install_root(self, tmp_path: Path) -> None:
        jar = tmp_path / "tools" / "closure.jar"
        settings = CompilerSettings(install_root=tmp_path / "elsewhere", compiler_jar=jar)
        assert settings.resolve_compiler_jar() == jar.resolve()

    def test_resolved_jar_is_absolute(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        settings = CompilerSettings(compiler_jar=Path("relative/compiler.jar"))
        assert settings.resolve_compiler_jar().is_absolute()

    def test_jar_need_not_exist(self, tmp_path: Path) -> None:
        settings = CompilerSettings(compiler_jar=tmp_path / "missing.jar")
        assert not settings.resolve_compiler_jar().exists()


class TestBinary:
    """Tests for the launch prefix."""

    def test_binary_shape(self, tmp_path: Path) -> None:
        jar = tmp_path / "compiler.jar"
        settings = CompilerSettings(compiler_jar=jar)
        assert settings.binary() == ["java", "-jar", str(jar.resolve())]

    def test_java_options_precede_jar(self, tmp_path: Path) -> None:
        jar = tmp_path / "compiler.jar"
        settings = CompilerSettings(
            compiler_jar=jar,
            java_binary="/usr/lib/jvm/bin/java",
            java_options=["-Xmx512m", "-client"],
        )
        assert settings.binary() == [
            "/usr/lib/jvm/bin/java",
            "-Xmx512m",
            "-client",
            "-jar",
            str(jar.resolve()),
        ]

    def test_binary_accepts_explicit_jar(self) -> None:
        settings = CompilerSettings()
        assert settings.binary(Path("/opt/c.jar")) == ["java", "-jar", "/opt/c.jar"]


class TestEnvironment:
    """Tests for loading settings from CLOSURE_* variables."""

    def test_loads_from_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        jar = tmp_path / "env.jar"
        monkeypatch.setenv("CLOSURE_COMPILER_JAR", str(jar))
        monkeypatch.setenv("CLOSURE_JAVA_BINARY", "java17")
        monkeypatch.setenv("CLOSURE_JAVA_OPTIONS", '["-Xss4m"]')
        monkeypatch.setenv("CLOSURE_TIMEOUT_SECONDS", "90")

        settings = CompilerSettings()

        assert settings.resolve_compiler_jar() == jar.resolve()
        assert settings.java_binary == "java17"
        assert settings.java_options == ["-Xss4m"]
        assert settings.timeout_seconds == 90

    def test_install_root_from_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CLOSURE_INSTALL_ROOT", str(tmp_path))
        settings = CompilerSettings()
        assert settings.resolve_compiler_jar() == (tmp_path / DEFAULT_COMPILER_JAR).resolve()

    def test_explicit_arguments_win_over_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CLOSURE_JAVA_BINARY", "java17")
        assert CompilerSettings(java_binary="java21").java_binary == "java21"


class TestValidation:
    """Tests for settings constraints."""

    def test_timeout_defaults_to_none(self) -> None:
        assert CompilerSettings().timeout_seconds is None

    @pytest.mark.parametrize("timeout", [0, -5])
    def test_timeout_must_be_positive(self, timeout: float) -> None:
        with pytest.raises(ValidationError):
            CompilerSettings(timeout_seconds=timeout)
