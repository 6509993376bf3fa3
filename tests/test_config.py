"""Tests for run configuration and error formatting."""

import pytest

from crun_mcp.config import LinuxTerminal, RunConfig, default_make_command, parse_bool
from crun_mcp.errors import (
    CompileError,
    NoMakefileError,
    RunError,
    UnsupportedLanguageError,
    format_message,
)


class TestRunConfigDefaults:
    """Tests for default configuration values."""

    def test_defaults(self):
        """Test documented defaults."""
        config = RunConfig()

        assert config.c_compiler == "gcc"
        assert config.cpp_compiler == "g++"
        assert config.c_compiler_options == ""
        assert config.cpp_compiler_options == ""
        assert config.run_after_compile is True
        assert config.show_warnings is True
        assert config.compile_to_tmpdir is True
        assert config.linux_terminal == LinuxTerminal.XTERM
        assert config.debugger == "gdb"
        assert config.make_command == default_make_command()

    def test_terminal_coerced_from_string(self):
        """Test terminal names are accepted as strings."""
        assert RunConfig(linux_terminal="konsole").linux_terminal == LinuxTerminal.KONSOLE

    def test_unknown_terminal_rejected(self):
        """Test terminals outside the fixed set are rejected."""
        with pytest.raises(ValueError):
            RunConfig(linux_terminal="alacritty")

    def test_to_dict(self):
        """Test serialization uses the terminal name."""
        data = RunConfig(make_command="make").to_dict()
        assert data["linux_terminal"] == "xterm"
        assert data["make_command"] == "make"


class TestRunConfigFromEnv:
    """Tests for RunConfig.from_env."""

    def test_reads_prefixed_variables(self):
        """Test CRUN_* variables are read."""
        config = RunConfig.from_env(
            {
                "CRUN_C_COMPILER": "clang",
                "CRUN_CPP_COMPILER_OPTIONS": "-std=c++20 -Wall",
                "CRUN_RUN_AFTER_COMPILE": "false",
                "CRUN_LINUX_TERMINAL": "gnome-terminal",
            }
        )

        assert config.c_compiler == "clang"
        assert config.cpp_compiler_options == "-std=c++20 -Wall"
        assert config.run_after_compile is False
        assert config.linux_terminal == LinuxTerminal.GNOME

    def test_overrides_win(self):
        """Test explicit overrides beat the environment; None is ignored."""
        config = RunConfig.from_env(
            {"CRUN_C_COMPILER": "clang", "CRUN_SHOW_WARNINGS": "no"},
            c_compiler="tcc",
            show_warnings=None,
        )

        assert config.c_compiler == "tcc"
        assert config.show_warnings is False

    def test_invalid_bool(self):
        """Test invalid booleans are rejected."""
        with pytest.raises(ValueError):
            RunConfig.from_env({"CRUN_COMPILE_TO_TMPDIR": "maybe"})

    @pytest.mark.parametrize("value,expected", [("1", True), ("YES", True), ("off", False)])
    def test_parse_bool(self, value, expected):
        """Test accepted boolean spellings."""
        assert parse_bool(value) is expected


class TestErrors:
    """Tests for the error taxonomy."""

    def test_format_message(self):
        """Test newlines become explicit break markers."""
        assert format_message("a\nb\n") == "a<br />b<br />"

    def test_to_dict_has_code(self):
        """Test errors serialize with a stable code."""
        data = NoMakefileError("/work/A").to_dict()
        assert data == {"error": "No Makefile found in /work/A", "code": "no_makefile"}

    def test_compile_error_without_stderr(self):
        """Test a silent failing compiler still has a message."""
        error = CompileError("", 1)
        assert "exited with code 1" in str(error)

    def test_all_errors_are_run_errors(self):
        """Test the taxonomy shares one base class."""
        assert isinstance(UnsupportedLanguageError("Go"), RunError)
