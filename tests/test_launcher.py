"""Tests for platform launchers."""

from unittest.mock import AsyncMock, patch

import pytest

from crun_mcp.compile.state import LaunchTarget
from crun_mcp.config import LinuxTerminal, RunConfig
from crun_mcp.launch.launcher import (
    CREATE_NEW_CONSOLE,
    LinuxLauncher,
    UnsupportedLauncher,
    WindowsLauncher,
    select_launcher,
)


class TestSelectLauncher:
    """Tests for select_launcher."""

    def test_windows(self):
        """Test win32 gets the Windows launcher."""
        assert isinstance(select_launcher(RunConfig(), "win32"), WindowsLauncher)

    def test_linux_uses_configured_terminal(self):
        """Test linux gets the Linux launcher with the configured terminal."""
        config = RunConfig(linux_terminal=LinuxTerminal.KONSOLE)
        launcher = select_launcher(config, "linux")

        assert isinstance(launcher, LinuxLauncher)
        assert launcher.terminal == LinuxTerminal.KONSOLE

    def test_other_platform_unsupported(self):
        """Test other platforms get a launcher that does nothing."""
        launcher = select_launcher(RunConfig(), "darwin")

        assert isinstance(launcher, UnsupportedLauncher)
        assert not launcher.supported
        assert launcher.platform_name == "darwin"


class TestWindowsLauncher:
    """Tests for WindowsLauncher commands."""

    def test_run_pauses_on_exit(self):
        """Test plain run keeps the console open."""
        command = WindowsLauncher().get_command(LaunchTarget(r"C:\Temp\x"))
        assert command == ["cmd", "/C", r'"C:\Temp\x" & pause']

    def test_path_with_spaces_is_quoted(self):
        """Test a binary under a directory with spaces stays one word for cmd."""
        command = WindowsLauncher().get_command(LaunchTarget(r"C:\My Projects\x"))
        assert command[2] == r'"C:\My Projects\x" & pause'

    def test_debug_uses_debugger(self):
        """Test debug run goes through the debugger, without pause."""
        command = WindowsLauncher(debugger="gdb").get_command(LaunchTarget(r"C:\Temp\x", debug=True))
        assert command == ["gdb", r"C:\Temp\x"]

    @pytest.mark.asyncio
    async def test_opens_new_console(self):
        """Test the process gets its own console window."""
        with patch("asyncio.create_subprocess_exec") as mock_exec:
            mock_exec.return_value = AsyncMock()

            launched = await WindowsLauncher().launch(LaunchTarget(r"C:\Temp\x"))

        assert launched
        assert mock_exec.call_args.kwargs["creationflags"] == CREATE_NEW_CONSOLE


class TestLinuxLauncher:
    """Tests for LinuxLauncher commands."""

    def test_default_terminal_is_xterm(self):
        """Test xterm runs the target with -e."""
        command = LinuxLauncher().get_command(LaunchTarget("/tmp/x"))
        assert command == ["xterm", "-e", "/tmp/x"]

    def test_debug_wraps_with_debugger(self):
        """Test debug run wraps the target in the debugger."""
        command = LinuxLauncher(debugger="gdb").get_command(LaunchTarget("/tmp/x", debug=True))
        assert command == ["xterm", "-e", "gdb", "/tmp/x"]

    @pytest.mark.parametrize(
        "terminal,expected",
        [
            (LinuxTerminal.DEFAULT, ["x-terminal-emulator", "-e", "/tmp/x"]),
            (LinuxTerminal.GNOME, ["gnome-terminal", "--", "/tmp/x"]),
            (LinuxTerminal.KONSOLE, ["konsole", "-e", "/tmp/x"]),
            (LinuxTerminal.XFCE, ["xfce4-terminal", "-x", "/tmp/x"]),
        ],
    )
    def test_terminal_exec_flags(self, terminal, expected):
        """Test each terminal gets its own execute flag."""
        assert LinuxLauncher(terminal=terminal).get_command(LaunchTarget("/tmp/x")) == expected

    @pytest.mark.asyncio
    async def test_launch_does_not_wait_for_program(self):
        """Test launch returns without awaiting the program."""
        process = AsyncMock()
        with patch("asyncio.create_subprocess_exec") as mock_exec:
            mock_exec.return_value = process

            launched = await LinuxLauncher().launch(LaunchTarget("/tmp/x"))

        assert launched
        args = mock_exec.call_args.args
        assert args == ("xterm", "-e", "/tmp/x")

    @pytest.mark.asyncio
    async def test_missing_terminal_reports_not_launched(self):
        """Test a missing terminal is logged, not raised."""
        with patch("asyncio.create_subprocess_exec") as mock_exec:
            mock_exec.side_effect = FileNotFoundError(2, "No such file or directory")

            launched = await LinuxLauncher().launch(LaunchTarget("/tmp/x"))

        assert not launched


class TestUnsupportedLauncher:
    """Tests for UnsupportedLauncher."""

    @pytest.mark.asyncio
    async def test_launch_is_noop(self):
        """Test nothing is spawned."""
        with patch("asyncio.create_subprocess_exec") as mock_exec:
            launched = await UnsupportedLauncher().launch(LaunchTarget("/tmp/x"))

        assert not launched
        mock_exec.assert_not_called()
