"""Platform launchers for compiled programs.

Launches are fire-and-forget: the program runs in its own terminal and is
never awaited. A background task only reaps the terminal process.
"""

from __future__ import annotations

import asyncio
import logging
import subprocess
import sys
from abc import ABC, abstractmethod
from typing import Any, Final

from ..compile.state import LaunchTarget
from ..config import LinuxTerminal, RunConfig

logger = logging.getLogger(__name__)

# subprocess only defines this on Windows
CREATE_NEW_CONSOLE: Final[int] = getattr(subprocess, "CREATE_NEW_CONSOLE", 0x00000010)

# Flag after which each terminal takes the command to execute
TERMINAL_EXEC_FLAGS: Final[dict[LinuxTerminal, str]] = {
    LinuxTerminal.DEFAULT: "-e",
    LinuxTerminal.GNOME: "--",
    LinuxTerminal.KONSOLE: "-e",
    LinuxTerminal.XFCE: "-x",
    LinuxTerminal.XTERM: "-e",
}


class Launcher(ABC):
    """Starts a compiled program, plain or under a debugger."""

    platform_name: str = "unknown"

    def __init__(self, debugger: str = "gdb"):
        self._debugger = debugger
        self._reapers: set[asyncio.Task] = set()

    @property
    def supported(self) -> bool:
        """Whether this launcher can start programs at all."""
        return True

    @abstractmethod
    def get_command(self, target: LaunchTarget) -> list[str]:
        """Build the command line that opens a terminal running the target."""

    def _spawn_options(self) -> dict[str, Any]:
        """Extra keyword arguments for create_subprocess_exec."""
        return {}

    async def _reap(self, process: asyncio.subprocess.Process) -> None:
        try:
            await process.wait()
        except Exception as e:
            logger.debug(f"Failed to reap launcher process: {e}")

    async def launch(self, target: LaunchTarget) -> bool:
        """Start the target without waiting for it.

        Returns:
            True if the terminal process was started
        """
        command = self.get_command(target)
        logger.info(f"Launching: {' '.join(command)}")
        try:
            process = await asyncio.create_subprocess_exec(
                *command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
                **self._spawn_options(),
            )
        except OSError as e:
            logger.warning(f"Failed to launch {target.binary_path}: {e}")
            return False

        task = asyncio.create_task(self._reap(process))
        self._reapers.add(task)
        task.add_done_callback(self._reapers.discard)
        return True


class WindowsLauncher(Launcher):
    """Opens a new console window for the program."""

    platform_name = "windows"

    def get_command(self, target: LaunchTarget) -> list[str]:
        if target.debug:
            return [self._debugger, target.binary_path]
        # Keep the console open after the program exits
        return ["cmd", "/C", f'"{target.binary_path}" & pause']

    def _spawn_options(self) -> dict[str, Any]:
        return {"creationflags": CREATE_NEW_CONSOLE}


class LinuxLauncher(Launcher):
    """Runs the program inside a terminal emulator."""

    platform_name = "linux"

    def __init__(
        self,
        terminal: LinuxTerminal = LinuxTerminal.XTERM,
        debugger: str = "gdb",
    ):
        super().__init__(debugger)
        self._terminal = terminal

    @property
    def terminal(self) -> LinuxTerminal:
        """Terminal emulator in use."""
        return self._terminal

    def get_command(self, target: LaunchTarget) -> list[str]:
        command = [self._terminal.value, TERMINAL_EXEC_FLAGS[self._terminal]]
        if target.debug:
            command.append(self._debugger)
        command.append(target.binary_path)
        return command


class UnsupportedLauncher(Launcher):
    """Placeholder for platforms without a launch mechanism."""

    @property
    def supported(self) -> bool:
        return False

    def get_command(self, target: LaunchTarget) -> list[str]:
        return []

    async def launch(self, target: LaunchTarget) -> bool:
        logger.warning(
            f"Launching programs is not supported on {self.platform_name}; "
            f"run {target.binary_path} manually"
        )
        return False


def select_launcher(config: RunConfig, platform: str | None = None) -> Launcher:
    """Pick the launcher for the running platform.

    Args:
        config: Run configuration (terminal and debugger)
        platform: Platform string, defaults to sys.platform

    Returns:
        Launcher instance
    """
    platform = platform or sys.platform
    if platform.startswith(("win32", "cygwin")):
        return WindowsLauncher(debugger=config.debugger)
    if platform.startswith("linux"):
        return LinuxLauncher(terminal=config.linux_terminal, debugger=config.debugger)
    launcher = UnsupportedLauncher(debugger=config.debugger)
    launcher.platform_name = platform
    return launcher
