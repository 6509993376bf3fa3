"""Launch dispatch for compiled programs."""

from .launcher import (
    Launcher,
    LinuxLauncher,
    UnsupportedLauncher,
    WindowsLauncher,
    select_launcher,
)

__all__ = [
    "Launcher",
    "LinuxLauncher",
    "UnsupportedLauncher",
    "WindowsLauncher",
    "select_launcher",
]
