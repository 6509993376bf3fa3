"""Run configuration.

Loaded once at startup from ``CRUN_*`` environment variables and CLI flags;
read-only afterwards.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Any, Mapping

logger = logging.getLogger(__name__)

ENV_PREFIX = "CRUN_"

TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
FALSE_VALUES = frozenset({"0", "false", "no", "off"})


class LinuxTerminal(str, Enum):
    """Terminal emulators the Linux launcher knows how to drive."""

    DEFAULT = "x-terminal-emulator"
    GNOME = "gnome-terminal"
    KONSOLE = "konsole"
    XFCE = "xfce4-terminal"
    XTERM = "xterm"


def default_make_command(platform: str | None = None) -> str:
    """Return the make executable name for a platform."""
    platform = platform or sys.platform
    if platform.startswith(("win32", "cygwin")):
        return "mingw32-make"
    return "make"


def parse_bool(value: str) -> bool:
    """Parse a boolean environment value.

    Raises:
        ValueError: If the value is not a recognised boolean
    """
    lowered = value.strip().lower()
    if lowered in TRUE_VALUES:
        return True
    if lowered in FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


@dataclass(frozen=True)
class RunConfig:
    """User configuration for compile, launch and build actions."""

    c_compiler: str = "gcc"
    cpp_compiler: str = "g++"
    c_compiler_options: str = ""
    cpp_compiler_options: str = ""
    run_after_compile: bool = True
    show_warnings: bool = True
    compile_to_tmpdir: bool = True
    linux_terminal: LinuxTerminal = LinuxTerminal.XTERM
    debugger: str = "gdb"
    make_command: str = ""

    def __post_init__(self) -> None:
        """Coerce the terminal name and fill in the platform make command."""
        if not isinstance(self.linux_terminal, LinuxTerminal):
            object.__setattr__(self, "linux_terminal", LinuxTerminal(self.linux_terminal))
        if not self.make_command:
            object.__setattr__(self, "make_command", default_make_command())

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        **overrides: Any,
    ) -> RunConfig:
        """Build configuration from ``CRUN_<OPTION>`` variables.

        Keyword overrides that are not None win over the environment.

        Raises:
            ValueError: If a variable holds an invalid value
        """
        environ = os.environ if environ is None else environ
        values: dict[str, Any] = {}

        for f in fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            if f.type in ("bool", bool):
                values[f.name] = parse_bool(raw)
            else:
                values[f.name] = raw

        values.update({k: v for k, v in overrides.items() if v is not None})
        config = cls(**values)
        logger.debug(f"Loaded configuration: {config.to_dict()}")
        return config

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = asdict(self)
        result["linux_terminal"] = self.linux_terminal.value
        return result
