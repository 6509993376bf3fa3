"""Make-based project builds.

Steps, each a hard stop on failure:
Makefile check → make availability probe → make run → exit status report.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time

from ..errors import BuildFailureError, MakeNotFoundError, NoMakefileError
from .state import MAKEFILE_NAME, BuildOutcome, Project

logger = logging.getLogger(__name__)


def has_makefile(root_path: str) -> bool:
    """Whether a file named exactly ``Makefile`` is listed in root_path."""
    try:
        entries = os.listdir(root_path)
    except OSError as e:
        logger.warning(f"Cannot list project directory {root_path}: {e}")
        return False
    return MAKEFILE_NAME in entries and os.path.isfile(
        os.path.join(root_path, MAKEFILE_NAME)
    )


class BuildRunner:
    """Runs make in a project root."""

    def __init__(self, make_command: str = "make"):
        self._make_command = make_command

    @property
    def make_command(self) -> str:
        """Make executable name."""
        return self._make_command

    async def is_make_available(self) -> bool:
        """Probe the make command with ``--version``."""
        try:
            process = await asyncio.create_subprocess_exec(
                self._make_command,
                "--version",
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            logger.debug(f"Make probe failed: {e}")
            return False
        await process.wait()
        return process.returncode == 0

    def get_command(self, target: str = "") -> list[str]:
        """Build the make command line."""
        if target:
            return [self._make_command, target]
        return [self._make_command]

    async def build(self, project: Project, target: str = "") -> BuildOutcome:
        """Build a project with make.

        Args:
            project: Selected project
            target: Make target, empty for the default target

        Returns:
            Successful build outcome

        Raises:
            NoMakefileError: If the project root has no Makefile
            MakeNotFoundError: If make is not available
            BuildFailureError: If make exits with a nonzero status
        """
        root = project.root_path
        if not has_makefile(root):
            raise NoMakefileError(root)

        if not await self.is_make_available():
            raise MakeNotFoundError(self._make_command)

        cmd = self.get_command(target)
        logger.info(f"Running: {' '.join(cmd)} (cwd: {root})")
        start_time = time.perf_counter()

        try:
            # Output is not captured; stdout belongs to the MCP transport
            process = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=root,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.DEVNULL,
            )
        except OSError as e:
            raise MakeNotFoundError(self._make_command) from e

        await process.wait()
        exit_code = process.returncode or 0
        duration = (time.perf_counter() - start_time) * 1000

        if exit_code != 0:
            logger.warning(f"Build failed in {root} with exit code {exit_code}")
            raise BuildFailureError(root, exit_code)

        logger.info(f"Build succeeded in {root} ({duration:.0f}ms)")
        return BuildOutcome(
            success=True,
            project_path=root,
            target=target,
            command=cmd,
            exit_code=exit_code,
            duration_ms=duration,
        )
