"""Compiler process runner.

Spawns the compiler, accumulates everything it writes to stderr and turns
its exit into a single CompileOutcome.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Sequence

from ..errors import CompilerSpawnFailureError
from .state import CompileOutcome

logger = logging.getLogger(__name__)

READ_CHUNK_BYTES: int = 4096


class CompileRunner:
    """Runs one compiler process per call."""

    async def _read_stream(self, stream: asyncio.StreamReader | None) -> str:
        """Read a stream to EOF, keeping chunk order."""
        if stream is None:
            return ""
        chunks: list[str] = []
        while True:
            data = await stream.read(READ_CHUNK_BYTES)
            if not data:
                break
            chunks.append(data.decode("utf-8", errors="replace"))
        return "".join(chunks)

    async def run(self, command: str, arguments: Sequence[str]) -> CompileOutcome:
        """Run the compiler and classify how it ended.

        Args:
            command: Compiler executable
            arguments: Argument vector from build_arguments()

        Returns:
            Compile outcome

        Raises:
            CompilerSpawnFailureError: If the compiler cannot be started
        """
        logger.info(f"Running: {command} {' '.join(arguments)}")
        try:
            # Never use shell=True (security)
            process = await asyncio.create_subprocess_exec(
                command,
                *arguments,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.warning(f"Failed to start compiler {command}: {e}")
            raise CompilerSpawnFailureError(command, e.strerror or str(e)) from e

        stderr = await self._read_stream(process.stderr)
        await process.wait()
        exit_code = process.returncode or 0

        outcome = CompileOutcome(exit_code=exit_code, stderr=stderr)
        logger.info(
            f"Compiler exited with code {exit_code} ({outcome.classification.value})"
        )
        return outcome
