"""Action manager - runs the compile and build pipelines.

compile: resolve toolchain → build arguments → run compiler → launch
build:   select project → run make

Only one action runs at a time; overlapping triggers are rejected.
"""

from __future__ import annotations

import asyncio
import logging
import os
import time
from collections.abc import Sequence

from ..build import BuildOutcome, BuildRequest, BuildRunner, Project, ProjectChooser, ProjectSelector
from ..compile import (
    CompileRequest,
    CompileResult,
    CompileRunner,
    Language,
    LaunchTarget,
    ToolchainConfig,
    build_arguments,
    compiled_path,
    detect_language,
    resolve_toolchain,
)
from ..config import RunConfig
from ..errors import (
    ActionInProgressError,
    CompileError,
    NoFileOpenError,
    OutputOverwritesSourceError,
)
from ..launch import Launcher, select_launcher

logger = logging.getLogger(__name__)


class ActionManager:
    """Owns configuration, launcher and project selection for all actions."""

    def __init__(
        self,
        config: RunConfig | None = None,
        launcher: Launcher | None = None,
        compile_runner: CompileRunner | None = None,
        build_runner: BuildRunner | None = None,
        tmpdir: str | None = None,
    ):
        self._config = config or RunConfig()
        self._launcher = launcher or select_launcher(self._config)
        self._compile_runner = compile_runner or CompileRunner()
        self._build_runner = build_runner or BuildRunner(self._config.make_command)
        self._selector = ProjectSelector()
        self._tmpdir = tmpdir
        self._lock = asyncio.Lock()
        self._running: str | None = None
        self._last_compile: CompileResult | None = None
        self._last_build: BuildOutcome | None = None

    @property
    def config(self) -> RunConfig:
        """Read-only run configuration."""
        return self._config

    @property
    def launcher(self) -> Launcher:
        """Launcher selected for this platform."""
        return self._launcher

    @property
    def current_project(self) -> Project | None:
        """Project chosen by the last build action."""
        return self._selector.current

    @property
    def is_busy(self) -> bool:
        """Whether an action is running."""
        return self._lock.locked()

    @property
    def last_compile(self) -> CompileResult | None:
        """Result of the last completed compile."""
        return self._last_compile

    @property
    def last_build(self) -> BuildOutcome | None:
        """Outcome of the last successful build."""
        return self._last_build

    async def _acquire(self, action: str) -> None:
        if self._lock.locked():
            raise ActionInProgressError(self._running or "unknown")
        await self._lock.acquire()
        self._running = action

    def _release(self) -> None:
        self._running = None
        self._lock.release()

    def _prepare(
        self,
        source_path: str | None,
        language: str | None,
        debug: bool,
    ) -> tuple[CompileRequest, ToolchainConfig]:
        if not source_path:
            raise NoFileOpenError("No file is open")
        abs_path = os.path.abspath(source_path)
        if not os.path.isfile(abs_path):
            raise NoFileOpenError(f"Cannot find file: {source_path}")

        tag = language or detect_language(abs_path).value
        toolchain = resolve_toolchain(tag, self._config)
        request = CompileRequest(
            source_path=abs_path,
            language=Language(tag),
            debug=debug,
            extra_args=toolchain.extra_options,
        )
        return request, toolchain

    def make_request(
        self,
        source_path: str | None,
        language: str | None = None,
        debug: bool = False,
    ) -> CompileRequest:
        """Validate caller input into a compile request.

        Raises:
            NoFileOpenError: If no existing source file is given
            NoLanguageDetectedError: If the language cannot be detected
            UnsupportedLanguageError: If the language is not C or C++
        """
        request, _ = self._prepare(source_path, language, debug)
        return request

    async def compile(
        self,
        source_path: str | None,
        language: str | None = None,
        debug: bool = False,
    ) -> CompileResult:
        """Compile a source file and launch it on success.

        Args:
            source_path: Path of the source file
            language: "C" or "C++"; detected from the extension if omitted
            debug: Compile with debug symbols and launch under the debugger

        Returns:
            Compile result (success or success with warnings)

        Raises:
            RunError: Any error from the taxonomy; CompileError on a failed compile
        """
        await self._acquire("debug" if debug else "compile")
        try:
            request, toolchain = self._prepare(source_path, language, debug)
            output = compiled_path(
                request.source_path,
                to_tmpdir=self._config.compile_to_tmpdir,
                tmpdir=self._tmpdir,
            )
            if os.path.normcase(os.path.abspath(output)) == os.path.normcase(request.source_path):
                raise OutputOverwritesSourceError(request.source_path)
            args = build_arguments(
                request.source_path, output, request.debug, request.extra_args
            )

            start_time = time.perf_counter()
            outcome = await self._compile_runner.run(toolchain.compiler, args)
            duration = (time.perf_counter() - start_time) * 1000

            if not outcome.succeeded:
                raise CompileError(outcome.stderr, outcome.exit_code)

            result = CompileResult(
                request=request,
                output_path=output,
                command=toolchain.compiler,
                arguments=args,
                outcome=outcome,
                show_warnings=self._config.show_warnings,
                duration_ms=duration,
            )

            if self._config.run_after_compile:
                result.launched = await self._launcher.launch(
                    LaunchTarget(binary_path=output, debug=request.debug)
                )

            self._last_compile = result
            return result
        finally:
            self._release()

    async def select_project(
        self,
        candidates: Sequence[Project],
        chooser: ProjectChooser,
    ) -> Project:
        """Choose the current project without building it."""
        return await self._selector.select(candidates, chooser)

    async def build(
        self,
        candidates: Sequence[Project],
        chooser: ProjectChooser,
        target: str = "",
    ) -> BuildOutcome:
        """Select a project and run make in it.

        Args:
            candidates: Workspace projects
            chooser: Asks the user to pick when there are several projects
            target: Make target, empty for the default target

        Returns:
            Successful build outcome

        Raises:
            RunError: NoProjectsToBuild, SelectionCancelled, NoMakefile,
                MakeNotFound or BuildFailure
        """
        await self._acquire("build")
        try:
            project = await self._selector.select(candidates, chooser)
            request = BuildRequest(project=project, target=target)
            outcome = await self._build_runner.build(request.project, request.target)
            self._last_build = outcome
            return outcome
        finally:
            self._release()
