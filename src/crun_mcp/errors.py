"""Errors reported by compile, launch and build actions.

Every error is terminal for the action that raised it. The server turns
them into tool results instead of letting them escape.
"""

from __future__ import annotations

from typing import Any


def format_message(text: str) -> str:
    """Return text with line breaks replaced by an explicit break marker."""
    return text.replace("\n", "<br />")


class RunError(Exception):
    """Base exception for compile and build actions."""

    code = "run_error"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"error": format_message(str(self)), "code": self.code}


class NoFileOpenError(RunError):
    """Raised when no source file is given to a compile action."""

    code = "no_file_open"


class NoLanguageDetectedError(RunError):
    """Raised when the source file has no resolvable language tag."""

    code = "no_language_detected"


class UnsupportedLanguageError(RunError):
    """Raised when the language tag is neither C nor C++."""

    code = "unsupported_language"

    def __init__(self, language: str | None):
        super().__init__(f"Language not supported: {language}")
        self.language = language


class CompilerSpawnFailureError(RunError):
    """Raised when the compiler executable cannot be started at all."""

    code = "compiler_spawn_failure"

    def __init__(self, command: str, reason: str):
        super().__init__(f"Cannot run compiler '{command}': {reason}")
        self.command = command


class OutputOverwritesSourceError(RunError):
    """Raised when the derived binary path is the source file itself."""

    code = "output_overwrites_source"

    def __init__(self, source_path: str):
        super().__init__(f"Output binary would overwrite the source file: {source_path}")
        self.source_path = source_path


class CompileError(RunError):
    """Compiler exited with a nonzero status."""

    code = "compile_error"

    def __init__(self, stderr: str, exit_code: int):
        super().__init__(stderr or f"Compiler exited with code {exit_code}")
        self.stderr = stderr
        self.exit_code = exit_code

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["exitCode"] = self.exit_code
        return result


class CompileWarning(RunError):
    """Compiler succeeded but wrote diagnostics to stderr.

    Never raised; carried on a successful result when warnings are shown.
    """

    code = "compile_warning"


class NoProjectsToBuildError(RunError):
    """Raised when a build is triggered with no workspace projects."""

    code = "no_projects_to_build"

    def __init__(self, message: str = "No projects to build"):
        super().__init__(message)


class SelectionCancelledError(RunError):
    """Raised when the user declines to choose a project."""

    code = "selection_cancelled"


class NoMakefileError(RunError):
    """Raised when the project root has no Makefile."""

    code = "no_makefile"

    def __init__(self, root_path: str):
        super().__init__(f"No Makefile found in {root_path}")
        self.root_path = root_path


class MakeNotFoundError(RunError):
    """Raised when the make tool is not available."""

    code = "make_not_found"

    def __init__(self, command: str):
        super().__init__(f"'{command}' is not available on this system")
        self.command = command


class BuildFailureError(RunError):
    """Raised when make exits with a nonzero status."""

    code = "build_failure"

    def __init__(self, project_path: str, exit_code: int):
        super().__init__(f"Build failed in {project_path} (exit code {exit_code})")
        self.project_path = project_path
        self.exit_code = exit_code

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["exitCode"] = self.exit_code
        return result


class ActionInProgressError(RunError):
    """Raised when an action is triggered while another one is running."""

    code = "action_in_progress"

    def __init__(self, running: str):
        super().__init__(f"Another action is already running: {running}")
        self.running = running
