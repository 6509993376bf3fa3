"""Compile requests, outcomes and per-action results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..errors import format_message
from .toolchain import Language


class CompileClassification(str, Enum):
    """Three-way outcome bucket of a compiler run."""

    SUCCESS = "success"
    SUCCESS_WITH_WARNING = "success_with_warning"
    ERROR = "error"


def classify(exit_code: int, stderr: str) -> CompileClassification:
    """Classify a compiler run from its exit status and error stream."""
    if exit_code != 0:
        return CompileClassification.ERROR
    if stderr:
        return CompileClassification.SUCCESS_WITH_WARNING
    return CompileClassification.SUCCESS


@dataclass(frozen=True)
class CompileRequest:
    """One compile invocation."""

    source_path: str
    language: Language
    debug: bool = False
    extra_args: tuple[str, ...] = ()


@dataclass(frozen=True)
class CompileOutcome:
    """Terminal state of one compiler process."""

    exit_code: int
    stderr: str = ""
    classification: CompileClassification = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "classification", classify(self.exit_code, self.stderr))

    @property
    def succeeded(self) -> bool:
        """Whether a binary was produced."""
        return self.classification != CompileClassification.ERROR


@dataclass(frozen=True)
class LaunchTarget:
    """Binary to start after a successful compile."""

    binary_path: str
    debug: bool = False


@dataclass
class CompileResult:
    """Report of one compile action."""

    request: CompileRequest
    output_path: str
    command: str
    arguments: list[str]
    outcome: CompileOutcome
    launched: bool = False
    show_warnings: bool = True
    duration_ms: float = 0.0

    @property
    def warning(self) -> str | None:
        """Display-safe warning text, if warnings are to be shown."""
        if (
            self.show_warnings
            and self.outcome.classification == CompileClassification.SUCCESS_WITH_WARNING
        ):
            return format_message(self.outcome.stderr)
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "success": self.outcome.succeeded,
            "classification": self.outcome.classification.value,
            "source": self.request.source_path,
            "language": self.request.language.value,
            "debug": self.request.debug,
            "output": self.output_path,
            "command": [self.command, *self.arguments],
            "exitCode": self.outcome.exit_code,
            "launched": self.launched,
            "durationMs": round(self.duration_ms, 2),
        }
        if self.warning:
            result["warning"] = self.warning
        return result

    def to_summary(self) -> str:
        """Generate human-readable summary."""
        if self.outcome.classification == CompileClassification.ERROR:
            status = "[FAILED] Compilation failed"
        elif self.outcome.classification == CompileClassification.SUCCESS_WITH_WARNING:
            status = "[OK] Compiled with warnings"
        else:
            status = "[OK] Compiled"

        parts = [
            status,
            f"  Source: {self.request.source_path}",
            f"  Output: {self.output_path}",
            f"  Duration: {self.duration_ms:.0f}ms",
        ]
        if self.launched:
            parts.append("  Launched under debugger" if self.request.debug else "  Launched")
        return "\n".join(parts)
