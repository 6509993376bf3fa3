"""Project and build result types."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

MAKEFILE_NAME = "Makefile"


@dataclass(frozen=True)
class Project:
    """A workspace project root."""

    root_path: str

    @property
    def name(self) -> str:
        """Display name shown when choosing between projects."""
        return os.path.basename(os.path.normpath(self.root_path)) or self.root_path

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {"name": self.name, "rootPath": self.root_path}


@dataclass(frozen=True)
class BuildRequest:
    """One make invocation for a project."""

    project: Project
    target: str = ""


@dataclass
class BuildOutcome:
    """Result of a make run."""

    success: bool
    project_path: str
    target: str
    command: list[str]
    exit_code: int
    duration_ms: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "success": self.success,
            "projectPath": self.project_path,
            "target": self.target or None,
            "command": self.command,
            "exitCode": self.exit_code,
            "durationMs": round(self.duration_ms, 2),
        }

    def to_summary(self) -> str:
        """Generate human-readable summary."""
        status = "[OK] Build succeeded" if self.success else "[FAILED] Build failed"
        return "\n".join(
            [
                status,
                f"  Project: {self.project_path}",
                f"  Target: {self.target or '(default)'}",
                f"  Duration: {self.duration_ms:.0f}ms",
            ]
        )
