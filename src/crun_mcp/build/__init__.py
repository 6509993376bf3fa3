"""Project build orchestration.

Provides:
- Project selection across several workspace roots
- Makefile detection and make availability probing
- make execution with exit status reporting
"""

from .runner import BuildRunner, has_makefile
from .selector import ProjectChooser, ProjectSelector
from .state import MAKEFILE_NAME, BuildOutcome, BuildRequest, Project

__all__ = [
    "BuildRunner",
    "has_makefile",
    "ProjectChooser",
    "ProjectSelector",
    "MAKEFILE_NAME",
    "BuildOutcome",
    "BuildRequest",
    "Project",
]
