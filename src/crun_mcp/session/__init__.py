"""Action orchestration."""

from .manager import ActionManager

__all__ = ["ActionManager"]
