"""Project selection for workspaces with several project roots."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from ..errors import NoProjectsToBuildError, SelectionCancelledError
from .state import Project

logger = logging.getLogger(__name__)

# Receives the candidates, returns the chosen one or None when the user declines
ProjectChooser = Callable[[Sequence[Project]], Awaitable["Project | None"]]


class ProjectSelector:
    """Chooses the current project and remembers it.

    Only one selection runs at a time; the choice is overwritten by the
    next completed selection.
    """

    def __init__(self) -> None:
        self._current: Project | None = None
        self._lock = asyncio.Lock()

    @property
    def current(self) -> Project | None:
        """Project chosen by the last completed selection."""
        return self._current

    async def select(
        self,
        candidates: Sequence[Project],
        chooser: ProjectChooser,
    ) -> Project:
        """Select one project from the candidates.

        Args:
            candidates: Workspace projects
            chooser: Asks the user to pick one of several candidates

        Returns:
            The selected project, now also the current one

        Raises:
            NoProjectsToBuildError: If there are no candidates
            SelectionCancelledError: If the user declines to choose
        """
        if not candidates:
            raise NoProjectsToBuildError()

        if len(candidates) == 1:
            self._current = candidates[0]
            logger.info(f"Selected only project: {self._current.root_path}")
            return self._current

        async with self._lock:
            while True:
                chosen = await chooser(candidates)
                if chosen is None:
                    raise SelectionCancelledError("Project selection cancelled")
                if chosen in candidates:
                    break
                logger.warning(f"Rejected choice outside candidates: {chosen}")

            self._current = chosen
            logger.info(f"Selected project: {chosen.root_path}")
            return chosen
