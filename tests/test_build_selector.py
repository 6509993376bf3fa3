"""Tests for project selection."""

from unittest.mock import AsyncMock

import pytest

from crun_mcp.build.selector import ProjectSelector
from crun_mcp.build.state import Project
from crun_mcp.errors import NoProjectsToBuildError, SelectionCancelledError


class TestProject:
    """Tests for Project."""

    def test_name_is_basename(self):
        """Test display name is the directory name."""
        assert Project("/work/app").name == "app"
        assert Project("/work/app/").name == "app"

    def test_to_dict(self):
        """Test dictionary form."""
        assert Project("/work/app").to_dict() == {"name": "app", "rootPath": "/work/app"}


class TestProjectSelector:
    """Tests for ProjectSelector.select."""

    def test_starts_unset(self):
        """Test there is no current project at startup."""
        assert ProjectSelector().current is None

    @pytest.mark.asyncio
    async def test_no_candidates(self):
        """Test zero candidates is reported and nothing is selected."""
        selector = ProjectSelector()
        chooser = AsyncMock()

        with pytest.raises(NoProjectsToBuildError):
            await selector.select([], chooser)

        chooser.assert_not_called()
        assert selector.current is None

    @pytest.mark.asyncio
    async def test_single_candidate_no_prompt(self):
        """Test one candidate is selected without asking."""
        selector = ProjectSelector()
        chooser = AsyncMock()
        project = Project("/work/app")

        chosen = await selector.select([project], chooser)

        assert chosen == project
        assert selector.current == project
        chooser.assert_not_called()

    @pytest.mark.asyncio
    async def test_several_candidates_prompts_once(self):
        """Test the chooser is shown all candidates and its answer is kept."""
        selector = ProjectSelector()
        a, b = Project("/work/A"), Project("/work/B")
        chooser = AsyncMock(return_value=b)

        chosen = await selector.select([a, b], chooser)

        assert chosen == b
        assert selector.current == b
        chooser.assert_awaited_once()
        assert list(chooser.call_args.args[0]) == [a, b]

    @pytest.mark.asyncio
    async def test_choice_outside_candidates_asks_again(self):
        """Test an answer that is not a candidate is rejected."""
        selector = ProjectSelector()
        a, b = Project("/work/A"), Project("/work/B")
        chooser = AsyncMock(side_effect=[Project("/elsewhere"), a])

        chosen = await selector.select([a, b], chooser)

        assert chosen == a
        assert chooser.await_count == 2

    @pytest.mark.asyncio
    async def test_declined_prompt(self):
        """Test declining keeps the previous current project."""
        selector = ProjectSelector()
        a, b = Project("/work/A"), Project("/work/B")
        await selector.select([a], AsyncMock())

        with pytest.raises(SelectionCancelledError):
            await selector.select([a, b], AsyncMock(return_value=None))

        assert selector.current == a

    @pytest.mark.asyncio
    async def test_selection_overwrites_current(self):
        """Test each completed selection replaces the current project."""
        selector = ProjectSelector()
        a, b = Project("/work/A"), Project("/work/B")

        await selector.select([a, b], AsyncMock(return_value=a))
        await selector.select([a, b], AsyncMock(return_value=b))

        assert selector.current == b
