"""MCP Server for compiling, running and building C/C++ code."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from mcp.server.fastmcp import Context, FastMCP
from pydantic import AnyUrl, BaseModel, Field, create_model

from .build import Project, ProjectChooser
from .config import RunConfig
from .errors import CompileWarning, RunError, format_message
from .resources import register_resources
from .session import ActionManager
from .utils.project import get_workspace_projects

logger = logging.getLogger(__name__)

# Global action manager (single client mode)
_manager: ActionManager | None = None
_initial_config: RunConfig | None = None


def get_manager() -> ActionManager:
    """Get or create the action manager."""
    global _manager
    if _manager is None:
        _manager = ActionManager(_initial_config)
    return _manager


def choice_labels(candidates: Sequence[Project]) -> list[str]:
    """Labels offered to the user: project names, or root paths if names clash."""
    names = [p.name for p in candidates]
    if len(set(names)) == len(names):
        return names
    return [p.root_path for p in candidates]


def make_choice_schema(candidates: Sequence[Project]) -> type[BaseModel]:
    """Build an elicitation form whose only field enumerates the candidates."""
    return create_model(
        "ProjectChoice",
        project=(
            str,
            Field(
                description="Project to build",
                json_schema_extra={"enum": choice_labels(candidates)},
            ),
        ),
    )


def describe_choices(candidates: Sequence[Project]) -> str:
    """List the candidates as 'name (path)' lines."""
    return "\n".join(f"- {p.name} ({p.root_path})" for p in candidates)


def match_choice(answer: str, candidates: Sequence[Project]) -> Project | None:
    """Find the candidate a user answer refers to, by name or root path."""
    answer = answer.strip()
    for project in candidates:
        if answer == project.root_path:
            return project
    matches = [p for p in candidates if p.name == answer]
    if len(matches) == 1:
        return matches[0]
    return None


def make_elicitation_chooser(ctx: Context) -> ProjectChooser:
    """Build a chooser that asks the MCP client's user to pick a project."""

    async def choose(candidates: Sequence[Project]) -> Project | None:
        result = await ctx.elicit(
            message="Select the project to build:\n" + describe_choices(candidates),
            schema=make_choice_schema(candidates),
        )
        if result.action != "accept":
            return None
        chosen = match_choice(result.data.project, candidates)
        if chosen is None:
            # Not one of the candidates; the selector asks again
            return Project(root_path=result.data.project)
        return chosen

    return choose


def error_result(e: Exception) -> dict:
    """Turn an exception into a tool error payload."""
    if isinstance(e, RunError):
        return {"success": False, **e.to_dict()}
    logger.exception("Unexpected tool error")
    return {"success": False, "error": format_message(str(e))}


def create_server(config: RunConfig | None = None) -> FastMCP:
    """Create and configure the MCP server.

    Args:
        config: Run configuration; loaded from the environment if omitted
    """
    global _initial_config, _manager
    _initial_config = config or RunConfig.from_env()
    _manager = None
    mcp = FastMCP("crun-mcp")
    manager = get_manager()

    async def notify_result_changed(ctx: Context) -> None:
        """Notify client that crun://last-result has changed."""
        try:
            if ctx.session:
                await ctx.session.send_resource_updated(AnyUrl("crun://last-result"))
        except Exception:
            pass  # Notification failure shouldn't break the tool

    async def notify_project_changed(ctx: Context) -> None:
        """Notify client that crun://current-project has changed."""
        try:
            if ctx.session:
                await ctx.session.send_resource_updated(AnyUrl("crun://current-project"))
        except Exception:
            pass

    async def notify_warning(ctx: Context, text: str) -> None:
        """Send compiler warnings to the client log."""
        try:
            await ctx.warning(text)
        except Exception:
            pass

    async def run_compile(
        ctx: Context, path: str, language: str | None, debug: bool
    ) -> dict:
        try:
            result = await manager.compile(path, language, debug=debug)
            await notify_result_changed(ctx)
            response = {
                "success": True,
                "data": result.to_dict(),
                "summary": result.to_summary(),
            }
            if result.warning:
                warning = CompileWarning(result.outcome.stderr).to_dict()
                response["warning"] = warning
                await notify_warning(ctx, warning["error"])
            return response
        except Exception as e:
            return error_result(e)

    # ============== Compile Tools ==============

    @mcp.tool()
    async def compile_file(ctx: Context, path: str, language: str | None = None) -> dict:
        """
        Compile a C or C++ source file and run the resulting program.

        The program is started in a new terminal window when run_after_compile
        is enabled. Compiler errors are returned as the error text; warnings are
        returned in the "warning" field when show_warnings is enabled.

        Args:
            path: Absolute path to the source file
            language: "C" or "C++" (detected from the file extension if omitted)
        """
        return await run_compile(ctx, path, language, debug=False)

    @mcp.tool()
    async def debug_file(ctx: Context, path: str, language: str | None = None) -> dict:
        """
        Compile a C or C++ source file with debug symbols and start it under the debugger.

        Args:
            path: Absolute path to the source file
            language: "C" or "C++" (detected from the file extension if omitted)
        """
        return await run_compile(ctx, path, language, debug=True)

    # ============== Build Tools ==============

    @mcp.tool()
    async def build_project(ctx: Context, target: str = "") -> dict:
        """
        Build a workspace project with make.

        With several workspace projects the user is asked to choose one.
        The project root must contain a file named exactly "Makefile".

        Args:
            target: Make target (default target if empty)
        """
        previous = manager.current_project
        try:
            candidates = await get_workspace_projects(ctx)
            outcome = await manager.build(
                candidates, make_elicitation_chooser(ctx), target=target
            )
            await notify_result_changed(ctx)
            return {
                "success": True,
                "data": outcome.to_dict(),
                "summary": outcome.to_summary(),
            }
        except Exception as e:
            return error_result(e)
        finally:
            # The selection sticks even when make fails afterwards
            if manager.current_project != previous:
                await notify_project_changed(ctx)

    @mcp.tool()
    async def select_project(ctx: Context) -> dict:
        """Choose the current project without building it."""
        try:
            candidates = await get_workspace_projects(ctx)
            project = await manager.select_project(
                candidates, make_elicitation_chooser(ctx)
            )
            await notify_project_changed(ctx)
            return {"success": True, "data": project.to_dict()}
        except Exception as e:
            return error_result(e)

    @mcp.tool()
    async def list_projects(ctx: Context) -> dict:
        """List the workspace projects that can be built."""
        try:
            candidates = await get_workspace_projects(ctx)
            current = manager.current_project
            return {
                "success": True,
                "data": [
                    {**p.to_dict(), "current": p == current} for p in candidates
                ],
            }
        except Exception as e:
            return error_result(e)

    # ============== State Tools ==============

    @mcp.tool()
    async def get_config() -> dict:
        """Get the compiler, launch and build configuration."""
        return {"success": True, "data": manager.config.to_dict()}

    @mcp.tool()
    async def get_last_result() -> dict:
        """Get the last compile result and the last build outcome."""
        return {
            "success": True,
            "data": {
                "compile": manager.last_compile.to_dict() if manager.last_compile else None,
                "build": manager.last_build.to_dict() if manager.last_build else None,
                "busy": manager.is_busy,
            },
        }

    register_resources(mcp, manager)

    logger.info("crun MCP Server initialized")
    return mcp
