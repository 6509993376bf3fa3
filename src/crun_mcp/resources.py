"""MCP Resources for configuration and action state."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mcp.server.fastmcp import FastMCP

    from .session import ActionManager


def register_resources(server: FastMCP, manager: ActionManager) -> None:
    """Register MCP resources."""

    @server.resource("crun://config", mime_type="application/json")
    async def config_resource() -> str:
        """
        Compiler, launch and build configuration.
        """
        return json.dumps(manager.config.to_dict(), indent=2)

    @server.resource("crun://last-result", mime_type="application/json")
    async def last_result_resource() -> str:
        """
        Last compile result and last build outcome.
        Updates when: a compile or build action completes.
        """
        result = {
            "compile": manager.last_compile.to_dict() if manager.last_compile else None,
            "build": manager.last_build.to_dict() if manager.last_build else None,
        }
        return json.dumps(result, indent=2)

    @server.resource("crun://current-project", mime_type="application/json")
    async def current_project_resource() -> str:
        """
        Project chosen by the last build or selection.
        """
        project = manager.current_project
        return json.dumps(project.to_dict() if project else None, indent=2)
