"""Utility modules for crun-mcp."""

from .project import (
    WorkspaceConfig,
    configure_workspace,
    get_configured_projects,
    get_workspace_projects,
    parse_file_uri,
)

__all__ = [
    "WorkspaceConfig",
    "configure_workspace",
    "get_configured_projects",
    "get_workspace_projects",
    "parse_file_uri",
]
