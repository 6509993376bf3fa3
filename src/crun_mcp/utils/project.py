"""Workspace project discovery.

Candidate project roots come from, in priority order:
1. MCP Roots from client (via ctx.session.list_roots())
2. ``--project`` paths given at startup
3. The ``CRUN_PROJECTS`` environment variable (os.pathsep separated)
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

from ..build import Project

if TYPE_CHECKING:
    from mcp.server.fastmcp import Context

logger = logging.getLogger(__name__)

PROJECTS_ENV_VAR = "CRUN_PROJECTS"


@dataclass
class WorkspaceConfig:
    """Project roots configured at startup."""

    project_paths: list[Path] = field(default_factory=list)
    """Explicit project paths from --project flags."""

    env_var_name: str = PROJECTS_ENV_VAR
    """Environment variable listing project roots."""


# Global configuration (set at startup)
_config: WorkspaceConfig = WorkspaceConfig()


def configure_workspace(project_paths: list[str] | None = None) -> None:
    """Record the --project paths. Called once at server startup."""
    global _config
    _config = WorkspaceConfig(project_paths=[Path(p) for p in project_paths or []])
    logger.debug(f"Workspace configured: {_config.project_paths}")


def get_config() -> WorkspaceConfig:
    """Get current workspace configuration."""
    return _config


def parse_file_uri(uri: str) -> Path | None:
    """Parse a file:// URI to a Path.

    Handles platform-specific path formats:
    - Unix: file:///home/user/project → /home/user/project
    - Windows: file:///C:/Users/project → C:\\Users\\project

    Args:
        uri: A file:// URI string

    Returns:
        Path object if parsing succeeds, None otherwise
    """
    parsed = urlparse(str(uri))
    if parsed.scheme != "file":
        logger.warning(f"Not a file URI: {uri}")
        return None

    path_str = unquote(parsed.path)

    if sys.platform == "win32":
        # file:///C:/path → parsed.path = "/C:/path"
        if path_str.startswith("/") and len(path_str) > 2 and path_str[2] == ":":
            path_str = path_str[1:]
        if parsed.netloc:
            path_str = f"\\\\{parsed.netloc}{path_str}"

    path = Path(path_str)
    if not path.is_absolute():
        logger.warning(f"Parsed path is not absolute: {path}")
        return None
    return path


def _unique_projects(paths: list[Path]) -> list[Project]:
    """Keep existing directories, drop duplicates, preserve order."""
    projects: list[Project] = []
    seen: set[str] = set()
    for path in paths:
        if not path.is_dir():
            logger.warning(f"Project root is not a directory: {path}")
            continue
        root = os.path.abspath(path)
        key = os.path.normcase(root)
        if key not in seen:
            seen.add(key)
            projects.append(Project(root_path=root))
    return projects


def get_configured_projects() -> list[Project]:
    """Projects from --project flags and the environment."""
    config = get_config()
    paths = list(config.project_paths)
    env_value = os.environ.get(config.env_var_name)
    if env_value:
        paths.extend(Path(p) for p in env_value.split(os.pathsep) if p)
    return _unique_projects(paths)


async def get_workspace_projects(ctx: Context | None = None) -> list[Project]:
    """Determine the candidate projects for a build.

    Client roots win when the client provides any; otherwise the
    configured projects are used.

    Args:
        ctx: MCP Context for accessing client-provided roots

    Returns:
        Candidate projects, possibly empty
    """
    if ctx is not None:
        try:
            result = await ctx.session.list_roots()
            uris = [str(root.uri) for root in result.roots]
            logger.info(f"MCP list_roots() returned {len(uris)} roots")
            paths = [p for p in (parse_file_uri(uri) for uri in uris) if p is not None]
            projects = _unique_projects(paths)
            if projects:
                return projects
        except Exception as e:
            # Client may not support roots
            logger.info(f"Could not get roots from client: {e}")

    return get_configured_projects()
