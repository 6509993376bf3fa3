"""Compile, run, debug and build C/C++ code through MCP tools."""

__version__ = "0.1.0"
