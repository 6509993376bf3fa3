"""Compile pipeline for C and C++ source files.

- Toolchain resolution per language tag
- Compiler argument construction
- Compiler process runner with stderr capture and outcome classification
"""

from .runner import CompileRunner
from .state import (
    CompileClassification,
    CompileOutcome,
    CompileRequest,
    CompileResult,
    LaunchTarget,
    classify,
)
from .toolchain import (
    Language,
    ToolchainConfig,
    build_arguments,
    compiled_path,
    detect_language,
    resolve_toolchain,
    split_options,
    temp_directory,
)

__all__ = [
    "CompileRunner",
    "CompileClassification",
    "CompileOutcome",
    "CompileRequest",
    "CompileResult",
    "LaunchTarget",
    "classify",
    "Language",
    "ToolchainConfig",
    "build_arguments",
    "compiled_path",
    "detect_language",
    "resolve_toolchain",
    "split_options",
    "temp_directory",
]
