"""Toolchain resolution and compiler argument construction."""

from __future__ import annotations

import os
import sys
import tempfile
from dataclasses import dataclass
from enum import Enum
from typing import Final, Sequence

from ..config import RunConfig
from ..errors import NoLanguageDetectedError, UnsupportedLanguageError

DEBUG_FLAG: Final[str] = "-g"


class Language(str, Enum):
    """Languages with a configured toolchain."""

    C = "C"
    CPP = "C++"


# Case-sensitive: ".C" is C++ by convention, ".c" is C
_EXACT_EXTENSIONS: Final[dict[str, Language]] = {
    ".c": Language.C,
    ".C": Language.CPP,
}

_CPP_EXTENSIONS: Final[frozenset[str]] = frozenset(
    {".cpp", ".cc", ".cxx", ".c++", ".cp"}
)


@dataclass(frozen=True)
class ToolchainConfig:
    """Compiler command and extra options for one language."""

    compiler: str
    extra_options: tuple[str, ...] = ()


def split_options(options: str) -> tuple[str, ...]:
    """Split an options string on single spaces.

    No quoting or escaping is honoured. Empty tokens are kept here and
    dropped by build_arguments().
    """
    if not options:
        return ()
    return tuple(options.split(" "))


def detect_language(path: str) -> Language:
    """Detect the language of a source file from its extension.

    Raises:
        NoLanguageDetectedError: If the extension is not a C/C++ one
    """
    ext = os.path.splitext(path)[1]
    if ext in _EXACT_EXTENSIONS:
        return _EXACT_EXTENSIONS[ext]
    if ext.lower() in _CPP_EXTENSIONS:
        return Language.CPP
    raise NoLanguageDetectedError(f"Cannot detect language of {path}")


def resolve_toolchain(language: str | None, config: RunConfig) -> ToolchainConfig:
    """Map a language tag to its configured toolchain.

    Args:
        language: Language tag ("C" or "C++")
        config: Run configuration

    Returns:
        Toolchain for the language

    Raises:
        UnsupportedLanguageError: For any other tag, including None
    """
    if language == Language.C.value:
        return ToolchainConfig(config.c_compiler, split_options(config.c_compiler_options))
    if language == Language.CPP.value:
        return ToolchainConfig(
            config.cpp_compiler, split_options(config.cpp_compiler_options)
        )
    raise UnsupportedLanguageError(language)


def build_arguments(
    source_path: str,
    output_path: str,
    debug: bool = False,
    extra_options: Sequence[str] = (),
) -> list[str]:
    """Build the compiler argument vector.

    Order: source, ``-o``, output, debug flag (if any), extra options.
    Empty tokens are never emitted.
    """
    args = [source_path, "-o", output_path, DEBUG_FLAG if debug else "", *extra_options]
    return [arg for arg in args if arg]


def temp_directory(platform: str | None = None) -> str:
    """Return the directory compiled binaries are relocated into."""
    platform = platform or sys.platform
    if platform.startswith(("win32", "cygwin")):
        return os.environ.get("TEMP") or tempfile.gettempdir()
    return "/tmp"


def compiled_path(
    source_path: str,
    to_tmpdir: bool = False,
    tmpdir: str | None = None,
) -> str:
    """Derive the output binary path from a source path.

    The extension is stripped; with ``to_tmpdir`` the binary is placed in
    the temporary directory under the source's base name.
    """
    base, _ = os.path.splitext(source_path)
    if not to_tmpdir:
        return base
    return os.path.join(tmpdir or temp_directory(), os.path.basename(base))
