"""Build configuration.

BuildConfig carries every knob the build pipeline needs. The defaults are the
fixed project layout (src/ -> obj/ -> bin/program); tests and the CLI replace
individual fields instead of relying on hard-coded literals.

Environment:
- CBUILD_CC: compiler/linker executable (default: gcc)
- CBUILD_VERBOSE=1: show VERBOSE log lines (commands, compiler output)
"""

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

DEFAULT_SOURCE_DIR = Path("src")
DEFAULT_OBJECT_DIR = Path("obj")
DEFAULT_BIN_DIR = Path("bin")
DEFAULT_OUTPUT_NAME = "program"
DEFAULT_COMPILER = "gcc"

# Mode for the obj/ and bin/ directories and the linked executable
DEFAULT_DIR_MODE = 0o755
EXECUTABLE_MODE = 0o755


@dataclass(frozen=True)
class BuildConfig:
    """Parameters for a single build run.

    Attributes:
        source_dir: Directory searched recursively for .c files (must exist)
        object_dir: Directory receiving .o files (created if absent)
        bin_dir: Directory receiving the linked executable (created if absent)
        output_name: File name of the executable inside bin_dir
        should_run: Whether to run the executable after a successful link
        compiler: Compiler executable used for both compiling and linking
        verbose: Whether VERBOSE log lines are shown
    """

    source_dir: Path = DEFAULT_SOURCE_DIR
    object_dir: Path = DEFAULT_OBJECT_DIR
    bin_dir: Path = DEFAULT_BIN_DIR
    output_name: str = DEFAULT_OUTPUT_NAME
    should_run: bool = False
    compiler: str = DEFAULT_COMPILER
    verbose: bool = False

    @property
    def output_path(self) -> Path:
        """Path of the final executable artifact."""
        return self.bin_dir / self.output_name

    @classmethod
    def from_env(cls, **overrides: Any) -> "BuildConfig":
        """Create a config from CBUILD_* environment variables plus explicit overrides.

        Explicit keyword overrides win over the environment.
        """
        config = cls(
            compiler=os.environ.get("CBUILD_CC") or DEFAULT_COMPILER,
            verbose=os.environ.get("CBUILD_VERBOSE") == "1",
        )
        return replace(config, **overrides)
