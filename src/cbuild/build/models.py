"""Data models for the build pipeline.

Defines the records passed between pipeline phases and returned to callers:
- SourceFile / ObjectFile: discovered inputs and compiled artifacts
- CompileOutcome: result of compiling one source file
- LinkOutcome: result of the link step
- RunOutcome: result of the optional run step
- BuildResult: everything a single build produced
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional


@dataclass(frozen=True)
class SourceFile:
    """A .c file found under the source directory."""

    path: Path


@dataclass(frozen=True)
class ObjectFile:
    """A compiled object file and the source it came from."""

    path: Path
    source: SourceFile


@dataclass(frozen=True)
class CompileOutcome:
    """Result of compiling a single source file.

    Attributes:
        source: Source that was compiled
        object_path: Where the object file was expected
        launched: Whether the compiler process could be started
        artifact_exists: Whether object_path existed after the compiler exited
        output: Combined compiler output, None if the compiler never launched
        returncode: Compiler exit status, None if it never launched
    """

    source: SourceFile
    object_path: Path
    launched: bool
    artifact_exists: bool
    output: Optional[str] = None
    returncode: Optional[int] = None

    @property
    def success(self) -> bool:
        """A compile succeeded if the compiler launched and the object appeared."""
        return self.launched and self.artifact_exists

    @property
    def object_file(self) -> Optional[ObjectFile]:
        if not self.success:
            return None
        return ObjectFile(path=self.object_path, source=self.source)


@dataclass(frozen=True)
class LinkOutcome:
    """Result of the link step.

    Attributes:
        output_path: Executable the linker was asked to produce
        skipped: True if linking was not attempted (no object files)
        returncode: Linker exit status, None if skipped
        artifact_exists: Whether output_path existed after linking
    """

    output_path: Path
    skipped: bool = False
    returncode: Optional[int] = None
    artifact_exists: bool = False

    @property
    def success(self) -> bool:
        return not self.skipped and self.returncode == 0 and self.artifact_exists


class RunError(Enum):
    """Why the built program was not run."""

    MISSING = "missing"
    NOT_EXECUTABLE = "not executable"


@dataclass(frozen=True)
class RunOutcome:
    """Result of the optional run step.

    Attributes:
        program: Path of the executable
        attempted: True if the program was actually executed
        returncode: Program exit status when attempted
        error: Precondition that failed when not attempted
    """

    program: Path
    attempted: bool
    returncode: Optional[int] = None
    error: Optional[RunError] = None

    @property
    def success(self) -> bool:
        return self.attempted and self.returncode == 0


@dataclass
class BuildResult:
    """Aggregated result of one build.

    Attributes:
        sources: Discovered source files, in discovery order
        compile_outcomes: One outcome per source, in compilation order
        link: Link outcome, None if the build stopped before linking
        permissions_set: Whether the executable bits were applied
        run: Run outcome, None if running was not requested or not reached
    """

    sources: list[SourceFile] = field(default_factory=list)
    compile_outcomes: list[CompileOutcome] = field(default_factory=list)
    link: Optional[LinkOutcome] = None
    permissions_set: bool = False
    run: Optional[RunOutcome] = None

    @property
    def requested_count(self) -> int:
        """Number of source files the build tried to compile."""
        return len(self.sources)

    @property
    def object_files(self) -> list[ObjectFile]:
        """Successfully compiled objects, in compilation order."""
        return [o.object_file for o in self.compile_outcomes if o.object_file is not None]

    @property
    def succeeded_count(self) -> int:
        return len(self.object_files)

    @property
    def failed_sources(self) -> list[SourceFile]:
        return [o.source for o in self.compile_outcomes if not o.success]

    @property
    def all_compiled(self) -> bool:
        return self.succeeded_count == self.requested_count

    @property
    def success(self) -> bool:
        """The build succeeded if the executable was linked. Running does not count."""
        return self.link is not None and self.link.success

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "requested": self.requested_count,
            "succeeded": self.succeeded_count,
            "objects": [str(o.path) for o in self.object_files],
            "failed": [str(s.path) for s in self.failed_sources],
            "linked": self.success,
            "output_path": str(self.link.output_path) if self.link else None,
            "run_returncode": self.run.returncode if self.run else None,
            "run_succeeded": self.run.success if self.run else None,
        }
