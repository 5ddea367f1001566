"""
Build system components for cbuild.

This package provides:
- Source file discovery (FileSystemGateway)
- Compilation, linking and running (BuildPipeline)
- Build result records and the compile summary report
"""

from .filesystem import FileSystemGateway
from .models import BuildResult, CompileOutcome, LinkOutcome, ObjectFile, RunError, RunOutcome, SourceFile
from .pipeline import BuildPipeline

__all__ = [
    "BuildPipeline",
    "BuildResult",
    "CompileOutcome",
    "FileSystemGateway",
    "LinkOutcome",
    "ObjectFile",
    "RunError",
    "RunOutcome",
    "SourceFile",
]
