"""Build pipeline: discover -> compile-all -> link -> finalize -> run.

The phases run strictly in order, one compiler process at a time:

1. Discover: find every .c file under the source directory. No sources is
   fatal.
2. Compile: compile each source on its own. A file that fails is logged and
   skipped; the remaining files are still compiled.
3. Link: link the objects that did compile into one executable. With no
   objects the link is skipped and the build ends without an artifact.
4. Finalize: mark the executable as runnable (best effort).
5. Run: optionally execute the program. Its exit code is reported but does
   not affect the build result.

A compile counts as successful when the compiler could be launched and the
expected object file exists afterwards. The compiler's exit code is not
consulted. Linking and running are judged by their exit codes.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional

from cbuild.build.filesystem import FileSystemGateway
from cbuild.build.models import (
    BuildResult,
    CompileOutcome,
    LinkOutcome,
    ObjectFile,
    RunError,
    RunOutcome,
    SourceFile,
)
from cbuild.build.path_utils import object_path_for
from cbuild.config import DEFAULT_DIR_MODE, EXECUTABLE_MODE, BuildConfig
from cbuild.output import log_detail, log_error, log_fatal, log_info, log_verbose, log_warning
from cbuild.process_runner import ProcessRunner

logger = logging.getLogger(__name__)

SOURCE_EXTENSION = "c"
COMPILE_FLAGS = ["-Wall", "-Werror"]


class BuildPipeline:
    """Runs one build according to a BuildConfig.

    Args:
        config: Directories, output name, compiler and run flag.
        fs: Filesystem gateway (replaceable in tests).
        runner: Process runner (replaceable in tests).
    """

    def __init__(
        self,
        config: BuildConfig,
        fs: Optional[FileSystemGateway] = None,
        runner: Optional[ProcessRunner] = None,
    ) -> None:
        self.config = config
        self.fs = fs or FileSystemGateway()
        self.runner = runner or ProcessRunner()

    def build(self) -> BuildResult:
        """Run every phase and return what happened.

        Raises:
            FatalError: If the source directory is missing, an output
                directory cannot be created, or no sources are found.
        """
        self.prepare_directories()

        result = BuildResult()
        result.sources = self.discover()
        result.compile_outcomes = self.compile_all(result.sources)

        result.link = self.link([o.path for o in result.object_files])
        if not result.link.success:
            log_error("Error linking program")
            return result

        log_info(f"Program successfully built: {result.link.output_path}")
        result.permissions_set = self.finalize(result.link.output_path)

        if self.config.should_run:
            log_info("Running program...")
            result.run = self.run_program(result.link.output_path)

        return result

    def prepare_directories(self) -> None:
        """Check the source directory and create the object and bin directories."""
        if not self.fs.is_directory(self.config.source_dir):
            log_fatal(f"Source code directory {self.config.source_dir} does not exist")

        self._ensure_directory(self.config.object_dir, "object files")
        self._ensure_directory(self.config.bin_dir, "executable files")

    def _ensure_directory(self, path: Path, purpose: str) -> None:
        if self.fs.is_directory(path):
            return
        log_info(f"Creating directory for {purpose} {path}")
        if not self.fs.create_directory(path, DEFAULT_DIR_MODE):
            log_fatal(f"Failed to create directory {path}")

    def discover(self) -> List[SourceFile]:
        """Find all source files. Terminates the build if there are none."""
        source_dir = self.config.source_dir
        log_info(f"Searching for source files in {source_dir}")

        paths = self.fs.list_files_by_extension(source_dir, SOURCE_EXTENSION)
        if not paths:
            log_fatal(f"No source .{SOURCE_EXTENSION} files found in directory {source_dir}")

        log_info(f"Found {len(paths)} source files")
        return [SourceFile(path=p) for p in paths]

    def compile_file(self, source: SourceFile) -> CompileOutcome:
        """Compile one source file into its object file."""
        object_path = object_path_for(source.path, self.config.object_dir)
        log_info(f"Compiling {source.path} to {object_path}")

        captured = self.runner.run_capturing(
            self.config.compiler,
            "-c",
            "-o",
            str(object_path),
            str(source.path),
            *COMPILE_FLAGS,
        )
        logger.debug("Compiler exit status for %s: %s", source.path, captured.returncode)
        if captured.output:
            log_verbose(captured.output.rstrip())

        return CompileOutcome(
            source=source,
            object_path=object_path,
            launched=captured.launched,
            artifact_exists=captured.launched and self.fs.exists(object_path),
            output=captured.output,
            returncode=captured.returncode,
        )

    def compile_all(self, sources: Iterable[SourceFile]) -> List[CompileOutcome]:
        """Compile every source, continuing past failures."""
        outcomes: List[CompileOutcome] = []
        claimed: dict[Path, SourceFile] = {}

        for source in sources:
            object_path = object_path_for(source.path, self.config.object_dir)
            previous = claimed.get(object_path)
            if previous is not None:
                log_warning(f"{source.path} and {previous.path} both compile to {object_path}")
            claimed[object_path] = source

            outcome = self.compile_file(source)
            if not outcome.success:
                if not outcome.launched:
                    log_verbose(f"Could not launch compiler {self.config.compiler}")
                log_error(f"Error compiling {source.path}")
            outcomes.append(outcome)

        succeeded = sum(1 for o in outcomes if o.success)
        if succeeded != len(outcomes):
            log_error(f"Only {succeeded} out of {len(outcomes)} files compiled")
            for outcome in outcomes:
                if not outcome.success:
                    log_detail(f"failed: {outcome.source.path}")
        else:
            log_info("All files successfully compiled")
        return outcomes

    def link(self, object_paths: List[Path]) -> LinkOutcome:
        """Link object files, in the given order, into the output executable."""
        output_path = self.config.output_path
        if not object_paths:
            log_error("No object files for linking")
            return LinkOutcome(output_path=output_path, skipped=True)

        log_info(f"Linking files into {output_path}")
        cmd = [self.config.compiler, "-o", str(output_path), *(str(p) for p in object_paths)]
        log_verbose(f"Executing command: {' '.join(cmd)}")

        returncode = self.runner.run(cmd)
        return LinkOutcome(
            output_path=output_path,
            returncode=returncode,
            artifact_exists=self.fs.exists(output_path),
        )

    def finalize(self, output_path: Path) -> bool:
        """Make the executable runnable. A failure is logged and otherwise ignored."""
        return self.fs.set_permissions(output_path, EXECUTABLE_MODE)

    def run_program(self, program: Path) -> RunOutcome:
        """Run the built program after checking it exists and is executable."""
        log_info(f"Running program {program}")

        if not self.fs.exists(program):
            log_error(f"Program {program} does not exist")
            return RunOutcome(program=program, attempted=False, error=RunError.MISSING)

        if not self.fs.is_executable(program):
            log_error(f"File {program} is not executable")
            return RunOutcome(program=program, attempted=False, error=RunError.NOT_EXECUTABLE)

        invocation = str(program) if program.is_absolute() else os.path.join(os.curdir, str(program))
        returncode = self.runner.run([invocation], inherit_stdin=True)
        if returncode == 0:
            log_info(f"Program {program} exited with code 0")
        else:
            log_error(f"Program {program} exited with code {returncode}")
        return RunOutcome(program=program, attempted=True, returncode=returncode)
