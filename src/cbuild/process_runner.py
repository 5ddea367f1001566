"""External process execution for the build pipeline.

Commands are always given as argument lists and spawned without a shell, so
paths containing spaces or shell metacharacters need no quoting.

Two calling styles are provided:
- run_capturing(): used for compilation. Captures combined stdout/stderr and
  distinguishes "could not launch" (output is None) from "launched".
- run(): used for linking and for running the built program. Output goes to
  the terminal; only the exit code is returned.
"""

import logging
import subprocess
import sys
from dataclasses import dataclass
from typing import Any, Optional, Sequence

logger = logging.getLogger(__name__)

# Exit code reported when a command could not be launched at all
LAUNCH_FAILURE_EXIT_CODE = 127

# subprocess only defines CREATE_NO_WINDOW on Windows
CREATE_NO_WINDOW = getattr(subprocess, "CREATE_NO_WINDOW", 0x08000000)


def get_subprocess_creation_flags() -> int:
    """Get platform-specific subprocess creation flags.

    Returns:
        - Windows: CREATE_NO_WINDOW (prevents console window)
        - Other platforms: 0 (no special flags)
    """
    if sys.platform == "win32":
        return CREATE_NO_WINDOW
    return 0


@dataclass(frozen=True)
class CapturedOutput:
    """Result of run_capturing().

    Attributes:
        output: Combined stdout/stderr text, or None if the process could not
            be launched
        exit_succeeded: True if the process launched and exited with status 0
        returncode: Process exit status, or None if it never launched
    """

    output: Optional[str]
    exit_succeeded: bool
    returncode: Optional[int] = None

    @property
    def launched(self) -> bool:
        return self.output is not None


class ProcessRunner:
    """Spawns external commands and waits for them to finish."""

    def _spawn_kwargs(self, inherit_stdin: bool) -> dict[str, Any]:
        kwargs: dict[str, Any] = {}
        flags = get_subprocess_creation_flags()
        if flags:
            kwargs["creationflags"] = flags
        if not inherit_stdin:
            kwargs["stdin"] = subprocess.DEVNULL
        return kwargs

    def run_capturing(self, program: str, *args: str) -> CapturedOutput:
        """Run a program and capture its combined output.

        Args:
            program: Executable name or path
            *args: Command-line arguments

        Returns:
            CapturedOutput. output is None only when the process could not be
            started (missing binary, permission denied, other OS error).
        """
        cmd = [program, *args]
        logger.debug("run_capturing: %s", cmd)
        try:
            result = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                text=True,
                errors="replace",
                **self._spawn_kwargs(inherit_stdin=False),
            )
        except OSError as e:
            logger.debug("Failed to launch %s: %s", program, e)
            return CapturedOutput(output=None, exit_succeeded=False)

        return CapturedOutput(
            output=result.stdout or "",
            exit_succeeded=result.returncode == 0,
            returncode=result.returncode,
        )

    def run(self, cmd: Sequence[str], inherit_stdin: bool = False) -> int:
        """Run a command with output going to the terminal.

        Args:
            cmd: Command and arguments
            inherit_stdin: If True the child reads from our stdin, otherwise
                stdin is redirected to DEVNULL

        Returns:
            The process exit code, or LAUNCH_FAILURE_EXIT_CODE if the command
            could not be started.
        """
        cmd = list(cmd)
        logger.debug("run: %s", cmd)
        try:
            completed = subprocess.run(cmd, **self._spawn_kwargs(inherit_stdin=inherit_stdin))
        except OSError as e:
            logger.debug("Failed to launch %s: %s", cmd[0], e)
            return LAUNCH_FAILURE_EXIT_CODE
        return completed.returncode
