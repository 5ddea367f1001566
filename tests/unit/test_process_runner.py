"""Tests for the process runner."""

import subprocess
import sys
from unittest.mock import patch

from cbuild.process_runner import (
    CREATE_NO_WINDOW,
    LAUNCH_FAILURE_EXIT_CODE,
    ProcessRunner,
    get_subprocess_creation_flags,
)


def test_get_subprocess_creation_flags_windows():
    """Test that Windows returns CREATE_NO_WINDOW flag."""
    with patch("sys.platform", "win32"):
        assert get_subprocess_creation_flags() == CREATE_NO_WINDOW


def test_get_subprocess_creation_flags_linux():
    with patch("sys.platform", "linux"):
        assert get_subprocess_creation_flags() == 0


class TestRunCapturing:
    def test_captures_combined_output(self):
        runner = ProcessRunner()
        result = runner.run_capturing(
            sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr)"
        )
        assert result.launched
        assert result.exit_succeeded
        assert result.returncode == 0
        assert "out" in result.output
        assert "err" in result.output

    def test_nonzero_exit_is_launched_but_not_succeeded(self):
        result = ProcessRunner().run_capturing(sys.executable, "-c", "raise SystemExit(3)")
        assert result.launched
        assert result.output == ""
        assert not result.exit_succeeded
        assert result.returncode == 3

    def test_missing_binary_returns_none_output(self, tmp_path):
        result = ProcessRunner().run_capturing(str(tmp_path / "no-such-compiler"), "-c")
        assert result.output is None
        assert not result.launched
        assert not result.exit_succeeded
        assert result.returncode is None

    @patch("subprocess.run")
    def test_stdin_redirected_and_no_shell(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="")
        with patch("sys.platform", "linux"):
            ProcessRunner().run_capturing("gcc", "-c", "-o", "obj/a.o", "src/a.c")

        cmd = mock_run.call_args[0][0]
        kwargs = mock_run.call_args[1]
        assert cmd == ["gcc", "-c", "-o", "obj/a.o", "src/a.c"]
        assert kwargs["stdin"] == subprocess.DEVNULL
        assert kwargs["stderr"] == subprocess.STDOUT
        assert "shell" not in kwargs
        assert "creationflags" not in kwargs

    @patch("subprocess.run")
    def test_applies_flags_on_windows(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0, stdout="")
        with patch("sys.platform", "win32"):
            ProcessRunner().run_capturing("gcc")
        assert mock_run.call_args[1]["creationflags"] == CREATE_NO_WINDOW


class TestRun:
    def test_returns_exit_code(self):
        assert ProcessRunner().run([sys.executable, "-c", "raise SystemExit(5)"]) == 5

    def test_zero_exit(self):
        assert ProcessRunner().run([sys.executable, "-c", "pass"]) == 0

    def test_launch_failure_exit_code(self, tmp_path):
        assert ProcessRunner().run([str(tmp_path / "missing")]) == LAUNCH_FAILURE_EXIT_CODE

    @patch("subprocess.run")
    def test_inherit_stdin(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
        ProcessRunner().run(["./bin/program"], inherit_stdin=True)
        assert "stdin" not in mock_run.call_args[1]

    @patch("subprocess.run")
    def test_default_stdin_devnull(self, mock_run):
        mock_run.return_value = subprocess.CompletedProcess(args=[], returncode=0)
        ProcessRunner().run(["gcc", "-o", "bin/program", "obj/a.o"])
        assert mock_run.call_args[1]["stdin"] == subprocess.DEVNULL
