"""Pytest configuration and fixtures for cbuild tests.

cbuild.output binds its output stream at import time, before pytest installs
its capture streams. The fixtures here point it at a fresh buffer per test and
restore module state afterwards.
"""

import io
import sys

import pytest

from cbuild import output


@pytest.fixture(autouse=True)
def log_stream():
    """Route cbuild log output to a buffer and reset output module state."""
    stream = io.StringIO()
    output.init_timer(stream)
    output.set_verbose(False)
    output.set_output_file(None)
    yield stream
    output._output_stream = sys.stdout
    output.set_verbose(False)
    output.set_output_file(None)


@pytest.fixture
def log_text(log_stream):
    """Return a callable giving everything logged so far."""
    return log_stream.getvalue
