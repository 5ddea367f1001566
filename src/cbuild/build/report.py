"""Rich-based compile summary for a finished build.

Renders one row per source file with the object it produced and its status,
followed by the overall count:

    Source         Object      Status
    src/a.c        obj/a.o     ok
    src/bad.c      obj/bad.o   failed (exit 1)

    1 out of 2 compiled
"""

from typing import Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from .models import BuildResult, CompileOutcome


def _status_text(outcome: CompileOutcome) -> Text:
    if outcome.success:
        return Text("ok", style="green")
    if not outcome.launched:
        return Text("compiler not found", style="bold red")
    if outcome.returncode:
        return Text(f"failed (exit {outcome.returncode})", style="red")
    return Text("no object produced", style="red")


def count_text(result: BuildResult) -> Text:
    """Overall "N out of M compiled" line, red when any file failed."""
    style = "green" if result.all_compiled else "bold red"
    return Text(f"{result.succeeded_count} out of {result.requested_count} compiled", style=style)


def build_summary_table(result: BuildResult) -> Table:
    """Create the per-file compile summary table."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Source", no_wrap=True)
    table.add_column("Object", no_wrap=True)
    table.add_column("Status")

    for outcome in result.compile_outcomes:
        table.add_row(str(outcome.source.path), str(outcome.object_path), _status_text(outcome))
    return table


def render_summary(result: BuildResult, stream: Optional[TextIO] = None) -> None:
    """Print the compile summary table and counts to stream (stdout by default)."""
    console = Console(file=stream, highlight=False, soft_wrap=True)
    console.print(build_summary_table(result))
    console.print()
    console.print(count_text(result))
