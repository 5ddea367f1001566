"""cbuild - a minimal C build driver.

Compiles every .c file under src/ into obj/, links the objects into
bin/program and optionally runs it.
"""

__version__ = "0.1.0"

from cbuild.build import BuildPipeline, BuildResult  # noqa: E402
from cbuild.config import BuildConfig  # noqa: E402

__all__ = ["BuildConfig", "BuildPipeline", "BuildResult", "__version__"]
