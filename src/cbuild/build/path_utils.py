"""Pure path helpers used by the build pipeline. No filesystem access."""

from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def join(directory: PathLike, name: PathLike) -> Path:
    """Join a directory and a file name."""
    return Path(directory) / name


def basename(path: PathLike) -> str:
    """Return the final path component ("src/util/a.c" -> "a.c")."""
    return Path(path).name


def replace_extension(name: str, old: str, new: str) -> str:
    """Replace a trailing extension.

    Only the suffix is replaced, so "io.cfg.c" becomes "io.cfg.o" rather than
    having every ".c" occurrence rewritten. Names that do not end with `old`
    are returned with `new` appended.

    Args:
        name: File name
        old: Extension to strip, including the dot (".c")
        new: Extension to add, including the dot (".o")
    """
    if old and name.endswith(old):
        name = name[: -len(old)]
    return name + new


def object_path_for(source: PathLike, object_dir: PathLike) -> Path:
    """Derive the object file path for a source file.

    The object lives directly in object_dir and is named after the source's
    base name, so "src/net/http.c" maps to "<object_dir>/http.o".
    """
    return join(object_dir, replace_extension(basename(source), ".c", ".o"))
