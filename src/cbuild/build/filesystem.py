"""Filesystem gateway.

Wraps the OS calls the build pipeline needs. Every probe and mutation reports
failure through its return value; none of them raise.
"""

import logging
import os
import stat
from pathlib import Path
from typing import List, Union

from cbuild.output import log_error

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class FileSystemGateway:
    """Existence checks, directory creation, permissions and source discovery."""

    def exists(self, path: PathLike) -> bool:
        try:
            return Path(path).exists()
        except OSError:
            return False

    def is_directory(self, path: PathLike) -> bool:
        try:
            return Path(path).is_dir()
        except OSError:
            return False

    def is_executable(self, path: PathLike) -> bool:
        """Return True if path is a regular file with an execute bit set."""
        try:
            st = os.stat(path)
        except OSError:
            return False
        return stat.S_ISREG(st.st_mode) and bool(st.st_mode & _EXEC_BITS)

    def create_directory(self, path: PathLike, mode: int = 0o755) -> bool:
        """Create a single directory level.

        Args:
            path: Directory to create. Its parent must already exist.
            mode: Permission bits for the new directory

        Returns:
            True if the directory exists afterwards, False on failure.
        """
        try:
            os.mkdir(path, mode)
        except FileExistsError:
            return self.is_directory(path)
        except OSError as e:
            log_error(f"Failed to create directory {path}: {e}")
            return False
        return True

    def set_permissions(self, path: PathLike, mode: int = 0o755) -> bool:
        """Change permission bits. Best effort: failures are logged, not raised."""
        try:
            os.chmod(path, mode)
        except OSError as e:
            log_error(f"Failed to set permissions {oct(mode)} on {path}: {e}")
            return False
        return True

    def list_files_by_extension(self, root_dir: PathLike, extension: str) -> List[Path]:
        """Recursively find regular files whose name ends with ".<extension>".

        Directories and files are visited in sorted name order so the result
        is the same for the same tree. The match is exact and case-sensitive:
        "a.c" matches extension "c", "a.cc" and "a.C" do not.

        Args:
            root_dir: Directory to walk
            extension: Extension without the leading dot

        Returns:
            Matching file paths, each starting with root_dir. Empty if nothing
            matches or root_dir cannot be read.
        """
        suffix = f".{extension}"
        found: List[Path] = []

        for root, dirs, files in os.walk(root_dir):
            # Sort in place so os.walk descends in a stable order
            dirs.sort()
            root_path = Path(root)
            for name in sorted(files):
                if not name.endswith(suffix):
                    continue
                file_path = root_path / name
                if not file_path.is_file():
                    continue
                found.append(file_path)

        logger.debug("Found %d *%s files under %s", len(found), suffix, root_dir)
        return found
