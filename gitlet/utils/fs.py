"""Filesystem helpers shared by the object store, refs and index."""

import logging
import os
import tempfile
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)


def atomic_write(path: Path, data: bytes) -> None:
    """
    Replace path's content with data in a single rename.

    Readers see either the old file or the complete new one, never a partial
    write.

    Args:
        path: Destination file
        data: Bytes to write
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_fd, tmp_path = tempfile.mkstemp(dir=str(path.parent), prefix=f'.{path.name}_', suffix='.tmp')

    try:
        with os.fdopen(tmp_fd, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

        os.replace(tmp_path, str(path))
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


def prune_empty_dirs(start: Path, stop_at: Iterable[Path]) -> List[Path]:
    """
    Remove start and its ancestors while they are empty directories.

    The walk stops at the first non-empty directory or at any directory in
    stop_at (which is never removed).

    Args:
        start: Directory that may have just become empty
        stop_at: Directories that must survive (repository root, invoking directory)

    Returns:
        List of removed directories, innermost first
    """
    boundaries = {Path(p).resolve() for p in stop_at}
    removed = []
    current = start

    while current.is_dir():
        if current.resolve() in boundaries:
            break
        if any(current.iterdir()):
            break

        current.rmdir()
        logger.debug("Removed empty directory %s", current)
        removed.append(current)
        current = current.parent

    return removed


def working_files(root: Path) -> List[str]:
    """
    List every non-hidden file under root as a sorted root-relative POSIX path.

    Hidden files and anything inside hidden directories (including .gitlet)
    are skipped.
    """
    files = []
    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = [d for d in dirnames if not d.startswith('.')]
        for name in filenames:
            if name.startswith('.'):
                continue
            rel_path = (Path(dirpath) / name).relative_to(root)
            files.append(rel_path.as_posix())

    return sorted(files)
