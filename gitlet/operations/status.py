"""Working tree status computation for Gitlet."""

from dataclasses import dataclass
from typing import List, Optional

from gitlet.core.index import Index
from gitlet.core.objects import Commit
from gitlet.utils.fs import working_files


@dataclass(frozen=True)
class Modification:
    """A tracked file whose working copy differs from what is recorded."""
    path: str
    deleted: bool = False

    def __str__(self) -> str:
        return f"{self.path} (deleted)" if self.deleted else self.path


def unstaged_modifications(repo, head: Optional[Commit] = None, index: Optional[Index] = None) -> List[Modification]:
    """
    Find tracked files changed in the working tree but not staged.

    A file tracked by the HEAD commit is deleted when it is missing from disk
    without a staged removal, and modified when its content differs from the
    staged version (if staged) or from HEAD's version. Files newly staged for
    addition are checked against their staged content.

    Args:
        repo: Repository instance
        head: Commit the working tree is based on (defaults to HEAD)
        index: Staging area (defaults to the stored index)

    Returns:
        List of modifications sorted by path
    """
    head = head if head is not None else repo.head_commit()
    index = index if index is not None else repo.load_index()
    objects = repo.objects
    modifications = []

    for path, tracked_blob in head.tracked.items():
        if path in index.removals:
            continue

        file_path = repo.absolute_path(path)
        if not file_path.is_file():
            modifications.append(Modification(path, deleted=True))
            continue

        expected = index.additions.get(path, tracked_blob)
        if not objects.content_equals(expected, file_path):
            modifications.append(Modification(path))

    for path, staged_blob in index.additions.items():
        if head.tracks(path):
            continue

        file_path = repo.absolute_path(path)
        if not file_path.is_file():
            modifications.append(Modification(path, deleted=True))
        elif not objects.content_equals(staged_blob, file_path):
            modifications.append(Modification(path))

    return sorted(modifications, key=lambda m: m.path)


def untracked_files(repo, head: Optional[Commit] = None, index: Optional[Index] = None) -> List[str]:
    """List working tree files that are neither tracked by HEAD nor staged for addition."""
    head = head if head is not None else repo.head_commit()
    index = index if index is not None else repo.load_index()

    return [
        path for path in working_files(repo.work_tree)
        if path not in index.additions and (not head.tracks(path) or path in index.removals)
    ]


def render_status(repo) -> str:
    """
    Render the status report.

    Example:
        On branch main

        === Staged Files ===
        a.txt

        === Removed Files ===

        === Unstaged Modifications ===
        b.txt (deleted)

        === Untracked Files ===
        c.txt
    """
    head = repo.head_commit()
    index = repo.load_index()

    lines = [f"On branch {repo.refs.get_current_branch()}", ""]

    lines.append("=== Staged Files ===")
    lines.extend(sorted(index.additions))
    lines.append("")

    lines.append("=== Removed Files ===")
    lines.extend(sorted(index.removals))
    lines.append("")

    lines.append("=== Unstaged Modifications ===")
    lines.extend(str(m) for m in unstaged_modifications(repo, head, index))
    lines.append("")

    lines.append("=== Untracked Files ===")
    lines.extend(untracked_files(repo, head, index))
    lines.append("")

    return '\n'.join(lines) + '\n'
