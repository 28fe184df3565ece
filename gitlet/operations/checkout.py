"""Working tree synchronization (checkout) for Gitlet."""

import logging
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import List, Optional, Set

from gitlet.core.errors import CheckoutConflict, IoError
from gitlet.core.objects import Blob, Commit
from gitlet.operations.status import unstaged_modifications
from gitlet.utils.fs import prune_empty_dirs

logger = logging.getLogger(__name__)


@dataclass
class CheckoutResult:
    """Files touched by a checkout."""
    removed: List[str] = field(default_factory=list)
    restored: List[str] = field(default_factory=list)
    kept: List[str] = field(default_factory=list)

    def __repr__(self) -> str:
        """String representation."""
        return (f"CheckoutResult(removed={len(self.removed)}, "
                f"restored={len(self.restored)}, kept={len(self.kept)})")


class WorkingTreeSync:
    """
    Moves the working tree from the HEAD snapshot to another commit's snapshot.

    Local work is never lost: files with unstaged edits, staged additions and
    staged removals are left alone, and if any of them would have to be
    overwritten the checkout is refused before anything on disk changes.
    The caller is responsible for moving refs and HEAD afterwards.
    """

    def __init__(self, repo):
        """
        Initialize checkout engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def local_changes(self, source: Commit, index) -> Set[str]:
        """Paths holding local work: unstaged edits, staged additions and staged removals."""
        changed = {m.path for m in unstaged_modifications(self.repo, source, index)}
        return changed | set(index.additions) | set(index.removals)

    def find_conflicts(self, source: Commit, target: Commit, local: Set[str]) -> List[str]:
        """
        Find paths whose local state a checkout of target would overwrite.

        A locally changed path conflicts when source and target both track it
        with different content. A file on disk that source does not track
        conflicts when target would write different content over it, or when
        it sits where target needs a directory.
        """
        conflicts = []

        for path in local:
            src_blob = source.tracked.get(path)
            dst_blob = target.tracked.get(path)
            if src_blob is not None and dst_blob is not None and src_blob != dst_blob:
                conflicts.append(path)

        for path, dst_blob in target.tracked.items():
            if source.tracks(path):
                continue
            file_path = self.repo.absolute_path(path)
            if file_path.is_file() and not self.repo.objects.content_equals(dst_blob, file_path):
                conflicts.append(path)

        for path in target.tracked:
            blocker = self.blocking_file(path, source, local)
            if blocker is not None:
                conflicts.append(blocker)

        return sorted(set(conflicts))

    def blocking_file(self, path: str, source: Commit, local: Set[str]) -> Optional[str]:
        """
        Find a file occupying one of path's parent directories.

        A file that source tracks and that holds no local work is deleted
        before anything is restored, so it does not block.

        Returns:
            The blocking path, or None
        """
        for parent in reversed(PurePosixPath(path).parents):
            parent_path = parent.as_posix()
            if parent_path == '.':
                continue
            if not self.repo.absolute_path(parent_path).is_file():
                continue
            if source.tracks(parent_path) and parent_path not in local:
                continue
            return parent_path
        return None

    def checkout(self, target_hash: str) -> CheckoutResult:
        """
        Bring the working tree to the snapshot of target_hash.

        Args:
            target_hash: Commit to check out ('' for the empty snapshot)

        Returns:
            CheckoutResult listing removed, restored and kept paths

        Raises:
            CheckoutConflict: If local changes would be overwritten (nothing
                on disk has been modified)
        """
        source = self.repo.head_commit()
        target = self.repo.commits.load(target_hash)
        index = self.repo.load_index()

        local = self.local_changes(source, index)
        conflicts = self.find_conflicts(source, target, local)
        if conflicts:
            raise CheckoutConflict(conflicts)

        result = CheckoutResult(kept=sorted(local))

        for path in sorted(source.tracked):
            if path in local or target.tracks(path):
                continue
            self._remove(path)
            result.removed.append(path)

        for path, blob in sorted(target.tracked.items()):
            if path in local or source.tracked.get(path) == blob:
                continue
            self._restore(path, blob)
            result.restored.append(path)

        logger.debug("Checked out %s: %r", target_hash or '(empty)', result)
        return result

    def reset_to(self, commit_hash: Optional[str] = None) -> CheckoutResult:
        """
        Discard all local work and restore a commit's snapshot.

        Every file tracked by HEAD or staged for addition that the commit does
        not track is deleted, every file the commit tracks is rewritten and the
        index is cleared.

        Args:
            commit_hash: Commit to restore (defaults to HEAD)
        """
        if commit_hash is None:
            commit_hash = self.repo.refs.head_hash()

        source = self.repo.head_commit()
        target = self.repo.commits.load(commit_hash)
        index = self.repo.load_index()
        result = CheckoutResult()

        for path in sorted(set(source.tracked) | set(index.additions)):
            if target.tracks(path):
                continue
            if self.repo.absolute_path(path).exists():
                self._remove(path)
                result.removed.append(path)

        for path, blob in sorted(target.tracked.items()):
            self._restore(path, blob)
            result.restored.append(path)

        index.clear()
        logger.debug("Reset working tree to %s: %r", commit_hash or '(empty)', result)
        return result

    def _remove(self, path: str) -> None:
        file_path = self.repo.absolute_path(path)
        try:
            file_path.unlink()
        except FileNotFoundError:
            logger.debug("%s already absent", path)
        except OSError as exc:
            raise IoError(f"Cannot delete {path}: {exc}") from exc

        prune_empty_dirs(file_path.parent, stop_at=[self.repo.work_tree, self.repo.cwd])

    def _restore(self, path: str, blob: Blob) -> None:
        self.repo.objects.read(blob, self.repo.absolute_path(path))
        logger.debug("Restored %s from %s", path, blob.hash)
