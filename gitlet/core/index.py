"""Index (staging area) implementation."""

import json
import logging
from typing import Dict, Set

from .errors import (AlreadyStaged, CorruptObject, FileNotFound, IoError, NotTracked,
                     StagedChangesConflict)
from .hash import is_valid_digest
from .objects import Blob
from gitlet.utils.fs import atomic_write, prune_empty_dirs

logger = logging.getLogger(__name__)


class Index:
    """
    Gitlet index (staging area) implementation.

    The index records what the next commit changes relative to the HEAD
    commit: files staged for addition (path -> blob) and paths staged for
    removal. A path is never staged for both at once.

    The whole index is persisted as one JSON record in .gitlet/index:
    {"additions": {"<path>": "<digest>", ...}, "removals": ["<path>", ...]}
    """

    def __init__(self, repo):
        """
        Initialize empty index.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.additions: Dict[str, Blob] = {}
        self.removals: Set[str] = set()

    @classmethod
    def load(cls, repo) -> 'Index':
        """
        Load the index from disk, creating an empty one on first use.

        Raises:
            CorruptObject: If the stored record cannot be parsed
        """
        index = cls(repo)

        if not repo.index_file.exists():
            index.save()
            return index

        try:
            record = json.loads(repo.index_file.read_text())
            additions = record['additions']
            removals = record['removals']
            for path, digest in additions.items():
                if not is_valid_digest(digest):
                    raise ValueError(f"invalid digest {digest!r} for {path}")
                index.additions[path] = Blob(digest)
            index.removals = set(removals)
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            raise CorruptObject(f"Cannot parse index {repo.index_file}: {exc}") from exc

        both = index.removals & index.additions.keys()
        if both:
            raise CorruptObject(f"Index stages paths for addition and removal: {sorted(both)}")

        return index

    def save(self) -> None:
        """
        Write the index to disk.

        The file is replaced atomically, so a crash leaves either the old or the
        new record.
        """
        record = {
            'additions': {path: blob.hash for path, blob in sorted(self.additions.items())},
            'removals': sorted(self.removals),
        }
        try:
            atomic_write(self.repo.index_file, json.dumps(record, indent=2).encode())
        except OSError as exc:
            raise IoError(f"Cannot save index: {exc}") from exc

    def clear(self) -> None:
        """Drop every staged change and persist the empty index."""
        self.additions.clear()
        self.removals.clear()
        self.save()

    def is_clear(self) -> bool:
        """True when nothing is staged for addition or removal."""
        return not self.additions and not self.removals

    def stage(self, path: str) -> Blob:
        """
        Stage a file for addition.

        The file's content is hashed and stored as a blob, and any pending
        removal of the path is cancelled.

        Args:
            path: Working-tree-relative path

        Returns:
            Blob: Blob for the staged content

        Raises:
            FileNotFound: If the file does not exist
        """
        file_path = self.repo.absolute_path(path)
        if not file_path.is_file():
            raise FileNotFound(path)

        objects = self.repo.objects
        blob = objects.put(file_path)
        objects.write(blob, file_path)

        self.removals.discard(path)
        self.additions[path] = blob
        self.save()

        logger.debug("Staged %s as %s", path, blob.hash)
        return blob

    def unstage(self, path: str) -> None:
        """Forget any staged addition or removal of path. Idempotent."""
        self.additions.pop(path, None)
        self.removals.discard(path)
        self.save()

    def remove(self, path: str, cached: bool = False) -> None:
        """
        Stage a file for removal.

        - Missing from disk: record the removal if HEAD tracks the file,
          otherwise drop its staged addition.
        - cached: untrack the file but leave it on disk.
        - otherwise: delete the file from disk, refusing when that would
          discard changes staged for addition. The removal is only staged
          when HEAD tracks the file.

        Args:
            path: Working-tree-relative path
            cached: Keep the working tree file

        Raises:
            NotTracked: If neither the index nor HEAD knows a missing file
            AlreadyStaged: If the removal is already recorded
            StagedChangesConflict: If deleting would lose staged changes
            IoError: If the file cannot be deleted
        """
        file_path = self.repo.absolute_path(path)
        tracked_by_head = self.repo.head_commit().tracks(path)
        staged = path in self.additions

        if not file_path.exists():
            if not staged and not tracked_by_head:
                raise NotTracked(path)

            if tracked_by_head and path not in self.removals:
                self.additions.pop(path, None)
                self.removals.add(path)
            elif staged:
                del self.additions[path]
            else:
                raise AlreadyStaged(path)

        elif cached:
            if not staged and not tracked_by_head:
                raise NotTracked(path)

            blob = self.additions.pop(path, None)
            if tracked_by_head:
                self.removals.add(path)
            elif blob is not None:
                self._discard_blob(blob)

        else:
            if staged:
                raise StagedChangesConflict(path)

            try:
                file_path.unlink()
            except OSError as exc:
                raise IoError(f"Cannot delete {path}: {exc}") from exc
            prune_empty_dirs(file_path.parent, stop_at=[self.repo.work_tree, self.repo.cwd])
            if tracked_by_head:
                self.removals.add(path)

        self.save()
        logger.debug("Staged removal of %s (cached=%s)", path, cached)

    def _discard_blob(self, blob: Blob) -> None:
        """Delete a blob nothing else refers to any more."""
        if any(other.hash == blob.hash for other in self.additions.values()):
            return
        if blob.hash in self.repo.commits.reachable_blobs():
            return
        if self.repo.objects.exists(blob.hash):
            self.repo.objects.delete(blob)

    def __len__(self) -> int:
        """Number of staged changes."""
        return len(self.additions) + len(self.removals)

    def __repr__(self) -> str:
        """String representation."""
        return f"Index(additions={len(self.additions)}, removals={len(self.removals)})"
