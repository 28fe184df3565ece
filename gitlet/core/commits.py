"""Commit storage and history traversal for Gitlet."""

import logging
from collections import deque
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .errors import CorruptObject, GitletError, IoError, ObjectNotFound
from .hash import is_valid_digest
from .objects import Commit
from gitlet.utils.fs import atomic_write

logger = logging.getLogger(__name__)


class CommitGraph:
    """
    Loads, saves and walks the commit DAG.

    Commits are append-only: a saved commit is never rewritten or deleted.
    Records are stored in the same two-level layout as blobs, under
    .gitlet/commits instead of .gitlet/blobs.
    """

    def __init__(self, repo):
        """
        Initialize commit graph.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.root = repo.commits_dir

    def commit_path(self, commit_hash: str):
        return self.root / commit_hash[:2] / commit_hash[2:]

    def load(self, commit_hash: str) -> Commit:
        """
        Load a commit by hash.

        The empty hash short-circuits to the virtual commit that precedes all
        history: no parents, no message and an empty snapshot.

        Args:
            commit_hash: 40-character hash, or ''

        Returns:
            Commit: Loaded commit

        Raises:
            ObjectNotFound: If no commit is stored under the hash
            CorruptObject: If the hash or the stored record is malformed
        """
        if not commit_hash:
            return Commit()

        if not is_valid_digest(commit_hash):
            raise CorruptObject(f"Invalid commit id: {commit_hash!r}")

        path = self.commit_path(commit_hash)
        if not path.is_file():
            raise ObjectNotFound('commit', commit_hash)

        try:
            commit = Commit.deserialize(path.read_bytes())
        except (ValueError, UnicodeDecodeError) as exc:
            raise CorruptObject(f"Cannot parse commit {commit_hash}: {exc}") from exc
        except OSError as exc:
            raise IoError(f"Cannot read commit {commit_hash}: {exc}") from exc

        if commit.hash != commit_hash:
            raise CorruptObject(f"Commit {commit_hash} content hashes to {commit.hash}")

        return commit

    def save(self, commit: Commit) -> None:
        """
        Persist a commit.

        A record already stored under the same hash is a hash collision and is
        treated as fatal: the existing commit is never overwritten.

        Raises:
            CorruptObject: If a commit with this hash already exists
            IoError: If the record cannot be written
        """
        if not is_valid_digest(commit.hash):
            raise CorruptObject(f"Invalid commit id: {commit.hash!r}")

        path = self.commit_path(commit.hash)
        if path.exists():
            raise CorruptObject(f"Commit {commit.hash} already exists (hash collision)")

        try:
            atomic_write(path, commit.serialize())
        except OSError as exc:
            raise IoError(f"Cannot save commit {commit.hash}: {exc}") from exc

        logger.debug("Saved commit %s", commit.hash)

    def exists(self, commit_hash: str) -> bool:
        return is_valid_digest(commit_hash) and self.commit_path(commit_hash).is_file()

    def create(
        self,
        parent_hash: str,
        message: str,
        index,
        merge_parent: str = '',
        timestamp: Optional[int] = None
    ) -> Commit:
        """
        Build (but do not save) a commit from a parent and the staging area.

        Args:
            parent_hash: Parent commit hash ('' for the first commit)
            message: Commit message
            index: Index holding staged additions and removals
            merge_parent: Merged-in commit hash, or ''
            timestamp: Unix timestamp (defaults to current time)
        """
        parent = self.load(parent_hash)
        return Commit.create(
            parent,
            message,
            additions=index.additions,
            removals=index.removals,
            merge_parent=merge_parent,
            timestamp=timestamp,
        )

    def iterate(self, start_hash: str) -> 'CommitIterator':
        """Walk history from start_hash, most recent commit first."""
        return CommitIterator(self, start_hash)

    def parents(self, commit_hash: str) -> List[str]:
        """
        Return the non-empty parent hashes of a commit.

        Raises:
            ObjectNotFound, CorruptObject: If the commit cannot be loaded
        """
        commit = self.load(commit_hash)
        return [p for p in (commit.parent, commit.merge_parent) if p]

    def ancestors(self, commit_hash: str) -> Set[str]:
        """
        Collect every commit reachable from commit_hash through either parent.

        The result includes commit_hash itself and the '' root shared by all
        histories. A commit that cannot be loaded ends the walk along that path.
        """
        ancestors = {''}
        to_visit = deque([commit_hash])

        while to_visit:
            current = to_visit.popleft()
            if current in ancestors:
                continue
            ancestors.add(current)

            try:
                to_visit.extend(p for p in self.parents(current) if p not in ancestors)
            except GitletError as exc:
                logger.warning("Stopping ancestry walk at %s: %s", current, exc)

        return ancestors

    def is_ancestor(self, ancestor_hash: str, descendant_hash: str) -> bool:
        """Check if ancestor_hash is reachable from descendant_hash (or equal to it)."""
        return ancestor_hash in self.ancestors(descendant_hash)

    def merge_base(self, commit1_hash: str, commit2_hash: str) -> str:
        """
        Find the most recent common ancestor of two commits.

        Common ancestors that are themselves ancestors of another common
        ancestor are discarded; of the rest, the one with the latest timestamp
        wins. Unrelated histories meet at the '' root, so the result is ''
        when nothing else is shared.

        Args:
            commit1_hash: First commit hash
            commit2_hash: Second commit hash

        Returns:
            Hash of the merge base ('' for the empty pre-history commit)
        """
        if commit1_hash == commit2_hash:
            return commit1_hash

        common = self.ancestors(commit1_hash) & self.ancestors(commit2_hash)

        redundant: Set[str] = set()
        for candidate in common:
            if candidate and candidate not in redundant:
                redundant |= self.ancestors(candidate) - {candidate}

        best = common - redundant
        if not best:
            return ''

        return max(best, key=lambda h: (self._timestamp(h), h))

    def reachable_blobs(self) -> Set[str]:
        """Collect every blob digest referenced by a commit reachable from any branch."""
        commits: Set[str] = set()
        for _, commit_hash in self.repo.refs.list_branches():
            if commit_hash:
                commits |= self.ancestors(commit_hash)

        digests = set()
        for commit_hash in commits:
            try:
                commit = self.load(commit_hash)
            except GitletError as exc:
                logger.warning("Skipping unreadable commit %s: %s", commit_hash, exc)
                continue
            digests.update(blob.hash for blob in commit.tracked.values())

        return digests

    def _timestamp(self, commit_hash: str) -> int:
        try:
            return self.load(commit_hash).timestamp
        except GitletError as exc:
            logger.warning("Treating unreadable commit %s as oldest: %s", commit_hash, exc)
            return 0


class CommitIterator:
    """
    Linearizes history into chronological order, newest first.

    The iterator tracks the next commit to emit plus two frontiers: the next
    commit along the first-parent line and the next one along the merge-parent
    line. After emitting a commit it advances:

    - no frontier left: the walk ends
    - a single frontier: it becomes the next commit
    - equal frontiers: the lines have met at their divergence point, which is
      emitted once
    - different frontiers: the more recent one is emitted next and only that
      frontier moves back; the other is carried forward

    A merge parent that is itself a merge commit only has its first parent
    followed. A commit that cannot be loaded ends the walk.
    """

    def __init__(self, graph: CommitGraph, start_hash: str):
        self.graph = graph
        self.current: Optional[str] = start_hash or None
        self.parent_frontier, self.merge_frontier = self._frontiers(start_hash)

    def __iter__(self) -> Iterator[Commit]:
        return self

    def __next__(self) -> Commit:
        if self.current is None:
            raise StopIteration

        output_hash = self.current
        parent, merge = self.parent_frontier, self.merge_frontier

        if parent is None and merge is None:
            self.current = None

        elif parent is None or merge is None:
            self.current = parent or merge
            self.parent_frontier, self.merge_frontier = self._frontiers(self.current)

        elif parent == merge:
            self.current = parent
            self.parent_frontier, self.merge_frontier = self._frontiers(parent)

        else:
            recent = self._more_recent(parent, merge)
            if recent is None:
                self._stop()
            elif recent == parent:
                self.current = parent
                self.parent_frontier = self._frontiers(parent)[0]
            else:
                self.current = merge
                self.merge_frontier = self._frontiers(merge)[0]

        try:
            return self.graph.load(output_hash)
        except GitletError as exc:
            logger.warning("History walk stopped at %s: %s", output_hash, exc)
            self._stop()
            raise StopIteration

    def _stop(self) -> None:
        self.current = None
        self.parent_frontier = None
        self.merge_frontier = None

    def _frontiers(self, commit_hash: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
        if not commit_hash:
            return None, None

        try:
            commit = self.graph.load(commit_hash)
        except GitletError as exc:
            logger.warning("Cannot read parents of %s: %s", commit_hash, exc)
            return None, None

        if not commit.parent:
            return (commit.merge_parent or None), None
        return commit.parent, (commit.merge_parent or None)

    def _more_recent(self, parent: str, merge: str) -> Optional[str]:
        loaded: Dict[str, Commit] = {}
        for commit_hash in (parent, merge):
            try:
                loaded[commit_hash] = self.graph.load(commit_hash)
            except GitletError as exc:
                logger.warning("Cannot order %s in history: %s", commit_hash, exc)

        if parent in loaded and merge in loaded:
            if loaded[parent].timestamp > loaded[merge].timestamp:
                return parent
            return merge
        if parent in loaded:
            return parent
        if merge in loaded:
            return merge
        return None
