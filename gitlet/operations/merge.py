"""Merge operations for Gitlet."""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from gitlet.core.errors import (BranchNotFound, CheckoutConflict, IoError, SelfMerge,
                                UncommittedChanges, UnstagedChanges)
from gitlet.core.objects import Blob, Commit
from gitlet.operations.history import record_commit
from gitlet.operations.status import unstaged_modifications
from gitlet.utils.fs import atomic_write, prune_empty_dirs

logger = logging.getLogger(__name__)


@dataclass
class MergeResult:
    """Result of a merge operation."""
    success: bool
    conflicts: List[str] = field(default_factory=list)
    commit_hash: Optional[str] = None
    is_fast_forward: bool = False
    up_to_date: bool = False
    message: str = ""

    def __repr__(self) -> str:
        """String representation."""
        if self.up_to_date:
            return "MergeResult(up-to-date)"
        if self.is_fast_forward:
            return "MergeResult(fast-forward, conflicts=0)"
        if self.success:
            return f"MergeResult(success, commit={self.commit_hash[:7]})"
        return f"MergeResult(conflicted, conflicts={len(self.conflicts)})"


class MergeEngine:
    """
    Handles merge operations for Gitlet.

    Supports:
    - Fast-forward merges
    - Three-way merges against the merge base of the two branches
    - Per-file conflicts, written into the working tree with markers
    - Merge state (MERGE_HEAD) so a conflicted merge can be committed or aborted
    """

    def __init__(self, repo):
        """
        Initialize merge engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def merge(self, target_branch: str) -> MergeResult:
        """
        Merge target branch into the current branch.

        Args:
            target_branch: Name of branch to merge

        Returns:
            MergeResult with status and any conflicting paths

        Raises:
            BranchNotFound: If target_branch does not exist
            SelfMerge: If target_branch is checked out
            UnstagedChanges: If the working tree has unstaged modifications
            UncommittedChanges: If anything is staged or a merge is in progress
        """
        refs = self.repo.refs

        if not refs.branch_exists(target_branch):
            raise BranchNotFound(target_branch)

        current_branch = refs.get_current_branch()
        if target_branch == current_branch:
            raise SelfMerge(target_branch)

        head_hash = refs.head_hash()
        target_hash = refs.read_ref(target_branch)
        head = self.repo.commits.load(head_hash)
        index = self.repo.load_index()

        modified = unstaged_modifications(self.repo, head, index)
        if modified:
            raise UnstagedChanges(m.path for m in modified)

        if self.is_merge_in_progress():
            raise UncommittedChanges(
                "A merge is in progress; commit the result or run 'gitlet merge --abort'"
            )
        if not index.is_clear():
            raise UncommittedChanges()

        graph = self.repo.commits

        if graph.is_ancestor(target_hash, head_hash):
            logger.debug("%s is already contained in %s", target_branch, current_branch)
            return MergeResult(success=True, up_to_date=True, message="Already up to date.")

        if graph.is_ancestor(head_hash, target_hash):
            return self.fast_forward(target_branch, current_branch, target_hash)

        base_hash = graph.merge_base(head_hash, target_hash)
        logger.debug("Merge base of %s and %s is %s", head_hash, target_hash, base_hash or '(empty)')

        return self.three_way_merge(
            graph.load(base_hash), head, graph.load(target_hash),
            index, target_branch, current_branch
        )

    def fast_forward(self, target_branch: str, current_branch: str, target_hash: str) -> MergeResult:
        """
        Move the current branch forward to target_hash.

        The working tree is updated first; the branch only moves once the
        checkout has succeeded.
        """
        self.repo.checkout.checkout(target_hash)
        self.repo.refs.update_head(target_hash)

        return MergeResult(
            success=True,
            commit_hash=target_hash,
            is_fast_forward=True,
            message=f"Merged {target_branch} into {current_branch}. (fast-forward to {target_hash[:7]})"
        )

    def three_way_merge(
        self,
        base: Commit,
        ours: Commit,
        theirs: Commit,
        index,
        theirs_branch: str,
        ours_branch: str
    ) -> MergeResult:
        """
        Perform a three-way merge.

        Merges changes from 'theirs' into 'ours' based on common ancestor
        'base'. The merged snapshot is staged; without conflicts it is
        committed with theirs as merge parent, otherwise it is left staged and
        MERGE_HEAD records theirs.

        Args:
            base: Common ancestor commit
            ours: Our current (HEAD) commit
            theirs: Commit being merged in
            index: Staging area (must be clear)
            theirs_branch: Name of the branch being merged in
            ours_branch: Name of the current branch

        Returns:
            MergeResult with success status and any conflicts
        """
        merged, conflicts = self._merge_files(base.tracked, ours.tracked, theirs.tracked)

        overwritten = [
            path for path, blob in merged.items()
            if blob is not None and not ours.tracks(path) and self._untracked_differs(path, blob)
        ]
        overwritten += [path for path in conflicts if not ours.tracks(path)
                        and self.repo.absolute_path(path).exists()]
        kept = set(ours.tracked) - {path for path, blob in merged.items() if blob is None}
        for path in set(merged) | set(conflicts):
            if merged.get(path, True) is None:
                continue
            blocker = self.repo.checkout.blocking_file(path, ours, kept)
            if blocker is not None:
                overwritten.append(blocker)
        if overwritten:
            raise CheckoutConflict(overwritten)

        for path, blob in sorted(merged.items()):
            if blob is None:
                self._remove_file(path)
                index.removals.add(path)
            else:
                self.repo.objects.read(blob, self.repo.absolute_path(path))
                index.additions[path] = blob
        index.save()

        for path in conflicts:
            content = self.generate_conflict_markers(
                self._blob_content(ours.tracked.get(path)),
                self._blob_content(theirs.tracked.get(path)),
                theirs.hash
            )
            self._write_file(path, content)
            index.stage(path)
            logger.debug("Conflict in %s", path)

        if conflicts:
            self.save_merge_state(theirs.hash)
            return MergeResult(
                success=False,
                conflicts=conflicts,
                message=f"Encountered a merge conflict in {len(conflicts)} file(s)."
            )

        message = f"Merged {theirs_branch} into {ours_branch}."
        commit = record_commit(self.repo, message, index, merge_parent=theirs.hash)

        return MergeResult(success=True, commit_hash=commit.hash, message=message)

    def _merge_files(
        self,
        base_files: Dict[str, Blob],
        ours_files: Dict[str, Blob],
        theirs_files: Dict[str, Blob]
    ) -> Tuple[Dict[str, Optional[Blob]], List[str]]:
        """
        Merge snapshots using three-way merge logic.

        Returns:
            Tuple of (changes, conflicts): changes maps each path whose merged
            version differs from ours to its new blob (None for a deletion);
            conflicts lists paths changed differently on both sides.
        """
        changes: Dict[str, Optional[Blob]] = {}
        conflicts = []

        all_paths = set(base_files) | set(ours_files) | set(theirs_files)

        for path in sorted(all_paths):
            base_blob = base_files.get(path)
            ours_blob = ours_files.get(path)
            theirs_blob = theirs_files.get(path)

            if ours_blob == theirs_blob:
                # Same on both sides (including both deleted)
                continue
            elif ours_blob == base_blob:
                # Only theirs changed
                changes[path] = theirs_blob
            elif theirs_blob == base_blob:
                # Only ours changed
                continue
            else:
                conflicts.append(path)

        return changes, conflicts

    def generate_conflict_markers(self, ours_content: bytes, theirs_content: bytes,
                                  theirs_hash: str) -> bytes:
        """
        Build the content of a conflicted file.

        Format:
            <<<<<<< HEAD
            {our content}
            =======
            {their content}
            >>>>>>> {their commit hash}
        """
        return (
            b"<<<<<<< HEAD\n" + ours_content
            + b"\n=======\n" + theirs_content
            + b"\n>>>>>>> " + theirs_hash.encode() + b"\n"
        )

    def save_merge_state(self, theirs_hash: str) -> None:
        """Record the commit being merged so the next commit becomes a merge commit."""
        try:
            atomic_write(self.repo.merge_head_file, theirs_hash.encode())
        except OSError as exc:
            raise IoError(f"Cannot write MERGE_HEAD: {exc}") from exc

    def clear_merge_state(self) -> None:
        """Clear merge state files."""
        if self.repo.merge_head_file.exists():
            self.repo.merge_head_file.unlink()

    def is_merge_in_progress(self) -> bool:
        """Check if a merge is in progress."""
        return self.repo.merge_head_file.exists()

    def get_merge_head(self) -> Optional[str]:
        """Get the commit hash being merged (from MERGE_HEAD)."""
        if self.repo.merge_head_file.exists():
            return self.repo.merge_head_file.read_text().strip() or None
        return None

    def abort_merge(self) -> bool:
        """
        Abort an in-progress merge.

        Resets working tree and index to HEAD state, then clears merge state.

        Returns:
            True if merge was aborted, False if no merge in progress
        """
        if not self.is_merge_in_progress():
            return False

        self.repo.checkout.reset_to(self.repo.refs.head_hash())
        self.clear_merge_state()
        return True

    def _untracked_differs(self, path: str, blob: Blob) -> bool:
        file_path = self.repo.absolute_path(path)
        return file_path.is_file() and not self.repo.objects.content_equals(blob, file_path)

    def _blob_content(self, blob: Optional[Blob]) -> bytes:
        if blob is None:
            return b""
        return self.repo.objects.contents(blob)

    def _write_file(self, path: str, content: bytes) -> None:
        file_path = self.repo.absolute_path(path)
        try:
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_bytes(content)
        except OSError as exc:
            raise IoError(f"Cannot write {path}: {exc}") from exc

    def _remove_file(self, path: str) -> None:
        file_path = self.repo.absolute_path(path)
        if file_path.exists():
            file_path.unlink()
            prune_empty_dirs(file_path.parent, stop_at=[self.repo.work_tree, self.repo.cwd])
