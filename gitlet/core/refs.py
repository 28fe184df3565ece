"""Reference management for Gitlet."""

import logging
from typing import List, Tuple

from .errors import (BranchCheckedOut, BranchExists, BranchNotFound, CorruptObject,
                     InvalidBranchName, IoError)
from .hash import is_valid_digest
from gitlet.utils.fs import atomic_write

logger = logging.getLogger(__name__)


class RefStore:
    """
    Manages branch references and HEAD.

    Each branch is a file under .gitlet/refs holding a commit hash, or nothing
    when the branch has no commits yet. HEAD is symbolic: it holds the name of
    the checked-out branch, never a hash.
    """

    def __init__(self, repo):
        """
        Initialize reference store.

        Args:
            repo: Repository instance
        """
        self.repo = repo
        self.refs_dir = repo.refs_dir
        self.head_file = repo.head_file

    def ref_path(self, branch_name: str):
        return self.refs_dir / branch_name

    def branch_exists(self, branch_name: str) -> bool:
        """Check if a branch exists."""
        return bool(branch_name) and self.ref_path(branch_name).is_file()

    def read_ref(self, branch_name: str) -> str:
        """
        Read the commit hash a branch points to.

        Args:
            branch_name: Branch name

        Returns:
            Commit hash, or '' if the branch has no commits

        Raises:
            BranchNotFound: If the branch does not exist
            CorruptObject: If the ref holds something other than a hash
        """
        if not self.branch_exists(branch_name):
            raise BranchNotFound(branch_name)

        content = self.ref_path(branch_name).read_text().strip()
        if content and not is_valid_digest(content):
            raise CorruptObject(f"Branch '{branch_name}' holds an invalid commit hash: {content!r}")
        return content

    def write_ref(self, branch_name: str, commit_hash: str) -> None:
        """
        Point a branch at a commit, creating the branch if needed.

        Args:
            branch_name: Branch name
            commit_hash: Commit hash, or '' for an empty branch
        """
        if commit_hash and not is_valid_digest(commit_hash):
            raise CorruptObject(f"Refusing to write invalid commit hash {commit_hash!r}")

        try:
            atomic_write(self.ref_path(branch_name), commit_hash.encode())
        except OSError as exc:
            raise IoError(f"Cannot update branch '{branch_name}': {exc}") from exc
        logger.debug("Branch %s -> %s", branch_name, commit_hash or '(empty)')

    def get_current_branch(self) -> str:
        """
        Get the current branch name.

        Raises:
            CorruptObject: If HEAD is missing or empty
        """
        try:
            branch_name = self.head_file.read_text().strip()
        except OSError as exc:
            raise CorruptObject(f"Cannot read HEAD: {exc}") from exc

        if not branch_name:
            raise CorruptObject("HEAD does not name a branch")
        return branch_name

    def set_head(self, branch_name: str) -> None:
        """
        Make branch_name the checked-out branch.

        Raises:
            BranchNotFound: If the branch does not exist
        """
        if not self.branch_exists(branch_name):
            raise BranchNotFound(branch_name)

        try:
            atomic_write(self.head_file, branch_name.encode())
        except OSError as exc:
            raise IoError(f"Cannot update HEAD: {exc}") from exc
        logger.debug("HEAD -> %s", branch_name)

    def head_hash(self) -> str:
        """Resolve HEAD to a commit hash ('' before the first commit)."""
        return self.read_ref(self.get_current_branch())

    def update_head(self, commit_hash: str) -> None:
        """Advance the checked-out branch to commit_hash."""
        self.write_ref(self.get_current_branch(), commit_hash)

    def list_branches(self) -> List[Tuple[str, str]]:
        """
        List all branches.

        Returns:
            List of (branch_name, commit_hash) tuples sorted by name
        """
        if not self.refs_dir.exists():
            return []

        branches = []
        for ref_file in self.refs_dir.iterdir():
            if ref_file.is_file() and not ref_file.name.startswith('.'):
                branches.append((ref_file.name, ref_file.read_text().strip()))

        return sorted(branches, key=lambda x: x[0])

    def create_branch(self, branch_name: str, commit_hash: str) -> None:
        """
        Create a new branch.

        Raises:
            BranchExists: If the branch already exists
        """
        if not branch_name or '/' in branch_name or branch_name.startswith('.'):
            raise InvalidBranchName(branch_name)
        if self.branch_exists(branch_name):
            raise BranchExists(branch_name)

        self.write_ref(branch_name, commit_hash)

    def delete_branch(self, branch_name: str) -> None:
        """
        Delete a branch.

        Raises:
            BranchNotFound: If the branch does not exist
            BranchCheckedOut: If the branch is the current branch
        """
        if not self.branch_exists(branch_name):
            raise BranchNotFound(branch_name)
        if self.get_current_branch() == branch_name:
            raise BranchCheckedOut(branch_name)

        self.ref_path(branch_name).unlink()
        logger.debug("Deleted branch %s", branch_name)
