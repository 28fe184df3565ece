"""Exception types raised by Gitlet operations."""

from typing import Iterable, List


class GitletError(Exception):
    """Base class for every error Gitlet reports to the user."""


class NotARepository(GitletError):
    """No .gitlet directory was found walking up from the start path."""

    def __init__(self, path):
        super().__init__(f"Not a gitlet repository (or any of the parent directories): {path}")
        self.path = path


class RepositoryAlreadyExists(GitletError):
    """A .gitlet directory is already present at the target path."""

    def __init__(self, path):
        super().__init__(f"A gitlet repository already exists in {path}")
        self.path = path


class FileNotFound(GitletError):
    """A working tree file named by the user does not exist."""

    def __init__(self, path):
        super().__init__(f"File does not exist: {path}")
        self.path = path


class IoError(GitletError):
    """A filesystem read or write failed."""


class ConfigError(GitletError):
    """A configuration value is missing or malformed."""


class ObjectNotFound(GitletError):
    """A blob or commit object is missing from the object store."""

    def __init__(self, kind: str, digest: str):
        super().__init__(f"No {kind} object with id {digest}")
        self.kind = kind
        self.digest = digest


class CorruptObject(GitletError):
    """A commit, index or ref record could not be parsed."""


class NotTracked(GitletError):
    """The path is neither staged nor tracked by the HEAD commit."""

    def __init__(self, path: str):
        super().__init__(f"Cannot remove file. The file is not tracked: {path}")
        self.path = path


class AlreadyStaged(GitletError):
    """The requested removal is already recorded in the index."""

    def __init__(self, path: str):
        super().__init__(f"File already staged for removal: {path}")
        self.path = path


class StagedChangesConflict(GitletError):
    """Removing the file would discard changes staged for addition."""

    def __init__(self, path: str):
        super().__init__(f"Cannot remove a file with staged changes: {path}")
        self.path = path


class BranchExists(GitletError):
    def __init__(self, name: str):
        super().__init__(f"A branch named '{name}' already exists")
        self.name = name


class BranchNotFound(GitletError):
    def __init__(self, name: str):
        super().__init__(f"Branch '{name}' not found")
        self.name = name


class InvalidBranchName(GitletError):
    def __init__(self, name: str):
        super().__init__(f"'{name}' is not a valid branch name")
        self.name = name


class BranchCheckedOut(GitletError):
    def __init__(self, name: str):
        super().__init__(f"Cannot delete branch '{name}' while it is checked out")
        self.name = name


class SelfMerge(GitletError):
    def __init__(self, name: str):
        super().__init__(f"Cannot merge branch '{name}' into itself")
        self.name = name


class UnstagedChanges(GitletError):
    """The working tree has modifications that are not staged."""

    def __init__(self, paths: Iterable[str]):
        self.paths: List[str] = sorted(paths)
        super().__init__(
            "You have unstaged changes; stage or discard them first: "
            + ', '.join(self.paths)
        )


class UncommittedChanges(GitletError):
    """The index holds staged changes that were never committed."""

    def __init__(self, message: str = "You have uncommitted changes; commit them first"):
        super().__init__(message)


class CheckoutConflict(GitletError):
    """
    Local changes would be overwritten by a checkout.

    Carries every conflicting path so callers can report all of them at once.
    """

    def __init__(self, paths: Iterable[str]):
        self.paths: List[str] = sorted(set(paths))
        lines = ["Your local changes to the following files would be overwritten by checkout:"]
        lines.extend(f"\t{path}" for path in self.paths)
        super().__init__('\n'.join(lines))


class NothingToCommit(GitletError):
    def __init__(self):
        super().__init__("Nothing to commit (staging area is empty)")
