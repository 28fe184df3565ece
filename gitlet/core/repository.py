"""Repository management for Gitlet."""

import logging
import os
from pathlib import Path
from typing import Optional

from .errors import FileNotFound, IoError, NotARepository, RepositoryAlreadyExists

logger = logging.getLogger(__name__)

MARKER_DIR = '.gitlet'
DEFAULT_BRANCH = 'main'


class Repository:
    """
    Represents a Gitlet repository.

    A repository is the explicit context every component works against: the
    working tree root, the .gitlet directory layout inside it, and the
    directory the current operation was invoked from. It is built once per
    operation and handed to the object store, refs, index and engines.
    """

    def __init__(self, path: str = '.', cwd: Optional[str] = None):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
            cwd: Directory the operation was invoked from (defaults to the
                process working directory)
        """
        self.work_tree = Path(path).resolve()
        self.cwd = Path(cwd).resolve() if cwd else Path.cwd()
        self.gitlet_dir = self.work_tree / MARKER_DIR
        self.blobs_dir = self.gitlet_dir / 'blobs'
        self.commits_dir = self.gitlet_dir / 'commits'
        self.refs_dir = self.gitlet_dir / 'refs'
        self.head_file = self.gitlet_dir / 'HEAD'
        self.index_file = self.gitlet_dir / 'index'
        self.config_file = self.gitlet_dir / 'config'
        self.merge_head_file = self.gitlet_dir / 'MERGE_HEAD'

        # Initialize managers (lazy loading to avoid circular import)
        self._config = None
        self._object_store = None
        self._commit_graph = None
        self._ref_store = None
        self._checkout_engine = None
        self._merge_engine = None

    @property
    def config(self):
        """Get Config instance."""
        if self._config is None:
            from .config import Config
            self._config = Config(self.config_file)
        return self._config

    @property
    def objects(self):
        """Get ObjectStore instance."""
        if self._object_store is None:
            from .store import ObjectStore
            level = self.config.compression_level()
            self._object_store = ObjectStore(self.blobs_dir, compression_level=level)
        return self._object_store

    @property
    def commits(self):
        """Get CommitGraph instance."""
        if self._commit_graph is None:
            from .commits import CommitGraph
            self._commit_graph = CommitGraph(self)
        return self._commit_graph

    @property
    def refs(self):
        """Get RefStore instance."""
        if self._ref_store is None:
            from .refs import RefStore
            self._ref_store = RefStore(self)
        return self._ref_store

    @property
    def checkout(self):
        """Get WorkingTreeSync instance."""
        if self._checkout_engine is None:
            from gitlet.operations.checkout import WorkingTreeSync
            self._checkout_engine = WorkingTreeSync(self)
        return self._checkout_engine

    @property
    def merge(self):
        """Get MergeEngine instance."""
        if self._merge_engine is None:
            from gitlet.operations.merge import MergeEngine
            self._merge_engine = MergeEngine(self)
        return self._merge_engine

    def load_index(self):
        """Load the staging area, creating it on first use."""
        from .index import Index
        return Index.load(self)

    def head_commit(self):
        """Load the commit the checked-out branch points at."""
        return self.commits.load(self.refs.head_hash())

    def init(self) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .gitlet directory structure:
        .gitlet/
        ├── blobs/         # Compressed file contents
        ├── commits/       # Commit records
        ├── refs/
        │   └── main       # Default branch, no commits yet
        ├── HEAD           # Current branch name
        └── config         # Repository configuration

        Returns:
            Repository: self for method chaining

        Raises:
            RepositoryAlreadyExists: If .gitlet already exists
        """
        if self.gitlet_dir.exists():
            raise RepositoryAlreadyExists(self.work_tree)

        try:
            self.work_tree.mkdir(parents=True, exist_ok=True)
            self.gitlet_dir.mkdir()
            self.blobs_dir.mkdir()
            self.commits_dir.mkdir()
            self.refs_dir.mkdir()
            (self.refs_dir / DEFAULT_BRANCH).write_text('')
            self.head_file.write_text(DEFAULT_BRANCH)
            self.config_file.write_text('[core]\nrepositoryformatversion = 0\n')
        except OSError as exc:
            raise IoError(f"Cannot create repository at {self.work_tree}: {exc}") from exc

        logger.debug("Initialized repository at %s", self.gitlet_dir)
        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> 'Repository':
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a .gitlet directory
        or reaches the filesystem root.

        Args:
            path: Starting path for search

        Returns:
            Repository rooted at the directory holding .gitlet, with the
            starting path recorded as the invoking directory

        Raises:
            NotARepository: If no .gitlet directory is found
        """
        start = Path(path).resolve()
        current = start

        while True:
            if (current / MARKER_DIR).is_dir():
                return cls(str(current), cwd=str(start))

            # Reached filesystem root
            if current == current.parent:
                raise NotARepository(start)

            current = current.parent

    def relative_path(self, path) -> str:
        """
        Convert a user-supplied path into a working-tree-relative POSIX path.

        Relative paths are interpreted from the invoking directory. The file
        does not need to exist.

        Raises:
            FileNotFound: If the path lies outside the working tree
        """
        candidate = Path(path)
        if not candidate.is_absolute():
            candidate = self.cwd / candidate
        candidate = Path(os.path.normpath(candidate))

        for base in (candidate, candidate.resolve()):
            try:
                rel_path = base.relative_to(self.work_tree)
            except ValueError:
                continue
            if rel_path.parts and rel_path.parts[0] != MARKER_DIR:
                return rel_path.as_posix()

        raise FileNotFound(path)

    def absolute_path(self, rel_path: str) -> Path:
        """Get the working tree location of a repository-relative path."""
        return self.work_tree / rel_path

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(path={self.work_tree})"
