"""Shared pytest fixtures for Gitlet tests."""

import pytest
import tempfile
import shutil
from pathlib import Path

from gitlet.core.config import Config
from gitlet.core.repository import Repository
from gitlet.operations.history import commit_changes


@pytest.fixture(autouse=True)
def isolated_global_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the user's ~/.gitletconfig."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.gitletconfig')
    for key in ('GITLET_CORE_COMPRESSION',):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir):
    """Create an initialized repository."""
    repo = Repository(str(temp_dir), cwd=str(temp_dir))
    repo.init()
    return repo


def write(repo, path, content):
    """Write a working tree file, creating parent directories."""
    file_path = repo.work_tree / path
    file_path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(content, str):
        content = content.encode()
    file_path.write_bytes(content)
    return file_path


def make_commit(repo, files=None, message="Test commit", timestamp=None):
    """
    Helper function to write, stage and commit files.

    Args:
        repo: Repository instance
        files: Mapping of path -> content to write and stage
        message: Commit message
        timestamp: Commit timestamp (defaults to now)

    Returns:
        Commit: The new commit
    """
    index = repo.load_index()
    for path, content in (files or {}).items():
        write(repo, path, content)
        index.stage(path)
    return commit_changes(repo, message, timestamp=timestamp)


@pytest.fixture
def repo_with_commits(repo):
    """Repository with two commits on main."""
    make_commit(repo, {'file1.txt': 'Hello, World!'}, message="First commit", timestamp=1000)
    make_commit(repo, {'file2.txt': 'Second file'}, message="Second commit", timestamp=2000)
    return repo


@pytest.fixture
def diverged_repo(repo):
    """
    Repository where main and dev diverge after a shared commit.

    base (t=1000): a.txt = "base"
    main (t=2000): a.txt = "main change", m.txt added
    dev  (t=3000): b.txt added, a.txt unchanged
    main is checked out.
    """
    make_commit(repo, {'a.txt': 'base'}, message="Base", timestamp=1000)
    repo.refs.create_branch('dev', repo.refs.head_hash())

    make_commit(repo, {'a.txt': 'main change', 'm.txt': 'main only'},
                message="Main work", timestamp=2000)

    repo.checkout.checkout(repo.refs.read_ref('dev'))
    repo.refs.set_head('dev')
    make_commit(repo, {'b.txt': 'dev only'}, message="Dev work", timestamp=3000)

    repo.checkout.checkout(repo.refs.read_ref('main'))
    repo.refs.set_head('main')
    return repo


@pytest.fixture
def runner():
    """Click test runner."""
    from click.testing import CliRunner
    return CliRunner()


@pytest.fixture
def cli_repo(repo, monkeypatch):
    """Initialized repository that is also the process working directory."""
    monkeypatch.chdir(repo.work_tree)
    return repo
