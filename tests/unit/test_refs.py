"""Unit tests for branch references and HEAD."""

import pytest
from gitlet.core.errors import (BranchCheckedOut, BranchExists, BranchNotFound, CorruptObject,
                                InvalidBranchName)

HASH = 'a' * 40


def test_initial_state(repo):
    """Test a fresh repository has an empty main branch checked out."""
    assert repo.refs.get_current_branch() == 'main'
    assert repo.refs.list_branches() == [('main', '')]


def test_write_and_read_ref(repo):
    """Test refs store commit hashes."""
    repo.refs.write_ref('main', HASH)
    assert repo.refs.read_ref('main') == HASH
    assert repo.refs.head_hash() == HASH


def test_read_missing_ref(repo):
    """Test reading an unknown branch fails."""
    with pytest.raises(BranchNotFound):
        repo.refs.read_ref('nope')


def test_read_corrupt_ref(repo):
    """Test a ref holding garbage is reported as corrupt."""
    (repo.refs_dir / 'main').write_text('not-a-hash')
    with pytest.raises(CorruptObject):
        repo.refs.read_ref('main')


def test_update_head_moves_current_branch(repo):
    """Test update_head writes the checked-out branch."""
    repo.refs.create_branch('dev', '')
    repo.refs.update_head(HASH)

    assert repo.refs.read_ref('main') == HASH
    assert repo.refs.read_ref('dev') == ''


def test_create_branch(repo):
    """Test creating and listing branches."""
    repo.refs.create_branch('feature', HASH)
    repo.refs.create_branch('bugfix', '')

    assert repo.refs.list_branches() == [('bugfix', ''), ('feature', HASH), ('main', '')]


def test_create_existing_branch(repo):
    """Test creating a branch twice fails."""
    with pytest.raises(BranchExists):
        repo.refs.create_branch('main', '')


@pytest.mark.parametrize('name', ['', 'a/b', '.hidden'])
def test_create_invalid_branch(repo, name):
    """Test branch names that cannot be stored as ref files are rejected."""
    with pytest.raises(InvalidBranchName):
        repo.refs.create_branch(name, '')


def test_set_head(repo):
    """Test switching HEAD to another branch."""
    repo.refs.create_branch('dev', '')
    repo.refs.set_head('dev')
    assert repo.refs.get_current_branch() == 'dev'


def test_set_head_unknown_branch(repo):
    """Test HEAD cannot point at a missing branch."""
    with pytest.raises(BranchNotFound):
        repo.refs.set_head('ghost')


def test_delete_branch(repo):
    """Test deleting a branch removes its ref."""
    repo.refs.create_branch('dev', '')
    repo.refs.delete_branch('dev')
    assert not repo.refs.branch_exists('dev')


def test_delete_checked_out_branch(repo):
    """Test the current branch cannot be deleted."""
    with pytest.raises(BranchCheckedOut):
        repo.refs.delete_branch('main')


def test_delete_missing_branch(repo):
    """Test deleting an unknown branch fails."""
    with pytest.raises(BranchNotFound):
        repo.refs.delete_branch('ghost')
