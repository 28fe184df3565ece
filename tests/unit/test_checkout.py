"""Unit tests for working tree synchronization (checkout)."""

import pytest
from gitlet.core.errors import CheckoutConflict
from gitlet.core.objects import Blob, Commit
from tests.conftest import make_commit, write


def snapshot(repo):
    """Map every working tree file (outside .gitlet) to its bytes."""
    return {
        p.relative_to(repo.work_tree).as_posix(): p.read_bytes()
        for p in repo.work_tree.rglob('*')
        if p.is_file() and '.gitlet' not in p.relative_to(repo.work_tree).parts
    }


@pytest.fixture
def two_commits(repo):
    """Commit A tracks a.txt and old/x.txt; commit B changes a.txt, drops old/ and adds b.txt."""
    first = make_commit(repo, {'a.txt': 'A1', 'old/x.txt': 'x', 'same.txt': 's'},
                        message="first", timestamp=1000)
    index = repo.load_index()
    index.remove('old/x.txt')
    second = make_commit(repo, {'a.txt': 'A2', 'b.txt': 'B'}, message="second", timestamp=2000)

    repo.refs.create_branch('old', first.hash)
    return first, second


def test_checkout_older_commit(repo, two_commits):
    """Test checkout restores, deletes and leaves identical files alone."""
    first, second = two_commits

    result = repo.checkout.checkout(first.hash)

    assert snapshot(repo) == {'a.txt': b'A1', 'old/x.txt': b'x', 'same.txt': b's'}
    assert result.removed == ['b.txt']
    assert result.restored == ['a.txt', 'old/x.txt']


def test_checkout_newer_commit_prunes_directories(repo, two_commits):
    """Test directories emptied by a checkout are removed."""
    first, second = two_commits
    repo.checkout.checkout(first.hash)
    repo.refs.set_head('old')

    repo.checkout.checkout(second.hash)

    assert snapshot(repo) == {'a.txt': b'A2', 'b.txt': b'B', 'same.txt': b's'}
    assert not (repo.work_tree / 'old').exists()


def test_checkout_keeps_invoking_directory(repo, two_commits):
    """Test the directory the command runs from is never pruned."""
    first, second = two_commits
    repo.checkout.checkout(first.hash)
    repo.refs.set_head('old')
    repo.cwd = repo.work_tree / 'old'

    repo.checkout.checkout(second.hash)

    assert (repo.work_tree / 'old').is_dir()
    assert not (repo.work_tree / 'old' / 'x.txt').exists()


def test_checkout_empty_snapshot(repo, two_commits):
    """Test checking out the empty commit removes every tracked file."""
    write(repo, 'untracked.txt', 'mine')

    repo.checkout.checkout('')

    assert snapshot(repo) == {'untracked.txt': b'mine'}


def test_conflict_leaves_tree_untouched(repo, two_commits):
    """Test a local edit to a file that differs between commits blocks the checkout."""
    first, second = two_commits
    write(repo, 'a.txt', 'local edit')
    before = snapshot(repo)

    with pytest.raises(CheckoutConflict) as exc_info:
        repo.checkout.checkout(first.hash)

    assert exc_info.value.paths == ['a.txt']
    assert snapshot(repo) == before
    assert 'a.txt' in str(exc_info.value)


def test_conflict_reports_every_path(repo, two_commits):
    """Test staged and unstaged conflicts are reported together."""
    first, second = two_commits
    write(repo, 'a.txt', 'local edit')
    write(repo, 'b.txt', 'staged edit')
    repo.load_index().stage('b.txt')
    repo.refs.write_ref('old', make_old_with_b(repo, first))

    with pytest.raises(CheckoutConflict) as exc_info:
        repo.checkout.checkout(repo.refs.read_ref('old'))

    assert exc_info.value.paths == ['a.txt', 'b.txt']


def make_old_with_b(repo, first):
    """Save a commit on top of first that tracks a different b.txt."""
    other = Commit.create(first, 'other b', {'b.txt': Blob('e' * 40)}, [], timestamp=3000)
    repo.commits.save(other)
    return other.hash


def test_local_edit_carried_over(repo, two_commits):
    """Test an edit to a file both commits agree on survives the checkout."""
    first, second = two_commits
    write(repo, 'same.txt', 'local edit')

    result = repo.checkout.checkout(first.hash)

    assert (repo.work_tree / 'same.txt').read_text() == 'local edit'
    assert 'same.txt' in result.kept


def test_deleted_file_not_restored(repo, two_commits):
    """Test a locally deleted file that both commits agree on stays deleted."""
    first, second = two_commits
    (repo.work_tree / 'same.txt').unlink()

    repo.checkout.checkout(first.hash)

    assert not (repo.work_tree / 'same.txt').exists()


def test_untracked_file_would_be_overwritten(repo, two_commits):
    """Test an untracked file in the way of a checkout blocks it."""
    first, second = two_commits
    repo.checkout.checkout(first.hash)
    repo.refs.set_head('old')
    write(repo, 'b.txt', 'my own b')

    with pytest.raises(CheckoutConflict) as exc_info:
        repo.checkout.checkout(second.hash)

    assert exc_info.value.paths == ['b.txt']
    assert (repo.work_tree / 'b.txt').read_text() == 'my own b'


@pytest.fixture
def nested_target(repo):
    """dev tracks only x.txt; main replaces it with d/b.txt and z.txt. dev is checked out."""
    first = make_commit(repo, {'x.txt': 'x'}, message="only x", timestamp=1000)
    repo.refs.create_branch('dev', first.hash)
    repo.load_index().remove('x.txt')
    second = make_commit(repo, {'d/b.txt': 'b', 'z.txt': 'z'},
                         message="nested", timestamp=2000)

    repo.checkout.checkout(first.hash)
    repo.refs.set_head('dev')
    return first, second


def test_untracked_file_in_place_of_directory(repo, nested_target):
    """Test an untracked file where a directory must go blocks the checkout."""
    first, second = nested_target
    write(repo, 'd', 'mine')

    with pytest.raises(CheckoutConflict) as exc_info:
        repo.checkout.checkout(second.hash)

    assert exc_info.value.paths == ['d']
    assert snapshot(repo) == {'x.txt': b'x', 'd': b'mine'}


def test_tracked_file_replaced_by_directory(repo):
    """Test a tracked file is removed before a directory of the same name is restored."""
    first = make_commit(repo, {'d': 'plain file'}, message="file d", timestamp=1000)
    repo.load_index().remove('d')
    second = make_commit(repo, {'d/b.txt': 'b'}, message="dir d", timestamp=2000)
    repo.checkout.checkout(first.hash)
    assert (repo.work_tree / 'd').read_text() == 'plain file'
    repo.refs.create_branch('old', first.hash)
    repo.refs.set_head('old')

    repo.checkout.checkout(second.hash)

    assert snapshot(repo) == {'d/b.txt': b'b'}

def test_reset_to_discards_local_work(repo, two_commits):
    """Test reset_to restores the snapshot and clears the index."""
    first, second = two_commits
    write(repo, 'a.txt', 'local edit')
    write(repo, 'new.txt', 'staged')
    repo.load_index().stage('new.txt')
    (repo.work_tree / 'b.txt').unlink()

    repo.checkout.reset_to()

    assert snapshot(repo) == {'a.txt': b'A2', 'b.txt': b'B', 'same.txt': b's'}
    assert repo.load_index().is_clear()
