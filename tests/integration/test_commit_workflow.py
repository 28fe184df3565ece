"""Integration tests for staging, committing, status and log."""

import re

from gitlet.cli.main import cli

EMPTY_STATUS = (
    "On branch main\n\n"
    "=== Staged Files ===\n\n"
    "=== Removed Files ===\n\n"
    "=== Unstaged Modifications ===\n\n"
    "=== Untracked Files ===\n\n"
)


def test_add_commit_status_log(runner, cli_repo):
    """Test init, add, commit: status is clean and log shows one entry."""
    (cli_repo.work_tree / 'a.txt').write_text('hello')

    assert runner.invoke(cli, ['add', 'a.txt']).exit_code == 0
    result = runner.invoke(cli, ['commit', 'msg'])
    assert result.exit_code == 0

    status = runner.invoke(cli, ['status'])
    assert status.exit_code == 0
    assert status.output == EMPTY_STATUS

    log = runner.invoke(cli, ['log'])
    assert log.exit_code == 0
    head = cli_repo.refs.head_hash()
    assert re.fullmatch(
        rf"===\ncommit {head}\nDate: \w{{3}}, \d{{2}} \w{{3}} \d{{4}} \d{{2}}:\d{{2}}:\d{{2}} \+0000\nmsg\n\n",
        log.output
    )


def test_staged_file_deleted_shows_in_status(runner, cli_repo):
    """Test a staged file deleted from disk is listed as deleted."""
    (cli_repo.work_tree / 'a.txt').write_text('hello')
    runner.invoke(cli, ['add', 'a.txt'])
    (cli_repo.work_tree / 'a.txt').unlink()

    status = runner.invoke(cli, ['status'])

    assert status.output == (
        "On branch main\n\n"
        "=== Staged Files ===\na.txt\n\n"
        "=== Removed Files ===\n\n"
        "=== Unstaged Modifications ===\na.txt (deleted)\n\n"
        "=== Untracked Files ===\n\n"
    )


def test_commit_with_message_option(runner, cli_repo):
    """Test -m is accepted as well as a positional message."""
    (cli_repo.work_tree / 'a.txt').write_text('hello')
    runner.invoke(cli, ['add', 'a.txt'])

    result = runner.invoke(cli, ['commit', '-m', 'via option'])

    assert result.exit_code == 0
    assert cli_repo.head_commit().message == 'via option'


def test_nothing_to_commit(runner, cli_repo):
    """Test committing an empty index fails."""
    result = runner.invoke(cli, ['commit', 'empty'])

    assert result.exit_code == 1
    assert 'Nothing to commit' in result.output
    assert cli_repo.refs.head_hash() == ''


def test_commit_without_message(runner, cli_repo):
    """Test a message is required."""
    result = runner.invoke(cli, ['commit'])
    assert result.exit_code == 1


def test_add_missing_file(runner, cli_repo):
    """Test adding a missing file fails."""
    result = runner.invoke(cli, ['add', 'missing.txt'])

    assert result.exit_code == 1
    assert 'File does not exist' in result.output


def test_add_from_subdirectory(runner, cli_repo, monkeypatch):
    """Test paths are interpreted relative to the invoking directory."""
    sub = cli_repo.work_tree / 'src'
    sub.mkdir()
    (sub / 'main.py').write_text('print(1)\n')
    monkeypatch.chdir(sub)

    result = runner.invoke(cli, ['add', 'main.py'])

    assert result.exit_code == 0
    assert 'src/main.py' in cli_repo.load_index().additions


def test_log_lists_history_newest_first(runner, cli_repo):
    """Test log order for a linear history."""
    for i in range(3):
        (cli_repo.work_tree / 'a.txt').write_text(f'version {i}')
        runner.invoke(cli, ['add', 'a.txt'])
        runner.invoke(cli, ['commit', f'commit {i}'])

    log = runner.invoke(cli, ['log']).output

    lines = log.splitlines()
    messages = [lines[i + 1] for i, line in enumerate(lines) if line.startswith("Date: ")]
    assert messages == ['commit 2', 'commit 1', 'commit 0']


def test_unstage(runner, cli_repo):
    """Test unstage forgets a staged addition."""
    (cli_repo.work_tree / 'a.txt').write_text('hello')
    runner.invoke(cli, ['add', 'a.txt'])

    result = runner.invoke(cli, ['unstage', 'a.txt'])

    assert result.exit_code == 0
    assert cli_repo.load_index().is_clear()
    assert 'a.txt' in runner.invoke(cli, ['status']).output.split('=== Untracked Files ===')[1]


def test_verbose_flag(runner, cli_repo):
    """Test --verbose is accepted before a command."""
    result = runner.invoke(cli, ['--verbose', 'status'])
    assert result.exit_code == 0
