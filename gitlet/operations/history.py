"""Committing and history display for Gitlet."""

import logging
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional

from gitlet.core.errors import NothingToCommit
from gitlet.core.objects import Commit

logger = logging.getLogger(__name__)


def record_commit(repo, message: str, index, merge_parent: str = '',
                  timestamp: Optional[int] = None) -> Commit:
    """
    Fold the staged changes into a new commit on the current branch.

    Writes happen in a fixed order: the commit record, then the branch ref,
    then the emptied index. A crash part way through never leaves the branch
    pointing at a commit that was not written.

    Args:
        repo: Repository instance
        message: Commit message
        index: Staging area to commit (cleared on success)
        merge_parent: Merged-in commit hash, or ''
        timestamp: Unix timestamp (defaults to now)

    Returns:
        Commit: The saved commit
    """
    parent_hash = repo.refs.head_hash()
    commit = repo.commits.create(parent_hash, message, index,
                                 merge_parent=merge_parent, timestamp=timestamp)

    repo.commits.save(commit)
    repo.refs.update_head(commit.hash)
    index.clear()

    logger.debug("Committed %s on %s", commit.hash, repo.refs.get_current_branch())
    return commit


def commit_changes(repo, message: str, timestamp: Optional[int] = None) -> Commit:
    """
    Commit the staging area.

    If a conflicted merge is being concluded, the merged-in commit recorded in
    MERGE_HEAD becomes the new commit's merge parent and the merge state is
    cleared afterwards.

    Raises:
        NothingToCommit: If nothing is staged
    """
    index = repo.load_index()
    if index.is_clear():
        raise NothingToCommit()

    merge_head = repo.merge.get_merge_head() or ''
    commit = record_commit(repo, message, index, merge_parent=merge_head, timestamp=timestamp)

    if merge_head:
        repo.merge.clear_merge_state()

    return commit


def format_commit(commit: Commit) -> str:
    """
    Format one commit as a log entry.

    Example:
        ===
        commit 5d41402abc4b2a76b9719d911017c592cafe1234
        Merge: 1a2b3c4 5d6e7f8
        Date: Sat, 17 Oct 2026 12:00:00 +0000
        Merged dev into main.
    """
    date = datetime.fromtimestamp(commit.timestamp, tz=timezone.utc)

    lines = ["===", f"commit {commit.hash}"]
    if commit.is_merge:
        lines.append(f"Merge: {commit.parent[:7]} {commit.merge_parent[:7]}")
    lines.append(f"Date: {format_datetime(date)}")
    lines.append(commit.message)

    return '\n'.join(lines) + '\n'


def render_log(repo) -> str:
    """Render the history of HEAD, most recent commit first, one blank line after each entry."""
    return ''.join(
        format_commit(commit) + '\n'
        for commit in repo.commits.iterate(repo.refs.head_hash())
    )
