"""Gitlet objects: blobs and commits."""

import time
from dataclasses import dataclass, field
from typing import Dict, Iterable, Mapping, Optional

from .hash import hash_object


@dataclass(frozen=True)
class Blob:
    """
    Represents stored file content.

    A blob is identified only by the SHA-1 digest of the file's bytes; the
    compressed bytes themselves live in the object store. Two files with the
    same content share one blob regardless of their names.
    """
    hash: str

    def __repr__(self) -> str:
        """String representation of blob."""
        return f"Blob(hash={self.hash[:7]})"


@dataclass
class Commit:
    """
    Represents a commit with metadata.

    A commit captures:
    - Snapshot of the project (path -> blob mapping)
    - Parent commit, plus a merge parent for merge commits
    - Timestamp
    - Commit message

    The empty string stands for "no commit" in both parent fields, and a commit
    whose hash is the empty string is the virtual commit preceding all history.
    """
    hash: str = ''
    parent: str = ''
    merge_parent: str = ''
    message: str = ''
    timestamp: int = 0
    tracked: Dict[str, Blob] = field(default_factory=dict)

    @staticmethod
    def compute_hash(parent: str, merge_parent: str, message: str, timestamp: int) -> str:
        """
        Compute a commit id.

        Only the parents, message and timestamp are hashed; the snapshot is not.

        Returns:
            str: 40-character SHA-1 hash
        """
        return hash_object(f"{parent}{merge_parent}{message}{timestamp}".encode())

    @classmethod
    def create(
        cls,
        parent: 'Commit',
        message: str,
        additions: Mapping[str, Blob],
        removals: Iterable[str],
        merge_parent: str = '',
        timestamp: Optional[int] = None
    ) -> 'Commit':
        """
        Create a new commit on top of a parent snapshot.

        The parent's tracked files are copied, staged removals are dropped and
        staged additions are inserted or replaced.

        Args:
            parent: Parent commit (the virtual empty commit for a first commit)
            message: Commit message
            additions: Staged path -> blob mapping
            removals: Paths staged for removal
            merge_parent: Hash of the merged-in commit, or '' for none
            timestamp: Unix timestamp (defaults to current time)

        Returns:
            Commit: New, unsaved commit
        """
        removed = set(removals)
        tracked = {path: blob for path, blob in parent.tracked.items() if path not in removed}
        tracked.update(additions)

        if timestamp is None:
            timestamp = int(time.time())

        return cls(
            hash=cls.compute_hash(parent.hash, merge_parent, message, timestamp),
            parent=parent.hash,
            merge_parent=merge_parent,
            message=message,
            timestamp=timestamp,
            tracked=tracked,
        )

    @property
    def is_merge(self) -> bool:
        return bool(self.merge_parent)

    def tracks(self, path: str) -> bool:
        """Return True if the commit's snapshot contains path."""
        return path in self.tracked

    def serialize(self) -> bytes:
        """
        Serialize commit to Gitlet format.

        Format:
        parent <parent-hash>
        merge_parent <merge-parent-hash>
        timestamp <seconds>
        blob <digest> <path>  (zero or more, sorted by path)

        <commit message>

        Returns:
            bytes: Serialized commit data
        """
        lines = [
            f'parent {self.parent}',
            f'merge_parent {self.merge_parent}',
            f'timestamp {self.timestamp}',
        ]

        for path in sorted(self.tracked):
            lines.append(f'blob {self.tracked[path].hash} {path}')

        lines.append('')
        lines.append(self.message)

        return '\n'.join(lines).encode()

    @classmethod
    def deserialize(cls, data: bytes) -> 'Commit':
        """
        Deserialize commit from Gitlet format.

        The hash is recomputed from the parsed fields.

        Args:
            data: Serialized commit data

        Raises:
            ValueError: If the record is malformed
        """
        lines = data.decode().split('\n')
        commit = cls()

        message_start = None
        for i, line in enumerate(lines):
            if not line:
                message_start = i + 1
                break

            if line.startswith('parent '):
                commit.parent = line[7:]

            elif line.startswith('merge_parent '):
                commit.merge_parent = line[13:]

            elif line.startswith('timestamp '):
                commit.timestamp = int(line[10:])

            elif line.startswith('blob '):
                digest, sep, path = line[5:].partition(' ')
                if not sep or len(digest) != 40 or not path:
                    raise ValueError(f"Malformed blob entry: {line!r}")
                commit.tracked[path] = Blob(digest)

            else:
                raise ValueError(f"Unknown commit header: {line!r}")

        if message_start is None:
            raise ValueError("Commit record has no message separator")

        commit.message = '\n'.join(lines[message_start:])
        commit.hash = cls.compute_hash(
            commit.parent, commit.merge_parent, commit.message, commit.timestamp
        )
        return commit

    def __repr__(self) -> str:
        """String representation."""
        msg_preview = self.message.split('\n')[0][:50]
        merge_info = f", merge_parent={self.merge_parent[:7]}" if self.merge_parent else ""
        return f"Commit(hash={self.hash[:7]}{merge_info}, files={len(self.tracked)}, msg='{msg_preview}')"
