"""Utilities module for common helper functions.

This module contains:
- Atomic file replacement
- Empty directory pruning
- Working tree file listing
"""

from gitlet.utils.fs import atomic_write, prune_empty_dirs, working_files

__all__ = [
    'atomic_write', 'prune_empty_dirs', 'working_files',
]
