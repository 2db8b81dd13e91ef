"""Directory snapshot and path relocation index."""

from sandfix_core.pathindex.index import PathIndex
from sandfix_core.pathindex.snapshot import DirectorySnapshot, TreeNode


def build_index(*args, **kwargs) -> PathIndex:
    """Convenience wrapper: snapshot a directory and index it."""
    return PathIndex.build(DirectorySnapshot.build(*args, **kwargs))


__all__ = [
    "DirectorySnapshot",
    "PathIndex",
    "TreeNode",
    "build_index",
]
