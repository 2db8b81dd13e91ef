"""Name-only snapshot of a live directory tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from sandfix_core.errors import StoreIOError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TreeNode:
    """A directory (or, with no children, a file) in the snapshot."""

    children: dict[str, TreeNode] = field(default_factory=dict)

    def child(self, name: str) -> TreeNode | None:
        return self.children.get(name)

    def descends(self, names: list[str] | tuple[str, ...]) -> bool:
        """True if *names* is a chain of child names starting below this node."""
        node: TreeNode | None = self
        for name in names:
            node = node.child(name)
            if node is None:
                return False
        return True

    def count(self) -> int:
        """Number of nodes below this one."""
        return sum(1 + c.count() for c in self.children.values())


class DirectorySnapshot:
    """Directory-name skeleton of a tree rooted at a canonical path.

    Only names are recorded; file contents are never read. Built once per
    run and treated as read-only afterwards.
    """

    def __init__(self, root: str, tree: TreeNode) -> None:
        self.root = root
        self.tree = tree

    @classmethod
    def build(
        cls,
        root_path: str | Path,
        ignore_patterns: list[str] | None = None,
        follow_symlinks: bool = True,
    ) -> DirectorySnapshot:
        """Walk *root_path* recursively and record every entry name.

        Entries whose name is in *ignore_patterns* are skipped. Directory
        symlinks are followed unless *follow_symlinks* is false; a symlink
        that leads back to one of its own ancestors is recorded as a leaf.
        """
        try:
            root = Path(root_path).resolve(strict=True)
        except OSError as e:
            raise StoreIOError(str(root_path), e) from e
        ignore = set(ignore_patterns or ())

        def walk(path: Path, ancestors: frozenset[Path]) -> TreeNode:
            try:
                entries = sorted(path.iterdir(), key=lambda p: p.name)
            except OSError as e:
                raise StoreIOError(str(path), e) from e

            children: dict[str, TreeNode] = {}
            for entry in entries:
                if entry.name in ignore:
                    continue
                if entry.is_symlink() and not follow_symlinks:
                    children[entry.name] = TreeNode()
                    continue
                if not entry.is_dir():
                    children[entry.name] = TreeNode()
                    continue
                real = entry.resolve()
                if real in ancestors:
                    logger.debug("symlink loop at %s -> %s", entry, real)
                    children[entry.name] = TreeNode()
                    continue
                children[entry.name] = walk(entry, ancestors | {real})
            return TreeNode(children=children)

        tree = walk(root, frozenset({root}))
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("snapshot of %s has %d entries", root, tree.count())
        return cls(root=str(root), tree=tree)
