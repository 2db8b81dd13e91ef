"""Reverse lookup from trailing path segments to live paths."""

from __future__ import annotations

from collections import defaultdict, deque
from pathlib import PurePath

from sandfix_core.pathindex.snapshot import DirectorySnapshot, TreeNode


def _join(*parts: str) -> str:
    return str(PurePath(*parts))


class PathIndex:
    """Maps every entry name in a snapshot to where it occurs.

    ``entries[name]`` lists ``(parent_path, node)`` pairs in breadth-first
    order, so shallower occurrences come first. Candidate order returned by
    :meth:`resolve` follows this order.
    """

    def __init__(self, root: str, entries: dict[str, list[tuple[str, TreeNode]]]) -> None:
        self.root = root
        self.entries = entries

    @classmethod
    def build(cls, snapshot: DirectorySnapshot) -> PathIndex:
        entries: dict[str, list[tuple[str, TreeNode]]] = defaultdict(list)
        queue: deque[tuple[str, TreeNode]] = deque([(snapshot.root, snapshot.tree)])
        while queue:
            path, node = queue.popleft()
            for name, child in node.children.items():
                entries[name].append((path, child))
                queue.append((_join(path, name), child))
        return cls(root=snapshot.root, entries=dict(entries))

    def __len__(self) -> int:
        return sum(len(v) for v in self.entries.values())

    def resolve(self, stale_path: str) -> list[str]:
        """Return live paths whose trailing segments match *stale_path*.

        Leading segments of *stale_path* are dropped one at a time until
        some segment names an indexed entry from which the rest of the path
        descends. All such entries for that segment are returned.
        """
        p = PurePath(stale_path)
        segments = [s for s in p.parts if s != p.anchor]

        for i, name in enumerate(segments):
            occurrences = self.entries.get(name)
            if not occurrences:
                continue
            rest = segments[i + 1:]
            matches = [
                _join(prefix, name, *rest)
                for prefix, node in occurrences
                if node.descends(rest)
            ]
            if matches:
                return matches
        return []
