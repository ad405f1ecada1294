#!/usr/bin/env python3
"""
Status tree: the data model TreeDash draws.

The tree always has exactly one root. Children are kept in insertion order,
which is also drawing order (top-to-bottom, depth-first). Every node is one
terminal line, so `lines` is simply the node count.

Mutations never hold references into the tree across steps. They resolve an
index path (child indices from the root) and walk it again to reach the
node they change:

  open branch path  : from the root, follow the last child while that last
                      child itself has children. `append` adds here.
  deepest leaf path : from the root, follow the last child until a leaf.
                      `descend` opens a new level under this node.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List

from .components import Content

Path = List[int]


@dataclass
class DisplayNode:
    content: Content
    children: List["DisplayNode"] = field(default_factory=list)

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def count(self) -> int:
        """Nodes in this subtree, including self."""
        return 1 + sum(child.count() for child in self.children)

    def depth(self) -> int:
        """Levels below this node (0 for a leaf)."""
        return 1 + max((child.depth() for child in self.children), default=-1)

    def walk(self, depth: int = 0) -> Iterator[tuple[int, "DisplayNode"]]:
        yield depth, self
        for child in self.children:
            yield from child.walk(depth + 1)


class StatusTree:
    """Rooted tree of display nodes plus a running line count."""

    def __init__(self, root_content: Content):
        self.root = DisplayNode(root_content)
        self.lines = 1

    # -----------------------------
    # Path resolution
    # -----------------------------
    def open_branch_path(self) -> Path:
        path: Path = []
        node = self.root
        while node.children and node.children[-1].children:
            path.append(len(node.children) - 1)
            node = node.children[-1]
        return path

    def deepest_leaf_path(self) -> Path:
        path: Path = []
        node = self.root
        while node.children:
            path.append(len(node.children) - 1)
            node = node.children[-1]
        return path

    def node_at(self, path: Path) -> DisplayNode:
        node = self.root
        for index in path:
            node = node.children[index]
        return node

    # -----------------------------
    # Mutations (caller holds the write lock)
    # -----------------------------
    def append(self, content: Content) -> Path:
        """Add a sibling to the most recent task (or a first child under a bare root)."""
        parent_path = self.open_branch_path()
        parent = self.node_at(parent_path)
        parent.children.append(DisplayNode(content))
        self.lines += 1
        return parent_path + [len(parent.children) - 1]

    def descend(self, content: Content) -> Path:
        """Open a sub-task under the most recent task."""
        parent_path = self.deepest_leaf_path()
        parent = self.node_at(parent_path)
        parent.children.append(DisplayNode(content))
        self.lines += 1
        return parent_path + [len(parent.children) - 1]

    def remove(self) -> bool:
        """Drop the last displayed leaf. The root is never removed; returns False when nothing was."""
        if not self.root.children:
            return False
        parent = self.node_at(self.open_branch_path())
        parent.children.pop()
        self.lines -= 1
        return True

    def replace_root(self, content: Content) -> None:
        """Swap the root's content; its subtree stays put."""
        self.root.content = content

    def __len__(self) -> int:
        return self.lines
