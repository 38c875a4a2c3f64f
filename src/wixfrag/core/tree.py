"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/tree.py
Builds the pruned directory tree of one group from the resolved file list.
Only directories holding a group file, or with a descendant that does, get a node.
"""

import os
from dataclasses import dataclass, field
from typing import List, Dict, Optional

from wixfrag.core.models import ResolvedFile


@dataclass
class DirectoryNode:
    """
    One directory level of the output tree.
    files keep resolution order; children keep order of first appearance.
    """
    path: str
    files: List[ResolvedFile] = field(default_factory=list)
    children: List["DirectoryNode"] = field(default_factory=list)

    @property
    def name(self) -> str:
        return os.path.basename(self.path)

    def walk(self):
        """Yields this node and all descendants, parents first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def __repr__(self):
        return f"<DirectoryNode {self.path} files={len(self.files)} children={len(self.children)}>"


def is_within(directory: str, ancestor: str) -> bool:
    """True if directory is ancestor itself or lies anywhere beneath it."""
    ancestor = ancestor.rstrip(os.sep) or os.sep
    if directory == ancestor:
        return True
    prefix = ancestor if ancestor.endswith(os.sep) else ancestor + os.sep
    return directory.startswith(prefix)


def files_in_group(files: List[ResolvedFile], group_dir: str) -> List[ResolvedFile]:
    """Files whose source directory is inside group_dir, in resolution order."""
    return [f for f in files if is_within(f.directory, group_dir)]


def build_group_tree(group_dir: str, files: List[ResolvedFile]) -> Optional[DirectoryNode]:
    """
    Returns the node for group_dir with its pruned subtree, or None when the
    group holds no files at all.
    """
    group_dir = group_dir.rstrip(os.sep) or os.sep
    members = files_in_group(files, group_dir)
    if not members:
        return None

    root = DirectoryNode(path=group_dir)
    nodes: Dict[str, DirectoryNode] = {group_dir: root}

    def ensure(path: str) -> DirectoryNode:
        node = nodes.get(path)
        if node is not None:
            return node
        parent = ensure(os.path.dirname(path))
        node = DirectoryNode(path=path)
        parent.children.append(node)
        nodes[path] = node
        return node

    for record in members:
        ensure(record.directory).files.append(record)

    return root
