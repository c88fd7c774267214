"""Prefix tree over dot-delimited classification codes.

Nodes live in an arena keyed by their segment tuple (``("01",)``,
``("01", "00")``); the synthetic root has the empty key and the display path
``""``. A code with an empty leading segment such as ``".05"`` therefore gets its
own branch instead of folding into the root. Building happens in three explicit
steps:

1. ``insert`` walks each code prefix by prefix, creating missing nodes and
   linking them to their parent. Revisiting a prefix reuses the same node, so the
   order in which codes arrive does not change the resulting tree.
2. ``aggregate`` runs a post-order pass storing ``own_value + sum(child values)``
   on every node and returns the root total.
3. ``prune`` runs a second post-order pass that detaches every non-root node whose
   aggregated value is zero and which has no remaining children.

Both passes use an explicit stack so deep code hierarchies cannot hit the
interpreter recursion limit.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

NodeKey = Tuple[str, ...]

ROOT_KEY: NodeKey = ()
ROOT_PATH = ""
ROOT_NAME = "root"
SEGMENT_SEPARATOR = "."


def node_key(path: str | NodeKey) -> NodeKey:
    """Arena key for a display path; ``""`` is the root."""
    if isinstance(path, tuple):
        return path
    if path == ROOT_PATH:
        return ROOT_KEY
    return tuple(path.split(SEGMENT_SEPARATOR))


@dataclass
class TreeNode:
    key: NodeKey
    parent: Optional[NodeKey] = None
    own_value: int = 0
    value: int = 0
    children: List[NodeKey] = field(default_factory=list)

    @property
    def path(self) -> str:
        return SEGMENT_SEPARATOR.join(self.key)

    @property
    def is_root(self) -> bool:
        return self.key == ROOT_KEY


class ClassificationTree:
    """Arena-backed classification hierarchy."""

    def __init__(self) -> None:
        self._nodes: Dict[NodeKey, TreeNode] = {ROOT_KEY: TreeNode(key=ROOT_KEY)}

    @property
    def root(self) -> TreeNode:
        return self._nodes[ROOT_KEY]

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, tuple)):
            return False
        return node_key(path) in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def node(self, path: str | NodeKey) -> TreeNode:
        return self._nodes[node_key(path)]

    def children_of(self, path: str | NodeKey) -> List[TreeNode]:
        return [self._nodes[child] for child in self._nodes[node_key(path)].children]

    def insert(self, code: str, count: int) -> TreeNode:
        """Create every prefix node of ``code`` and set the leaf's own value."""
        key = ROOT_KEY
        for segment in code.split(SEGMENT_SEPARATOR):
            parent_key = key
            key = key + (segment,)
            if key not in self._nodes:
                self._nodes[key] = TreeNode(key=key, parent=parent_key)
                self._nodes[parent_key].children.append(key)
        leaf = self._nodes[key]
        leaf.own_value = count
        return leaf

    def _post_order(self, start: NodeKey = ROOT_KEY) -> Iterator[TreeNode]:
        stack: List[Tuple[NodeKey, bool]] = [(start, False)]
        while stack:
            key, expanded = stack.pop()
            node = self._nodes[key]
            if expanded:
                yield node
                continue
            stack.append((key, True))
            for child in reversed(node.children):
                stack.append((child, False))

    def aggregate(self) -> int:
        """Store subtree totals on every node; returns the root total."""
        totals: Dict[NodeKey, int] = {}
        for node in self._post_order():
            total = node.own_value + sum(totals[child] for child in node.children)
            totals[node.key] = total
            node.value = total
        return totals[ROOT_KEY]

    def prune(self) -> int:
        """Detach empty branches; returns how many nodes were removed."""
        removed = 0
        for node in self._post_order():
            retained: List[NodeKey] = []
            for child_key in node.children:
                child = self._nodes[child_key]
                if child.value == 0 and not child.children:
                    del self._nodes[child_key]
                    removed += 1
                    continue
                retained.append(child_key)
            node.children = retained
        return removed

    def to_dict(self, path: str | NodeKey = ROOT_PATH) -> Dict[str, Any]:
        """Nested ``{name, value, children}`` document rooted at ``path``."""
        start = node_key(path)
        documents: Dict[NodeKey, Dict[str, Any]] = {}
        for node in self._post_order(start):
            documents[node.key] = {
                "name": ROOT_NAME if node.is_root else node.path,
                "value": node.value,
                "children": [documents.pop(child) for child in node.children],
            }
        return documents[start]


def build_classification_tree(counts: Mapping[str, int]) -> ClassificationTree:
    """Build, aggregate and prune the hierarchy for a flat code -> count map."""
    tree = ClassificationTree()
    for code in sorted(counts):
        if not code or not code.strip():
            continue
        tree.insert(code, counts[code])
    tree.aggregate()
    tree.prune()
    return tree
