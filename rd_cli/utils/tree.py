"""Build and draw collection hierarchies from flat parent-referencing lists."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Optional

from rd_cli.core.constants import TREE_BRANCH, TREE_ICON, TREE_LAST_BRANCH, TREE_PIPE, TREE_SPACE
from rd_cli.utils.records import MISSING, get_nested_value


@dataclass
class TreeNode:
    """One record plus its ordered children."""

    item: Dict[str, Any]
    children: List["TreeNode"] = field(default_factory=list)

    @property
    def title(self) -> str:
        return str(self.item.get("title") or "")

    @property
    def id(self) -> Any:
        return self.item.get("_id")

    @property
    def count(self) -> int:
        try:
            return int(self.item.get("count") or 0)
        except (TypeError, ValueError):
            return 0

    @property
    def parent_id(self) -> Optional[Any]:
        value = get_nested_value(self.item, "parent.$id")
        return None if value is MISSING else value


@dataclass(frozen=True)
class TreeRow:
    """Rendered line: tree-decorated label plus the record's id and count."""

    tree: str
    id: Any
    count: int


def _sort_key(node: TreeNode) -> tuple[str, str]:
    return node.title.casefold(), node.title


def _sort_recursive(nodes: List[TreeNode]) -> None:
    nodes.sort(key=_sort_key)
    for node in nodes:
        _sort_recursive(node.children)


def build_tree(roots: Iterable[Dict[str, Any]], children: Iterable[Dict[str, Any]]) -> List[TreeNode]:
    """Link records into a forest sorted by title at every level.

    Records present in both lists are kept once. A record whose parent is not
    among the inputs becomes a root. Records without an ``_id`` are never
    merged and never act as parents.
    """
    nodes: Dict[Any, TreeNode] = {}
    anonymous: List[TreeNode] = []
    for item in [*roots, *children]:
        node = TreeNode(item=item)
        if node.id is None:
            anonymous.append(node)
        else:
            nodes[node.id] = node
    everything = [*nodes.values(), *anonymous]

    forest: List[TreeNode] = []
    for node in everything:
        parent = nodes.get(node.parent_id) if node.parent_id is not None else None
        if parent is not None and parent is not node:
            parent.children.append(node)
        else:
            forest.append(node)

    # Parent cycles are unreachable from any root; cut each one at its first member
    reachable = {id(node) for node, _ in walk_tree(forest)}
    for node in everything:
        if id(node) in reachable:
            continue
        nodes[node.parent_id].children.remove(node)
        forest.append(node)
        reachable.update(id(member) for member, _ in walk_tree([node]))

    _sort_recursive(forest)
    return forest


def walk_tree(nodes: List[TreeNode], depth: int = 0) -> Iterable[tuple[TreeNode, int]]:
    """Yield ``(node, depth)`` in depth-first pre-order."""
    for node in nodes:
        yield node, depth
        yield from walk_tree(node.children, depth + 1)


def iter_tree_lines(nodes: List[TreeNode], prefix: str = "", is_root: bool = True) -> Iterable[tuple[str, TreeNode]]:
    """Yield ``(prefix + branch, node)`` pairs with continuation bars drawn."""
    for index, node in enumerate(nodes):
        is_last = index == len(nodes) - 1
        branch = "" if is_root else (TREE_LAST_BRANCH if is_last else TREE_BRANCH)
        yield f"{prefix}{branch}", node
        if node.children:
            child_prefix = "" if is_root else prefix + (TREE_SPACE if is_last else TREE_PIPE)
            yield from iter_tree_lines(node.children, child_prefix, is_root=False)


def render_tree(
    nodes: List[TreeNode],
    icon: str = TREE_ICON,
    label: Callable[[str], str] = str,
) -> List[TreeRow]:
    """Render the forest as rows, one per node; ``label`` styles each title."""
    return [
        TreeRow(tree=f"{lead}{icon} {label(node.title)}", id=node.id, count=node.count)
        for lead, node in iter_tree_lines(nodes)
    ]
