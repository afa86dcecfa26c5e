# /school_console/services/form_helpers/traversal.py

"""
Generic recursive operations over a form tree.

Every function here treats groups and lists uniformly: a group is walked by
name, a list by index, and the recursion bottoms out at leaves. Nothing is
special-cased by depth or by which screen built the tree.
"""

import copy
from collections.abc import Mapping
from typing import Any, Iterator, Tuple

from .schema import GROUP, LEAF, LIST


def _join(path: str, part: str) -> str:
    return f"{path}.{part}" if path else part


def children(node) -> Iterator[Tuple[str, Any]]:
    if node.kind == GROUP:
        yield from node.children.items()
    elif node.kind == LIST:
        for index, item in enumerate(node.items):
            yield str(index), item
    elif node.kind != LEAF:
        raise TypeError(f"Unknown form node kind: {node.kind!r}")


def iter_leaves(node, path: str = "") -> Iterator[Tuple[str, Any]]:
    """Yields `(dotted_path, leaf)` for every leaf under `node`, depth first."""
    if node.kind == LEAF:
        yield path, node
        return
    for name, child in children(node):
        yield from iter_leaves(child, _join(path, name))


def is_valid(node) -> bool:
    return all(not leaf.errors for _, leaf in iter_leaves(node))


def is_touched(node) -> bool:
    return all(leaf.is_touched for _, leaf in iter_leaves(node))


def is_dirty(node) -> bool:
    return any(leaf.is_dirty for _, leaf in iter_leaves(node))


def mark_all_touched(node) -> None:
    for _, leaf in iter_leaves(node):
        leaf.mark_touched()


def validate(node) -> bool:
    """Re-runs every validator under `node` and returns the aggregate validity."""
    for _, leaf in iter_leaves(node):
        leaf.revalidate()
    return is_valid(node)


def to_value(node) -> Any:
    if node.kind == LEAF:
        value = copy.deepcopy(node.value)
        return node.normalize(value) if node.normalize else value
    if node.kind == GROUP:
        return {name: to_value(child) for name, child in node.children.items()}
    return [to_value(item) for item in node.items]


def patch(node, value: Any) -> None:
    """
    Merges `value` into `node` without touching anything it does not mention.

    `None` for a group or list keeps the current shape, so a record whose
    nested object is missing still patches cleanly. Lists are resized to the
    incoming sequence; items that already exist are patched in place.
    """
    if node.kind == LEAF:
        node.set_value(copy.deepcopy(value), mark_dirty=False)
        return
    if value is None:
        return
    if node.kind == GROUP:
        if not isinstance(value, Mapping):
            raise TypeError(f"Expected a mapping to patch a group, got {type(value).__name__}")
        for name, child_value in value.items():
            child = node.children.get(name)
            if child is not None:
                patch(child, child_value)
        return
    if isinstance(value, (str, bytes, Mapping)) or not hasattr(value, "__iter__"):
        raise TypeError(f"Expected a sequence to patch a list, got {type(value).__name__}")
    incoming = list(value)
    del node.items[len(incoming):]
    for index, item_value in enumerate(incoming):
        if index < len(node.items):
            patch(node.items[index], item_value)
        else:
            item = node.build_item()
            patch(item, item_value)
            node.items.append(item)


def resolve(node, path: str):
    """Follows a dotted path (list positions as integers) down from `node`."""
    current = node
    if not path:
        return current
    for part in path.split("."):
        if current.kind == GROUP and part in current.children:
            current = current.children[part]
        elif current.kind == LIST and part.isdigit() and int(part) < len(current.items):
            current = current.items[int(part)]
        else:
            raise KeyError(path)
    return current
