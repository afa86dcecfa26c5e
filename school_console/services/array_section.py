# /school_console/services/array_section.py

from typing import Any, Iterator, List

from .form_helpers import traversal
from .form_helpers.nodes import FormList, FormNode
from .form_helpers.schema import LEAF


class DynamicArraySection:
    """
    Add/remove/toggle operations on one repeatable part of a form
    (facilities, course resources, schedule days, prerequisites).

    Existing item nodes are never rebuilt or renumbered by these operations,
    so the touched and validity state of untouched siblings survives every
    add or remove.
    """

    def __init__(self, node: FormList):
        if node.kind != "list":
            raise TypeError("DynamicArraySection requires a list node")
        self.node = node

    # --- Queries ---
    def __len__(self) -> int:
        return len(self.node)

    def __iter__(self) -> Iterator[FormNode]:
        return iter(self.node)

    def __getitem__(self, index: int) -> FormNode:
        return self.node[index]

    @property
    def valid(self) -> bool:
        return self.node.valid

    @property
    def touched(self) -> bool:
        return self.node.touched

    def values(self) -> List[Any]:
        return traversal.to_value(self.node)

    def contains(self, value: Any) -> bool:
        return self._index_of(value) is not None

    # --- Mutations ---
    def append(self, value: Any = None) -> FormNode:
        """Adds a new item built from the item spec, pre-filled with `value`."""
        item = self.node.build_item()
        if value is not None:
            traversal.patch(item, value)
        return self.node.append(item)

    def append_node(self, item: FormNode) -> FormNode:
        return self.node.append(item)

    def remove_at(self, index: int) -> FormNode:
        return self.node.remove_at(index)

    def toggle(self, value: Any) -> bool:
        """
        Removes the item holding `value`, or appends it when absent.
        Returns True when `value` is selected afterwards.
        """
        if self.node.item_spec.kind != LEAF:
            raise TypeError("toggle is only supported on lists of plain values")
        index = self._index_of(value)
        if index is not None:
            self.node.remove_at(index)
            return False
        item = self.node.build_item()
        item.set_value(value)
        self.node.append(item)
        return True

    def replace(self, values: List[Any]) -> None:
        self.clear()
        for value in values:
            self.append(value)

    def clear(self) -> None:
        self.node.clear()

    def _index_of(self, value: Any):
        for index, item in enumerate(self.node):
            if item.kind == LEAF and item.value == value:
                return index
        return None
