# /school_console/services/form_helpers/nodes.py

"""
The three node variants a form tree is made of.

Nodes only hold state. Anything that walks the tree (validity, touch
propagation, flattening, patching) lives in `traversal`, written once and
dispatched on `kind`.
"""

import copy
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence

from . import traversal
from .schema import GROUP, LEAF, LIST, FieldSpec, GroupSpec, ListSpec, Spec
from .validators import ValidationErrors, Validator


class FormNode:
    kind: str = ""

    @property
    def valid(self) -> bool:
        return traversal.is_valid(self)

    @property
    def touched(self) -> bool:
        return traversal.is_touched(self)

    @property
    def dirty(self) -> bool:
        return traversal.is_dirty(self)


class FormLeaf(FormNode):
    """
    A single input. `touched` only ever goes from False to True; validity is
    re-evaluated on every value change.
    """
    kind = LEAF

    def __init__(
        self,
        value: Any = None,
        validators: Sequence[Validator] = (),
        normalize: Optional[Callable[[Any], Any]] = None,
    ):
        self.value = value
        self.validators = tuple(validators)
        self.normalize = normalize
        self.is_touched = False
        self.is_dirty = False
        self.errors: ValidationErrors = {}
        self.revalidate()

    def set_value(self, value: Any, mark_dirty: bool = True) -> None:
        self.value = value
        if mark_dirty:
            self.is_dirty = True
        self.revalidate()

    def mark_touched(self) -> None:
        self.is_touched = True

    def revalidate(self) -> ValidationErrors:
        errors: ValidationErrors = {}
        for validator in self.validators:
            result = validator(self.value)
            if result:
                errors.update(result)
        self.errors = errors
        return errors

    def __repr__(self) -> str:
        return f"FormLeaf(value={self.value!r}, touched={self.is_touched}, errors={self.errors})"


class FormGroup(FormNode):
    kind = GROUP

    def __init__(self, children: Optional[Dict[str, FormNode]] = None):
        self.children: Dict[str, FormNode] = dict(children or {})

    def __getitem__(self, name: str) -> FormNode:
        return self.children[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.children)


class FormList(FormNode):
    """An ordered, resizable sequence of nodes built from one item spec."""
    kind = LIST

    def __init__(self, item_spec: Spec, items: Sequence[FormNode] = ()):
        self.item_spec = item_spec
        self.items: List[FormNode] = list(items)

    def build_item(self) -> FormNode:
        return build_node(self.item_spec)

    def append(self, node: FormNode) -> FormNode:
        self.items.append(node)
        return node

    def remove_at(self, index: int) -> FormNode:
        if not 0 <= index < len(self.items):
            raise IndexError(f"No list item at index {index} (length {len(self.items)})")
        return self.items.pop(index)

    def clear(self) -> None:
        self.items.clear()

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[FormNode]:
        return iter(self.items)

    def __getitem__(self, index: int) -> FormNode:
        return self.items[index]


def build_node(spec: Spec) -> FormNode:
    """Instantiates a pristine node tree for `spec`."""
    if spec.kind == LEAF:
        return FormLeaf(copy.deepcopy(spec.default), spec.validators, spec.normalize)
    if spec.kind == GROUP:
        return FormGroup({name: build_node(child) for name, child in spec.fields.items()})
    if spec.kind == LIST:
        return FormList(spec.item, [build_node(spec.item) for _ in range(spec.initial)])
    raise TypeError(f"Unknown schema kind: {spec.kind!r}")
