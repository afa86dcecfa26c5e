# /school_console/services/form_helpers/schema.py

"""
Declarative form schemas.

A schema is plain data: field names mapped to `FieldSpec` (a leaf with its
validators), `GroupSpec` (named children) or `ListSpec` (a repeatable item).
Nested dicts are accepted wherever a group is expected.
"""

from dataclasses import dataclass, field as dc_field
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, Union

from .validators import Validator

LEAF = "leaf"
GROUP = "group"
LIST = "list"


@dataclass(frozen=True)
class FieldSpec:
    default: Any = None
    validators: Tuple[Validator, ...] = ()
    normalize: Optional[Callable[[Any], Any]] = None
    kind: str = dc_field(default=LEAF, init=False)


@dataclass(frozen=True)
class GroupSpec:
    fields: Dict[str, "Spec"] = dc_field(default_factory=dict)
    kind: str = dc_field(default=GROUP, init=False)


@dataclass(frozen=True)
class ListSpec:
    item: "Spec" = dc_field(default_factory=FieldSpec)
    initial: int = 0
    kind: str = dc_field(default=LIST, init=False)


Spec = Union[FieldSpec, GroupSpec, ListSpec]


def field(default: Any = None, *validators: Validator, normalize: Optional[Callable[[Any], Any]] = None) -> FieldSpec:
    return FieldSpec(default=default, validators=tuple(validators), normalize=normalize)


def group(fields: Mapping[str, Any]) -> GroupSpec:
    return GroupSpec(fields={name: as_spec(child) for name, child in fields.items()})


def array(item: Any, initial: int = 0) -> ListSpec:
    if initial < 0:
        raise ValueError("initial must not be negative")
    return ListSpec(item=as_spec(item), initial=initial)


def as_spec(obj: Any) -> Spec:
    if isinstance(obj, (FieldSpec, GroupSpec, ListSpec)):
        return obj
    if isinstance(obj, Mapping):
        return group(obj)
    raise TypeError(f"Cannot use {type(obj).__name__} as a form schema entry")
