# /school_console/services/form_service.py

"""
This module is the single form engine behind every create/edit screen.

A NestedFormModel is built from a declarative schema (see
`form_helpers.schema`) and exposes the handful of operations screens need:
patching from a fetched record, validating, forcing error display on a
rejected submit, and flattening back into a payload. The submit flow keeps
validation failures inside the form layer and turns collaborator failures
into one notification, without retrying.
"""

import asyncio
import logging
from typing import Any, Dict, Iterable, Mapping, Optional, Union

from pydantic import BaseModel

from ..errors import ValidationError, coerce_error
from ..models.resource_model import OperationResult
from .array_section import DynamicArraySection
from .collaborators import Notify, NotifyKind, Persist, resolve
from .form_helpers import traversal
from .form_helpers.nodes import FormGroup, FormNode, build_node
from .form_helpers.schema import GroupSpec, as_spec
from .form_helpers.validators import ValidationErrors, error_message

logger = logging.getLogger(__name__)


class NestedFormModel:
    def __init__(self, schema: GroupSpec):
        self.schema = schema
        self.root: FormGroup = build_node(schema)

    @classmethod
    def build(cls, schema: Union[GroupSpec, Mapping[str, Any]]) -> "NestedFormModel":
        spec = as_spec(schema)
        if not isinstance(spec, GroupSpec):
            raise TypeError("A form schema must describe a group of fields")
        return cls(spec)

    # --- Navigation ---
    def get(self, path: str) -> FormNode:
        return traversal.resolve(self.root, path)

    def section(self, path: str) -> DynamicArraySection:
        return DynamicArraySection(self.get(path))

    # --- Aggregate state ---
    @property
    def valid(self) -> bool:
        return self.root.valid

    @property
    def touched(self) -> bool:
        return self.root.touched

    @property
    def dirty(self) -> bool:
        return self.root.dirty

    # --- Mutations ---
    def set_value(self, path: str, value: Any) -> None:
        """A user edit: marks the leaf dirty and re-runs its validators."""
        node = self.get(path)
        if node.kind != "leaf":
            raise TypeError(f"{path!r} is not a single field")
        node.set_value(value)

    def touch(self, path: str) -> None:
        traversal.mark_all_touched(self.get(path))

    def patch(self, partial: Optional[Mapping[str, Any]]) -> None:
        traversal.patch(self.root, partial)

    def mark_all_touched(self) -> None:
        traversal.mark_all_touched(self.root)

    def validate(self) -> bool:
        return traversal.validate(self.root)

    def reset(self) -> None:
        self.root = build_node(self.schema)

    # --- Output ---
    def errors(self) -> Dict[str, ValidationErrors]:
        return {path: dict(leaf.errors) for path, leaf in traversal.iter_leaves(self.root) if leaf.errors}

    def visible_errors(self) -> Dict[str, str]:
        """First error message of every touched, invalid field."""
        visible = {}
        for path, leaf in traversal.iter_leaves(self.root):
            if leaf.is_touched and leaf.errors:
                key, detail = next(iter(leaf.errors.items()))
                visible[path] = error_message(key, detail, label=path.rsplit(".", 1)[-1])
        return visible

    def to_value(self) -> Dict[str, Any]:
        return traversal.to_value(self.root)


# --- Edit-form population ---

def _reference_id(value: Any) -> Any:
    if isinstance(value, Mapping):
        return value.get("_id", value.get("id"))
    return value


def populate_from_record(
    form: NestedFormModel,
    record: Union[BaseModel, Mapping[str, Any]],
    references: Iterable[str] = (),
) -> None:
    """
    Loads a fetched record into an edit form.

    Virtual fields are dropped and populated references (`{"_id": ..., ...}`)
    are reduced to their id, alone or inside lists. Missing nested objects
    leave the form's default shape in place.
    """
    if isinstance(record, BaseModel):
        exclude = set(getattr(record, "VIRTUAL_FIELDS", ()))
        data = record.model_dump(by_alias=True, exclude=exclude, exclude_none=True)
    else:
        data = dict(record)
    for key in references:
        value = data.get(key)
        if isinstance(value, list):
            data[key] = [_reference_id(item) for item in value]
        elif value is not None:
            data[key] = _reference_id(value)
    form.patch(data)


# --- Submission ---

async def submit(
    form: NestedFormModel,
    persist: Persist,
    notify: Optional[Notify] = None,
    record_id: Optional[str] = None,
    entity_label: str = "Record",
) -> OperationResult:
    """
    Validates and persists a form.

    An invalid form is marked touched so every error becomes visible, and no
    collaborator is called. A persistence failure is reported once through
    `notify` and returned; the form is left exactly as it was.
    """
    if not form.validate():
        form.mark_all_touched()
        invalid = sorted(form.errors())
        logger.info("Rejected %s submission with %d invalid field(s).", entity_label, len(invalid))
        return OperationResult(ok=False, error=ValidationError(invalid_paths=invalid))

    payload = form.to_value()
    action = "updated" if record_id else "created"
    try:
        saved = await persist(record_id, payload)
    except asyncio.CancelledError:
        raise
    except Exception as e:
        error = coerce_error(e)
        logger.warning("Saving %s failed: %s", entity_label, error.message)
        if notify is not None:
            await resolve(notify(error.user_message, NotifyKind.ERROR))
        return OperationResult(ok=False, error=error)

    if notify is not None:
        await resolve(notify(f"{entity_label} {action} successfully", NotifyKind.SUCCESS))
    return OperationResult(ok=True, value=saved)
