# /school_console/models/entity_model.py

# --- Core Imports ---
from typing import Any, ClassVar, Dict, FrozenSet, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

# --- Base Model ---

class EntityRecord(BaseModel):
    """
    Common base for the four managed resources.

    Records are permissive: every server field is optional and
    unknown fields are retained, so a partially populated response never
    fails to render. Subclasses list their client-side virtual fields in
    `VIRTUAL_FIELDS`; those are regenerated on every load and never sent back.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    VIRTUAL_FIELDS: ClassVar[FrozenSet[str]] = frozenset()

    id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("_id", "id"),
        serialization_alias="_id",
    )
    status: Optional[str] = None
    createdAt: Optional[Any] = None
    updatedAt: Optional[Any] = None

    def to_payload(self) -> Dict[str, Any]:
        """Server-bound representation: aliased names, no virtual fields, no unset values."""
        return self.model_dump(by_alias=True, exclude=set(self.VIRTUAL_FIELDS), exclude_none=True)
