"""Character Schemas — open record model for the local character store.

Invariants:
    - id, name, createdAt are always present on a stored record
    - updatedAt is None until the first update, and omitted from to_dict() while None
    - Any other caller-supplied key is kept verbatim in the extra side-map

Design Decisions:
    - extra="allow" keeps the record an open map while the core fields stay typed
    - camelCase field names match the wire format, no alias layer
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

SERVER_OWNED_FIELDS = frozenset({"id", "createdAt", "updatedAt"})


class CharacterRecord(BaseModel):
    """A local character: typed core fields plus arbitrary caller fields."""
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    createdAt: str
    updatedAt: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_empty(cls, v: str) -> str:
        if not v:
            raise ValueError("name cannot be empty")
        return v

    @property
    def extra_fields(self) -> dict[str, Any]:
        return dict(self.model_extra or {})

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump()
        if self.updatedAt is None:
            data.pop("updatedAt", None)
        return data


def strip_server_owned(payload: dict[str, Any]) -> dict[str, Any]:
    """Drop the keys only the store may assign."""
    return {k: v for k, v in payload.items() if k not in SERVER_OWNED_FIELDS}
