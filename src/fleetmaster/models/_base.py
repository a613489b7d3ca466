"""Base model for fleet records.

Every persisted record inherits from :class:`FleetBaseModel` which
provides:

* ``alias_generator=to_camel`` so snake_case fields serialize to the
  camelCase keys of the stored blob (``vehicleNumber``, ``updatedAt``...).
* A ``model_validator(mode="after")`` that turns per-field "empty"
  values into ``None`` (see ``_BLANK_RULES``).
"""

from __future__ import annotations

import secrets
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from fleetmaster._constants import ID_ALPHABET, ID_LENGTH


def new_record_id() -> str:
    """Return a short random record id (9 lowercase base-36 characters)."""
    return "".join(secrets.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def utcnow() -> datetime:
    return datetime.now(UTC)


def ensure_aware(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class FleetBaseModel(BaseModel):
    """Base for fleet register records.

    Handles:
    * camelCase aliases for the persisted format, snake_case in Python
    * Post-construction blank normalisation via ``_BLANK_RULES``
    """

    _BLANK_RULES: ClassVar[dict[str, Callable[[Any], bool]]] = {}
    """Per-field "empty" predicates.

    Subclasses override this to declare ``{"field_name": predicate}``
    pairs. After model construction the field is set to ``None`` when
    *predicate(value)* is ``True``.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )

    @model_validator(mode="after")
    def _normalise_blanks(self) -> FleetBaseModel:
        blank_rules: dict[str, Callable[[Any], bool]] = getattr(type(self), "_BLANK_RULES", {})
        for field_name, predicate in blank_rules.items():
            val = getattr(self, field_name, None)
            if val is not None and predicate(val):
                object.__setattr__(self, field_name, None)
        return self

    def to_record(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON-compatible dict that gets persisted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
