"""Advisory service result models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PartSuggestion(BaseModel):
    """A commonly replaced part for a vehicle class."""

    model_config = ConfigDict(frozen=True, extra="ignore", str_strip_whitespace=True)

    name: str
    category: str
    interval: str
    """Free-text replacement interval (e.g. ``"every 20,000 km"``)."""
