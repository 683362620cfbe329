"""Household domain model."""

from pydantic import BaseModel, Field


class Household(BaseModel):
    """Household data transfer object; only what derivation needs."""

    id: str = Field(..., description="Unique household ID")
    name: str = Field(default="", description="Display name")
    timezone: str | None = Field(default=None, description="IANA timezone name, e.g. 'Australia/Sydney'")
