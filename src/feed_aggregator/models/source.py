"""
Feed source declarations.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Source(BaseModel):
    """A single feed to aggregate.

    Declared in the registry file as ``{"url": ..., "name": ..., "maxItems": ...}``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    url: str = Field(..., min_length=1, description="Feed URL")
    name: str = Field(..., min_length=1, description="Display name")
    max_items: int = Field(
        default=10,
        ge=0,
        strict=True,
        alias="maxItems",
        description="Maximum entries taken from this feed",
    )

    @field_validator("url", "name")
    @classmethod
    def strip_text(cls, v: str) -> str:
        """Strip whitespace and reject blank values."""
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class SourceRegistryFile(BaseModel):
    """Top-level shape of the registry file."""

    model_config = ConfigDict(extra="ignore")

    sources: list[Source]
