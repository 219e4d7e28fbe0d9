"""Pydantic schemas for /api/tags."""

from typing import Optional

from pydantic import BaseModel, Field


class TagWrite(BaseModel):
    """Body of POST/PUT /api/tags; `name` is checked by the service."""
    name: Optional[str] = Field(default=None, description="Tag name (required, non-empty)")


class TagResponse(BaseModel):
    id: int = Field(description="Tag identifier")
    name: str = Field(description="Tag name")

    model_config = {"from_attributes": True}
