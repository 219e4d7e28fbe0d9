"""Pydantic schemas for /api/folders."""

from typing import Optional

from pydantic import BaseModel, Field


class FolderWrite(BaseModel):
    """Body of POST/PUT /api/folders; `name` is checked by the service."""
    name: Optional[str] = Field(default=None, description="Folder name (required, non-empty)")


class FolderResponse(BaseModel):
    id: int = Field(description="Folder identifier")
    name: str = Field(description="Folder name")

    model_config = {"from_attributes": True}
