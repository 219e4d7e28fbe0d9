"""
Noteful API — Note Request/Response Schemas
============================================

What:  Pydantic models defining the note API contract.
How:   FastAPI validates request bodies against these models and serializes
       responses through them (also drives the OpenAPI docs).

Request bodies are partial on purpose: `title` is optional at the schema
level so a missing title becomes a 400 ValidationError raised by the service
(before any store call) instead of FastAPI's automatic 422.
"""

from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, Field

from noteful.schemas.folder import FolderResponse
from noteful.schemas.tag import TagResponse


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════

# Columns of `notes` a client may write
NOTE_WRITABLE_FIELDS = ("title", "content", "folder_id")


class NoteWrite(BaseModel):
    """
    Body of POST /api/notes and PUT /api/notes/{id}.

    Works as a typed patch: only the fields the client actually sent are in
    `model_fields_set`, and only those reach the UPDATE statement.

    Example:
        {"title": "Groceries", "content": "eggs", "folderId": 100, "tags": [1, 2]}
    """
    title: Optional[str] = Field(default=None, description="Note title (required, non-empty)")
    content: Optional[str] = Field(default=None, description="Note body text")
    folder_id: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("folderId", "folder_id"),
        description="Folder the note belongs to (null for none)",
    )
    tags: Optional[List[int]] = Field(
        default=None,
        description="Complete set of tag ids for the note",
    )

    def note_fields(self) -> Dict[str, Any]:
        """Column values present in the request, keyed by column name."""
        return {
            name: getattr(self, name)
            for name in NOTE_WRITABLE_FIELDS
            if name in self.model_fields_set
        }

    def tag_ids(self) -> Optional[List[int]]:
        """
        Requested tag ids with duplicates removed (first occurrence wins).

        Returns None when the request did not mention tags at all, which on
        update means "leave the note's tags as they are".
        """
        if "tags" not in self.model_fields_set or self.tags is None:
            return None
        return list(dict.fromkeys(self.tags))


class NoteFilters(BaseModel):
    """
    Validated filters for GET /api/notes.

    Filters compose conjunctively; an unset filter does not restrict.
    """
    search_term: Optional[str] = Field(default=None, description="Substring of the note title")
    folder_id: Optional[int] = Field(default=None, description="Exact folder id")
    tag_id: Optional[int] = Field(default=None, description="Tag id the note must carry")


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    A hydrated note: one object per note, its folder inlined, its tags as an
    array of distinct {id, name} objects.

    Returned by every /api/notes endpoint except DELETE.
    """
    id: int = Field(description="Note identifier")
    title: str = Field(description="Note title")
    content: Optional[str] = Field(default=None, description="Note body text")
    folder: Optional[FolderResponse] = Field(
        default=None,
        description="Folder the note belongs to (null when it has none)",
    )
    tags: List[TagResponse] = Field(
        default_factory=list,
        description="Tags attached to the note",
    )
