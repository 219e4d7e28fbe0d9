"""
Noteful API — Notes Route Handlers
===================================

What:  CRUD endpoints for /api/notes.
How:   Extracts query parameters and bodies, delegates to NoteService with the
       request's session, sets status codes and headers.
Who:   Called by the Noteful frontend.

Endpoints:
    GET    /api/notes?searchTerm=&folderId=&tagId=  → 200 [note]
    GET    /api/notes/{id}                          → 200 note | 404
    POST   /api/notes                               → 201 note + Location | 400
    PUT    /api/notes/{id}                          → 200 note | 400 | 404
    DELETE /api/notes/{id}                          → 204
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.config import settings
from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import NoteFilters, NoteResponse, NoteWrite
from noteful.services.note_service import note_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix=f"{settings.api_prefix}/notes", tags=["Notes"])


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List notes",
    description=(
        "Returns every note matching the optional filters, ordered by id, each "
        "with its folder and tags inlined."
    ),
)
async def list_notes(
    search_term: str | None = Query(
        default=None,
        alias="searchTerm",
        description="Only notes whose title contains this text",
    ),
    folder_id: int | None = Query(
        default=None,
        alias="folderId",
        description="Only notes in this folder",
    ),
    tag_id: int | None = Query(
        default=None,
        alias="tagId",
        description="Only notes carrying this tag",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    filters = NoteFilters(search_term=search_term, folder_id=folder_id, tag_id=tag_id)
    return await note_service.list_notes(db=db, filters=filters)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db=db, note_id=note_id)


@router.post(
    "",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Missing title", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteWrite,
    request: Request,
    response: Response,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note with its tags.

    The Location header points at GET /api/notes/{id} for the new note.
    """
    note = await note_service.create_note(db=db, payload=payload)
    response.headers["Location"] = str(request.url_for("get_note", note_id=note.id))
    return note


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Missing title", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a note",
    description=(
        "Writes only the fields present in the body. When `tags` is present it "
        "replaces the note's whole tag set."
    ),
)
async def update_note(
    note_id: int,
    payload: NoteWrite,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(db=db, note_id=note_id, payload=payload)


@router.delete(
    "/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete a note",
    description="Always 204, whether or not the note existed.",
)
async def delete_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db=db, note_id=note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
