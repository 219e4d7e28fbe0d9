"""
Noteful API — Note Service (Business Logic)
============================================

What:  CRUD for notes, including the note ⟷ tag junction maintenance.
How:   Reads go through compose_note_rows_query() + hydrate_notes(); writes
       run inside one transaction (database.atomic) per request.
Who:   Called by the /api/notes route handlers.

Write Path (create / update):
    ┌────────────┐   ┌──────────────────┐   ┌──────────────────┐   ┌───────────┐
    │ note row   │──▶│ delete junction  │──▶│ insert junction  │──▶│ read-back │
    │ INSERT/UPD │   │ (update only)    │   │ one row per tag  │   │ hydrate   │
    └────────────┘   └──────────────────┘   └──────────────────┘   └───────────┘
    └─────────────────────── one transaction ───────────────────────┘

    Each step is awaited before the next starts. A failure anywhere inside
    the transaction rolls all of it back, so a note is never left with its
    old tags deleted and its new tags missing.

Error Handling:
    Missing title → ValidationError, raised before the session is touched.
    No row for an id → NotFoundError.
    SQLAlchemy errors propagate unchanged to the global handler (500).

NoteService is stateless: the session is passed to every call.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import delete, insert, update
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.config import settings
from noteful.database import atomic
from noteful.exceptions import NotFoundError, ValidationError
from noteful.models.note import Note, notes_tags
from noteful.schemas.note import NoteFilters, NoteResponse, NoteWrite
from noteful.services.hydrator import hydrate_notes
from noteful.services.query_composer import compose_note_rows_query

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes():  Filtered, hydrated listing
        - get_note():    Single hydrated note with not-found handling
        - create_note(): Note row + tag associations
        - update_note(): Patch note row + replace tag associations
        - delete_note(): Remove note and its tag associations (idempotent)

    Args:
        case_sensitive: Title search mode; defaults to settings
        tag_filter: "row" or "exists"; defaults to settings
    """

    def __init__(
        self,
        case_sensitive: Optional[bool] = None,
        tag_filter: Optional[str] = None,
    ):
        self.case_sensitive = (
            settings.note_search_case_sensitive if case_sensitive is None else case_sensitive
        )
        self.tag_filter = settings.note_tag_filter if tag_filter is None else tag_filter

    # ── Reads ─────────────────────────────────────────────────────────────

    async def list_notes(
        self,
        db: AsyncSession,
        filters: Optional[NoteFilters] = None,
    ) -> List[NoteResponse]:
        """
        List notes matching the filters, ordered by note id.

        Query plan:
            One SELECT over notes ⟕ folders ⟕ notes_tags ⟕ tags, then
            in-memory grouping. An empty result is an empty list.
        """
        query = compose_note_rows_query(
            filters,
            case_sensitive=self.case_sensitive,
            tag_filter=self.tag_filter,
        )
        result = await db.execute(query)
        notes = hydrate_notes(result.mappings().all())
        logger.debug("Listed %d notes (filters=%s)", len(notes), filters)
        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, db: AsyncSession, note_id: int) -> NoteResponse:
        """
        Retrieve a single hydrated note.

        Raises:
            NotFoundError: No note with this id (→ 404)
        """
        result = await db.execute(compose_note_rows_query(note_id=note_id))
        notes = hydrate_notes(result.mappings().all())
        if not notes:
            raise NotFoundError(resource="note", resource_id=note_id)
        return NoteResponse.model_validate(notes[0])

    # ── Writes ────────────────────────────────────────────────────────────

    async def create_note(self, db: AsyncSession, payload: NoteWrite) -> NoteResponse:
        """
        Insert a note and its tag associations, then return it hydrated.

        Workflow Steps:
            1. Validate title (no store call on failure)
            2. INSERT note, flush to obtain the generated id
            3. INSERT one notes_tags row per requested tag id
            4. Read back through the composer + hydrator

        Raises:
            ValidationError: Missing or blank title (→ 400)
        """
        self._require_title(payload)
        tag_ids = payload.tag_ids() or []

        async with atomic(db):
            note = Note(**payload.note_fields())
            db.add(note)
            await db.flush()
            await self._insert_note_tags(db, note.id, tag_ids)

        logger.info("Note %s created with %d tags", note.id, len(tag_ids))
        return await self.get_note(db, note.id)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: int,
        payload: NoteWrite,
    ) -> NoteResponse:
        """
        Patch a note and replace its tag set, then return it hydrated.

        Only fields present in the request body are written. When `tags` is
        present the junction rows are replaced as a whole (delete all, insert
        the requested ids); when absent they are left untouched.

        Raises:
            ValidationError: Missing or blank title (→ 400)
            NotFoundError: No note with this id (→ 404)
        """
        self._require_title(payload)
        tag_ids = payload.tag_ids()

        async with atomic(db):
            result = await db.execute(
                update(Note)
                .where(Note.id == note_id)
                .values(**payload.note_fields())
                .returning(Note.id)
            )
            if result.scalar_one_or_none() is None:
                raise NotFoundError(resource="note", resource_id=note_id)

            if tag_ids is not None:
                await db.execute(
                    delete(notes_tags).where(notes_tags.c.note_id == note_id)
                )
                await self._insert_note_tags(db, note_id, tag_ids)

        logger.info(
            "Note %s updated (fields=%s, tags=%s)",
            note_id,
            sorted(payload.note_fields()),
            tag_ids,
        )
        return await self.get_note(db, note_id)

    async def delete_note(self, db: AsyncSession, note_id: int) -> None:
        """
        Delete a note and its tag associations.

        Idempotent: deleting an id that does not exist is not an error.
        """
        async with atomic(db):
            await db.execute(delete(notes_tags).where(notes_tags.c.note_id == note_id))
            result = await db.execute(delete(Note).where(Note.id == note_id))

        if result.rowcount:
            logger.info("Note %s deleted", note_id)
        else:
            logger.debug("Delete of missing note %s ignored", note_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    @staticmethod
    def _require_title(payload: NoteWrite) -> None:
        if payload.title is None or not payload.title.strip():
            raise ValidationError(
                message="Missing `title` in request body",
                field="title",
            )

    @staticmethod
    async def _insert_note_tags(
        db: AsyncSession,
        note_id: int,
        tag_ids: Sequence[int],
    ) -> None:
        """Insert one junction row per tag id; no statement for an empty list."""
        if not tag_ids:
            return
        rows: List[Dict[str, Any]] = [
            {"note_id": note_id, "tag_id": tag_id} for tag_id in tag_ids
        ]
        await db.execute(insert(notes_tags), rows)


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
