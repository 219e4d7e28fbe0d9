"""
Noteful API — Note Query Composer
==================================

What:  Builds the single flat SELECT that feeds note hydration.
How:   notes ⟕ folders ⟕ notes_tags ⟕ tags, optional filters, ordered by
       note id. Returns an unexecuted SQLAlchemy Select; callers execute it
       on whatever session they hold.
Who:   NoteService (list, get, read-back after writes).

Row shape (labels):
    id | title | content | folder_id | folder_name | tag_id | tag_name

    One row per (note, tag) pair; a note without tags yields one row with
    tag_id/tag_name NULL. LEFT joins keep notes without folder or tags.

Ordering:
    ORDER BY notes.id, tags.id, so all rows of a note are adjacent.

Tag filter strategies:
    row    — WHERE notes_tags.tag_id = :tag_id on the joined rows. A note
             carrying several tags comes back with only the matching one.
    exists — correlated EXISTS on the junction table; matching notes keep
             every tag.
"""

from typing import Optional

from sqlalchemy import Select, select

from noteful.models.note import Folder, Note, Tag, notes_tags
from noteful.schemas.note import NoteFilters

TAG_FILTER_ROW = "row"
TAG_FILTER_EXISTS = "exists"


def compose_note_rows_query(
    filters: Optional[NoteFilters] = None,
    *,
    note_id: Optional[int] = None,
    case_sensitive: bool = False,
    tag_filter: str = TAG_FILTER_ROW,
) -> Select:
    """
    Compose the flat note/folder/tag row query.

    Args:
        filters: search_term / folder_id / tag_id, combined with AND
        note_id: Restrict to a single note (GET by id, read-back)
        case_sensitive: Title search with LIKE instead of ILIKE
        tag_filter: "row" or "exists" (see module docstring)

    Returns:
        Select producing the labelled row shape, ordered by note id.
    """
    query = (
        select(
            Note.id.label("id"),
            Note.title.label("title"),
            Note.content.label("content"),
            Folder.id.label("folder_id"),
            Folder.name.label("folder_name"),
            Tag.id.label("tag_id"),
            Tag.name.label("tag_name"),
        )
        .select_from(Note)
        .outerjoin(Folder, Note.folder_id == Folder.id)
        .outerjoin(notes_tags, Note.id == notes_tags.c.note_id)
        .outerjoin(Tag, notes_tags.c.tag_id == Tag.id)
    )

    if note_id is not None:
        query = query.where(Note.id == note_id)

    if filters is not None:
        if filters.search_term:
            # autoescape: % and _ in the term match literally
            if case_sensitive:
                query = query.where(Note.title.contains(filters.search_term, autoescape=True))
            else:
                query = query.where(Note.title.icontains(filters.search_term, autoescape=True))

        if filters.folder_id is not None:
            query = query.where(Note.folder_id == filters.folder_id)

        if filters.tag_id is not None:
            if tag_filter == TAG_FILTER_EXISTS:
                matching = notes_tags.alias("matching_tags")
                query = query.where(
                    select(matching.c.note_id)
                    .where(
                        matching.c.note_id == Note.id,
                        matching.c.tag_id == filters.tag_id,
                    )
                    .exists()
                )
            else:
                query = query.where(notes_tags.c.tag_id == filters.tag_id)

    return query.order_by(Note.id, Tag.id)
