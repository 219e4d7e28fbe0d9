"""
Noteful API — Note, Folder and Tag SQLAlchemy Models
=====================================================

What:  ORM models for the `notes`, `folders` and `tags` tables plus the
       `notes_tags` junction table.
How:   Inherits from the shared DeclarativeBase; Alembic reads the metadata.
Who:   Used by the query composer (joins), the services (writes) and Alembic.

Table Design:
    folders ──< notes >──< notes_tags >── tags

    - notes.folder_id: nullable FK, ON DELETE SET NULL (a note has 0..1 folder)
    - notes_tags: composite primary key (note_id, tag_id), so a pair can
      exist only once; both FKs ON DELETE CASCADE
"""

from typing import Optional

from sqlalchemy import Column, ForeignKey, Index, Integer, Table, Text
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base


# ── Junction Table ────────────────────────────────────────────────────────
# No identity beyond the (note, tag) pair, so a Core Table rather than a
# mapped class. Rows are owned by the note: they are replaced wholesale on
# note update and removed on note delete.
notes_tags = Table(
    "notes_tags",
    Base.metadata,
    Column(
        "note_id",
        Integer,
        ForeignKey("notes.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        Integer,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Index("idx_notes_tags_tag_id", "tag_id"),
)


class Folder(Base):
    """A named container; each note sits in at most one folder."""

    __tablename__ = "folders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"


class Tag(Base):
    """A label attached to any number of notes through `notes_tags`."""

    __tablename__ = "tags"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"


class Note(Base):
    """
    A note with a mandatory title, optional content and optional folder.

    Lifecycle:
        1. Created with its tag set in one transaction
        2. Updated field by field (patch); the tag set is replaced as a whole
        3. Deleted together with its junction rows

    Query Patterns:
        - List notes: notes ⟕ folders ⟕ notes_tags ⟕ tags ORDER BY notes.id
        - Filter by folder: WHERE notes.folder_id = :id
          → Uses idx_notes_folder_id
        - Filter by tag: WHERE notes_tags.tag_id = :id
          → Uses idx_notes_tags_tag_id
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    folder_id: Mapped[Optional[int]] = mapped_column(
        Integer,
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
    )

    __table_args__ = (
        Index("idx_notes_folder_id", "folder_id"),
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return (
            f"<Note(id={self.id}, title='{self.title}', "
            f"folder_id={self.folder_id})>"
        )
