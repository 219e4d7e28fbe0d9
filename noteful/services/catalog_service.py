"""
Noteful API — Folder & Tag Services
====================================

What:  CRUD for the two id/name entities notes refer to.
How:   NamedEntityService holds the shared logic; FolderService and
       TagService add the clean-up each delete needs on the notes side.
Who:   Called by the /api/folders and /api/tags route handlers.

Delete Clean-up:
    Folder → notes.folder_id set to NULL for notes in that folder
    Tag    → notes_tags rows for that tag removed
    Done explicitly in the same transaction as the delete, so it also holds
    on stores that do not enforce foreign keys.
"""

import logging
from typing import Generic, List, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import atomic
from noteful.exceptions import NotFoundError, ValidationError
from noteful.models.note import Folder, Note, Tag, notes_tags
from noteful.schemas.folder import FolderResponse
from noteful.schemas.tag import TagResponse

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", Folder, Tag)
ResponseT = TypeVar("ResponseT", bound=BaseModel)


class NamedEntityService(Generic[ModelT, ResponseT]):
    """
    list_all/get/create/update/delete for a table of (id, name) rows.

    Subclasses set `model`, `response_model` and `resource`, and may
    override `_before_delete` to detach notes from the row being removed.
    """

    model: Type[ModelT]
    response_model: Type[ResponseT]
    resource: str

    async def list_all(self, db: AsyncSession) -> List[ResponseT]:
        result = await db.execute(select(self.model).order_by(self.model.id))
        return [self.response_model.model_validate(row) for row in result.scalars().all()]

    async def get(self, db: AsyncSession, entity_id: int) -> ResponseT:
        """
        Raises:
            NotFoundError: No row with this id (→ 404)
        """
        entity = await db.get(self.model, entity_id)
        if entity is None:
            raise NotFoundError(resource=self.resource, resource_id=entity_id)
        return self.response_model.model_validate(entity)

    async def create(self, db: AsyncSession, name: str | None) -> ResponseT:
        """
        Raises:
            ValidationError: Missing or blank name (→ 400)
        """
        self._require_name(name)
        async with atomic(db):
            entity = self.model(name=name)
            db.add(entity)
            await db.flush()
        logger.info("%s %s created", self.resource.capitalize(), entity.id)
        return self.response_model.model_validate(entity)

    async def update(self, db: AsyncSession, entity_id: int, name: str | None) -> ResponseT:
        """
        Raises:
            ValidationError: Missing or blank name (→ 400)
            NotFoundError: No row with this id (→ 404)
        """
        self._require_name(name)
        async with atomic(db):
            result = await db.execute(
                update(self.model)
                .where(self.model.id == entity_id)
                .values(name=name)
                .returning(self.model.id, self.model.name)
            )
            row = result.mappings().one_or_none()
        if row is None:
            raise NotFoundError(resource=self.resource, resource_id=entity_id)
        logger.info("%s %s renamed", self.resource.capitalize(), entity_id)
        return self.response_model.model_validate(dict(row))

    async def delete(self, db: AsyncSession, entity_id: int) -> None:
        """Delete a row; deleting a missing id is not an error."""
        async with atomic(db):
            await self._before_delete(db, entity_id)
            result = await db.execute(delete(self.model).where(self.model.id == entity_id))
        if result.rowcount:
            logger.info("%s %s deleted", self.resource.capitalize(), entity_id)

    async def _before_delete(self, db: AsyncSession, entity_id: int) -> None:
        return None

    def _require_name(self, name: str | None) -> None:
        if name is None or not name.strip():
            raise ValidationError(
                message="Missing `name` in request body",
                field="name",
            )


class FolderService(NamedEntityService[Folder, FolderResponse]):
    model = Folder
    response_model = FolderResponse
    resource = "folder"

    async def _before_delete(self, db: AsyncSession, entity_id: int) -> None:
        # Notes outlive their folder
        await db.execute(
            update(Note).where(Note.folder_id == entity_id).values(folder_id=None)
        )


class TagService(NamedEntityService[Tag, TagResponse]):
    model = Tag
    response_model = TagResponse
    resource = "tag"

    async def _before_delete(self, db: AsyncSession, entity_id: int) -> None:
        await db.execute(delete(notes_tags).where(notes_tags.c.tag_id == entity_id))


# ── Singleton Instances ───────────────────────────────────────────────────
folder_service = FolderService()
tag_service = TagService()
