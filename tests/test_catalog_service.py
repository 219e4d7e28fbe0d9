"""
Noteful API — Folder & Tag Service Tests
=========================================

What:  Tests for FolderService and TagService.
How:   Seeded in-memory SQLite; name validation against the mock session.

What we test:
    ✅ list/get/create/update round through the store
    ✅ Missing or blank name rejected before any store call
    ✅ Deleting a folder detaches its notes
    ✅ Deleting a tag removes it from every note
    ✅ Deletes are idempotent
"""

import pytest

from noteful.exceptions import NotFoundError, ValidationError
from noteful.services.catalog_service import FolderService, TagService
from noteful.services.note_service import NoteService


class TestFolderService:
    """Tests for folder CRUD."""

    def setup_method(self):
        self.service = FolderService()
        self.notes = NoteService()

    @pytest.mark.asyncio
    async def test_list_in_id_order(self, db_session, seeded):
        folders = await self.service.list_all(db_session)

        assert [(f.id, f.name) for f in folders] == [(100, "Archive"), (101, "Drafts")]

    @pytest.mark.asyncio
    async def test_get_missing(self, db_session, seeded):
        with pytest.raises(NotFoundError) as exc_info:
            await self.service.get(db_session, 999)

        assert exc_info.value.message == "folder with ID '999' was not found"

    @pytest.mark.asyncio
    async def test_create_then_get(self, db_session, seeded):
        created = await self.service.create(db_session, "Inbox")

        fetched = await self.service.get(db_session, created.id)
        assert fetched.name == "Inbox"

    @pytest.mark.asyncio
    async def test_rename(self, db_session, seeded):
        folder = await self.service.update(db_session, 101, "Ideas")

        assert (folder.id, folder.name) == (101, "Ideas")
        note = await self.notes.get_note(db_session, 1001)
        assert note.folder.name == "Ideas"

    @pytest.mark.asyncio
    async def test_rename_missing(self, db_session, seeded):
        with pytest.raises(NotFoundError):
            await self.service.update(db_session, 999, "Nope")

    @pytest.mark.asyncio
    async def test_delete_detaches_notes(self, db_session, seeded):
        await self.service.delete(db_session, 100)

        for note_id in (1000, 1003):
            note = await self.notes.get_note(db_session, note_id)
            assert note.folder is None
        assert (await self.notes.get_note(db_session, 1001)).folder.id == 101

    @pytest.mark.asyncio
    async def test_delete_twice(self, db_session, seeded):
        await self.service.delete(db_session, 101)
        await self.service.delete(db_session, 101)

        assert [f.id for f in await self.service.list_all(db_session)] == [100]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", [None, "", "  "])
    async def test_missing_name(self, mock_db_session, name):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.create(mock_db_session, name)

        assert exc_info.value.message == "Missing `name` in request body"
        mock_db_session.add.assert_not_called()
        mock_db_session.execute.assert_not_awaited()


class TestTagService:
    """Tests for tag CRUD."""

    def setup_method(self):
        self.service = TagService()
        self.notes = NoteService()

    @pytest.mark.asyncio
    async def test_list_in_id_order(self, db_session, seeded):
        tags = await self.service.list_all(db_session)

        assert [t.name for t in tags] == ["foo", "bar", "baz"]

    @pytest.mark.asyncio
    async def test_create(self, db_session, seeded):
        tag = await self.service.create(db_session, "qux")

        assert tag.id not in (1, 2, 3)
        assert tag.name == "qux"

    @pytest.mark.asyncio
    async def test_rename_shows_on_notes(self, db_session, seeded):
        await self.service.update(db_session, 2, "renamed")

        note = await self.notes.get_note(db_session, 1000)
        assert [t.name for t in note.tags] == ["foo", "renamed"]

    @pytest.mark.asyncio
    async def test_update_requires_name(self, mock_db_session):
        with pytest.raises(ValidationError):
            await self.service.update(mock_db_session, 1, None)

        mock_db_session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_removes_tag_from_notes(self, db_session, seeded):
        await self.service.delete(db_session, 1)

        assert [t.id for t in (await self.notes.get_note(db_session, 1000)).tags] == [2]
        assert [t.id for t in (await self.notes.get_note(db_session, 1003)).tags] == [3]
        with pytest.raises(NotFoundError):
            await self.service.get(db_session, 1)

    @pytest.mark.asyncio
    async def test_delete_missing_is_quiet(self, db_session, seeded):
        await self.service.delete(db_session, 77)

        assert len(await self.service.list_all(db_session)) == 3
