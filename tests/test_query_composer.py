"""
Noteful API — Note Query Composer Tests
========================================

What:  Tests for compose_note_rows_query().
How:   Compiled SQL for the statement shape; execution against the seeded
       in-memory database for the rows it actually produces.

What we test:
    ✅ LEFT OUTER joins and ordering by note id
    ✅ Labelled row shape, one row per (note, tag)
    ✅ searchTerm / folderId / tagId filters, alone and combined
    ✅ Row vs exists tag filtering
    ✅ LIKE wildcards in the search term match literally
"""

import pytest
from sqlalchemy.dialects import postgresql

from noteful.schemas.note import NoteFilters
from noteful.services.query_composer import (
    TAG_FILTER_EXISTS,
    TAG_FILTER_ROW,
    compose_note_rows_query,
)


def compiled(query):
    return str(query.compile(dialect=postgresql.dialect()))


async def fetch(db, query):
    result = await db.execute(query)
    return [dict(row) for row in result.mappings().all()]


class TestComposedStatement:
    """Shape of the generated SQL."""

    def test_left_joins_all_three_tables(self):
        sql = compiled(compose_note_rows_query())

        assert sql.count("LEFT OUTER JOIN") == 3
        assert "ORDER BY notes.id" in sql
        assert "WHERE" not in sql

    def test_case_insensitive_search_uses_ilike(self):
        sql = compiled(compose_note_rows_query(NoteFilters(search_term="cats")))

        assert "ILIKE" in sql

    def test_case_sensitive_search_uses_like(self):
        sql = compiled(
            compose_note_rows_query(NoteFilters(search_term="cats"), case_sensitive=True)
        )

        assert "ILIKE" not in sql
        assert "LIKE" in sql

    def test_exists_strategy_uses_subquery(self):
        sql = compiled(
            compose_note_rows_query(NoteFilters(tag_id=1), tag_filter=TAG_FILTER_EXISTS)
        )

        assert "EXISTS" in sql
        assert "matching_tags" in sql

    def test_row_strategy_filters_joined_rows(self):
        sql = compiled(compose_note_rows_query(NoteFilters(tag_id=1), tag_filter=TAG_FILTER_ROW))

        assert "EXISTS" not in sql
        assert "notes_tags.tag_id = " in sql

    def test_empty_search_term_is_ignored(self):
        sql = compiled(compose_note_rows_query(NoteFilters(search_term="")))

        assert "WHERE" not in sql


class TestComposedRows:
    """Rows returned from the seeded store."""

    @pytest.mark.asyncio
    async def test_one_row_per_note_tag_pair(self, db_session, seeded):
        rows = await fetch(db_session, compose_note_rows_query())

        # 1000: 2 tags, 1001: 1, 1002: none (1 row), 1003: 2
        assert len(rows) == 6
        assert [r["id"] for r in rows] == [1000, 1000, 1001, 1002, 1003, 1003]
        assert set(rows[0]) == {
            "id", "title", "content", "folder_id", "folder_name", "tag_id", "tag_name",
        }

    @pytest.mark.asyncio
    async def test_tagless_folderless_note_has_null_columns(self, db_session, seeded):
        rows = await fetch(db_session, compose_note_rows_query(note_id=1002))

        assert rows == [{
            "id": 1002,
            "title": "The most boring article about dogs",
            "content": None,
            "folder_id": None,
            "folder_name": None,
            "tag_id": None,
            "tag_name": None,
        }]

    @pytest.mark.asyncio
    async def test_search_term_matches_title_substring(self, db_session, seeded):
        rows = await fetch(db_session, compose_note_rows_query(NoteFilters(search_term="cats")))

        assert sorted({r["id"] for r in rows}) == [1000, 1001, 1003]

    @pytest.mark.asyncio
    async def test_wildcards_match_literally(self, db_session, seeded):
        rows = await fetch(db_session, compose_note_rows_query(NoteFilters(search_term="%")))

        assert rows == []

    @pytest.mark.asyncio
    async def test_folder_filter(self, db_session, seeded):
        rows = await fetch(db_session, compose_note_rows_query(NoteFilters(folder_id=100)))

        assert {r["id"] for r in rows} == {1000, 1003}
        assert {r["folder_name"] for r in rows} == {"Archive"}

    @pytest.mark.asyncio
    async def test_tag_filter_row(self, db_session, seeded):
        rows = await fetch(db_session, compose_note_rows_query(NoteFilters(tag_id=1)))

        assert [(r["id"], r["tag_id"]) for r in rows] == [(1000, 1), (1003, 1)]

    @pytest.mark.asyncio
    async def test_tag_filter_exists(self, db_session, seeded):
        query = compose_note_rows_query(NoteFilters(tag_id=1), tag_filter=TAG_FILTER_EXISTS)

        rows = await fetch(db_session, query)

        assert [(r["id"], r["tag_id"]) for r in rows] == [(1000, 1), (1000, 2), (1003, 1), (1003, 3)]

    @pytest.mark.asyncio
    async def test_filters_are_conjunctive(self, db_session, seeded):
        query = compose_note_rows_query(NoteFilters(search_term="cats", folder_id=101, tag_id=2))

        rows = await fetch(db_session, query)

        assert [r["id"] for r in rows] == [1001]

    @pytest.mark.asyncio
    async def test_no_match_is_empty(self, db_session, seeded):
        rows = await fetch(db_session, compose_note_rows_query(NoteFilters(folder_id=555)))

        assert rows == []
