"""
Noteful API — Note Hydration
=============================

What:  Turns flat note/folder/tag join rows into denormalized note objects.
How:   Groups rows by note id. The first row of a note supplies id, title,
       content and folder; every row may contribute one tag.
Who:   NoteService, on the rows produced by compose_note_rows_query().

Example:
    rows:
        {id: 1, title: "A", folder_id: 5, folder_name: "F", tag_id: 1, tag_name: "x"}
        {id: 1, title: "A", folder_id: 5, folder_name: "F", tag_id: 2, tag_name: "y"}
    hydrated:
        [{id: 1, title: "A", folder: {id: 5, name: "F"},
          tags: [{id: 1, name: "x"}, {id: 2, name: "y"}]}]

Pure and synchronous: no I/O, inputs are never mutated.
"""

from typing import Any, Dict, Iterable, List, Mapping, Set


def hydrate_notes(rows: Iterable[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    """
    Aggregate join rows into one dict per distinct note id.

    - Notes appear in the order their id is first seen (the composer orders
      by note id, so this is id order).
    - `folder` is present only when the row's folder_id is not NULL.
    - `tags` holds each non-NULL tag id once, in first-seen order.

    Rows of one note are expected to be adjacent, but grouping is keyed by
    id, so scattered rows still collapse into a single note.
    """
    notes: Dict[Any, Dict[str, Any]] = {}
    seen_tags: Dict[Any, Set[Any]] = {}

    for row in rows:
        note_id = row["id"]
        note = notes.get(note_id)

        if note is None:
            note = {
                "id": note_id,
                "title": row["title"],
                "content": row["content"],
                "tags": [],
            }
            if row["folder_id"] is not None:
                note["folder"] = {"id": row["folder_id"], "name": row["folder_name"]}
            notes[note_id] = note
            seen_tags[note_id] = set()

        tag_id = row["tag_id"]
        if tag_id is not None and tag_id not in seen_tags[note_id]:
            seen_tags[note_id].add(tag_id)
            note["tags"].append({"id": tag_id, "name": row["tag_name"]})

    return list(notes.values())
