# Importing the package registers every table on Base.metadata
from noteful.models.note import Folder, Note, Tag, notes_tags

__all__ = ["Folder", "Note", "Tag", "notes_tags"]
