# Services package init
"""
Noteful API — Services Layer
=============================

Service Inventory:
    - query_composer:  Builds the flat notes ⟕ folders ⟕ tags row query
    - hydrator:        Folds those rows into one note object per note
    - NoteService:     Note CRUD and the note ⟷ tag junction transaction
    - FolderService / TagService: CRUD for the id/name entities

Every service method receives the AsyncSession to work on; none of them
reaches for a global connection.
"""
