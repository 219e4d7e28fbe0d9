# Routes package init
"""
Noteful API — API Routes Package
=================================

Route Inventory:
    - notes.py:    /api/notes           (CRUD, hydrated notes, filters)
    - catalog.py:  /api/folders         (CRUD)
                   /api/tags            (CRUD)
    - health.py:   GET /health          (service health check)

Routes are thin: extract request data, call a service with the request's
session, set status codes and headers.
"""
