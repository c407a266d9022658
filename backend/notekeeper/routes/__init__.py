# Routes package init
"""
Notekeeper Backend: API Routes Package
========================================

Route Inventory:
    - notes.py:   GET/POST      /api/notes
                  GET/PUT/DELETE /api/notes/{id}
    - health.py:  GET /health

Routes stay THIN: extract path/body data, build the per-request NoteStore,
call NoteService, return its response model. Status codes for failures
come from the global exception handlers.
"""
