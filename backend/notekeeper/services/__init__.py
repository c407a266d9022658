# Services package init
"""
Notekeeper Backend: Services Layer
====================================

What:  Logic sitting between routes (HTTP) and the database (persistence).

Service Inventory:
    - NoteStore:   Storage accessor; one SQL statement per operation,
                   bound to the session it is constructed with
    - NoteService: Validates requests and maps store outcomes to
                   responses or application exceptions

Why two layers:
    The store answers "what is in the table"; the service decides what that
    means for an API caller (None → 404, driver error → 500). Each can be
    tested without the other.
"""
