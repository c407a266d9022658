# Client package init
"""
Notekeeper Client
==================

What:  The client side of the application, without any rendering.

Module Inventory:
    - view_model.py: ViewModel state, actions, effects and the pure `reduce`
    - api.py:        NotesClient, async HTTP wrapper over /api/notes
    - controller.py: NotesController, runs effects and feeds results back

The local note list is only as fresh as the last fetch or the last
successful mutation's local patch. There is no background refresh.
"""
