"""
Notekeeper Backend: Note Service (API-side Business Logic)
============================================================

What:  Validates note requests, calls NoteStore, and translates outcomes
       into response models or application exceptions.
Why:   Keeps route handlers thin (HTTP only) and keeps the store free of
       HTTP-shaped decisions.
How:   Stateless methods that receive the request's NoteStore.
Who:   Called by the route handlers in `notekeeper.routes.notes`.

Error translation:
    ┌──────────────────────────┬──────────────────┬────────┐
    │ Situation                │ Exception        │ Status │
    ├──────────────────────────┼──────────────────┼────────┤
    │ title/content missing    │ ValidationError  │ 400    │
    │ store returned None      │ NotFoundError    │ 404    │
    │ anything else raised     │ StoreError       │ 500    │
    └──────────────────────────┴──────────────────┴────────┘

    Validation runs before the store is touched, so a rejected request
    never writes a row.

    Writes are committed inside the same try block as the statement. The
    response is only built once the row is durable, and a failed COMMIT
    surfaces as the operation's StoreError.
"""

import logging
from typing import List

from notekeeper.exceptions import NotFoundError, StoreError, ValidationError
from notekeeper.schemas.note import MessageResponse, NotePayload, NoteResponse
from notekeeper.services.note_store import NoteStore

logger = logging.getLogger(__name__)

DELETED_MESSAGE = "Note deleted successfully"


def _require_fields(payload: NotePayload) -> None:
    missing = payload.missing_fields()
    if missing:
        raise ValidationError(fields=missing)


class NoteService:
    """
    Business logic layer for note CRUD.

    Each method wraps its store call the same way: our own exceptions pass
    through untouched, anything else is logged with its traceback and
    re-raised as StoreError carrying the operation's generic message.
    """

    async def list_notes(self, store: NoteStore) -> List[NoteResponse]:
        try:
            notes = await store.list_all()
        except Exception as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise StoreError(
                message="Failed to fetch notes",
                context={"error_type": type(e).__name__},
            ) from e
        return [NoteResponse.from_note(note) for note in notes]

    async def get_note(self, store: NoteStore, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: no note with this id (→ 404)
            StoreError: query execution failed (→ 500)
        """
        try:
            note = await store.get_by_id(note_id)
        except Exception as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e), exc_info=True)
            raise StoreError(
                message="Failed to fetch note",
                context={"note_id": note_id, "error_type": type(e).__name__},
            ) from e

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return NoteResponse.from_note(note)

    async def create_note(self, store: NoteStore, payload: NotePayload) -> NoteResponse:
        """
        Create a note after checking both fields are present and non-empty.

        Raises:
            ValidationError: title or content missing/empty (→ 400)
            StoreError: insert failed (→ 500)
        """
        _require_fields(payload)
        try:
            note = await store.insert(title=payload.title, content=payload.content)
            await store.commit()
        except Exception as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise StoreError(
                message="Failed to create note",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Note %s created", note.id)
        return NoteResponse.from_note(note)

    async def update_note(
        self,
        store: NoteStore,
        note_id: int,
        payload: NotePayload,
    ) -> NoteResponse:
        """
        Replace a note's title and content wholesale.

        Validation comes first: an invalid body for an absent id is a 400,
        not a 404.

        Raises:
            ValidationError: title or content missing/empty (→ 400)
            NotFoundError: no note with this id (→ 404)
            StoreError: update failed (→ 500)
        """
        _require_fields(payload)
        try:
            note = await store.update_by_id(note_id, title=payload.title, content=payload.content)
            if note is not None:
                await store.commit()
        except Exception as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise StoreError(
                message="Failed to update note",
                context={"note_id": note_id, "error_type": type(e).__name__},
            ) from e

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        logger.info("Note %s updated", note_id)
        return NoteResponse.from_note(note)

    async def delete_note(self, store: NoteStore, note_id: int) -> MessageResponse:
        try:
            deleted_id = await store.delete_by_id(note_id)
            if deleted_id is not None:
                await store.commit()
        except Exception as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise StoreError(
                message="Failed to delete note",
                context={"note_id": note_id, "error_type": type(e).__name__},
            ) from e

        if deleted_id is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        logger.info("Note %s deleted", deleted_id)
        return MessageResponse(message=DELETED_MESSAGE)


# ── Singleton Instance ────────────────────────────────────────────────────
# NoteService keeps no state; the per-request part is the NoteStore
note_service = NoteService()
