"""
Notekeeper Backend: Notes Route Handlers
==========================================

What:  CRUD endpoints under /api/notes.
Why:   The HTTP surface the client view-model talks to.
How:   Parses the path id, builds a NoteStore on the request's session,
       delegates to NoteService, returns the response model.
Who:   Called by NotesClient (and any browser client).

Route Inventory:
    GET    /api/notes        → 200 [Note]          list, newest first
    POST   /api/notes        → 201 Note            create
    GET    /api/notes/{id}   → 200 Note            read one
    PUT    /api/notes/{id}   → 200 Note            replace title/content
    DELETE /api/notes/{id}   → 200 {message}       delete

Errors are raised as application exceptions and formatted by the global
handlers in main.py; no handler here builds an error response itself.
"""

import logging
import re
from typing import Any, Callable, Coroutine, List

from fastapi import APIRouter, Depends, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException

from notekeeper.database import get_db_session
from notekeeper.exceptions import NotekeeperError, NotFoundError, StoreError
from notekeeper.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NotePayload,
    NoteResponse,
)
from notekeeper.services.note_service import note_service
from notekeeper.services.note_store import NoteStore

logger = logging.getLogger(__name__)


_ID_PATTERN = re.compile(r"[0-9]+")
_MAX_ID = 2**63 - 1

# (method, targets one note) → message for an unexpected failure
_FAILURE_MESSAGES = {
    ("GET", False): "Failed to fetch notes",
    ("POST", False): "Failed to create note",
    ("GET", True): "Failed to fetch note",
    ("PUT", True): "Failed to update note",
    ("DELETE", True): "Failed to delete note",
}


class NoteRoute(APIRoute):
    """
    Route class for every endpoint on the notes router.

    Wraps the generated handler, dependencies included. Application errors
    and HTTP errors pass through to their handlers; anything else is logged
    and re-raised as StoreError with the operation's message. The 500 is then
    produced by the exception middleware, inside the request-id and CORS
    layers, instead of escaping to the server.
    """

    def get_route_handler(self) -> Callable[[Request], Coroutine[Any, Any, Response]]:
        handler = super().get_route_handler()
        # Each notes route is registered for exactly one method
        key = (next(iter(self.methods)), "{note_id}" in self.path)
        message = _FAILURE_MESSAGES.get(key, "Internal server error")

        async def guarded_handler(request: Request) -> Response:
            try:
                return await handler(request)
            except (NotekeeperError, HTTPException, RequestValidationError):
                raise
            except Exception as e:
                logger.error(
                    "Unexpected error in %s %s: %s",
                    request.method, request.url.path, str(e),
                    exc_info=True,
                )
                raise StoreError(
                    message=message,
                    context={"error_type": type(e).__name__},
                ) from e

        return guarded_handler


router = APIRouter(prefix="/api/notes", tags=["Notes"], route_class=NoteRoute)


def get_note_store(db: AsyncSession = Depends(get_db_session)) -> NoteStore:
    """Binds a NoteStore to this request's session."""
    return NoteStore(db)


def parse_note_id(raw: str) -> int:
    """
    Converts the path segment to a note id.

    A segment that is not a plain non-negative integer can never name a
    stored note, so it is reported as not found rather than as a 422.

    The match is strict: "1.5" and "1abc" are 404, not note 1 as a
    prefix-parsing server would read them. Request bodies are just as
    strict: a body that is not a JSON object, or whose title/content are
    not strings, is a 400 (see the RequestValidationError handler in
    main.py) rather than being coerced or failing as a 500.
    """
    if not _ID_PATTERN.fullmatch(raw) or int(raw) > _MAX_ID:
        raise NotFoundError(resource="note", resource_id=raw)
    return int(raw)


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all notes, newest first",
)
async def list_notes(store: NoteStore = Depends(get_note_store)) -> List[NoteResponse]:
    return await note_service.list_notes(store)


@router.post(
    "",
    status_code=201,
    response_model=NoteResponse,
    responses={
        400: {"description": "Title or content missing", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NotePayload,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    return await note_service.create_note(store, payload)


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    return await note_service.get_note(store, parse_note_id(note_id))


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Title or content missing", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace a note's title and content",
    description="Title and content are replaced wholesale; updatedAt is refreshed server-side.",
)
async def update_note(
    note_id: str,
    payload: NotePayload,
    store: NoteStore = Depends(get_note_store),
) -> NoteResponse:
    return await note_service.update_note(store, parse_note_id(note_id), payload)


@router.delete(
    "/{note_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    store: NoteStore = Depends(get_note_store),
) -> MessageResponse:
    return await note_service.delete_note(store, parse_note_id(note_id))
