"""
Notekeeper Client: Effect-Running Controller
==============================================

What:  Holds the current ViewModel and executes the effects `reduce` emits.
How:   dispatch(action) → reduce → run each effect through NotesClient (or
       the confirm callback) → dispatch the resulting action.

Failure policy:
    A failed call is logged and dispatched as RequestFailed, which leaves
    notes and form untouched. There is no retry, no backoff and no queue:
    the user repeats the action by hand.

Effects run one at a time and each one waits for its response. The
controller never cancels a call in flight.
"""

import logging
from typing import Callable, Optional

import httpx

from notekeeper.client.api import NotesClient
from notekeeper.client.view_model import (
    Action,
    ConfirmDelete,
    CreateNote,
    DeleteConfirmed,
    DeleteNote,
    Effect,
    FetchNotes,
    Mount,
    NoteCreated,
    NoteDeleted,
    NotesLoaded,
    NoteUpdated,
    RequestFailed,
    UpdateNote,
    ViewModel,
    initial_state,
    reduce,
)
from notekeeper.exceptions import APIRequestError

logger = logging.getLogger(__name__)


class NotesController:
    """
    Drives a ViewModel against a live API.

    Args:
        client:  NotesClient used for every network effect
        confirm: called with the prompt text before a delete; returning
                 False aborts the delete without any request
    """

    def __init__(
        self,
        client: NotesClient,
        confirm: Callable[[str], bool],
        state: Optional[ViewModel] = None,
    ):
        self.client = client
        self.confirm = confirm
        self.state = state or initial_state()

    async def mount(self) -> ViewModel:
        return await self.dispatch(Mount())

    async def dispatch(self, action: Action) -> ViewModel:
        self.state, effects = reduce(self.state, action)
        for effect in effects:
            follow_up = await self._run(effect)
            if follow_up is not None:
                await self.dispatch(follow_up)
        return self.state

    async def _run(self, effect: Effect) -> Optional[Action]:
        if isinstance(effect, ConfirmDelete):
            if self.confirm(effect.prompt):
                return DeleteConfirmed(effect.note_id)
            return None

        try:
            if isinstance(effect, FetchNotes):
                return NotesLoaded(tuple(await self.client.list_notes()))
            if isinstance(effect, CreateNote):
                return NoteCreated(await self.client.create_note(effect.title, effect.content))
            if isinstance(effect, UpdateNote):
                note = await self.client.update_note(effect.note_id, effect.title, effect.content)
                return NoteUpdated(note)
            if isinstance(effect, DeleteNote):
                await self.client.delete_note(effect.note_id)
                return NoteDeleted(effect.note_id)
        except (APIRequestError, httpx.HTTPError) as e:
            logger.warning("%s failed: %s", type(effect).__name__, e)
            return RequestFailed(effect, str(e))

        raise TypeError(f"Unsupported effect: {effect!r}")
