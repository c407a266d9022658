"""
Notekeeper Client: View-Model Reducer Tests
=============================================

What:  Transition-by-transition tests of `reduce`.
How:   Pure function calls; no HTTP, no event loop.
"""

from datetime import datetime, timezone

import pytest

from notekeeper.client.view_model import (
    DELETE_PROMPT,
    CancelForm,
    ChangeField,
    ConfirmDelete,
    CreateNote,
    DeleteConfirmed,
    DeleteNote,
    FetchNotes,
    FormData,
    Mount,
    NoteCreated,
    NoteDeleted,
    NotesLoaded,
    NoteUpdated,
    OpenCreateForm,
    OpenEditForm,
    RequestDelete,
    RequestFailed,
    SubmitForm,
    UpdateNote,
    initial_state,
    reduce,
)
from notekeeper.schemas.note import NoteResponse

T0 = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def note(note_id, title="T", content="C"):
    return NoteResponse(id=note_id, title=title, content=content, created_at=T0, updated_at=T0)


def loaded(*notes):
    state, _ = reduce(initial_state(), Mount())
    state, _ = reduce(state, NotesLoaded(tuple(notes)))
    return state


class TestMount:

    def test_initial_state_is_loading(self):
        state = initial_state()
        assert state.is_loading is True
        assert state.notes == ()
        assert state.show_form is False
        assert state.editing_note is None

    def test_mount_fetches_exactly_once(self):
        state, effects = reduce(initial_state(), Mount())
        assert effects == [FetchNotes()]

        state, effects = reduce(state, Mount())
        assert effects == []

    def test_notes_loaded_clears_loading(self):
        state = loaded(note(2), note(1))
        assert state.is_loading is False
        assert [n.id for n in state.notes] == [2, 1]

    def test_failed_fetch_clears_loading_only(self):
        state, _ = reduce(initial_state(), Mount())
        state, effects = reduce(state, RequestFailed(FetchNotes(), "boom"))

        assert state.is_loading is False
        assert state.notes == ()
        assert effects == []


class TestForms:

    def test_open_create_form_clears_form(self):
        state = loaded(note(1))
        state, _ = reduce(state, ChangeField("title", "leftover"))
        state, effects = reduce(state, OpenCreateForm())

        assert state.show_form is True
        assert state.editing_note is None
        assert state.form_data == FormData()
        assert effects == []

    def test_open_edit_form_prefills(self):
        target = note(1, "Title", "Body")
        state, _ = reduce(loaded(target), OpenEditForm(target))

        assert state.show_form is True
        assert state.editing_note == target
        assert state.form_data == FormData("Title", "Body")

    def test_change_field_unknown_name(self):
        with pytest.raises(ValueError):
            reduce(initial_state(), ChangeField("author", "me"))

    def test_submit_create(self):
        state, _ = reduce(loaded(), OpenCreateForm())
        state, _ = reduce(state, ChangeField("title", "T"))
        state, _ = reduce(state, ChangeField("content", "C"))

        after, effects = reduce(state, SubmitForm())

        assert effects == [CreateNote("T", "C")]
        assert after == state

    def test_submit_update(self):
        target = note(3, "old", "old")
        state, _ = reduce(loaded(target), OpenEditForm(target))
        state, _ = reduce(state, ChangeField("title", "new"))

        _, effects = reduce(state, SubmitForm())

        assert effects == [UpdateNote(3, "new", "old")]

    def test_submit_without_form_is_noop(self):
        state = loaded()
        assert reduce(state, SubmitForm()) == (state, [])

    def test_note_created_prepends_and_closes(self):
        state, _ = reduce(loaded(note(1)), OpenCreateForm())
        state, _ = reduce(state, NoteCreated(note(2, "new")))

        assert [n.id for n in state.notes] == [2, 1]
        assert state.show_form is False
        assert state.form_data == FormData()

    def test_note_updated_replaces_in_place(self):
        target = note(2, "old")
        state, _ = reduce(loaded(note(3), target, note(1)), OpenEditForm(target))
        state, _ = reduce(state, NoteUpdated(note(2, "new")))

        assert [n.id for n in state.notes] == [3, 2, 1]
        assert state.notes[1].title == "new"
        assert state.editing_note is None
        assert state.show_form is False

    def test_failed_mutation_keeps_form_open(self):
        state, _ = reduce(loaded(note(1)), OpenCreateForm())
        state, _ = reduce(state, ChangeField("title", "T"))

        after, effects = reduce(state, RequestFailed(CreateNote("T", ""), "400"))

        assert after == state
        assert effects == []

    def test_cancel_discards_form_without_effects(self):
        target = note(1)
        state, _ = reduce(loaded(target), OpenEditForm(target))
        state, _ = reduce(state, ChangeField("content", "draft"))

        state, effects = reduce(state, CancelForm())

        assert state.show_form is False
        assert state.editing_note is None
        assert state.form_data == FormData()
        assert state.notes == (target,)
        assert effects == []


class TestDelete:

    def test_request_delete_asks_for_confirmation(self):
        state = loaded(note(1))
        after, effects = reduce(state, RequestDelete(1))

        assert after == state
        assert effects == [ConfirmDelete(1)]
        assert effects[0].prompt == DELETE_PROMPT

    def test_confirmed_delete_issues_call(self):
        _, effects = reduce(loaded(note(1)), DeleteConfirmed(1))
        assert effects == [DeleteNote(1)]

    def test_note_deleted_removes_locally(self):
        state, _ = reduce(loaded(note(2), note(1)), NoteDeleted(2))
        assert [n.id for n in state.notes] == [1]

    def test_failed_delete_leaves_notes(self):
        state = loaded(note(2), note(1))
        after, _ = reduce(state, RequestFailed(DeleteNote(2), "500"))
        assert after == state


def test_unknown_action_rejected():
    with pytest.raises(TypeError):
        reduce(initial_state(), object())
