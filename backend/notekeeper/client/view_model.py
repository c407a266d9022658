"""
Notekeeper Client: View-Model Reducer
=======================================

What:  The client's in-memory state and the pure transition function over it.
Why:   UI callbacks (open form, submit, delete, cancel) become explicit
       actions, so every transition is a plain function call that tests can
       drive without a browser or a server.
How:   `reduce(state, action)` returns `(next_state, effects)`. Effects are
       descriptions of calls to make; NotesController runs them and feeds
       the outcome back in as another action.

State Machine:
    ┌─────────┐ NotesLoaded / RequestFailed(FetchNotes)  ┌──────┐
    │ Initial │ ────────────────────────────────────────▶│ Idle │
    └─────────┘                                          └──────┘
         │ Mount → [FetchNotes] (once)                    │    ▲
                                  OpenCreateForm/OpenEdit │    │ NoteCreated / NoteUpdated
                                                          ▼    │ CancelForm
                                                     ┌───────────┐
                                                     │ Form-open │
                                                     └───────────┘
                                                SubmitForm → [CreateNote | UpdateNote]

    Delete from Idle: RequestDelete → [ConfirmDelete] → DeleteConfirmed
    → [DeleteNote] → NoteDeleted.

    RequestFailed never mutates notes or the form. The only field it can
    change is is_loading, when the initial fetch is what failed.
"""

from dataclasses import dataclass, field, replace
from typing import List, Optional, Tuple, Union

from notekeeper.schemas.note import NoteResponse

DELETE_PROMPT = "Are you sure you want to delete this note?"


@dataclass(frozen=True)
class FormData:
    title: str = ""
    content: str = ""


@dataclass(frozen=True)
class ViewModel:
    notes: Tuple[NoteResponse, ...] = ()
    is_loading: bool = True
    show_form: bool = False
    editing_note: Optional[NoteResponse] = None
    form_data: FormData = field(default_factory=FormData)
    mounted: bool = False


def initial_state() -> ViewModel:
    return ViewModel()


# ── Effects: calls the controller must make ──────────────────────────────

@dataclass(frozen=True)
class FetchNotes:
    pass


@dataclass(frozen=True)
class CreateNote:
    title: str
    content: str


@dataclass(frozen=True)
class UpdateNote:
    note_id: int
    title: str
    content: str


@dataclass(frozen=True)
class ConfirmDelete:
    note_id: int
    prompt: str = DELETE_PROMPT


@dataclass(frozen=True)
class DeleteNote:
    note_id: int


Effect = Union[FetchNotes, CreateNote, UpdateNote, ConfirmDelete, DeleteNote]


# ── Actions: user events and call outcomes ───────────────────────────────

@dataclass(frozen=True)
class Mount:
    pass


@dataclass(frozen=True)
class NotesLoaded:
    notes: Tuple[NoteResponse, ...]


@dataclass(frozen=True)
class OpenCreateForm:
    pass


@dataclass(frozen=True)
class OpenEditForm:
    note: NoteResponse


@dataclass(frozen=True)
class ChangeField:
    name: str  # "title" or "content"
    value: str


@dataclass(frozen=True)
class SubmitForm:
    pass


@dataclass(frozen=True)
class NoteCreated:
    note: NoteResponse


@dataclass(frozen=True)
class NoteUpdated:
    note: NoteResponse


@dataclass(frozen=True)
class RequestDelete:
    note_id: int


@dataclass(frozen=True)
class DeleteConfirmed:
    note_id: int


@dataclass(frozen=True)
class NoteDeleted:
    note_id: int


@dataclass(frozen=True)
class CancelForm:
    pass


@dataclass(frozen=True)
class RequestFailed:
    effect: Effect
    reason: str = ""


Action = Union[
    Mount, NotesLoaded, OpenCreateForm, OpenEditForm, ChangeField, SubmitForm,
    NoteCreated, NoteUpdated, RequestDelete, DeleteConfirmed, NoteDeleted,
    CancelForm, RequestFailed,
]


def _close_form(state: ViewModel, **changes) -> ViewModel:
    return replace(state, show_form=False, editing_note=None, form_data=FormData(), **changes)


def reduce(state: ViewModel, action: Action) -> Tuple[ViewModel, List[Effect]]:
    """
    Computes the next view-model and the effects to run.

    Pure: never performs I/O and never mutates `state`.
    """
    if isinstance(action, Mount):
        if state.mounted:
            return state, []
        return replace(state, mounted=True, is_loading=True), [FetchNotes()]

    if isinstance(action, NotesLoaded):
        return replace(state, notes=tuple(action.notes), is_loading=False), []

    if isinstance(action, OpenCreateForm):
        return replace(state, show_form=True, editing_note=None, form_data=FormData()), []

    if isinstance(action, OpenEditForm):
        form = FormData(title=action.note.title, content=action.note.content)
        return replace(state, show_form=True, editing_note=action.note, form_data=form), []

    if isinstance(action, ChangeField):
        if action.name not in ("title", "content"):
            raise ValueError(f"Unknown form field '{action.name}'")
        return replace(state, form_data=replace(state.form_data, **{action.name: action.value})), []

    if isinstance(action, SubmitForm):
        if not state.show_form:
            return state, []
        form = state.form_data
        if state.editing_note is not None:
            return state, [UpdateNote(state.editing_note.id, form.title, form.content)]
        return state, [CreateNote(form.title, form.content)]

    if isinstance(action, NoteCreated):
        return _close_form(state, notes=(action.note,) + state.notes), []

    if isinstance(action, NoteUpdated):
        notes = tuple(action.note if n.id == action.note.id else n for n in state.notes)
        return _close_form(state, notes=notes), []

    if isinstance(action, RequestDelete):
        return state, [ConfirmDelete(action.note_id)]

    if isinstance(action, DeleteConfirmed):
        return state, [DeleteNote(action.note_id)]

    if isinstance(action, NoteDeleted):
        return replace(state, notes=tuple(n for n in state.notes if n.id != action.note_id)), []

    if isinstance(action, CancelForm):
        return _close_form(state), []

    if isinstance(action, RequestFailed):
        if isinstance(action.effect, FetchNotes):
            return replace(state, is_loading=False), []
        return state, []

    raise TypeError(f"Unsupported action: {action!r}")
