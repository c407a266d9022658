"""
Notekeeper Client: API Client and Controller Tests
====================================================

What:  NotesClient and NotesController against the real app, plus canned
       failure responses.
How:   ASGITransport routes client calls into the test app in-process;
       httpx.MockTransport stands in for a failing server.

What we test:
    ✅ Mount loads notes once
    ✅ Create / edit / delete flows patch the local list
    ✅ Declined confirmation sends no request
    ✅ Server and network failures leave the view-model unchanged
"""

import httpx
import pytest
import pytest_asyncio

from notekeeper.client.api import NotesClient
from notekeeper.client.controller import NotesController
from notekeeper.client.view_model import (
    ChangeField,
    OpenCreateForm,
    OpenEditForm,
    RequestDelete,
    SubmitForm,
)
from notekeeper.exceptions import APIRequestError


@pytest_asyncio.fixture
async def notes_client(asgi_transport):
    async with NotesClient("http://test", transport=asgi_transport) as client:
        yield client


class Prompts:
    """Confirm callback that records prompts and answers with a fixed value."""

    def __init__(self, answer: bool):
        self.answer = answer
        self.seen = []

    def __call__(self, prompt: str) -> bool:
        self.seen.append(prompt)
        return self.answer


def counting_transport(handler):
    calls = []

    def wrapped(request: httpx.Request) -> httpx.Response:
        calls.append((request.method, request.url.path))
        return handler(request)

    return httpx.MockTransport(wrapped), calls


class TestNotesClient:

    @pytest.mark.asyncio
    async def test_crud_round_trip(self, notes_client):
        created = await notes_client.create_note("T", "C")
        assert created.created_at == created.updated_at

        fetched = await notes_client.get_note(created.id)
        assert fetched == created

        updated = await notes_client.update_note(created.id, "T2", "C2")
        assert updated.title == "T2"
        assert updated.updated_at > updated.created_at

        assert await notes_client.delete_note(created.id) == "Note deleted successfully"
        assert await notes_client.list_notes() == []

    @pytest.mark.asyncio
    async def test_error_carries_status_and_message(self, notes_client):
        with pytest.raises(APIRequestError) as exc_info:
            await notes_client.get_note(404404)

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Note not found"

    @pytest.mark.asyncio
    async def test_validation_error_message(self, notes_client):
        with pytest.raises(APIRequestError) as exc_info:
            await notes_client.create_note("", "C")

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Title and content are required"


class TestNotesController:

    @pytest.mark.asyncio
    async def test_mount_loads_existing_notes(self, notes_client):
        await notes_client.create_note("first", "a")
        await notes_client.create_note("second", "b")
        controller = NotesController(notes_client, confirm=Prompts(True))

        state = await controller.mount()

        assert state.is_loading is False
        assert [n.title for n in state.notes] == ["second", "first"]

    @pytest.mark.asyncio
    async def test_mount_twice_fetches_once(self):
        transport, calls = counting_transport(lambda request: httpx.Response(200, json=[]))
        async with NotesClient("http://test", transport=transport) as client:
            controller = NotesController(client, confirm=Prompts(True))
            await controller.mount()
            await controller.mount()

        assert calls == [("GET", "/api/notes")]

    @pytest.mark.asyncio
    async def test_create_flow(self, notes_client):
        controller = NotesController(notes_client, confirm=Prompts(True))
        await controller.mount()

        await controller.dispatch(OpenCreateForm())
        await controller.dispatch(ChangeField("title", "Groceries"))
        await controller.dispatch(ChangeField("content", "eggs"))
        state = await controller.dispatch(SubmitForm())

        assert state.show_form is False
        assert [n.title for n in state.notes] == ["Groceries"]
        assert [n.id for n in await notes_client.list_notes()] == [state.notes[0].id]

    @pytest.mark.asyncio
    async def test_edit_flow(self, notes_client):
        await notes_client.create_note("keep", "k")
        target = await notes_client.create_note("old", "o")
        controller = NotesController(notes_client, confirm=Prompts(True))
        await controller.mount()

        await controller.dispatch(OpenEditForm(target))
        await controller.dispatch(ChangeField("title", "new"))
        state = await controller.dispatch(SubmitForm())

        assert [n.title for n in state.notes] == ["new", "keep"]
        assert state.editing_note is None
        assert (await notes_client.get_note(target.id)).title == "new"

    @pytest.mark.asyncio
    async def test_invalid_submit_keeps_form_open(self, notes_client):
        controller = NotesController(notes_client, confirm=Prompts(True))
        await controller.mount()
        await controller.dispatch(OpenCreateForm())
        before = await controller.dispatch(ChangeField("title", "no content"))

        after = await controller.dispatch(SubmitForm())

        assert after == before
        assert after.show_form is True
        assert await notes_client.list_notes() == []

    @pytest.mark.asyncio
    async def test_confirmed_delete(self, notes_client):
        doomed = await notes_client.create_note("doomed", "d")
        prompts = Prompts(True)
        controller = NotesController(notes_client, confirm=prompts)
        await controller.mount()

        state = await controller.dispatch(RequestDelete(doomed.id))

        assert state.notes == ()
        assert prompts.seen == ["Are you sure you want to delete this note?"]
        assert await notes_client.list_notes() == []

    @pytest.mark.asyncio
    async def test_declined_delete_sends_nothing(self):
        transport, calls = counting_transport(lambda request: httpx.Response(200, json=[
            {"id": 1, "title": "T", "content": "C",
             "createdAt": "2024-01-15T12:00:00Z", "updatedAt": "2024-01-15T12:00:00Z"},
        ]))
        async with NotesClient("http://test", transport=transport) as client:
            controller = NotesController(client, confirm=Prompts(False))
            await controller.mount()
            state = await controller.dispatch(RequestDelete(1))

        assert [n.id for n in state.notes] == [1]
        assert calls == [("GET", "/api/notes")]

    @pytest.mark.asyncio
    async def test_server_error_leaves_state(self):
        def handler(request):
            if request.method == "GET":
                return httpx.Response(200, json=[])
            return httpx.Response(500, json={"error": "Failed to create note"})

        transport, _ = counting_transport(handler)
        async with NotesClient("http://test", transport=transport) as client:
            controller = NotesController(client, confirm=Prompts(True))
            await controller.mount()
            await controller.dispatch(OpenCreateForm())
            await controller.dispatch(ChangeField("title", "T"))
            before = await controller.dispatch(ChangeField("content", "C"))

            after = await controller.dispatch(SubmitForm())

        assert after == before

    @pytest.mark.asyncio
    async def test_network_error_on_mount_stops_loading(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with NotesClient("http://test", transport=httpx.MockTransport(handler)) as client:
            controller = NotesController(client, confirm=Prompts(True))
            state = await controller.mount()

        assert state.is_loading is False
        assert state.notes == ()
