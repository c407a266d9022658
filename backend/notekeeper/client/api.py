"""
Notekeeper Client: HTTP API Client
====================================

What:  Async wrapper around the /api/notes endpoints.
How:   httpx.AsyncClient; responses are parsed into the same NoteResponse
       model the server serializes from.
Who:   Used by NotesController to run view-model effects, and usable on
       its own from scripts.

Failure behavior:
    Any non-2xx response raises APIRequestError carrying the status code
    and the server's `error` message. Transport failures surface as
    httpx.HTTPError. Nothing is retried: the caller decides.
"""

import logging
from typing import List, Optional

import httpx

from notekeeper.config import settings
from notekeeper.exceptions import APIRequestError
from notekeeper.schemas.note import NoteResponse

logger = logging.getLogger(__name__)

NOTES_PATH = "/api/notes"


class NotesClient:
    """
    Usage:
        async with NotesClient("http://localhost:8000") as client:
            note = await client.create_note("Groceries", "eggs, milk")
            notes = await client.list_notes()

    `transport` lets tests route requests straight into an ASGI app
    (httpx.ASGITransport) or a canned handler (httpx.MockTransport).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(
            base_url=base_url or settings.api_base_url,
            transport=transport,
        )

    async def __aenter__(self) -> "NotesClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_notes(self) -> List[NoteResponse]:
        data = await self._request("GET", NOTES_PATH)
        return [NoteResponse.model_validate(item) for item in data]

    async def get_note(self, note_id: int) -> NoteResponse:
        data = await self._request("GET", f"{NOTES_PATH}/{note_id}")
        return NoteResponse.model_validate(data)

    async def create_note(self, title: str, content: str) -> NoteResponse:
        data = await self._request("POST", NOTES_PATH, json={"title": title, "content": content})
        return NoteResponse.model_validate(data)

    async def update_note(self, note_id: int, title: str, content: str) -> NoteResponse:
        data = await self._request(
            "PUT", f"{NOTES_PATH}/{note_id}", json={"title": title, "content": content}
        )
        return NoteResponse.model_validate(data)

    async def delete_note(self, note_id: int) -> str:
        """Deletes a note and returns the server's confirmation message."""
        data = await self._request("DELETE", f"{NOTES_PATH}/{note_id}")
        return data["message"]

    async def _request(self, method: str, url: str, **kwargs):
        response = await self._client.request(method, url, **kwargs)
        if response.is_success:
            return response.json()

        message = response.reason_phrase or "Request failed"
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            message = body["error"]

        logger.debug("%s %s failed with %d: %s", method, url, response.status_code, message)
        raise APIRequestError(
            status_code=response.status_code,
            message=message,
            context={"method": method, "url": url},
        )
