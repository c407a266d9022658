"""
Notekeeper Backend: Pydantic Request/Response Schemas
=======================================================

What:  Pydantic models defining the API contract between client and backend.
Why:   Input parsing, serialization, and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies and serialize
       responses; NotesClient uses the same models to parse responses.
Who:   Route handlers, NoteService, and the client package.

Wire format:
    Notes go over the wire in camelCase (`createdAt`, `updatedAt`) with
    ISO 8601 UTC timestamps. The database keeps epoch milliseconds;
    `NoteResponse.from_note()` is the single place that converts.
"""

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def millis_to_datetime(value: int) -> datetime:
    """Converts stored epoch milliseconds to an aware UTC datetime without float rounding."""
    return EPOCH + timedelta(milliseconds=value)


# ══════════════════════════════════════════════════════════════════════════
# Request Models: what clients send
# ══════════════════════════════════════════════════════════════════════════


class NotePayload(BaseModel):
    """
    Body of POST /api/notes and PUT /api/notes/{id}.

    Both fields are optional at the schema level on purpose: a missing field
    must produce the 400 "Title and content are required" response from
    NoteService, not FastAPI's generic 422.
    """
    title: Optional[str] = Field(default=None, description="Note title (non-empty)")
    content: Optional[str] = Field(default=None, description="Note body (non-empty)")

    def missing_fields(self) -> List[str]:
        """Names of required fields that are absent or empty."""
        return [name for name in ("title", "content") if not getattr(self, name)]


# ══════════════════════════════════════════════════════════════════════════
# Response Models: what the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    Full representation of a note.

    Returned by every note endpoint except DELETE, and used by the client
    view-model as its Note type (frozen so view-model states can share it).
    """
    id: int = Field(description="Server-assigned note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(alias="createdAt", description="Creation time (UTC ISO 8601)")
    updated_at: datetime = Field(alias="updatedAt", description="Last update time (UTC ISO 8601)")

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @classmethod
    def from_note(cls, note) -> "NoteResponse":
        return cls(
            id=note.id,
            title=note.title,
            content=note.content,
            created_at=millis_to_datetime(note.created_at),
            updated_at=millis_to_datetime(note.updated_at),
        )


class MessageResponse(BaseModel):
    """Confirmation body, e.g. {"message": "Note deleted successfully"}."""
    message: str


class ErrorResponse(BaseModel):
    """
    Error body shared by every failing endpoint.

    Example:
        {"error": "Note not found"}

    The request id is not repeated here; it travels in the X-Request-ID
    response header.
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
