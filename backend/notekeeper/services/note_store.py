"""
Notekeeper Backend: Note Store (Storage Accessor)
===================================================

What:  Typed query operations over the `notes` table.
Why:   Keeps every SQL statement for notes in one place, behind an object
       bound to the session it should run on.
How:   Constructed per request (or per test) with an AsyncSession and an
       optional millisecond clock. Each method runs exactly one statement.
Who:   Called by NoteService; constructed by the `get_note_store` dependency.

Outcomes:
    Absence is a normal result here, not an error: `get_by_id`,
    `update_by_id` and `delete_by_id` return None when no row matched.
    Driver and connection errors propagate unchanged; NoteService turns them
    into StoreError. `commit()` is called by NoteService after each write so
    a failed COMMIT is reported like a failed statement; rollback and close
    belong to the session's owner.
"""

import time
from typing import Callable, List, Optional

from sqlalchemy import case, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.models.note import Note


def current_millis() -> int:
    """Wall-clock time as integer epoch milliseconds."""
    return time.time_ns() // 1_000_000


class NoteStore:
    """
    Connection-scoped handle to the notes table.

    Timestamps are assigned here and nowhere else:
        insert:  created_at = updated_at = clock()
        update:  updated_at = clock(), or stored updated_at + 1 when the
                 clock has not moved past it, so each update strictly
                 increases updated_at and created_at is never touched.
    """

    def __init__(
        self,
        session: AsyncSession,
        clock: Optional[Callable[[], int]] = None,
    ):
        self.session = session
        self._clock = clock or current_millis

    async def list_all(self) -> List[Note]:
        """
        All notes, newest first.

        Ties on created_at fall back to id DESC, so of two notes created in
        the same millisecond the later insert is listed first.
        """
        result = await self.session.execute(
            select(Note).order_by(Note.created_at.desc(), Note.id.desc())
        )
        return list(result.scalars().all())

    async def get_by_id(self, note_id: int) -> Optional[Note]:
        result = await self.session.execute(
            select(Note).where(Note.id == note_id)
        )
        return result.scalar_one_or_none()

    async def insert(self, title: str, content: str) -> Note:
        """Inserts a note and returns it with its assigned id and timestamps."""
        now = self._clock()
        note = Note(title=title, content=content, created_at=now, updated_at=now)
        self.session.add(note)
        await self.session.flush()  # Assigns the id without committing
        return note

    async def update_by_id(self, note_id: int, title: str, content: str) -> Optional[Note]:
        """
        Replaces title and content and refreshes updated_at in one statement.

        UPDATE notes SET title=:title, content=:content,
            updated_at = CASE WHEN updated_at >= :now THEN updated_at + 1 ELSE :now END
        WHERE id = :id RETURNING *
        """
        now = self._clock()
        stmt = (
            update(Note)
            .where(Note.id == note_id)
            .values(
                title=title,
                content=content,
                updated_at=case(
                    (Note.updated_at >= now, Note.updated_at + 1),
                    else_=now,
                ),
            )
            .returning(Note)
            # RETURNING rows overwrite any copy already in the identity map
            .execution_options(synchronize_session=False, populate_existing=True)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def delete_by_id(self, note_id: int) -> Optional[int]:
        """Deletes a note; returns its id as confirmation, or None if no row matched."""
        stmt = (
            delete(Note)
            .where(Note.id == note_id)
            .returning(Note.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def commit(self) -> None:
        """Makes the writes of this request durable. Failures propagate like any query error."""
        await self.session.commit()
