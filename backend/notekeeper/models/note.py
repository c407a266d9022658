"""
Notekeeper Backend: Note SQLAlchemy Model
===========================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
How:   Inherits from the shared DeclarativeBase; Alembic reads it for migrations.
Who:   Used by NoteStore for CRUD operations.

Table Design:
    - INTEGER autoincrement primary key: assigned by the database, never reused
    - title / content: TEXT NOT NULL; emptiness is rejected at the API boundary
    - created_at / updated_at: INTEGER epoch milliseconds

    The timestamp columns have no defaults. NoteStore sets both on insert
    and computes updated_at on every update.

    Index on created_at DESC:
        The list endpoint always returns newest first.
"""

from sqlalchemy import BigInteger, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.database import Base


class Note(Base):
    """
    A titled block of text with creation/update timestamps.

    Lifecycle:
        1. Created by POST /api/notes (id, created_at, updated_at assigned)
        2. Mutated only by PUT /api/notes/{id}: title/content replaced, updated_at bumped
        3. Destroyed by DELETE /api/notes/{id}: hard delete, no history
    """

    __tablename__ = "notes"

    # sqlite_autoincrement: ids of deleted rows are never handed out again
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[str] = mapped_column(Text, nullable=False)

    # Epoch milliseconds; BigInteger so Postgres does not overflow int4
    created_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    updated_at: Mapped[int] = mapped_column(BigInteger, nullable=False)

    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return (
            f"<Note(id={self.id}, title={self.title!r}, "
            f"created_at={self.created_at}, updated_at={self.updated_at})>"
        )
