"""
SQL notes backend (Postgres in production, SQLite in tests).
"""

from __future__ import annotations

from sqlalchemy import Boolean, Column, String, Text, create_engine, select
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from scrapbook.store import Note


class SqlNotesBackend:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    name = "sql"

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlNotesBackend")
        if database_url.startswith("postgres://"):
            database_url = database_url.replace("postgres://", "postgresql://", 1)
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        Base.metadata.create_all(self.engine)

    def _to_note(self, row: "NoteRow") -> Note:
        return Note(
            id=row.id,
            author=row.author,
            message=row.message,
            visible_to_others=row.visible_to_others,
            created_at=row.created_at,
            color=row.color,
        )

    def list_notes(self) -> list[Note]:
        with self.Session() as session:
            stmt = select(NoteRow).order_by(NoteRow.created_at.desc())
            return [self._to_note(row) for row in session.execute(stmt).scalars()]

    def list_public_notes(self) -> list[Note]:
        with self.Session() as session:
            stmt = (
                select(NoteRow)
                .where(NoteRow.visible_to_others.is_(True))
                .order_by(NoteRow.created_at.desc())
            )
            return [self._to_note(row) for row in session.execute(stmt).scalars()]

    def insert_note(self, note: Note) -> None:
        with self.Session() as session:
            session.add(
                NoteRow(
                    id=note.id,
                    author=note.author,
                    message=note.message,
                    visible_to_others=note.visible_to_others,
                    created_at=note.created_at,
                    color=note.color,
                )
            )
            session.commit()


Base = declarative_base()


class NoteRow(Base):
    __tablename__ = "notes"

    id = Column(String, primary_key=True)
    author = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    visible_to_others = Column(Boolean, nullable=False, default=False, index=True)
    # ISO-8601 UTC strings in one format sort chronologically.
    created_at = Column(String, nullable=False, index=True)
    color = Column(String, nullable=True)
