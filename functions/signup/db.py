"""
Registration store interface, with SQL and in-memory implementations.
"""

from __future__ import annotations

from typing import Optional, Protocol

from sqlalchemy import Column, Integer, String, Text, create_engine, delete, func, select
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from shared.csv_codec import encode_document
from shared.types import RegistrationRecord


class RegistrationStore(Protocol):
    """Interface the API needs from whatever persists registrations."""

    location: str

    def ensure_ready(self) -> None:
        ...

    def add(self, record: RegistrationRecord) -> None:
        ...

    def list_recent(self, limit: Optional[int] = None) -> list[RegistrationRecord]:
        ...

    def count(self) -> int:
        ...

    def export_document(self) -> str:
        ...

    def reset(self) -> None:
        ...


class InMemoryRegistrationStore:
    """Simple in-memory store for development and tests."""

    location = "memory"

    def __init__(self):
        self.records: list[RegistrationRecord] = []

    def ensure_ready(self) -> None:
        return None

    def add(self, record: RegistrationRecord) -> None:
        self.records.append(record)

    def list_recent(self, limit: Optional[int] = None) -> list[RegistrationRecord]:
        # Sorting the reversed list keeps later inserts first among equal timestamps.
        ordered = sorted(
            reversed(self.records), key=lambda record: record.timestamp, reverse=True
        )
        return ordered if limit is None else ordered[:limit]

    def count(self) -> int:
        return len(self.records)

    def export_document(self) -> str:
        return encode_document(self.list_recent())

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.records.clear()


class SqlRegistrationStore:
    """
    SQLAlchemy-backed implementation. Accepts any SQLAlchemy URL (e.g., Postgres or SQLite for tests).
    """

    def __init__(self, database_url: str):
        if not database_url:
            raise ValueError("DATABASE_URL is required for SqlRegistrationStore")
        self.engine = create_engine(
            database_url,
            future=True,
            pool_pre_ping=True,
            pool_recycle=1800,
        )
        self.Session = sessionmaker(
            bind=self.engine, class_=Session, expire_on_commit=False, future=True
        )
        self.location = self.engine.url.render_as_string(hide_password=True)

    def ensure_ready(self) -> None:
        Base.metadata.create_all(self.engine)

    @staticmethod
    def _to_record(row: "RegistrationRow") -> RegistrationRecord:
        return RegistrationRecord(
            first_name=row.first_name,
            last_name=row.last_name,
            email=row.email,
            affiliation_type=row.affiliation_type,
            attendance=row.attendance,
            timestamp=row.timestamp,
            net_id=row.net_id,
            graduation_year=row.graduation_year,
            program=row.program,
            questions=row.questions,
        )

    def add(self, record: RegistrationRecord) -> None:
        with self.Session() as session:
            session.add(
                RegistrationRow(
                    first_name=record.first_name,
                    last_name=record.last_name,
                    email=record.email,
                    affiliation_type=record.affiliation_type,
                    net_id=record.net_id,
                    graduation_year=record.graduation_year,
                    program=record.program,
                    attendance=record.attendance,
                    questions=record.questions,
                    timestamp=record.timestamp,
                )
            )
            session.commit()

    def list_recent(self, limit: Optional[int] = None) -> list[RegistrationRecord]:
        with self.Session() as session:
            stmt = select(RegistrationRow).order_by(
                RegistrationRow.timestamp.desc(), RegistrationRow.id.desc()
            )
            if limit is not None:
                stmt = stmt.limit(limit)
            rows = session.execute(stmt).scalars().all()
            return [self._to_record(row) for row in rows]

    def count(self) -> int:
        with self.Session() as session:
            return session.execute(
                select(func.count()).select_from(RegistrationRow)
            ).scalar_one()

    def export_document(self) -> str:
        return encode_document(self.list_recent())

    def reset(self) -> None:
        with self.Session() as session:
            session.execute(delete(RegistrationRow))
            session.commit()


Base = declarative_base()


class RegistrationRow(Base):
    __tablename__ = "registrations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    email = Column(String, nullable=False, index=True)
    affiliation_type = Column(String, nullable=False)
    net_id = Column(String, nullable=False, default="")
    graduation_year = Column(String, nullable=False, default="")
    program = Column(String, nullable=False, default="")
    attendance = Column(String, nullable=False)
    questions = Column(Text, nullable=False, default="")
    timestamp = Column(String, nullable=False, index=True)
