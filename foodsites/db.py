"""
Registration store abstraction for SQL databases and an in-memory test implementation.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import asdict, dataclass, field
from typing import Dict, Optional, Protocol

from sqlalchemy import Boolean, Column, Float, String, Text, create_engine, select
from sqlalchemy.orm import Session, declarative_base, sessionmaker


class StoreError(RuntimeError):
    """Raised when the backing database rejects a request."""


@dataclass
class PartnerRegistration:
    org: str
    name: str
    email: str
    phone: str
    address: str
    city: str
    zip: str
    open_hours: str
    business_type: str = ""
    business_type_other: Optional[str] = None
    offer_dropoff: bool = False
    offer_pickup: bool = False
    offer_both: bool = False
    duration: Optional[str] = None
    duration_dates: Optional[str] = None
    storage_space: Optional[str] = None
    additional_info: Optional[str] = None
    ack_participation: bool = False
    ack_followup: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    created_at: float = field(default_factory=lambda: time.time())

    def as_dict(self) -> dict:
        return asdict(self)


class RegistrationStore(Protocol):
    """Interface for partner registration persistence."""

    def create_registration(self, record: PartnerRegistration) -> PartnerRegistration:
        ...

    def list_registrations(
        self, city: Optional[str] = None
    ) -> list[PartnerRegistration]:
        ...

    def get_registration(self, registration_id: str) -> Optional[PartnerRegistration]:
        ...


class InMemoryRegistrationStore:
    """Simple in-memory store for development and tests."""

    def __init__(self):
        self.registrations: Dict[str, PartnerRegistration] = {}

    def create_registration(self, record: PartnerRegistration) -> PartnerRegistration:
        self.registrations[record.id] = record
        return record

    def list_registrations(
        self, city: Optional[str] = None
    ) -> list[PartnerRegistration]:
        items = sorted(self.registrations.values(), key=lambda r: r.created_at)
        if city:
            wanted = city.lower()
            items = [r for r in items if (r.city or "").lower() == wanted]
        return items

    def get_registration(self, registration_id: str) -> Optional[PartnerRegistration]:
        return self.registrations.get(registration_id)

    def reset(self) -> None:
        """Clear all stored data (useful in tests)."""
        self.registrations.clear()


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
        Base.metadata.create_all(self.engine)

    def _to_record(self, row: "RegistrationRow") -> PartnerRegistration:
        return PartnerRegistration(
            id=row.id,
            org=row.org,
            name=row.name,
            email=row.email,
            phone=row.phone,
            address=row.address,
            city=row.city,
            zip=row.zip,
            open_hours=row.open_hours,
            business_type=row.business_type or "",
            business_type_other=row.business_type_other,
            offer_dropoff=row.offer_dropoff,
            offer_pickup=row.offer_pickup,
            offer_both=row.offer_both,
            duration=row.duration,
            duration_dates=row.duration_dates,
            storage_space=row.storage_space,
            additional_info=row.additional_info,
            ack_participation=row.ack_participation,
            ack_followup=row.ack_followup,
            created_at=row.created_at,
        )

    def create_registration(self, record: PartnerRegistration) -> PartnerRegistration:
        with self.Session() as session:
            row = RegistrationRow(**record.as_dict())
            session.add(row)
            session.commit()
            session.refresh(row)
            return self._to_record(row)

    def list_registrations(
        self, city: Optional[str] = None
    ) -> list[PartnerRegistration]:
        with self.Session() as session:
            stmt = select(RegistrationRow).order_by(RegistrationRow.created_at.asc())
            if city:
                stmt = stmt.where(RegistrationRow.city.ilike(city))
            rows = session.execute(stmt).scalars().all()
            return [self._to_record(row) for row in rows]

    def get_registration(self, registration_id: str) -> Optional[PartnerRegistration]:
        with self.Session() as session:
            row = session.get(RegistrationRow, registration_id)
            if not row:
                return None
            return self._to_record(row)


Base = declarative_base()


class RegistrationRow(Base):
    __tablename__ = "partner_registrations"

    id = Column(String, primary_key=True)
    org = Column(String, nullable=False)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    address = Column(String, nullable=False)
    city = Column(String, nullable=False, index=True)
    zip = Column(String, nullable=False)
    open_hours = Column(String, nullable=False)
    business_type = Column(String, nullable=True)
    business_type_other = Column(String, nullable=True)
    offer_dropoff = Column(Boolean, nullable=False, default=False)
    offer_pickup = Column(Boolean, nullable=False, default=False)
    offer_both = Column(Boolean, nullable=False, default=False)
    duration = Column(String, nullable=True)
    duration_dates = Column(String, nullable=True)
    storage_space = Column(String, nullable=True)
    additional_info = Column(Text, nullable=True)
    ack_participation = Column(Boolean, nullable=False, default=False)
    ack_followup = Column(Boolean, nullable=False, default=False)
    created_at = Column(Float, nullable=False)
