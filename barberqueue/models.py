# barberqueue/models.py

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import SQLModel, Field


def utcnow() -> datetime:
    """Timezone-aware UTC timestamp, the convention for every datetime column."""
    return datetime.now(timezone.utc)


class Barber(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    username: str = Field(index=True, unique=True)
    password_hash: str
    lat: float
    long: float


class User(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    phone_number: str = Field(index=True, unique=True)


class QueueSlot(SQLModel, table=True):
    # one active slot per user; this constraint is what keeps a user in a single queue
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", unique=True)
    barber_id: int = Field(foreign_key="barber.id", index=True)
    service: str
    entered_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), index=True)


class ServiceHistory(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    barber_id: int = Field(foreign_key="barber.id", index=True)
    user_id: int = Field(foreign_key="user.id")
    service: str
    served_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), index=True)
