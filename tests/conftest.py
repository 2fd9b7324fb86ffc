from datetime import datetime, timedelta, timezone
from typing import Generator

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.pool import StaticPool

from barberqueue import models  # noqa: F401  registers the tables
from barberqueue.auth import BARBER_ROLE, USER_ROLE, create_access_token
from barberqueue.db import get_session
from barberqueue.deps import get_payment_gate, get_queue_manager
from barberqueue.main import app
from barberqueue.models import Barber, User
from barberqueue.payments import PaymentGate
from barberqueue.queue_service import QueueManager

PAYMENT_SECRET = "test-razorpay-secret"


# Tag tests by folder
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "/tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "/tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


class StepClock:
    """Deterministic clock: every call returns a time one step after the last."""

    def __init__(self, start=datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc), step=timedelta(minutes=1)):
        self.current = start
        self.step = step

    def __call__(self):
        value = self.current
        self.current = self.current + self.step
        return value


class FakeOrderClient:
    def __init__(self):
        self.orders = []

    def create_order(self, amount, currency):
        order = {
            "id": f"order_test_{len(self.orders) + 1}",
            "amount": amount,
            "currency": currency,
            "status": "created",
        }
        self.orders.append(order)
        return order


@pytest.fixture()
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


@pytest.fixture()
def clock():
    return StepClock()


@pytest.fixture()
def manager(session, clock):
    return QueueManager(session, average_service_minutes=15, clock=clock)


@pytest.fixture()
def order_client():
    return FakeOrderClient()


@pytest.fixture()
def make_barber(session):
    def _make(name="Ravi", username=None, lat=12.9716, long=77.5946):
        barber = Barber(
            name=name,
            username=username or name.lower(),
            password_hash="not-a-real-hash",
            lat=lat,
            long=long,
        )
        session.add(barber)
        session.commit()
        session.refresh(barber)
        return barber

    return _make


@pytest.fixture()
def make_user(session):
    counter = {"n": 0}

    def _make(name="Asha", phone_number=None):
        counter["n"] += 1
        user = User(name=name, phone_number=phone_number or f"98765{counter['n']:05d}")
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    return _make


@pytest.fixture()
def client(session, order_client) -> Generator[TestClient, None, None]:
    def _get_session():
        return session

    def _get_payment_gate(manager: QueueManager = Depends(get_queue_manager)):
        return PaymentGate(order_client, manager, key_secret=PAYMENT_SECRET, currency="INR")

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_payment_gate] = _get_payment_gate
    try:
        # no context manager: the lifespan would create tables on the real database
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def auth_headers(subject_id: int, role: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token(subject_id, role)}"}


@pytest.fixture()
def user_headers():
    return lambda user_id: auth_headers(user_id, USER_ROLE)


@pytest.fixture()
def barber_headers():
    return lambda barber_id: auth_headers(barber_id, BARBER_ROLE)
