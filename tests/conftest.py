"""Pytest fixtures — SQLite database per test, fake checkout provider, store doubles."""
import os
import uuid
from datetime import date, timedelta

SQLITE_URL = "sqlite:///./test.db"

# Settings are read once at import; required values must exist before classreg loads.
os.environ.setdefault("DATABASE_URL", SQLITE_URL)
os.environ.setdefault("STRIPE_SECRET_KEY", "sk_test_dummy")
os.environ.setdefault("PUBLIC_BASE_URL", "http://testserver.local")

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi import Depends
from fastapi.testclient import TestClient

from classreg.database import Base, get_db
from classreg.deps import get_checkout_provider, get_gateway
from classreg.errors import PersistenceError, UpstreamProviderError
from classreg.main import app
from classreg.services.checkout_service import CheckoutProvider
from classreg.stores.interfaces import PersistenceGateway
from classreg.stores.sqlalchemy_store import SQLAlchemyGateway

# Import all models so they register with Base.metadata
from classreg.models.event import Event                              # noqa: F401
from classreg.models.registration import Registration                # noqa: F401
from classreg.models.payment import Payment                          # noqa: F401
from classreg.models.reconciliation import PaymentReconciliation     # noqa: F401

FAKE_CHECKOUT_URL = "https://checkout.stripe.test/c/pay/cs_test_123"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session, closed after the test."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def gateway(db):
    """Real SQLAlchemy gateway over the test session."""
    return SQLAlchemyGateway(db)


class FakeCheckoutProvider(CheckoutProvider):
    """Records every session request and answers with a fixed URL."""

    def __init__(self, fail: bool = False) -> None:
        self.fail = fail
        self.calls = []

    def create_session(self, line_items, mode, success_url, cancel_url) -> str:
        self.calls.append({
            "line_items": line_items,
            "mode": mode,
            "success_url": success_url,
            "cancel_url": cancel_url,
        })
        if self.fail:
            raise UpstreamProviderError()
        return FAKE_CHECKOUT_URL


@pytest.fixture(scope="function")
def checkout_provider():
    return FakeCheckoutProvider()


@pytest.fixture(scope="function")
def client(db_engine, checkout_provider):
    """FastAPI TestClient with the database and Stripe dependencies overridden."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_checkout_provider] = lambda: checkout_provider
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


class FlakyGateway(PersistenceGateway):
    """Delegates to a real gateway but fails chosen (operation, table) pairs."""

    def __init__(self, inner: PersistenceGateway, fail_on=()) -> None:
        self.inner = inner
        self.fail_on = set(fail_on)

    def _check(self, operation: str, table: str) -> None:
        if (operation, table) in self.fail_on:
            raise PersistenceError(operation, table)

    def insert(self, table, record):
        self._check("insert", table)
        return self.inner.insert(table, record)

    def update(self, table, where, patch):
        self._check("update", table)
        return self.inner.update(table, where, patch)

    def select(self, table, where=(), order_by=None, descending=False, limit=None):
        self._check("select", table)
        return self.inner.select(table, where, order_by, descending, limit)


def use_flaky_gateway(fail_on) -> None:
    """Route requests through a FlakyGateway; the client fixture clears the override."""
    def _override_get_gateway(db=Depends(get_db)):
        return FlakyGateway(SQLAlchemyGateway(db), fail_on=fail_on)

    app.dependency_overrides[get_gateway] = _override_get_gateway


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def create_test_event(db, days_from_today: int = 30, **overrides) -> Event:
    """Insert an event row directly (events are entered administratively)."""
    values = {
        "id": str(uuid.uuid4()),
        "date": date.today() + timedelta(days=days_from_today),
        "location_name": "Grand Valley Conference Hall",
        "address": "401 W Fulton St",
        "city": "Grand Rapids",
        "state": "MI",
        "zip": "49504",
        "time": "9:00 AM - 12:00 PM",
    }
    values.update(overrides)
    ev = Event(**values)
    db.add(ev)
    db.commit()
    db.refresh(ev)
    return ev


def registration_payload(event_id: str = "1", **overrides) -> dict:
    """A valid registration form body, camelCase as submitted by the site."""
    payload = {
        "eventId": event_id,
        "firstName": "Margaret",
        "lastName": "Hollis",
        "address": "1200 Lake Dr SE",
        "city": "Grand Rapids",
        "state": "MI",
        "zipCode": "49506",
        "phone": "6165550142",
        "email": "margaret.hollis@example.com",
        "guestName": "Robert Hollis",
        "confirmEvent": True,
    }
    payload.update(overrides)
    return payload


def payment_payload(registration_id: str, **overrides) -> dict:
    """A valid payment form body."""
    payload = {
        "registrationId": registration_id,
        "firstName": "Margaret",
        "lastName": "Hollis",
        "address": "1200 Lake Dr SE",
        "city": "Grand Rapids",
        "state": "MI",
        "zipCode": "49506",
        "cardType": "visa",
        "cardNumber": "4242424242424242",
        "expirationMonth": "08",
        "expirationYear": "2029",
        "securityCode": "123",
    }
    payload.update(overrides)
    return payload


def register_attendee(client: TestClient, event_id: str = "1", **overrides) -> str:
    """Helper — POST /api/registrations and return the registration id."""
    resp = client.post("/api/registrations/", json=registration_payload(event_id, **overrides))
    assert resp.status_code == 201, resp.text
    return resp.json()["registrationId"]
