"""Tests for the registration workflow and its routes."""
from classreg.errors import ErrorCode
from classreg.models.registration import Registration
from classreg.services import registration_service
from classreg.stores.interfaces import EVENTS, REGISTRATIONS
from tests.conftest import (
    FlakyGateway,
    create_test_event,
    register_attendee,
    registration_payload,
    use_flaky_gateway,
)


class TestRegisterWorkflow:
    """register() outcomes."""

    def test_valid_registration_is_pending(self, db, gateway):
        ev = create_test_event(db)
        result = registration_service.register(gateway, registration_payload(ev.id))
        assert result.success is True
        assert result.error is None

        row = db.query(Registration).filter(Registration.id == result.registration_id).first()
        assert row is not None
        assert row.status.value == "pending"
        assert row.event_id == ev.id
        assert row.email == "margaret.hollis@example.com"
        assert row.created_at is not None

    def test_invalid_email_persists_nothing(self, db, gateway):
        result = registration_service.register(gateway, registration_payload(email="not-an-email"))
        assert result.success is False
        assert result.error == "Invalid form data. Please check your inputs."
        assert result.code == ErrorCode.VALIDATION_FAILED
        assert result.registration_id is None
        assert db.query(Registration).count() == 0

    def test_unconfirmed_event_persists_nothing(self, db, gateway):
        result = registration_service.register(gateway, registration_payload(confirmEvent=False))
        assert result.success is False
        assert db.query(Registration).count() == 0

    def test_failure_message_hides_validation_details(self, gateway):
        result = registration_service.register(gateway, registration_payload(phone="123"))
        assert "phone" not in result.error.lower()

    def test_empty_guest_name_stored_as_null(self, db, gateway):
        result = registration_service.register(gateway, registration_payload(guestName=""))
        row = db.query(Registration).filter(Registration.id == result.registration_id).first()
        assert row.guest_name is None

    def test_stale_event_reference_still_registers(self, db, gateway):
        """The event id is checked best-effort only."""
        result = registration_service.register(gateway, registration_payload("no-such-event"))
        assert result.success is True

    def test_event_check_failure_does_not_block(self, gateway):
        flaky = FlakyGateway(gateway, fail_on={("select", EVENTS)})
        result = registration_service.register(flaky, registration_payload("1"))
        assert result.success is True

    def test_store_failure_returns_generic_error(self, db, gateway):
        flaky = FlakyGateway(gateway, fail_on={("insert", REGISTRATIONS)})
        result = registration_service.register(flaky, registration_payload())
        assert result.success is False
        assert result.error == "Failed to register. Please try again."
        assert result.code == ErrorCode.PERSISTENCE_FAILED
        assert db.query(Registration).count() == 0

    def test_retry_creates_duplicate_pending(self, db, gateway):
        """Not idempotent: each call makes a new pending registration."""
        first = registration_service.register(gateway, registration_payload())
        second = registration_service.register(gateway, registration_payload())
        assert first.registration_id != second.registration_id
        assert db.query(Registration).count() == 2


class TestGetRegistration:
    """get_registration() resolves the event through the event lookup."""

    def test_with_live_event(self, db, gateway):
        ev = create_test_event(db, city="Holland")
        reg_id = registration_service.register(gateway, registration_payload(ev.id)).registration_id
        detail = registration_service.get_registration(gateway, reg_id)
        assert detail.id == reg_id
        assert detail.status == "pending"
        assert detail.event.city == "Holland"

    def test_with_fallback_event(self, gateway):
        reg_id = registration_service.register(gateway, registration_payload("3")).registration_id
        detail = registration_service.get_registration(gateway, reg_id)
        assert detail.event.id == "3"

    def test_missing(self, gateway):
        assert registration_service.get_registration(gateway, "missing") is None


class TestRegistrationRoutes:
    """POST /api/registrations, GET /api/registrations/{id}."""

    def test_register_returns_camel_case_result(self, client):
        resp = client.post("/api/registrations/", json=registration_payload("2"))
        assert resp.status_code == 201
        data = resp.json()
        assert data["success"] is True
        assert data["registrationId"]
        assert data["error"] is None

    def test_register_invalid_returns_400(self, client):
        resp = client.post("/api/registrations/", json=registration_payload(zipCode="49"))
        assert resp.status_code == 400
        assert resp.json() == {
            "success": False,
            "registrationId": None,
            "error": "Invalid form data. Please check your inputs.",
        }

    def test_register_store_failure_returns_503(self, client, db):
        use_flaky_gateway({("insert", REGISTRATIONS)})
        resp = client.post("/api/registrations/", json=registration_payload("2"))
        assert resp.status_code == 503
        assert resp.json() == {
            "success": False,
            "registrationId": None,
            "error": "Failed to register. Please try again.",
        }
        assert db.query(Registration).count() == 0

    def test_get_registration(self, client):
        reg_id = register_attendee(client, "2", guestName="")
        resp = client.get(f"/api/registrations/{reg_id}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "pending"
        assert data["guest_name"] is None
        assert data["event"]["id"] == "2"

    def test_get_registration_not_found(self, client):
        assert client.get("/api/registrations/does-not-exist").status_code == 404
