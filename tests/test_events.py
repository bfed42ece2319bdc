"""Tests for Event CRUD, visibility and cancellation.

Covers:
- Event create with future-date and max_guests validation
- Host-only update / cancel / delete
- Canceled events are terminal
- max_guests cannot drop below the reserved spots
- Visibility of private events
- List endpoints
"""
from datetime import datetime, timezone, timedelta
from eventhost.models.rsvp import Rsvp
from tests.conftest import auth, create_test_user, create_test_event, invite


def _setup(client):
    host = create_test_user(client, name="Host")
    guest = create_test_user(client, name="Guest")
    return host, guest


class TestEventCreate:
    """Event creation and initial state."""

    def test_create_event(self, client):
        host, _ = _setup(client)
        event = create_test_event(client, host, title="Dinner", max_guests=4)
        assert event["title"] == "Dinner"
        assert event["max_guests"] == 4
        assert event["user_id"] == host["id"]
        assert event["is_canceled"] is False

    def test_past_date_rejected(self, client):
        host, _ = _setup(client)
        past = datetime.now(timezone.utc) - timedelta(hours=1)
        resp = client.post("/api/events/", headers=auth(host), json={
            "title": "Yesterday", "date_time": past.isoformat(),
            "location": "Park", "max_guests": 3,
        })
        assert resp.status_code == 422

    def test_negative_max_guests_rejected(self, client):
        host, _ = _setup(client)
        future = datetime.now(timezone.utc) + timedelta(days=2)
        resp = client.post("/api/events/", headers=auth(host), json={
            "title": "Nope", "date_time": future.isoformat(),
            "location": "Park", "max_guests": -1,
        })
        assert resp.status_code == 422

    def test_requires_principal(self, client):
        future = datetime.now(timezone.utc) + timedelta(days=2)
        resp = client.post("/api/events/", json={
            "title": "Anon", "date_time": future.isoformat(),
            "location": "Park", "max_guests": 3,
        })
        assert resp.status_code == 401
        assert resp.json()["error"] == "unauthenticated"


class TestEventUpdate:
    """Host-only updates, rejected once canceled."""

    def test_host_can_update(self, client):
        host, _ = _setup(client)
        event = create_test_event(client, host)
        resp = client.put(f"/api/events/{event['id']}", headers=auth(host), json={"title": "Renamed"})
        assert resp.status_code == 200
        assert resp.json()["title"] == "Renamed"

    def test_non_host_forbidden(self, client):
        host, guest = _setup(client)
        event = create_test_event(client, host, is_private=False)
        resp = client.put(f"/api/events/{event['id']}", headers=auth(guest), json={"title": "Hijacked"})
        assert resp.status_code == 403
        assert resp.json()["error"] == "forbidden"

    def test_update_canceled_event_rejected(self, client):
        host, _ = _setup(client)
        event = create_test_event(client, host)
        client.post(f"/api/events/{event['id']}/cancel", headers=auth(host))
        resp = client.put(f"/api/events/{event['id']}", headers=auth(host), json={"title": "Too late"})
        assert resp.status_code == 409
        assert resp.json()["error"] == "event_canceled"
        assert resp.json()["detail"] == "Cannot modify a canceled event"

    def test_cannot_lower_max_guests_below_reserved(self, client):
        host, guest = _setup(client)
        other = create_test_user(client, name="Other")
        event = create_test_event(client, host, max_guests=3)
        invite(client, host, event, [guest, other])

        resp = client.put(f"/api/events/{event['id']}", headers=auth(host), json={"max_guests": 1})
        assert resp.status_code == 409
        body = resp.json()
        assert body["error"] == "capacity_exceeded"
        assert body["effective_guests"] == 2

        resp = client.put(f"/api/events/{event['id']}", headers=auth(host), json={"max_guests": 2})
        assert resp.status_code == 200
        assert resp.json()["max_guests"] == 2


class TestEventCancel:
    """Cancellation is host-only and terminal."""

    def test_cancel_event(self, client):
        host, _ = _setup(client)
        event = create_test_event(client, host)
        resp = client.post(f"/api/events/{event['id']}/cancel", headers=auth(host))
        assert resp.status_code == 200
        assert resp.json()["is_canceled"] is True

    def test_cancel_already_canceled(self, client):
        host, _ = _setup(client)
        event = create_test_event(client, host)
        client.post(f"/api/events/{event['id']}/cancel", headers=auth(host))
        resp = client.post(f"/api/events/{event['id']}/cancel", headers=auth(host))
        assert resp.status_code == 409
        assert resp.json()["detail"] == "Cannot cancel a canceled event"

    def test_cancel_non_host_forbidden(self, client):
        host, guest = _setup(client)
        event = create_test_event(client, host)
        invite(client, host, event, [guest])
        resp = client.post(f"/api/events/{event['id']}/cancel", headers=auth(guest))
        assert resp.status_code == 403


class TestEventVisibility:
    """Private events are only visible to the host and invitees."""

    def test_private_event_hidden_from_strangers(self, client):
        host, guest = _setup(client)
        event = create_test_event(client, host, is_private=True)
        resp = client.get(f"/api/events/{event['id']}", headers=auth(guest))
        assert resp.status_code == 404

    def test_private_event_visible_to_invitee(self, client):
        host, guest = _setup(client)
        event = create_test_event(client, host, is_private=True)
        invite(client, host, event, [guest])
        resp = client.get(f"/api/events/{event['id']}", headers=auth(guest))
        assert resp.status_code == 200

    def test_delete_event_cascades(self, client, db):
        host, guest = _setup(client)
        event = create_test_event(client, host)
        invite(client, host, event, [guest])
        resp = client.delete(f"/api/events/{event['id']}", headers=auth(host))
        assert resp.status_code == 204
        assert db.query(Rsvp).filter(Rsvp.event_id == event["id"]).count() == 0


class TestEventLists:
    """Hosting / attending / public listings."""

    def test_lists(self, client):
        host, guest = _setup(client)
        private = create_test_event(client, host, title="Private", is_private=True)
        public = create_test_event(client, host, title="Public", is_private=False)
        invite(client, host, private, [guest])

        hosting = client.get("/api/events/hosting", headers=auth(host)).json()
        assert {e["title"] for e in hosting} == {"Private", "Public"}

        attending = client.get("/api/events/attending", headers=auth(guest)).json()
        assert [e["id"] for e in attending] == [private["id"]]

        public_list = client.get("/api/events/public", headers=auth(guest)).json()
        assert [e["id"] for e in public_list] == [public["id"]]

        mine = client.get("/api/events/", headers=auth(guest)).json()
        assert [e["id"] for e in mine] == [private["id"]]

    def test_public_list_excludes_canceled(self, client):
        host, guest = _setup(client)
        event = create_test_event(client, host, title="Called off", is_private=False)
        client.post(f"/api/events/{event['id']}/cancel", headers=auth(host))
        titles = [e["title"] for e in client.get("/api/events/public", headers=auth(guest)).json()]
        assert "Called off" not in titles
