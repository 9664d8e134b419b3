from datetime import datetime, timedelta, timezone

from gallery_admin.models import Event, EventRegistration


def _event_payload(**overrides):
    payload = {
        "title": "Spring Opening Night",
        "description": "Meet the artists of the spring collection.",
        "event_type": "Exhibition",
        "start_date": "2030-04-01T18:00:00Z",
        "end_date": "2030-04-01T21:00:00Z",
        "registration_enabled": True,
    }
    payload.update(overrides)
    return payload


def _registration_payload(**overrides):
    payload = {
        "full_name": "Joana Reis",
        "email": "joana@example.com",
        "number_of_attendees": 2,
    }
    payload.update(overrides)
    return payload


def test_create_event_derives_slug_and_rejects_duplicates(client, store, as_admin, revalidator):
    res = client.post("/api/events", json=_event_payload())
    assert res.status_code == 201
    assert res.json()["slug"] == "spring-opening-night"
    assert "/events" in revalidator.calls[-1]["paths"]

    res = client.post("/api/events", json=_event_payload())
    assert res.status_code == 400


def test_update_and_cancel_event(client, store, as_admin):
    event_id = client.post("/api/events", json=_event_payload()).json()["id"]

    res = client.put(f"/api/events/{event_id}", json={"title": "Spring Preview"})
    assert res.json()["slug"] == "spring-preview"
    assert res.json()["description"] == "Meet the artists of the spring collection."

    res = client.post(f"/api/events/{event_id}/toggle-cancellation")
    assert res.json()["is_canceled"] is True


def test_public_registration_stores_snapshot(client, store, as_admin):
    event_id = client.post("/api/events", json=_event_payload()).json()["id"]

    res = client.post(f"/api/events/{event_id}/registrations", json=_registration_payload())

    assert res.status_code == 201
    body = res.json()
    assert body["number_of_attendees"] == 2
    assert body["registration_data"]["event_title"] == "Spring Opening Night"
    assert body["registration_data"]["registration_fields"]["email"] == "joana@example.com"


def test_registration_requires_enabled_event(client, store, as_admin):
    event_id = client.post("/api/events", json=_event_payload(registration_enabled=False)).json()["id"]

    assert client.post(f"/api/events/{event_id}/registrations", json=_registration_payload()).status_code == 400
    assert client.post("/api/events/999/registrations", json=_registration_payload()).status_code == 404


def test_registration_stats(client, store, as_admin):
    event_id = client.post("/api/events", json=_event_payload()).json()["id"]
    client.post(f"/api/events/{event_id}/registrations", json=_registration_payload())
    client.post(f"/api/events/{event_id}/registrations", json=_registration_payload(number_of_attendees=3))
    store.add(EventRegistration(
        event_id=event_id,
        full_name="Old Timer",
        email="old@example.com",
        number_of_attendees=1,
        created_at=datetime.now(timezone.utc) - timedelta(days=30),
        updated_at=datetime.now(timezone.utc) - timedelta(days=30),
    ))

    stats = client.get(f"/api/events/{event_id}/registrations/stats").json()

    assert stats == {"total": 3, "total_attendees": 6, "recent_registrations": 2}


def test_update_and_delete_registration(client, store, as_admin):
    event_id = client.post("/api/events", json=_event_payload()).json()["id"]
    registration_id = client.post(
        f"/api/events/{event_id}/registrations", json=_registration_payload()
    ).json()["id"]

    res = client.put(f"/api/registrations/{registration_id}", json={"number_of_attendees": 4})
    assert res.json()["number_of_attendees"] == 4
    assert res.json()["full_name"] == "Joana Reis"

    assert client.delete(f"/api/registrations/{registration_id}").status_code == 200
    assert client.get(f"/api/events/{event_id}/registrations").json() == []


def test_deleting_event_removes_registrations(client, store, as_admin):
    event_id = client.post("/api/events", json=_event_payload()).json()["id"]
    registration_id = client.post(
        f"/api/events/{event_id}/registrations", json=_registration_payload()
    ).json()["id"]

    assert client.delete(f"/api/events/{event_id}").status_code == 200

    assert store.get(Event, event_id) is None
    assert store.get(EventRegistration, registration_id) is None


def test_registration_stats_for_unknown_event_is_404(client, store, as_admin):
    res = client.get("/api/events/999/registrations/stats")
    assert res.status_code == 404
    assert res.json()["error"] == "Event not found"
