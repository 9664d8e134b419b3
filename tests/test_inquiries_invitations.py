from datetime import datetime, timedelta, timezone

from gallery_admin.models import Artist, ArtistInvitation, Inquiry


def test_public_inquiry_is_listed_with_artwork_title(client, store, as_admin):
    artist = store.artist()
    artwork = store.artwork(artist, "Quiet Room")

    res = client.post("/api/inquiries", json={
        "artwork_id": artwork.id,
        "name": "Joana Reis",
        "email": "joana@example.com",
        "message": "Is this piece still available?",
    })
    assert res.status_code == 201
    assert res.json()["artwork_title"] == "Quiet Room"

    listed = client.get("/api/inquiries").json()
    assert [(i["name"], i["artwork_title"]) for i in listed] == [("Joana Reis", "Quiet Room")]


def test_inquiry_for_missing_artwork_is_404(client, store):
    res = client.post("/api/inquiries", json={
        "artwork_id": 41,
        "name": "Joana Reis",
        "email": "joana@example.com",
        "message": "Hello",
    })
    assert res.status_code == 404


def test_inquiry_email_is_validated(client, store):
    res = client.post("/api/inquiries", json={
        "artwork_id": 1,
        "name": "Joana Reis",
        "email": "not-an-email",
        "message": "Hello",
    })
    assert res.status_code == 400


def test_inquiry_stats_windows(client, store, as_admin):
    artist = store.artist()
    artwork = store.artwork(artist, "Quiet Room")
    now = datetime.now(timezone.utc)
    for days in (1, 10, 45):
        store.add(Inquiry(
            artwork_id=artwork.id,
            name="Visitor",
            email="visitor@example.com",
            message="Hello",
            created_at=now - timedelta(days=days),
        ))

    assert client.get("/api/inquiries/stats").json() == {"total": 3, "this_week": 1, "this_month": 2}


def test_invite_validate_and_redeem(client, store, as_admin, revalidator):
    res = client.post("/api/invitations", json={
        "name": "Marta Sousa",
        "email": "marta@example.com",
        "specialty": "Ceramics",
    })
    assert res.status_code == 201
    created = res.json()
    code = created["invitation_code"]
    assert code.startswith("INVITE-") and len(code) == len("INVITE-") + 8
    assert created["setup_url"].endswith(f"/handler/setup?code={code}")

    res = client.get("/api/invitations/validate", params={"code": code})
    assert res.status_code == 200
    assert res.json()["email"] == "marta@example.com"

    res = client.post("/api/invitations/redeem", json={"code": code})
    assert res.status_code == 201
    artist = store.get(Artist, res.json()["id"])
    assert (artist.name, artist.specialty, artist.portal_access) == ("Marta Sousa", "Ceramics", True)
    assert "/artists" in revalidator.calls[-1]["paths"]

    res = client.get("/api/invitations/validate", params={"code": code})
    assert res.status_code == 400
    assert res.json()["error"] == "Invitation already used"


def test_second_pending_invitation_is_refused(client, store, as_admin):
    payload = {"name": "Marta Sousa", "email": "marta@example.com"}
    assert client.post("/api/invitations", json=payload).status_code == 201
    assert client.post("/api/invitations", json=payload).status_code == 400


def test_existing_artist_email_is_refused(client, store, as_admin):
    store.artist(name="Marta Sousa", email="Marta@Example.com")
    res = client.post("/api/invitations", json={"name": "Marta Sousa", "email": "marta@example.com"})
    assert res.status_code == 400
    assert res.json()["error"] == "Artist already exists"


def test_unknown_and_expired_codes(client, store):
    store.add(ArtistInvitation(
        email="late@example.com",
        name="Late Comer",
        code="INVITE-EXPIRED1",
        invited_by="admin",
        expires_at=datetime.now(timezone.utc) - timedelta(days=1),
    ))

    assert client.get("/api/invitations/validate", params={"code": "INVITE-NOPE0000"}).status_code == 404
    res = client.get("/api/invitations/validate", params={"code": "INVITE-EXPIRED1"})
    assert res.status_code == 400
    assert res.json()["error"] == "Invitation expired"


def test_invitation_stats(client, store, as_admin):
    for i in range(3):
        client.post("/api/invitations", json={"name": f"Artist {i}", "email": f"artist{i}@example.com"})
    store.add(ArtistInvitation(
        email="used@example.com",
        name="Used Code",
        code="INVITE-USED0001",
        invited_by="admin",
        used_at=datetime.now(timezone.utc),
    ))

    stats = client.get("/api/invitations/stats").json()

    assert (stats["total"], stats["pending"], stats["used"]) == (4, 3, 1)
    assert len(stats["recent"]) == 4
    assert {i["invited_by"] for i in stats["recent"]} == {"Gallery Admin", "admin"}


def test_invitation_is_emailed_with_code_and_setup_link(client, store, as_admin, email_sender):
    res = client.post("/api/invitations", json={"name": "Marta Sousa", "email": "marta@example.com"})

    assert res.status_code == 201
    body = res.json()
    [message] = email_sender.sent
    assert message["to"] == ["Marta Sousa <marta@example.com>"]
    assert body["invitation_code"] in message["html"]
    assert body["setup_url"] in message["html"]
    assert "Gallery Admin" in message["html"]


def test_failed_invitation_email_is_reported_but_invitation_kept(client, store, as_admin, email_sender):
    email_sender.error = "Email service not configured"

    res = client.post("/api/invitations", json={"name": "Marta Sousa", "email": "marta@example.com"})

    assert res.status_code == 502
    body = res.json()
    assert body["error"] == "Invitation created but email failed to send"
    assert body["detail"] == "Email service not configured"
    assert client.get("/api/invitations/validate", params={"code": body["invitation_code"]}).status_code == 200


def test_expired_invitation_does_not_block_new_invite(client, store, as_admin):
    store.add(ArtistInvitation(
        email="marta@example.com",
        name="Marta Sousa",
        code="INVITE-OLDCODE1",
        invited_by="admin",
        expires_at=datetime.now(timezone.utc) - timedelta(days=1),
    ))

    res = client.post("/api/invitations", json={"name": "Marta Sousa", "email": "marta@example.com"})

    assert res.status_code == 201
    assert res.json()["invitation_code"] != "INVITE-OLDCODE1"
