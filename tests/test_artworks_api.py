import pytest

from gallery_admin.models import Artwork, Inquiry
from gallery_admin.utils.auth import CurrentUser


def _artwork_payload(artist_id, **overrides):
    payload = {
        "title": "Harbour at Dawn",
        "artist_id": artist_id,
        "year": "2024",
        "medium": "Acrylic",
        "dimensions": "60 x 80 cm",
        "description": "Boats waiting for the tide.",
        "price": "850.00",
        "featured": True,
    }
    payload.update(overrides)
    return payload


def test_admin_creates_approved_artwork_with_slug(client, store, as_admin, revalidator):
    artist = store.artist()

    res = client.post("/api/artworks", json=_artwork_payload(artist.id))

    assert res.status_code == 201
    body = res.json()
    assert body["slug"] == "harbour-at-dawn"
    assert body["approval_status"] == "approved"
    assert body["featured"] == 1
    assert body["status"] == "Draft"
    assert body["global_display_order"] == 0
    assert revalidator.calls[-1]["tags"] == ["artwork", "artists"]


def test_duplicate_titles_get_suffixed_slugs(client, store, as_admin):
    artist = store.artist()
    client.post("/api/artworks", json=_artwork_payload(artist.id))
    res = client.post("/api/artworks", json=_artwork_payload(artist.id))
    assert res.json()["slug"] == "harbour-at-dawn-2"


def test_artist_submissions_wait_for_approval_unless_pre_approved(client, store, login):
    regular = store.artist(name="Ana Lima")
    trusted = store.artist(name="Rui Costa", pre_approved=True)

    login(CurrentUser(user_id="u1", role="artist", artist_id=regular.id))
    res = client.post("/api/artworks", json=_artwork_payload(regular.id, featured=False))
    assert res.json()["approval_status"] == "pending"

    login(CurrentUser(user_id="u2", role="artist", artist_id=trusted.id))
    res = client.post("/api/artworks", json=_artwork_payload(trusted.id, title="Trusted Work", featured=False))
    assert res.json()["approval_status"] == "approved"


def test_artist_cannot_create_for_someone_else(client, store, login):
    mine = store.artist(name="Ana Lima")
    theirs = store.artist(name="Rui Costa")
    login(CurrentUser(user_id="u1", role="artist", artist_id=mine.id))

    res = client.post("/api/artworks", json=_artwork_payload(theirs.id))
    assert res.status_code == 403


def test_invalid_artwork_fields_are_rejected(client, store, as_admin):
    artist = store.artist()
    res = client.post("/api/artworks", json=_artwork_payload(artist.id, year="24", price="250000"))
    assert res.status_code == 400


def test_update_writes_only_supplied_fields(client, store, as_admin):
    artist = store.artist()
    artwork = store.artwork(artist, "Quiet Room", status="Available")

    res = client.put(f"/api/artworks/{artwork.id}", json={"price": "990.50"})

    assert res.status_code == 200
    saved = store.get(Artwork, artwork.id)
    assert str(saved.price) == "990.50"
    assert saved.status == "Available"
    assert saved.title == "Quiet Room"


def test_update_rejects_unknown_and_empty_commands(client, store, as_admin):
    artist = store.artist()
    artwork = store.artwork(artist, "Quiet Room")

    assert client.put(f"/api/artworks/{artwork.id}", json={"colour": "blue"}).status_code == 400
    assert client.put(f"/api/artworks/{artwork.id}", json={}).status_code == 400


def test_update_missing_artwork_is_404(client, store, as_admin):
    assert client.put("/api/artworks/404", json={"title": "Gone Away"}).status_code == 404


def test_artists_only_list_their_own_artworks(client, store, login):
    ana = store.artist(name="Ana Lima")
    rui = store.artist(name="Rui Costa")
    store.artwork(ana, "Ana One", minutes=1)
    store.artwork(rui, "Rui One", minutes=2)

    login(CurrentUser(user_id="u1", role="artist", artist_id=ana.id))
    res = client.get("/api/artworks", params={"artist_id": rui.id})

    assert [a["title"] for a in res.json()] == ["Ana One"]
    assert res.json()[0]["artist_name"] == "Ana Lima"


def test_toggles_and_location(client, store, as_admin):
    artist = store.artist()
    artwork = store.artwork(artist, "Quiet Room")

    assert client.post(f"/api/artworks/{artwork.id}/toggle-visibility").json()["is_visible"] is False
    assert client.put(f"/api/artworks/{artwork.id}/featured", json={"featured": True}).json()["featured"] == 1
    assert client.put(f"/api/artworks/{artwork.id}/location", json={"location": "Storage"}).json()["location"] == "Storage"


def test_approval_is_admin_only(client, store, login):
    artist = store.artist()
    artwork = store.artwork(artist, "Quiet Room")

    login(CurrentUser(user_id="u1", role="artist", artist_id=artist.id))
    res = client.put(f"/api/artworks/{artwork.id}/approval", json={"approval_status": "approved"})
    assert res.status_code == 403

    login(CurrentUser(user_id="admin", role="admin"))
    res = client.put(f"/api/artworks/{artwork.id}/approval", json={"approval_status": "rejected"})
    assert res.json()["approval_status"] == "rejected"


def test_delete_removes_artwork_and_its_inquiries(client, store, as_admin):
    artist = store.artist()
    artwork = store.artwork(artist, "Quiet Room")
    inquiry = store.add(Inquiry(artwork_id=artwork.id, name="Joana", email="joana@example.com", message="Is it framed?"))

    res = client.delete(f"/api/artworks/{artwork.id}")

    assert res.status_code == 200
    assert store.get(Artwork, artwork.id) is None
    assert store.get(Inquiry, inquiry.id) is None


def test_artist_cannot_change_gallery_state_of_own_artwork(client, store, login):
    artist = store.artist()
    artwork = store.artwork(artist, "Quiet Room")
    login(CurrentUser(user_id="u1", role="artist", artist_id=artist.id))

    assert client.post(f"/api/artworks/{artwork.id}/toggle-visibility").status_code == 403
    assert client.put(f"/api/artworks/{artwork.id}/featured", json={"featured": True}).status_code == 403
    assert client.put(f"/api/artworks/{artwork.id}/location", json={"location": "Storage"}).status_code == 403
    assert client.put(f"/api/artworks/{artwork.id}", json={"featured": True}).status_code == 403

    saved = store.get(Artwork, artwork.id)
    assert (saved.is_visible, saved.featured, saved.location) == (True, 0, "Gallery")


@pytest.mark.parametrize("field, value", [
    ("global_display_order", 1),
    ("artist_display_order", 1),
    ("is_visible", False),
    ("location", "Storage"),
])
def test_update_command_rejects_admin_only_fields(client, store, login, field, value):
    artist = store.artist()
    artwork = store.artwork(artist, "Quiet Room", global_display_order=5)
    login(CurrentUser(user_id="u1", role="artist", artist_id=artist.id))

    res = client.put(f"/api/artworks/{artwork.id}", json={field: value})

    assert res.status_code == 400
    assert store.get(Artwork, artwork.id).global_display_order == 5


def test_artist_cannot_create_featured_artwork(client, store, login):
    artist = store.artist()
    login(CurrentUser(user_id="u1", role="artist", artist_id=artist.id))

    res = client.post("/api/artworks", json=_artwork_payload(artist.id))

    assert res.status_code == 403
    assert client.get("/api/artworks").json() == []


def test_delete_removes_private_original_from_cloudinary(client, store, as_admin, monkeypatch):
    from gallery_admin.routes import artworks as artwork_routes

    deleted = []

    async def fake_delete(public_id, image_type="private", max_retries=3):
        deleted.append((public_id, image_type))
        return {"result": "ok"}

    monkeypatch.setattr(artwork_routes, "delete_image", fake_delete)
    artist = store.artist()
    artwork = store.artwork(
        artist,
        "Quiet Room",
        original_image="https://res.cloudinary.com/demo/image/private/v1/artworks/private/qr1.webp",
    )

    assert client.delete(f"/api/artworks/{artwork.id}").status_code == 200
    assert deleted == [("artworks/private/qr1", "private")]


def test_cloudinary_failure_does_not_block_artwork_delete(client, store, as_admin, monkeypatch):
    from gallery_admin.routes import artworks as artwork_routes

    async def failing_delete(public_id, image_type="private", max_retries=3):
        raise RuntimeError("cloudinary unavailable")

    monkeypatch.setattr(artwork_routes, "delete_image", failing_delete)
    artist = store.artist()
    artwork = store.artwork(
        artist,
        "Quiet Room",
        original_image="https://res.cloudinary.com/demo/image/private/v1/artworks/private/qr1.webp",
    )

    assert client.delete(f"/api/artworks/{artwork.id}").status_code == 200
    assert store.get(Artwork, artwork.id) is None
