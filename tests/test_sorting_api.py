import random

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from gallery_admin.models import Artwork
from gallery_admin.schemas import ErrorKind, GlobalOrderUpdate
from gallery_admin.services.display_order_service import DisplayOrderService
from gallery_admin.utils.auth import CurrentUser


def _global_orders(store):
    async def _load(session):
        result = await session.execute(select(Artwork.id, Artwork.global_display_order))
        return dict(result.all())
    return store.run(_load)


def _seed_three(store):
    artist = store.artist()
    first = store.artwork(artist, "Morning", minutes=1, global_display_order=1)
    second = store.artwork(artist, "Noon", minutes=2, global_display_order=2)
    third = store.artwork(artist, "Dusk", minutes=3, global_display_order=3)
    return first, second, third


def test_sortable_list_is_ordered_by_global_order(client, store, as_admin):
    artist = store.artist(name="Rui Costa")
    store.artwork(artist, "Late", minutes=1, global_display_order=2)
    store.artwork(artist, "Early", minutes=2, global_display_order=1)
    store.artwork(artist, "Tie newer", minutes=9, global_display_order=2, is_visible=False)

    res = client.get("/api/admin/sorting/artworks")

    assert res.status_code == 200
    body = res.json()
    assert [a["title"] for a in body] == ["Early", "Tie newer", "Late"]
    assert body[0]["artist_name"] == "Rui Costa"
    assert body[1]["is_visible"] is False


def test_save_global_order_writes_dense_orders(client, store, as_admin, revalidator):
    first, second, third = _seed_three(store)

    res = client.put("/api/admin/sorting/global-order", json={"updates": [
        {"id": third.id, "global_display_order": 1},
        {"id": first.id, "global_display_order": 2},
        {"id": second.id, "global_display_order": 3},
    ]})

    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["data"] == {"updated_count": 3}
    assert _global_orders(store) == {third.id: 1, first.id: 2, second.id: 3}
    assert "/admin/sorting" in revalidator.calls[-1]["paths"]


def test_saving_same_order_twice_is_idempotent(client, store, as_admin):
    first, second, third = _seed_three(store)
    payload = {"updates": [
        {"id": second.id, "global_display_order": 1},
        {"id": third.id, "global_display_order": 2},
        {"id": first.id, "global_display_order": 3},
    ]}

    assert client.put("/api/admin/sorting/global-order", json=payload).status_code == 200
    after_first = _global_orders(store)
    assert client.put("/api/admin/sorting/global-order", json=payload).status_code == 200

    assert _global_orders(store) == after_first


def test_unknown_id_reports_not_found_and_writes_nothing(client, store, as_admin, revalidator):
    first, second, third = _seed_three(store)
    before = _global_orders(store)

    res = client.put("/api/admin/sorting/global-order", json={"updates": [
        {"id": first.id, "global_display_order": 3},
        {"id": 9999, "global_display_order": 1},
    ]})

    assert res.status_code == 404
    body = res.json()
    assert body["success"] is False
    assert body["error_kind"] == "not_found"
    assert "9999" in body["error"]
    assert _global_orders(store) == before
    assert revalidator.calls == []


def test_empty_update_list_is_rejected(client, store, as_admin):
    res = client.put("/api/admin/sorting/global-order", json={"updates": []})
    assert res.status_code == 400
    assert res.json()["error_kind"] == "empty_input"


def test_duplicate_ids_fail_validation(client, store, as_admin):
    first, _, _ = _seed_three(store)
    res = client.put("/api/admin/sorting/global-order", json={"updates": [
        {"id": first.id, "global_display_order": 1},
        {"id": first.id, "global_display_order": 2},
    ]})
    assert res.status_code == 400
    assert res.json()["error"] == "Validation error"


def test_randomize_requires_confirmation(client, store, as_admin):
    _seed_three(store)
    before = _global_orders(store)

    res = client.post("/api/admin/sorting/randomize", json={})

    assert res.status_code == 400
    assert _global_orders(store) == before


def test_randomize_with_no_artworks_reports_empty_input(client, store, as_admin):
    res = client.post("/api/admin/sorting/randomize", json={"confirm": True})
    assert res.status_code == 400
    assert res.json()["error_kind"] == "empty_input"


def test_randomize_produces_a_permutation(client, store, as_admin, revalidator):
    artist = store.artist()
    for i in range(6):
        store.artwork(artist, f"Piece {i}", minutes=i)

    res = client.post("/api/admin/sorting/randomize", json={"confirm": True})

    assert res.status_code == 200
    assert res.json()["data"] == {"updated_count": 6}
    assert sorted(_global_orders(store).values()) == [1, 2, 3, 4, 5, 6]
    assert revalidator.calls


def test_populate_backfills_visible_artworks(client, store, as_admin):
    ana = store.artist(name="Ana Lima")
    rui = store.artist(name="Rui Costa")
    a1 = store.artwork(ana, "A1", minutes=1)
    r1 = store.artwork(rui, "R1", minutes=2)
    hidden = store.artwork(ana, "A hidden", minutes=3, is_visible=False)
    a2 = store.artwork(ana, "A2", minutes=4)

    res = client.post("/api/admin/sorting/populate")

    assert res.status_code == 200
    assert res.json()["data"] == {"updated_count": 3}
    assert _global_orders(store) == {a1.id: 1, a2.id: 2, r1.id: 3, hidden.id: 0}
    assert store.get(Artwork, a2.id).artist_display_order == 2
    assert store.get(Artwork, r1.id).artist_display_order == 1


def test_sorting_is_admin_only(client, store, login):
    login(CurrentUser(user_id="artist-1", role="artist", artist_id=1))
    assert client.get("/api/admin/sorting/artworks").status_code == 403
    assert client.post("/api/admin/sorting/randomize", json={"confirm": True}).status_code == 403


def test_store_error_rolls_back_and_is_reported(store, revalidator):
    first, second, _ = _seed_three(store)

    async def _save(session):
        service = DisplayOrderService(session, revalidator)

        async def _fail(rows):
            raise SQLAlchemyError("disk I/O error")

        service.artworks.bulk_update_orders = _fail
        return await service.save_global_order([
            GlobalOrderUpdate(id=first.id, global_display_order=2),
            GlobalOrderUpdate(id=second.id, global_display_order=1),
        ])

    result = store.run(_save)

    assert not result.success
    assert result.error_kind == ErrorKind.STORE_ERROR
    assert _global_orders(store)[first.id] == 1
    assert revalidator.calls == []


def test_service_randomize_uses_injected_rng(store, revalidator):
    artist = store.artist()
    artworks = [store.artwork(artist, f"Piece {i}", minutes=i) for i in range(4)]

    result = store.run(lambda session: DisplayOrderService(session, revalidator).randomize(random.Random(7)))
    first_orders = _global_orders(store)
    store.run(lambda session: DisplayOrderService(session, revalidator).randomize(random.Random(7)))

    assert result.success
    assert _global_orders(store) == first_orders
    assert set(first_orders) == {a.id for a in artworks}


def test_artist_can_order_own_portfolio(client, store, login):
    artist = store.artist()
    other = store.artist(name="Rui Costa")
    first = store.artwork(artist, "One", minutes=1)
    second = store.artwork(artist, "Two", minutes=2)
    foreign = store.artwork(other, "Elsewhere", minutes=3)
    login(CurrentUser(user_id="artist-1", role="artist", artist_id=artist.id))

    res = client.put(f"/api/artists/{artist.id}/artwork-order", json={"updates": [
        {"id": second.id, "artist_display_order": 1},
        {"id": first.id, "artist_display_order": 2},
    ]})
    assert res.status_code == 200

    portfolio = client.get(f"/api/artists/{artist.id}").json()
    assert [a["title"] for a in portfolio["artworks"]] == ["Two", "One"]

    res = client.put(f"/api/artists/{artist.id}/artwork-order", json={"updates": [
        {"id": foreign.id, "artist_display_order": 1},
    ]})
    assert res.status_code == 404
    assert store.get(Artwork, foreign.id).artist_display_order == 0

    res = client.put(f"/api/artists/{other.id}/artwork-order", json={"updates": [
        {"id": foreign.id, "artist_display_order": 1},
    ]})
    assert res.status_code == 403
