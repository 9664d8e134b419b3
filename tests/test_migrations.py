import importlib.util
from pathlib import Path
from unittest.mock import MagicMock

from sqlalchemy import select, text, update

from gallery_admin.models import Artwork

VERSIONS_DIR = Path(__file__).resolve().parents[1] / "alembic" / "versions"


def _load_revisions():
    revisions = {}
    for path in sorted(VERSIONS_DIR.glob("*.py")):
        spec = importlib.util.spec_from_file_location(path.stem, path)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        revisions[module.revision] = module
    return revisions


def _orders(store):
    async def _load(session):
        result = await session.execute(
            select(Artwork.id, Artwork.artist_display_order, Artwork.global_display_order)
        )
        return {row.id: (row.artist_display_order, row.global_display_order) for row in result.all()}
    return store.run(_load)


def _reset_orders(store):
    async def _reset(session):
        await session.execute(update(Artwork).values(artist_display_order=0, global_display_order=0))
        await session.commit()
    store.run(_reset)


def test_revisions_form_a_single_chain():
    revisions = _load_revisions()

    bases = [r for r in revisions.values() if r.down_revision is None]
    assert [r.revision for r in bases] == ["2f6a9d03c4e1"]
    assert revisions["8c2d41e7a9b3"].down_revision == "2f6a9d03c4e1"


def test_backfill_matches_populate_endpoint(client, store, as_admin, monkeypatch):
    newer_artist = store.artist(name="Ana Lima")
    older_artist = store.artist(name="Rui Costa")
    store.artwork(older_artist, "Rui Oldest", minutes=0)
    store.artwork(newer_artist, "Ana First", minutes=5)
    store.artwork(newer_artist, "Ana Hidden", minutes=6, is_visible=False)
    store.artwork(older_artist, "Rui Later", minutes=7)
    store.artwork(newer_artist, "Ana Second", minutes=8)

    assert client.post("/api/admin/sorting/populate").status_code == 200
    populated = _orders(store)
    _reset_orders(store)

    migration = _load_revisions()["8c2d41e7a9b3"]
    recorder = MagicMock()
    monkeypatch.setattr(migration, "op", recorder)
    migration.upgrade()
    backfill_sql = recorder.execute.call_args.args[0]

    async def _backfill(session):
        await session.execute(text(backfill_sql))
        await session.commit()
    store.run(_backfill)

    assert _orders(store) == populated
