import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from gallery_admin.database import create_tables, get_db
from gallery_admin.main import app
from gallery_admin.models import Artist, Artwork
from gallery_admin.services.email_service import EmailResult, EmailSender, get_email_sender
from gallery_admin.services.revalidation import CacheRevalidator, get_revalidator
from gallery_admin.utils.auth import CurrentUser, get_current_user
from gallery_admin.utils.rate_limit import limiter

limiter.enabled = False

BASE_TIME = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

ADMIN = CurrentUser(user_id="admin-1", role="admin", display_name="Gallery Admin")


class RecordingRevalidator(CacheRevalidator):
    """Revalidator that records requests instead of calling the main site."""

    def __init__(self):
        super().__init__(base_url="http://main-site.test", secret="test")
        self.calls = []

    async def revalidate(self, paths=(), tags=()):
        self.calls.append({"paths": list(paths), "tags": list(tags)})
        return True


class RecordingEmailSender(EmailSender):
    """Email sender that records messages instead of calling Resend. Set error to fail sends."""

    def __init__(self):
        super().__init__(api_key="test", from_address="Gallery <artists@gallery.test>", bcc=[])
        self.sent = []
        self.error = None

    async def send(self, to, subject, html):
        if self.error:
            return EmailResult(success=False, error=self.error)
        self.sent.append({"to": list(to), "subject": subject, "html": html})
        return EmailResult(success=True, message_id=f"msg-{len(self.sent)}")


class Store:
    """Synchronous helpers for seeding and inspecting the test database."""

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    def add(self, *objects):
        async def _add():
            async with self.session_factory() as session:
                session.add_all(objects)
                await session.commit()
        asyncio.run(_add())
        return objects[0] if len(objects) == 1 else objects

    def run(self, fn):
        """Run fn(session) in a fresh session and return its result."""
        async def _run():
            async with self.session_factory() as session:
                return await fn(session)
        return asyncio.run(_run())

    def get(self, model, pk):
        return self.run(lambda session: session.get(model, pk))

    def artist(self, name="Ana Lima", **fields):
        return self.add(Artist(name=name, slug=name.lower().replace(" ", "-"), **fields))

    def artwork(self, artist, title, minutes=0, **fields):
        values = dict(
            title=title,
            slug=title.lower().replace(" ", "-"),
            artist_id=artist.id,
            year="2024",
            medium="Oil on canvas",
            dimensions="50 x 70 cm",
            description="A study in light and colour.",
            price=Decimal("1200.00"),
            created_at=BASE_TIME + timedelta(minutes=minutes),
        )
        values.update(fields)
        return self.add(Artwork(**values))


@pytest.fixture
def store(tmp_path: Path) -> Iterator[Store]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'gallery-test.db'}", poolclass=NullPool)
    asyncio.run(create_tables(engine))
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        yield Store(session_factory)
    finally:
        asyncio.run(engine.dispose())


@pytest.fixture
def revalidator() -> RecordingRevalidator:
    return RecordingRevalidator()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def client(store: Store, revalidator: RecordingRevalidator, email_sender: RecordingEmailSender) -> Iterator[TestClient]:
    async def _get_test_db():
        async with store.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_test_db
    app.dependency_overrides[get_revalidator] = lambda: revalidator
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def login():
    """Call login(user) to authenticate subsequent requests as that CurrentUser."""
    def _login(user: CurrentUser) -> CurrentUser:
        app.dependency_overrides[get_current_user] = lambda: user
        return user
    return _login


@pytest.fixture
def as_admin(client, login) -> CurrentUser:
    return login(ADMIN)
