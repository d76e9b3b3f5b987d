from datetime import datetime, timedelta, timezone

import httpx
import pytest
import pytest_asyncio

from meme_vault.config import Settings
from meme_vault.database import create_engine, create_session_factory, init_db
from meme_vault.schemas.meme import Meme
from meme_vault.services.metadata import MetadataService
from meme_vault.services.slots import SlotStorage
from meme_vault.services.store import MemeStore
from meme_vault.services.vault import VaultService


class FakeClock:
    def __init__(self, start: datetime = datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc)):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'vault.db'}",
        support_path=tmp_path / "support",
    )


@pytest.fixture
def clock():
    return FakeClock()


@pytest_asyncio.fixture
async def slots(settings):
    engine = create_engine(settings.database_url)
    await init_db(engine)
    yield SlotStorage(create_session_factory(engine))
    await engine.dispose()


@pytest_asyncio.fixture
async def store(slots, clock):
    return MemeStore(slots, clock=clock)


@pytest.fixture
def make_meme(clock):
    counter = iter(range(1, 10_000))

    def factory(**overrides) -> Meme:
        n = next(counter)
        fields = {
            "id": f"meme-{n}",
            "url": f"https://tenor.com/view/meme-{n}",
            "added_at": clock(),
        }
        fields.update(overrides)
        return Meme(**fields)

    return factory


@pytest.fixture
def requests_seen():
    return []


@pytest.fixture
def make_transport(requests_seen):
    """Build an httpx transport that answers every request with ``html``."""

    def factory(html: str = "", status_code: int = 200) -> httpx.MockTransport:
        def handler(request: httpx.Request) -> httpx.Response:
            requests_seen.append(request)
            return httpx.Response(status_code, text=html)

        return httpx.MockTransport(handler)

    return factory


@pytest.fixture
def make_vault(settings, store, clock):
    def factory(transport: httpx.AsyncBaseTransport) -> VaultService:
        metadata = MetadataService(settings, transport=transport)
        return VaultService(store, metadata, settings.images_dir, clock=clock)

    return factory
