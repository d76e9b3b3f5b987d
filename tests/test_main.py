import pytest
from sqlalchemy.ext.asyncio import AsyncEngine

from meme_vault import __main__ as entrypoint
from meme_vault.main import create_app
from meme_vault.services.vault import VaultService


@pytest.mark.asyncio
async def test_lifespan_builds_vault_and_disposes_engine(settings, monkeypatch):
    disposed = []
    original = AsyncEngine.dispose

    async def dispose(self, close=True):
        disposed.append(self)
        await original(self, close)

    monkeypatch.setattr(AsyncEngine, "dispose", dispose)
    app = create_app(settings)

    async with app.router.lifespan_context(app):
        assert isinstance(app.state.vault, VaultService)
        assert await app.state.vault.store.list() == []

    assert len(disposed) == 1


@pytest.mark.asyncio
async def test_lifespan_disposes_engine_when_app_fails(settings, monkeypatch):
    disposed = []
    original = AsyncEngine.dispose

    async def dispose(self, close=True):
        disposed.append(self)
        await original(self, close)

    monkeypatch.setattr(AsyncEngine, "dispose", dispose)
    app = create_app(settings)

    with pytest.raises(RuntimeError):
        async with app.router.lifespan_context(app):
            raise RuntimeError("crashed while serving")

    assert len(disposed) == 1


def test_entrypoint_serves_app_with_uvicorn(monkeypatch, settings):
    calls = []
    monkeypatch.setattr(entrypoint, "get_settings", lambda: settings)
    monkeypatch.setattr(entrypoint.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))

    entrypoint.main()

    assert calls == [
        (
            "meme_vault.main:app",
            {"host": "127.0.0.1", "port": 8000, "log_level": "info"},
        )
    ]
