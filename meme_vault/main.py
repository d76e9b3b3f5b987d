import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from meme_vault.api import api_router
from meme_vault.config import Settings, get_settings
from meme_vault.database import create_engine, create_session_factory, init_db
from meme_vault.services.metadata import MetadataService
from meme_vault.services.slots import SlotStorage
from meme_vault.services.store import MemeStore
from meme_vault.services.vault import VaultService

logger = logging.getLogger(__name__)


def build_vault(settings: Settings, slots: SlotStorage) -> VaultService:
    store = MemeStore(slots, key=settings.storage_key)
    return VaultService(store, MetadataService(settings), settings.images_dir)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown events."""
        # Startup
        engine = create_engine(settings.database_url)
        await init_db(engine)
        app.state.vault = build_vault(
            settings, SlotStorage(create_session_factory(engine))
        )
        logger.info(f"{settings.app_name} ready, images in {settings.images_dir}")
        try:
            yield
        finally:
            # Shutdown
            await engine.dispose()

    app = FastAPI(title=settings.app_name, lifespan=lifespan)
    app.include_router(api_router)

    @app.get("/health", tags=["system"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok", "app": settings.app_name}

    return app


app = create_app()
