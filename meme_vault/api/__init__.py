from fastapi import APIRouter

from meme_vault.api.v1 import memes

api_router = APIRouter(prefix="/api")
api_router.include_router(memes.router)

__all__ = ["api_router"]
