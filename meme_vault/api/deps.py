from fastapi import Request

from meme_vault.services.vault import VaultService


async def get_vault(request: Request) -> VaultService:
    """The vault service built once at startup and kept on the app."""
    return request.app.state.vault
