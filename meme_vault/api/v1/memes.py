from typing import Annotated, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from meme_vault.api.deps import get_vault
from meme_vault.exceptions import (
    DuplicateMemeError,
    InvalidUrlError,
    LocalImportError,
    MetadataFetchError,
)
from meme_vault.schemas import (
    Meme,
    MemeCreate,
    MemeImport,
    MemeMetadata,
    MemeSection,
    StorageStats,
)
from meme_vault.services.browse import copy_metadata
from meme_vault.services.vault import VaultService

router = APIRouter(prefix="/memes", tags=["memes"])

Vault = Annotated[VaultService, Depends(get_vault)]


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Meme not found")


@router.get("", response_model=list[MemeSection])
async def list_memes(
    vault: Vault,
    q: Annotated[Optional[str], Query(description="Search text")] = None,
) -> list[MemeSection]:
    """List memes grouped into favorites and the rest, most recently used first."""
    return await vault.browse(q)


@router.post("", response_model=Meme, status_code=status.HTTP_201_CREATED)
async def create_meme(payload: MemeCreate, vault: Vault) -> Meme:
    """Store a meme from a URL, scraping its preview metadata."""
    try:
        return await vault.add_url(payload.url)
    except InvalidUrlError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateMemeError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except MetadataFetchError as e:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.post("/import", response_model=Meme, status_code=status.HTTP_201_CREATED)
async def import_meme(payload: MemeImport, vault: Vault) -> Meme:
    """Copy a local image into the vault."""
    try:
        return await vault.import_file(payload.path, title=payload.title)
    except LocalImportError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except DuplicateMemeError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))


@router.get("/stats", response_model=StorageStats)
async def storage_stats(vault: Vault) -> StorageStats:
    return vault.storage_stats()


@router.get("/{meme_id}", response_model=Meme)
async def get_meme(meme_id: str, vault: Vault) -> Meme:
    meme = await vault.get(meme_id)
    if not meme:
        raise _not_found()
    return meme


@router.get("/{meme_id}/metadata", response_model=MemeMetadata)
async def get_meme_metadata(meme_id: str, vault: Vault) -> MemeMetadata:
    """The summary handed out by the "Copy Metadata" action."""
    meme = await vault.get(meme_id)
    if not meme:
        raise _not_found()
    return copy_metadata(meme)


@router.post("/{meme_id}/copy", response_model=Meme)
async def copy_meme(meme_id: str, vault: Vault) -> Meme:
    """Record a use of the meme and return it for the clipboard."""
    meme = await vault.copy(meme_id)
    if not meme:
        raise _not_found()
    return meme


@router.post("/{meme_id}/favorite", response_model=Meme)
async def toggle_favorite(meme_id: str, vault: Vault) -> Meme:
    meme = await vault.toggle_favorite(meme_id)
    if not meme:
        raise _not_found()
    return meme


@router.delete("/{meme_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_meme(
    meme_id: str,
    vault: Vault,
    confirm: Annotated[bool, Query(description="Must be true to delete")] = False,
) -> None:
    """Delete a meme and any image it owns. Requires explicit confirmation."""
    if not confirm:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Deleting a meme requires confirm=true",
        )
    await vault.delete(meme_id)
