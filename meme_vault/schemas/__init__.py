from meme_vault.schemas.meme import (
    Meme,
    MemeCreate,
    MemeImport,
    MemeMetadata,
    MemeSection,
    OGMetadata,
    StorageStats,
)

__all__ = [
    "Meme",
    "MemeCreate",
    "MemeImport",
    "MemeMetadata",
    "MemeSection",
    "OGMetadata",
    "StorageStats",
]
