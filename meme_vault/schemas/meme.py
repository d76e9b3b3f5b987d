from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OGMetadata(CamelModel):
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    aspect_ratio: Optional[float] = None


class Meme(CamelModel):
    """A saved meme or link, persisted as one entry of the vault's JSON array."""

    id: str
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    local_path: Optional[str] = None
    added_at: datetime
    last_used_at: Optional[datetime] = None
    usage_count: int = Field(default=0, ge=0)
    is_favorite: bool = False
    aspect_ratio: Optional[float] = Field(default=None, gt=0)


class MemeCreate(CamelModel):
    url: str


class MemeImport(CamelModel):
    path: str
    title: Optional[str] = None


class MemeSection(CamelModel):
    title: str
    subtitle: str
    memes: list[Meme]


class MemeMetadata(CamelModel):
    url: str
    title: Optional[str] = None
    description: Optional[str] = None
    added_at: str
    usage_count: int


class StorageStats(CamelModel):
    image_count: int
    total_size_mb: float = Field(alias="totalSizeMB")
    formatted: str
