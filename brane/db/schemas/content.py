import uuid
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from brane.db.models import now_unix
from .base import WriteModel


class ContentWrite(WriteModel):
    id: str = Field(max_length=36)
    file_url: str = Field(max_length=64)
    author: str = Field(max_length=36)
    mime: str = Field(max_length=255)
    like_count: int = Field(default=0, ge=0)
    dislike_count: int = Field(default=0, ge=0)
    repub_count: int = Field(default=0, ge=0)
    view_count: int = Field(default=0, ge=0)
    comment_count: int = Field(default=0, ge=0)
    created: int = Field(ge=0)
    featured: Optional[bool] = False
    featurable: Optional[bool] = False
    removed: Optional[bool] = False
    nsfw: Optional[bool] = False
    # Stored in the tags collection, not on the content row
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags_default(cls, value):
        return [] if value is None else value

    @field_validator("tags")
    @classmethod
    def _tags_unique(cls, value: List[str]) -> List[str]:
        seen = []
        for tag in value:
            if len(tag) > 64:
                raise ValueError(f"tag longer than 64 characters: {tag[:16]}...")
            if tag not in seen:
                seen.append(tag)
        return seen

    @classmethod
    def new(
        cls,
        file_url: str,
        author: str,
        mime: str,
        tags: List[str],
        featurable: bool,
        nsfw: bool,
    ) -> "ContentWrite":
        return cls(
            id=str(uuid.uuid4()),
            file_url=file_url,
            author=author,
            mime=mime,
            created=now_unix(),
            featurable=featurable,
            nsfw=nsfw,
            tags=tags,
        )


class Content(BaseModel):
    id: str
    file_url: str
    author: str
    mime: str
    like_count: int
    dislike_count: int
    repub_count: int
    view_count: int
    comment_count: int
    created: int
    featured: Optional[bool] = None
    featurable: Optional[bool] = None
    removed: Optional[bool] = None
    nsfw: Optional[bool] = None
    tags: List[str] = Field(default_factory=list)
    model_config = ConfigDict(from_attributes=True)
