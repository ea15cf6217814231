import uuid

from pydantic import BaseModel, ConfigDict, Field

from brane.db.models import now_unix
from .base import WriteModel


class UserWrite(WriteModel):
    id: str = Field(max_length=36)
    email: str = Field(max_length=254)
    nick: str = Field(max_length=16)
    bio: str = Field(default="", max_length=255)
    subscriber_count: int = Field(default=0, ge=0)
    subscription_count: int = Field(default=0, ge=0)
    post_count: int = Field(default=0, ge=0)
    created: int = Field(ge=0)
    moderator: bool = False
    admin: bool = False

    @classmethod
    def new(cls, nick: str, bio: str, email: str) -> "UserWrite":
        return cls(id=str(uuid.uuid4()), email=email, nick=nick, bio=bio, created=now_unix())


class User(BaseModel):
    id: str
    email: str
    nick: str
    bio: str
    subscriber_count: int
    subscription_count: int
    post_count: int
    created: int
    moderator: bool
    admin: bool
    model_config = ConfigDict(from_attributes=True)
