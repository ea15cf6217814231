import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from brane.db.models import now_unix
from .base import WriteModel


class BanWrite(WriteModel):
    id: str = Field(max_length=36)
    banner: str = Field(max_length=36)
    banned: str = Field(max_length=36)
    reason: Optional[str] = Field(default=None, max_length=255)
    created: int = Field(ge=0)
    expires: int = Field(default=0, ge=0)
    forever: Optional[bool] = False

    @classmethod
    def new(cls, banner: str, banned: str, reason: str, duration: int, forever: bool) -> "BanWrite":
        """Build a ban starting now; ``duration`` seconds is ignored when ``forever``."""
        now = now_unix()
        return cls(
            id=str(uuid.uuid4()),
            banner=banner,
            banned=banned,
            reason=reason,
            created=now,
            expires=now + duration,
            forever=forever,
        )


class Ban(BaseModel):
    id: str
    banner: str
    banned: str
    reason: Optional[str] = None
    created: int
    expires: int
    forever: Optional[bool] = None
    model_config = ConfigDict(from_attributes=True)


class ReportWrite(WriteModel):
    id: str = Field(max_length=36)
    reporter: str = Field(max_length=36)
    reported: str = Field(max_length=36)
    type: str = Field(max_length=31)
    reason: str = Field(max_length=255)
    created: int = Field(ge=0)
    resolved: bool = False
    resolution: str = Field(default="", max_length=255)

    @classmethod
    def new(cls, reporter: str, reported: str, type: str, reason: str) -> "ReportWrite":
        return cls(
            id=str(uuid.uuid4()),
            reporter=reporter,
            reported=reported,
            type=type,
            reason=reason,
            created=now_unix(),
        )


class Report(BaseModel):
    id: str
    reporter: str
    reported: str
    type: str
    reason: str
    created: int
    resolved: bool
    resolution: str
    model_config = ConfigDict(from_attributes=True)
