from pydantic import Field

from .base import WriteModel


class CredentialWrite(WriteModel):
    id: str = Field(max_length=36)
    hash: str = Field(max_length=128)


class SecretWrite(WriteModel):
    id: str = Field(max_length=36)
    secret: str = Field(min_length=64, max_length=64)


class TokenWrite(WriteModel):
    id: str = Field(max_length=36)
    token: str = Field(min_length=64, max_length=64)
    created: int = Field(ge=0)
