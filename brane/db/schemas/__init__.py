"""
Pydantic schemas for writes (validated attribute maps) and reads.
"""
from .base import WriteModel
from .users import UserWrite, User
from .content import ContentWrite, Content
from .moderation import BanWrite, Ban, ReportWrite, Report
from .auth import CredentialWrite, SecretWrite, TokenWrite

__all__ = [
    "WriteModel",
    # Users
    "UserWrite",
    "User",
    # Content
    "ContentWrite",
    "Content",
    # Moderation
    "BanWrite",
    "Ban",
    "ReportWrite",
    "Report",
    # Credentials
    "CredentialWrite",
    "SecretWrite",
    "TokenWrite",
]
