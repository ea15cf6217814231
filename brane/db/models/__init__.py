"""
SQLAlchemy models for every persisted collection.

Exposes `Base`, the time helper, and all ORM classes from one place.
"""

from .base import Base, now_unix  # re-export

from .users import User, Subscription
from .content import Content, Tag
from .moderation import Ban, Report
from .auth import Credential, Secret, Token

__all__ = [
    # base
    "Base",
    "now_unix",
    # users
    "User",
    "Subscription",
    # content
    "Content",
    "Tag",
    # moderation
    "Ban",
    "Report",
    # credentials
    "Credential",
    "Secret",
    "Token",
]
