"""Identities produced by login and token verification."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

ADMIN_ROLE = "admin"


class AdminIdentity(BaseModel):
    """An admin whose credentials were accepted at login."""

    model_config = ConfigDict(frozen=True)

    subject: str
    username: str
    demo: bool = False


class AdminClaims(BaseModel):
    """Verified contents of an admin session token."""

    model_config = ConfigDict(frozen=True)

    subject: str
    username: str
    role: str
    issued_at: datetime
    expires_at: datetime
    demo: bool = False
