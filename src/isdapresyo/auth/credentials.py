"""Admin credential checkers: database-backed (durable) and demo pair (fallback)."""

import asyncio
import hmac
import logging
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from isdapresyo.auth.passwords import verify_password
from isdapresyo.db.repos.admin_repo import AdminRepo
from isdapresyo.domain.enums import AuditEventType
from isdapresyo.domain.models.auth import AdminIdentity

logger = logging.getLogger(__name__)

DEMO_SUBJECT = "demo-admin"


class LoginRejected(Exception):
    """Credentials were not accepted. Carries the audit event and detail."""

    def __init__(self, event: AuditEventType, detail: str) -> None:
        super().__init__(detail)
        self.event = event
        self.detail = detail


class CredentialChecker(Protocol):
    async def authenticate(self, username: str, password: str) -> AdminIdentity: ...


class DatabaseCredentialChecker:
    """Checks the admin table; bcrypt runs in a worker thread to keep the loop free."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def authenticate(self, username: str, password: str) -> AdminIdentity:
        async with self._session_factory() as session:
            admin = await AdminRepo(session).get_by_username(username)
        if admin is None:
            raise LoginRejected(AuditEventType.LOGIN_FAILED, "unknown_user")

        ok = await asyncio.to_thread(verify_password, password, admin.password)
        if not ok:
            raise LoginRejected(AuditEventType.LOGIN_FAILED, "bad_password")
        return AdminIdentity(subject=str(admin.id), username=admin.username)


class DemoCredentialChecker:
    """Accepts exactly one configured username/password pair. Demo mode only."""

    def __init__(self, username: str, password: str) -> None:
        self._username = username
        self._password = password

    async def authenticate(self, username: str, password: str) -> AdminIdentity:
        user_ok = hmac.compare_digest(username.encode(), self._username.encode())
        pass_ok = hmac.compare_digest(password.encode(), self._password.encode())
        if not (user_ok and pass_ok):
            raise LoginRejected(AuditEventType.LOGIN_FAILED_DEMO, "bad_demo_credentials")
        return AdminIdentity(subject=DEMO_SUBJECT, username=self._username, demo=True)
