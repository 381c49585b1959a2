"""
Admin session tokens.

Stateless HS256 JWTs carrying sub, username, role, iat and exp. Verification
is a pure function of (token, current time, signing key); there is no
server-side session table and no revocation.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from jwt import PyJWTError

from isdapresyo.domain.models.auth import ADMIN_ROLE, AdminClaims

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(hours=8)
ALGORITHM = "HS256"


class TokenRejected(Exception):
    """Token failed verification. `reason` is for the audit log only."""

    def __init__(self, reason: str, role_mismatch: bool = False) -> None:
        super().__init__(reason)
        self.reason = reason
        self.role_mismatch = role_mismatch


class TokenAuthority:
    """Issues and verifies signed, time-limited admin tokens."""

    def __init__(self, secret: str, ttl: timedelta = DEFAULT_TTL, algorithm: str = ALGORITHM) -> None:
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(
        self,
        subject: str,
        username: str,
        role: str = ADMIN_ROLE,
        ttl: Optional[timedelta] = None,
        now: Optional[datetime] = None,
        demo: bool = False,
    ) -> str:
        issued_at = _whole_seconds(now or datetime.now(timezone.utc))
        payload: Dict[str, Any] = {
            "sub": subject,
            "username": username,
            "role": role,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + (ttl if ttl is not None else self._ttl)).timestamp()),
        }
        if demo:
            payload["demo"] = True
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str, now: Optional[datetime] = None) -> AdminClaims:
        """
        Verify signature, expiry and role.

        A token is valid up to and including its exp second.

        Raises:
            TokenRejected: malformed, bad signature, missing claims, expired, or
                role other than admin
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False, "require": ["sub", "iat", "exp"]},
            )
        except jwt.InvalidSignatureError:
            raise TokenRejected("invalid signature")
        except jwt.MissingRequiredClaimError as e:
            raise TokenRejected(f"missing claim: {e.claim}")
        except jwt.DecodeError as e:
            raise TokenRejected(f"malformed token: {e}")
        except PyJWTError as e:
            raise TokenRejected(f"token validation error: {e}")

        try:
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc)
            issued_at = datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError):
            raise TokenRejected("malformed time claims")

        current = now or datetime.now(timezone.utc)
        if current > expires_at:
            raise TokenRejected("token has expired")

        role = payload.get("role")
        if role != ADMIN_ROLE:
            raise TokenRejected(f"role {role!r} is not admin", role_mismatch=True)

        username = payload.get("username")
        if not isinstance(username, str) or not username:
            raise TokenRejected("missing claim: username")

        return AdminClaims(
            subject=str(payload["sub"]),
            username=username,
            role=role,
            issued_at=issued_at,
            expires_at=expires_at,
            demo=bool(payload.get("demo", False)),
        )


def _whole_seconds(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.replace(microsecond=0)
