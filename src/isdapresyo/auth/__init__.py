from isdapresyo.auth.credentials import (
    CredentialChecker,
    DatabaseCredentialChecker,
    DemoCredentialChecker,
    LoginRejected,
)
from isdapresyo.auth.passwords import hash_password, verify_password
from isdapresyo.auth.tokens import TokenAuthority, TokenRejected

__all__ = [
    "CredentialChecker",
    "DatabaseCredentialChecker",
    "DemoCredentialChecker",
    "LoginRejected",
    "TokenAuthority",
    "TokenRejected",
    "hash_password",
    "verify_password",
]
