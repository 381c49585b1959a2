"""bcrypt password hashing for admin credentials."""

import bcrypt

BCRYPT_ROUNDS = 12
_BCRYPT_MAX_BYTES = 72


def _prepare(password: str) -> bytes:
    # bcrypt only reads the first 72 bytes; newer releases raise instead of truncating.
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    return bcrypt.hashpw(_prepare(password), bcrypt.gensalt(rounds=rounds)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_prepare(password), password_hash.encode("ascii"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False
