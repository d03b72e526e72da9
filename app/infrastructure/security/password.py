"""Password hashing (bcrypt, stored as $2b$ strings in Users.Password).

Hashes are compatible with the existing stored hashes, so passwords are
not pre-hashed. Input is cut at bcrypt's 72-byte limit explicitly, the
same truncation older bcrypt implementations applied silently.
Hashing and verification are CPU-bound; the async wrappers run them in a
worker thread so the event loop is not blocked.
"""

import asyncio

import bcrypt

_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Return True if plain_password matches hashed_password."""
    if not hashed_password:
        return False
    try:
        return bool(bcrypt.checkpw(_encode(plain_password), hashed_password.encode("utf-8")))
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str, rounds: int = 10) -> str:
    """Return bcrypt hash of password with the given work factor."""
    hashed = bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds))
    return hashed.decode("utf-8")


class BcryptPasswordHasher:
    """Async password hasher used by the services.

    A fixed dummy hash is kept so a login for an unknown email still pays
    for one bcrypt comparison.
    """

    def __init__(self, rounds: int = 10) -> None:
        self.rounds = rounds
        self._dummy_hash = get_password_hash("dummy-password-for-timing", rounds)

    async def hash(self, plain: str) -> str:
        return await asyncio.to_thread(get_password_hash, plain, self.rounds)

    async def verify(self, plain: str, hashed: str | None) -> bool:
        return await asyncio.to_thread(verify_password, plain, hashed)

    async def verify_dummy(self, plain: str) -> None:
        """Burn one comparison against the dummy hash (result ignored)."""
        await asyncio.to_thread(verify_password, plain, self._dummy_hash)
