from __future__ import annotations

from uuid import UUID

from passlib.context import CryptContext
from passlib.exc import PasswordTruncateError

from passwords.domain.errors import PasswordTooLong
from passwords.domain.ports.password_hasher import PasswordHasherPort

# bcrypt only reads this many bytes of its input
BCRYPT_MAX_BYTES = 72


class BcryptHasher(PasswordHasherPort):
    """
    bcrypt over ``password + salt + login``.

    Binding the login into the input means the same password stored for two
    logins produces hashes that do not verify against each other. Inputs
    over 72 bytes are refused rather than truncated, since truncation would
    cut the login off first.
    """

    def __init__(self, salt: str, *, rounds: int = 10) -> None:
        self._salt = salt
        self._rounds = rounds
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    def _secret(self, login: UUID, password: str) -> str:
        return f"{password}{self._salt}{login}"

    def hash(self, login: UUID, password: str) -> str:
        """
        Raises PasswordTooLong if the combined input exceeds 72 bytes, and
        ValueError if the configured rounds are outside bcrypt's range.
        """
        handler = self._context.handler("bcrypt").using(
            rounds=self._rounds, truncate_error=True
        )
        try:
            return handler.hash(self._secret(login, password))
        except PasswordTruncateError as e:
            raise PasswordTooLong() from e

    def check(self, login: UUID, password: str, password_hash: str) -> bool:
        secret = self._secret(login, password)
        if len(secret.encode("utf-8")) > BCRYPT_MAX_BYTES:
            # nothing this long can have been hashed
            return False
        try:
            return self._context.verify(secret, password_hash)
        except (ValueError, TypeError):
            # unrecognized or malformed hash
            return False
