from typing import Protocol
from uuid import UUID


class PasswordHasherPort(Protocol):
    def hash(self, login: UUID, password: str) -> str:
        """
        Hash the password bound to the login, for storage.
        Raises PasswordTooLong when the input cannot be bound in full.
        """

    def check(self, login: UUID, password: str, password_hash: str) -> bool:
        """True if the password matches the stored hash for this login."""
