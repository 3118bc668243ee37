from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class Credential:
    login: UUID
    password_hash: str
    valid_until: datetime
    one_time: bool = False
    disabled: bool = False
    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if not self.password_hash:
            raise ValueError("password_hash is required")
        if self.valid_until.tzinfo is None:
            raise ValueError("valid_until must be timezone-aware")

    def is_expired(self, now: datetime) -> bool:
        return self.valid_until <= now
