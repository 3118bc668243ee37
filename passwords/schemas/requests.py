from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from passwords.domain.services import as_utc


class PasswordIn(BaseModel):
    login: UUID = Field(..., description="The login the password belongs to")
    password: str = Field(..., description="The plaintext password", min_length=1)
    one_time: bool = Field(False, description="Valid for a single successful check")
    valid_until: datetime | None = Field(
        None, description="Expiry; defaults to the configured lifetime"
    )

    @field_validator("valid_until")
    @classmethod
    def _valid_until_utc(cls, value: datetime | None) -> datetime | None:
        return as_utc(value) if value is not None else None


class CheckIn(BaseModel):
    login: UUID = Field(..., description="The login the password belongs to")
    password: str = Field(..., description="The plaintext password", min_length=1)
