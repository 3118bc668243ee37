from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field


class OkOut(BaseModel):
    status: Literal["ok"] = "ok"


class AcceptedOut(BaseModel):
    status: Literal["accepted"] = "accepted"


class ErrorDetail(BaseModel):
    code: str
    message: str
    detail: str | None = None


class ErrorOut(BaseModel):
    error: ErrorDetail


class PasswordOut(BaseModel):
    uuid: UUID = Field(..., description="The id of the password")
    login: UUID
    one_time: bool
    disabled: bool
    valid_until: datetime


class PageMeta(BaseModel):
    count: int = Field(..., description="Total passwords stored for the login")
    page: int
    limit: int


class PageOut(BaseModel):
    meta: PageMeta
    records: list[PasswordOut]
