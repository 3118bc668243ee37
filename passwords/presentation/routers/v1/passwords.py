from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from passwords.application.password_service import PasswordService
from passwords.domain.errors import CredentialAlreadyExists, PasswordTooLong
from passwords.presentation.dependencies import get_password_service
from passwords.schemas.requests import CheckIn, PasswordIn
from passwords.schemas.responses import (
    AcceptedOut,
    OkOut,
    PageMeta,
    PageOut,
    PasswordOut,
)

router = APIRouter(tags=["Passwords"])

Service = Annotated[PasswordService, Depends(get_password_service)]


@router.put("/password", response_model=OkOut)
async def put_password(body: PasswordIn, service: Service):
    try:
        await service.add(
            body.login,
            body.password,
            one_time=body.one_time,
            valid_until=body.valid_until,
        )
    except CredentialAlreadyExists:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail="password already exists"
        )
    except PasswordTooLong:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="password too long"
        )
    return OkOut()


@router.post("/password/check", response_model=OkOut)
async def post_check_password(body: CheckIn, service: Service):
    # wrong, expired and unknown all get the same 403
    if not await service.check(body.login, body.password):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="forbidden")
    return OkOut()


@router.delete(
    "/password/{password_id}",
    status_code=status.HTTP_202_ACCEPTED,
    response_model=AcceptedOut,
)
async def delete_password(password_id: UUID, service: Service):
    service.block(password_id)
    return AcceptedOut()


@router.get("/passwords/{login}", response_model=PageOut)
async def get_passwords(
    login: UUID,
    response: Response,
    service: Service,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
):
    total, records = await service.page(login, page, limit)

    response.headers["X-Count"] = str(total)
    response.headers["X-Page"] = str(page)
    response.headers["X-Limit"] = str(limit)

    return PageOut(
        meta=PageMeta(count=total, page=page, limit=limit),
        records=[
            PasswordOut(
                uuid=record.id,
                login=record.login,
                one_time=record.one_time,
                disabled=record.disabled,
                valid_until=record.valid_until,
            )
            for record in records
        ],
    )
