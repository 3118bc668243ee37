import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from passwords.application.blocker import Blocker
from passwords.infrastructure.blocker.repeater import BlockRepeater
from passwords.infrastructure.db.credentials_repo import PgCredentialRepository
from passwords.infrastructure.db.migrate import upgrade
from passwords.infrastructure.db.pool import close_pool, open_pool
from passwords.logging import setup_logging
from passwords.presentation.api import api
from passwords.schemas.responses import ErrorDetail, ErrorOut
from passwords.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    if settings.migrate_on_startup:
        applied = await asyncio.to_thread(upgrade, settings.database_url)
        logger.info("migrations applied", extra={"versions": applied})

    pool = await open_pool()

    # ONE blocker per process, shared by request handlers and the repeater
    blocker = Blocker(PgCredentialRepository(pool))
    app.state.blocker = blocker

    repeater = BlockRepeater(
        blocker=blocker, interval=settings.blocker_interval_seconds
    )
    stop = asyncio.Event()
    repeater_task = asyncio.create_task(repeater.run_until_stopped(stop))

    try:
        yield
    finally:
        # shutdown; ids still pending at this point are not flushed
        stop.set()
        await repeater_task
        await close_pool()


def _without_input(errors) -> list[dict]:
    # pydantic echoes the offending value, which may be a plaintext password
    return [{k: v for k, v in err.items() if k != "input"} for err in errors]


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ErrorOut(
            error=ErrorDetail(
                code="validation_error",
                message="Request validation failed.",
                detail=str(_without_input(exc.errors())),
            )
        ).model_dump(),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # the client only gets a generic message; details go to the log
    logger.exception(
        "unhandled exception", extra={"method": request.method, "path": request.url.path}
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorOut(
            error=ErrorDetail(code="internal_error", message="Internal server error.")
        ).model_dump(),
    )


def create_app() -> FastAPI:
    setup_logging(settings.log_level)
    app = FastAPI(title="Passwords API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
    app.include_router(api)
    return app


app = create_app()
