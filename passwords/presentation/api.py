from fastapi import APIRouter

from passwords.presentation.routers.v1.passwords import router as passwords_router
from passwords.presentation.routes.health import router as health_router

api = APIRouter()

# Add all v1 routers here
routers = (passwords_router,)
for router in routers:
    api.include_router(router, prefix="/v1")

api.include_router(health_router)
