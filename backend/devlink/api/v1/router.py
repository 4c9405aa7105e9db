from fastapi import APIRouter
from devlink.api.v1.endpoints import auth, portfolios, ai, templates, health

api_router = APIRouter()

api_router.include_router(health.router)
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(portfolios.router, prefix="/portfolios", tags=["Portfolios"])
api_router.include_router(ai.router, prefix="/ai", tags=["AI Content"])
api_router.include_router(templates.router, prefix="/templates", tags=["Templates"])
