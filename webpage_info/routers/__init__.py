from fastapi import APIRouter

from . import info_routes

router = APIRouter()
router.include_router(info_routes.router, tags=["webpage"])

__all__ = ["router"]
