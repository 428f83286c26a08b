from fastapi import APIRouter

from app.api.routes import milestones_router

router = APIRouter()
router.include_router(milestones_router)

__all__ = ["router"]
