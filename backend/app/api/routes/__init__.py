"""Coleccion de routers de la API."""

from app.api.routes.milestones import router as milestones_router

__all__ = ["milestones_router"]
