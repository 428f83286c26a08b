from typing import Any

from pydantic import BaseModel, Field

from skills.milestone_scheduler import Milestone


class ProjectRequest(BaseModel):
    """Proyecto externo a cargar en una sesion de timeline."""
    name: str | None = Field(default=None, max_length=200)
    project_number: str | None = Field(default=None, max_length=100)
    contract_date: Any = Field(default=None, description="Fecha ancla; si es invalida se usa hoy")
    milestones: list[Milestone] | None = Field(
        default=None,
        description="Hitos existentes; si se omiten se generan desde el catalogo",
    )
