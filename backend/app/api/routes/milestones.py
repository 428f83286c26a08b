"""Endpoints del timeline de hitos por proyecto."""

from fastapi import APIRouter, HTTPException, status

from app.api.response_builder import build_timeline_response
from app.core.exceptions import (
    CatalogConfigurationError,
    MilestoneLoadError,
    SessionNotFoundError,
)
from app.core.logging import get_logger
from app.schemas import ProjectRequest, TimelineResponse
from app.services import get_container
from app.services.timeline_session import TimelineSession
from skills.milestone_scheduler import Milestone, MilestoneForm, Project

logger = get_logger(__name__)
router = APIRouter()


def _get_session(project_id: str) -> TimelineSession:
    try:
        return get_container().sessions.get(project_id)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)


@router.post("/projects/{project_id}/timeline", response_model=TimelineResponse)
def load_timeline(project_id: str, request: ProjectRequest) -> TimelineResponse:
    """Carga los hitos de un proyecto, generandolos si no se envian."""
    project = Project(
        id=project_id,
        name=request.name,
        project_number=request.project_number,
        contract_date=request.contract_date,
    )
    try:
        session = get_container().open_session(project, request.milestones)
    except MilestoneLoadError as e:
        logger.error(f"[TIMELINE] {e}")
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="Failed to load milestones",
        )
    except CatalogConfigurationError as e:
        logger.error(f"[TIMELINE] {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=e.message)
    return build_timeline_response(session)


@router.get("/projects/{project_id}/timeline", response_model=TimelineResponse)
def get_timeline(project_id: str) -> TimelineResponse:
    """Estado actual del timeline con geometria y visibilidad recalculadas."""
    return build_timeline_response(_get_session(project_id))


@router.post("/projects/{project_id}/milestones/draft", response_model=Milestone)
def draft_milestone(project_id: str) -> Milestone:
    """Borrador con id temporal para el formulario "Add Milestone"."""
    return _get_session(project_id).draft()


@router.put("/projects/{project_id}/milestones", response_model=TimelineResponse)
def save_milestone(project_id: str, form: MilestoneForm) -> TimelineResponse:
    """Guarda un hito nuevo (id temporal) o reemplaza uno existente."""
    session = _get_session(project_id)
    if form.project_id is None:
        form = form.model_copy(update={"project_id": session.project_id})
    session.save(form)
    return build_timeline_response(session)


@router.delete("/projects/{project_id}/milestones/{milestone_id}", response_model=TimelineResponse)
def delete_milestone(project_id: str, milestone_id: str) -> TimelineResponse:
    """Elimina un hito; sus hijos quedan huerfanos pero visibles."""
    session = _get_session(project_id)
    session.delete(milestone_id)
    return build_timeline_response(session)


@router.post("/projects/{project_id}/milestones/{milestone_id}/toggle", response_model=TimelineResponse)
def toggle_milestone(project_id: str, milestone_id: str) -> TimelineResponse:
    """Expande o colapsa los hijos de un hito."""
    session = _get_session(project_id)
    session.toggle(milestone_id)
    return build_timeline_response(session)
