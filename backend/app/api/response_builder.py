"""Construccion de respuestas API desde una sesion de timeline."""

from app.schemas import TimelineResponse
from app.services.timeline_session import TimelineSession


def build_timeline_response(session: TimelineSession) -> TimelineResponse:
    """Convierte el estado de la sesion en TimelineResponse tipado."""
    return TimelineResponse(
        project_id=session.project_id,
        project_name=session.project.display_name,
        milestones=session.milestones,
        layout=session.layout(),
    )
