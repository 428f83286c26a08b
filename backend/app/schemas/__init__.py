from app.schemas.requests import ProjectRequest
from app.schemas.responses import TimelineResponse

__all__ = [
    "ProjectRequest",
    "TimelineResponse",
]
