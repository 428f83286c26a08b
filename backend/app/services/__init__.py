from app.services.container import DependencyContainer, get_container, reset_container
from app.services.timeline_session import SessionStore, TimelineSession

__all__ = [
    "DependencyContainer",
    "SessionStore",
    "TimelineSession",
    "get_container",
    "reset_container",
]
