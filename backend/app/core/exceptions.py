"""
Custom exceptions for the Milestone Scheduler service.

This module provides a hierarchy of exceptions for consistent error handling
across the application. All exceptions inherit from SchedulerBaseException.

The scheduling engine itself degrades instead of raising; these exceptions
belong to the service layer that hosts editing sessions.

Example:
    try:
        session.load()
    except MilestoneLoadError as e:
        logger.error(f"Load failed: {e}")
"""

from typing import Optional


class SchedulerBaseException(Exception):
    """
    Base exception class for all Milestone Scheduler service errors.

    Attributes:
        message: Human-readable description of the error.
        details: Optional additional context for debugging.
    """

    def __init__(self, message: str, details: Optional[str] = None) -> None:
        self.message = message
        self.details = details
        super().__init__(self.message)

    def __str__(self) -> str:
        """Return string representation with optional details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class MilestoneLoadError(SchedulerBaseException):
    """
    Exception raised when a project's milestones cannot be loaded.

    Raised when generation yields nothing for a project without a usable id
    while the template catalog is not empty.

    Attributes:
        project_id: The (possibly blank) project id that was supplied.
    """

    def __init__(
        self,
        message: str = "Failed to load milestones",
        project_id: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        self.project_id = project_id
        super().__init__(f"[Project: {project_id!r}] {message}", details)


class SessionNotFoundError(SchedulerBaseException):
    """
    Exception raised when no timeline session exists for a project.

    Sessions expire after the configured TTL or are evicted when the store
    is full.

    Attributes:
        project_id: Project whose session was requested.
    """

    def __init__(self, project_id: str, details: Optional[str] = None) -> None:
        self.project_id = project_id
        super().__init__(f"[Session] No timeline loaded for project {project_id}", details)


class CatalogConfigurationError(SchedulerBaseException):
    """
    Exception raised when the configured template catalog cannot be used.

    Attributes:
        path: Configured catalog path.
    """

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        details: Optional[str] = None,
    ) -> None:
        self.path = path

        enhanced_message = f"[Catalog] {message}"
        if path:
            enhanced_message = f"{enhanced_message} (path: {path})"

        super().__init__(enhanced_message, details)
