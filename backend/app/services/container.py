"""
Dependency Injection Container.

This module provides a centralized container for the scheduling engine
components shared across requests: the template catalog, the generator,
editor and geometry built from settings, the session store and the
persistence hook.

The container pattern enables:
- Centralized dependency management
- Easy testing with substitute catalogs and persistence hooks
- Lazy initialization of the catalog (which may be read from disk)

Example:
    from app.services.container import get_container

    container = get_container()
    session = container.open_session(project)
"""

from functools import lru_cache
from typing import List, Optional

from app.core.config import Settings, settings as default_settings
from app.core.exceptions import CatalogConfigurationError
from app.core.logging import TimelineLogger
from app.services.timeline_session import SessionStore, TimelineSession, UpdateCallback
from skills.milestone_scheduler import (
    DEFAULT_CATALOG,
    InvalidCatalogError,
    Milestone,
    MilestoneCatalog,
    MilestoneEditor,
    Project,
    ScheduleGenerator,
    TimelineGeometry,
)


class DependencyContainer:
    """
    Centralized container for application dependencies.

    Attributes:
        _catalog: Cached template catalog.
        _generator: Cached ScheduleGenerator bound to the catalog.
        _editor: Cached MilestoneEditor.
        _geometry: Cached TimelineGeometry.
        _sessions: Cached SessionStore.
        _on_update: Persistence hook handed to every new session.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize the container with lazy service references."""
        self._settings = settings or default_settings
        self._catalog: Optional[MilestoneCatalog] = None
        self._generator: Optional[ScheduleGenerator] = None
        self._editor: Optional[MilestoneEditor] = None
        self._geometry: Optional[TimelineGeometry] = None
        self._sessions: Optional[SessionStore] = None
        self._logger: Optional[TimelineLogger] = None
        self._on_update: UpdateCallback = self._log_persistence

    @property
    def logger(self) -> TimelineLogger:
        if self._logger is None:
            self._logger = TimelineLogger("container")
        return self._logger

    @property
    def catalog(self) -> MilestoneCatalog:
        """
        Get the template catalog.

        Loaded from `milestone_catalog_path` when configured, otherwise the
        standard catalog.

        Raises:
            CatalogConfigurationError: If the configured file is unusable.
        """
        if self._catalog is None:
            path = self._settings.milestone_catalog_path
            if path:
                try:
                    self._catalog = MilestoneCatalog.from_json_file(path)
                except InvalidCatalogError as e:
                    raise CatalogConfigurationError(
                        "Cannot load milestone catalog", path=path, details=e.reason
                    ) from e
            else:
                self._catalog = DEFAULT_CATALOG
        return self._catalog

    @property
    def generator(self) -> ScheduleGenerator:
        if self._generator is None:
            self._generator = ScheduleGenerator(catalog=self.catalog)
        return self._generator

    @property
    def editor(self) -> MilestoneEditor:
        if self._editor is None:
            self._editor = MilestoneEditor(
                default_duration_days=self._settings.new_milestone_duration_days,
                default_color=self._settings.default_milestone_color,
            )
        return self._editor

    @property
    def geometry(self) -> TimelineGeometry:
        if self._geometry is None:
            self._geometry = TimelineGeometry(
                default_span_days=self._settings.default_span_days,
                padding_days=self._settings.span_padding_days,
                min_span_days=self._settings.min_span_days,
                max_header_days=self._settings.max_header_days,
            )
        return self._geometry

    @property
    def sessions(self) -> SessionStore:
        if self._sessions is None:
            self._sessions = SessionStore(
                ttl_seconds=self._settings.session_ttl_seconds,
                max_size=self._settings.session_max_size,
            )
        return self._sessions

    def open_session(
        self,
        project: Project,
        milestones: Optional[List[Milestone]] = None,
    ) -> TimelineSession:
        """
        Create, load and register a session for a project.

        Replaces any previous session of the same project.
        """
        session = TimelineSession(
            project=project,
            generator=self.generator,
            editor=self.editor,
            geometry=self.geometry,
            on_update=self._on_update,
        )
        session.load(milestones)
        self.sessions.put(session)
        return session

    def _log_persistence(self, project: Project, milestones: List[Milestone]) -> None:
        """Default hook: no backing store, the update is only logged."""
        self.logger.persistence_notified(str(project.id), len(milestones))

    def reset(self) -> None:
        """
        Reset all cached services.

        Useful for testing to ensure fresh instances.
        """
        self._catalog = None
        self._generator = None
        self._editor = None
        self._geometry = None
        self._sessions = None
        self._on_update = self._log_persistence

    def override_catalog(self, catalog: MilestoneCatalog) -> None:
        """
        Override the template catalog.

        Args:
            catalog: Substitute catalog, e.g. a small test catalog.
        """
        self._catalog = catalog
        # Reset generator to pick up new catalog
        self._generator = None

    def override_on_update(self, callback: UpdateCallback) -> None:
        """
        Override the persistence hook for sessions opened afterwards.

        Args:
            callback: Callable receiving (project, milestones).
        """
        self._on_update = callback


@lru_cache(maxsize=1)
def get_container() -> DependencyContainer:
    """
    Get the singleton DependencyContainer instance.

    Uses lru_cache to ensure only one container exists per process.
    """
    return DependencyContainer()


def reset_container() -> None:
    """
    Reset the global container singleton.

    Clears the lru_cache and allows a fresh container to be created.
    Useful for testing isolation.
    """
    get_container.cache_clear()
