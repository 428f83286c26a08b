"""
Timeline sessions.

A TimelineSession owns the in-memory milestone list of one project: it
loads (generating from the catalog when the project has no milestones),
applies editor operations and notifies the persistence hook. The
SessionStore keeps sessions per project id with TTL + LRU eviction.

Example:
    session = TimelineSession(project, generator, editor, geometry, on_update)
    session.load()
    draft = session.draft()
    session.save(draft)
    layout = session.layout()
"""

import time
from collections import OrderedDict
from typing import Callable, List, Optional, Sequence

from app.core.exceptions import MilestoneLoadError, SessionNotFoundError
from app.core.logging import TimelineLogger
from skills.milestone_scheduler import (
    InvalidProjectError,
    Milestone,
    MilestoneEditor,
    Project,
    ScheduleGenerator,
    TimelineGeometry,
    TimelineLayout,
)
from skills.milestone_scheduler.editor import EditedMilestone

UpdateCallback = Callable[[Project, List[Milestone]], None]

timeline_logger = TimelineLogger("session")


class TimelineSession:
    """
    In-memory milestone list for one project.

    Attributes:
        project: The external project record (read-only here).
        milestones: Current list. Replaced, never mutated, by each edit.
    """

    def __init__(
        self,
        project: Project,
        generator: ScheduleGenerator,
        editor: MilestoneEditor,
        geometry: TimelineGeometry,
        on_update: Optional[UpdateCallback] = None,
    ) -> None:
        self.project = project
        self.milestones: List[Milestone] = []
        self._generator = generator
        self._editor = editor
        self._geometry = geometry
        self._on_update = on_update

    @property
    def project_id(self) -> str:
        return str(self.project.id or "")

    def load(self, milestones: Optional[Sequence[Milestone]] = None) -> List[Milestone]:
        """
        Adopt existing milestones, or generate them when there are none.

        Raises:
            MilestoneLoadError: If generation produced nothing because the
                project has no id while the catalog has templates.
        """
        if milestones:
            self.milestones = list(milestones)
            timeline_logger.session_loaded(self.project_id, len(self.milestones), generated=False)
            return self.milestones

        generated = self._generator.generate(self.project)
        if not generated and len(self._generator.catalog) > 0:
            try:
                self._generator.require_project_id(self.project)
            except InvalidProjectError as e:
                raise MilestoneLoadError(project_id=self.project.id, details=str(e)) from e

        self.milestones = generated
        timeline_logger.session_loaded(self.project_id, len(self.milestones), generated=True)
        return self.milestones

    def draft(self) -> Milestone:
        """Unsaved milestone for the "Add Milestone" form."""
        timeline_logger.edit(self.project_id, "draft")
        return self._editor.add(self.project.id, self.project.display_name)

    def save(self, edited: EditedMilestone) -> List[Milestone]:
        self.milestones = self._editor.save(self.milestones, edited)
        timeline_logger.edit(self.project_id, "save", getattr(edited, "id", None))
        self._notify()
        return self.milestones

    def delete(self, milestone_id: str) -> List[Milestone]:
        self.milestones = self._editor.delete(self.milestones, milestone_id)
        timeline_logger.edit(self.project_id, "delete", milestone_id)
        self._notify()
        return self.milestones

    def toggle(self, milestone_id: str) -> List[Milestone]:
        self.milestones = self._editor.toggle_expansion(self.milestones, milestone_id)
        timeline_logger.edit(self.project_id, "toggle", milestone_id)
        return self.milestones

    def layout(self) -> TimelineLayout:
        return self._geometry.layout(self.milestones)

    def _notify(self) -> None:
        """Fire-and-forget call to the persistence hook."""
        if self._on_update is None:
            return
        try:
            self._on_update(self.project, list(self.milestones))
        except Exception as e:
            # The edit already applied; a persistence failure is only logged
            timeline_logger.error("persist", e)


class SessionStore:
    """
    Timeline sessions keyed by project id.

    A session expires after `ttl_seconds` without use; every read renews
    it. Beyond `max_size` the least recently used session is dropped.
    """

    def __init__(
        self,
        ttl_seconds: int,
        max_size: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._max_size = max_size
        self._clock = clock
        self._sessions: OrderedDict[str, tuple[float, TimelineSession]] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, project_id: str) -> TimelineSession:
        """
        Raises:
            SessionNotFoundError: If the project has no live session.
        """
        entry = self._sessions.get(project_id)
        if entry is None:
            raise SessionNotFoundError(project_id)

        touched_at, session = entry
        now = self._clock()
        if now - touched_at > self._ttl_seconds:
            del self._sessions[project_id]
            raise SessionNotFoundError(project_id, details="session expired")

        self._sessions[project_id] = (now, session)
        self._sessions.move_to_end(project_id)
        return session

    def put(self, session: TimelineSession) -> None:
        """Register the session, replacing any previous one for the project."""
        self._sessions[session.project_id] = (self._clock(), session)
        self._sessions.move_to_end(session.project_id)
        while len(self._sessions) > self._max_size:
            evicted, _ = self._sessions.popitem(last=False)
            timeline_logger.debug("evict", f"session for project {evicted} dropped")

    def discard(self, project_id: str) -> None:
        self._sessions.pop(project_id, None)

    def clear(self) -> None:
        self._sessions.clear()
