"""
Milestone Scheduler - Milestone Editor

Add / save / delete / toggle operations over a project's milestone list.

Every operation takes the current list and returns a new one; the input is
never mutated. Malformed form input (bad dates, non-numeric fields) is
coerced to safe defaults instead of being rejected, so a save always
stores a consistent start/end/duration triple.

Author: Timeline Team
"""

import logging
import time
from datetime import date
from typing import Any, Callable, List, Optional, Sequence, Union

from .definition import (
    DEFAULT_MILESTONE_COLOR,
    Milestone,
    MilestoneForm,
)
from .policies import (
    add_days,
    clamp,
    date_or_default,
    days_until_max,
    int_or_default,
    parse_date,
    sanitize_id_part,
)

logger = logging.getLogger(__name__)


TEMP_ID_PREFIX = "new_"
PERMANENT_ID_TOKEN = "_custom_"
NEW_MILESTONE_TITLE = "New Milestone"
UNTITLED_MILESTONE_TITLE = "Untitled Milestone"
NEW_MILESTONE_DURATION_DAYS = 7

EditedMilestone = Union[Milestone, MilestoneForm, dict]


def is_temporary_id(milestone_id: Any) -> bool:
    return isinstance(milestone_id, str) and milestone_id.startswith(TEMP_ID_PREFIX)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


def _text(value: Any) -> Optional[str]:
    """Stripped string form of a scalar form value; None when blank."""
    if value is None or isinstance(value, (bool, dict, list, tuple)):
        return None
    text = str(value).strip()
    return text or None


class MilestoneEditor:
    """
    Stateless milestone list editor.

    Usage:
        editor = MilestoneEditor()
        draft = editor.add("P-100")
        form = MilestoneForm.from_milestone(draft)
        form.title = "Commissioning"
        milestones = editor.save(milestones, form)
        milestones = editor.toggle_expansion(milestones, milestones[0].id)
    """

    def __init__(
        self,
        default_duration_days: int = NEW_MILESTONE_DURATION_DAYS,
        default_color: str = DEFAULT_MILESTONE_COLOR,
        today: Callable[[], date] = date.today,
        clock_ms: Callable[[], int] = _now_ms,
    ):
        """
        Initialize the editor.

        Args:
            default_duration_days: Duration given to new drafts.
            default_color: Bar color for drafts and colorless saves.
            today: Clock for draft start dates and unparsable start input.
            clock_ms: Millisecond clock used to mint ids.
        """
        self.default_duration_days = max(0, default_duration_days)
        self.default_color = default_color
        self._today = today
        self._clock_ms = clock_ms

    def add(self, project_id: Optional[str], project_name: Optional[str] = None) -> Milestone:
        """
        Create an unsaved draft with a temporary id.

        The draft is not part of any list until it goes through `save`.
        """
        start = self._today()
        duration = min(self.default_duration_days, days_until_max(start))
        return Milestone(
            id=f"{TEMP_ID_PREFIX}{self._clock_ms()}",
            title=NEW_MILESTONE_TITLE,
            start=start,
            end=add_days(start, duration),
            duration=duration,
            color=self.default_color,
            indent=0,
            completed=0,
            is_expanded=True,
            project_id=project_id,
            project_name=project_name,
        )

    def normalize(
        self,
        edited: EditedMilestone,
        milestones: Sequence[Milestone] = (),
    ) -> Milestone:
        """
        Coerce edit-form input into a consistent Milestone.

        The id is kept as given; `save` decides whether to mint a new one.
        """
        form = self._as_form(edited)
        milestone_id = _text(form.id) or ""

        title = _text(form.title)
        start = date_or_default(form.start, today=self._today)
        # Capped so start + duration stays a representable date
        duration = min(max(int_or_default(form.duration, 0), 0), days_until_max(start))
        completed = int(clamp(int_or_default(form.completed, 0), 0, 100))
        indent = int(clamp(int_or_default(form.indent, 0), 0))

        if form.start not in (None, "") and parse_date(form.start) is None:
            logger.warning(f"Invalid start date input {form.start!r} for {milestone_id}, using today")

        dependencies = form.dependencies if isinstance(form.dependencies, (list, tuple)) else []

        return Milestone(
            id=milestone_id,
            title=title or UNTITLED_MILESTONE_TITLE,
            start=start,
            end=add_days(start, duration),
            duration=duration,
            color=_text(form.color) or self.default_color,
            indent=indent,
            parent=self._resolve_parent(milestone_id, form.parent, indent, milestones),
            completed=completed,
            is_expanded=form.is_expanded if isinstance(form.is_expanded, bool) else True,
            project_id=_text(form.project_id),
            project_name=_text(form.project_name),
            key=_text(form.key),
            dependencies=[str(d) for d in dependencies if d is not None and str(d)],
        )

    def save(
        self,
        milestones: Sequence[Milestone],
        edited: EditedMilestone,
    ) -> List[Milestone]:
        """
        Insert or replace a milestone.

        A temporary id gets a permanent one and the milestone is appended.
        Otherwise the entry with the same id is replaced in place; an id
        that is not in the list is appended as is.
        """
        milestone = self.normalize(edited, milestones)

        if not milestone.id or is_temporary_id(milestone.id):
            permanent_id = self._mint_id(milestone.project_id, milestones)
            logger.info(f"Saving new milestone '{milestone.title}' as {permanent_id}")
            return [*milestones, milestone.model_copy(update={"id": permanent_id})]

        updated: List[Milestone] = []
        replaced = False
        for existing in milestones:
            if existing.id == milestone.id:
                updated.append(milestone)
                replaced = True
            else:
                updated.append(existing)

        if not replaced:
            logger.info(f"Milestone {milestone.id} not in list, appending")
            updated.append(milestone)

        return updated

    def delete(self, milestones: Sequence[Milestone], milestone_id: str) -> List[Milestone]:
        """Remove one milestone. Children keep their (now dangling) parent id."""
        return [m for m in milestones if m.id != milestone_id]

    def toggle_expansion(self, milestones: Sequence[Milestone], milestone_id: str) -> List[Milestone]:
        return [
            m.model_copy(update={"is_expanded": not m.is_expanded}) if m.id == milestone_id else m
            for m in milestones
        ]

    def _as_form(self, edited: EditedMilestone) -> MilestoneForm:
        if isinstance(edited, MilestoneForm):
            return edited
        if isinstance(edited, Milestone):
            return MilestoneForm.from_milestone(edited)
        if isinstance(edited, dict):
            return MilestoneForm.model_validate(edited)
        return MilestoneForm.model_validate(edited, from_attributes=True)

    def _resolve_parent(
        self,
        milestone_id: str,
        raw_parent: Any,
        indent: int,
        milestones: Sequence[Milestone],
    ) -> Optional[str]:
        """Keep the parent only if it exists and sits at a shallower indent."""
        parent_id = _text(raw_parent)
        if not parent_id or parent_id == milestone_id:
            return None

        parent = next((m for m in milestones if m.id == parent_id), None)
        if parent is None:
            logger.warning(f"Parent {parent_id} of {milestone_id} not found, clearing")
            return None
        if parent.indent >= indent:
            logger.warning(
                f"Parent {parent_id} of {milestone_id} is not shallower "
                f"(indent {parent.indent} >= {indent}), clearing"
            )
            return None
        return parent_id

    def _mint_id(self, project_id: Optional[str], milestones: Sequence[Milestone]) -> str:
        taken = {m.id for m in milestones}
        stamp = self._clock_ms()
        prefix = f"{sanitize_id_part(project_id)}{PERMANENT_ID_TOKEN}"
        while f"{prefix}{stamp}" in taken:
            stamp += 1
        return f"{prefix}{stamp}"
