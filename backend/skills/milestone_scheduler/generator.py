"""
Milestone Scheduler - Schedule Generator

Turns a project anchor date and the template catalog into a dated,
hierarchical milestone list.

Scheduling is a purely sequential chain in catalog order: each template
starts where the previous non-zero-duration template ended. Parent/child
nesting affects indentation and visibility only, never dates.

Author: Timeline Team
"""

import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from .catalog import DEFAULT_CATALOG, normalize_entries
from .definition import (
    InvalidProjectError,
    Milestone,
    MilestoneCatalog,
    MilestoneTemplate,
    Project,
)
from .policies import add_days, days_until_max, parse_date, sanitize_id_part

logger = logging.getLogger(__name__)


def milestone_id(project_id: Any, template_key: Any) -> str:
    """Stable id for a generated milestone (project id + template key)."""
    return f"{sanitize_id_part(project_id)}_{sanitize_id_part(template_key)}"


def _as_project(project: Any) -> Optional[Project]:
    """Accept a Project, a mapping, or any object exposing the same attributes."""
    if project is None or isinstance(project, Project):
        return project
    try:
        return Project.model_validate(project, from_attributes=True)
    except ValidationError as e:
        logger.warning(f"Unusable project record: {e.error_count()} validation error(s)")
        return None


class ScheduleGenerator:
    """
    Generates a project's initial milestones from a template catalog.

    Usage:
        generator = ScheduleGenerator()
        milestones = generator.generate(
            Project(id="P-100", contract_date="2025-01-01")
        )

        for m in milestones:
            print(f"{m.start} -> {m.end}: {m.title}")

    The generator never raises: a missing project id yields an empty list
    and an unusable anchor date falls back to today.
    """

    def __init__(
        self,
        catalog: Any = None,
        today: Callable[[], date] = date.today,
    ):
        """
        Initialize the generator.

        Args:
            catalog: MilestoneCatalog, or an iterable of raw template entries.
                Defaults to the standard construction catalog.
            today: Clock used when the project has no usable anchor date.
        """
        if catalog is None:
            catalog = DEFAULT_CATALOG
        elif not isinstance(catalog, MilestoneCatalog):
            catalog = MilestoneCatalog(templates=tuple(normalize_entries(catalog)))

        self.catalog: MilestoneCatalog = catalog
        self._today = today

    @staticmethod
    def has_valid_id(project: Any) -> bool:
        project_id = getattr(project, "id", None) if project is not None else None
        return bool(project_id is not None and str(project_id).strip())

    @classmethod
    def require_project_id(cls, project: Any) -> None:
        """
        Raises:
            InvalidProjectError: If the project has no usable id.
        """
        if not cls.has_valid_id(project):
            raise InvalidProjectError(getattr(project, "id", None))

    def resolve_anchor(self, project: Project) -> date:
        """Project contract date, or today when missing or unparsable."""
        raw = project.contract_date
        anchor = parse_date(raw)
        if anchor is None:
            if raw not in (None, ""):
                logger.warning(
                    f"Invalid contract date {raw!r} for project {project.id}, "
                    f"using current date instead"
                )
            anchor = self._today()
        return anchor

    def generate(self, project: Any) -> List[Milestone]:
        """
        Generate the milestone list for a project.

        Args:
            project: Project model, or a mapping with at least an "id".

        Returns:
            Milestones in catalog order, all expanded and 0% complete.
            Empty when the project has no id.
        """
        project = _as_project(project)

        if not self.has_valid_id(project):
            logger.error("Invalid project data provided to generator: missing id")
            return []

        anchor = self.resolve_anchor(project)
        logger.info(
            f"Generating {len(self.catalog)} milestones for project "
            f"{project.id} from anchor {anchor.isoformat()}"
        )

        milestones: List[Milestone] = []
        id_by_key: Dict[str, str] = {}
        indent_by_key: Dict[str, int] = {}
        cursor = anchor

        for template in self.catalog.templates:
            milestone = self._build_milestone(project, template, cursor)
            milestones.append(milestone)
            id_by_key[template.key] = milestone.id
            indent_by_key[template.key] = template.indent

            if template.duration > 0:
                cursor = milestone.end

        return self._resolve_parents(milestones, id_by_key, indent_by_key)

    def _build_milestone(
        self,
        project: Project,
        template: MilestoneTemplate,
        start: date,
    ) -> Milestone:
        duration = min(template.duration, days_until_max(start))
        if duration < template.duration:
            logger.warning(
                f"Template '{template.key}' runs past the last representable date, "
                f"duration capped at {duration} days"
            )
        return Milestone(
            id=milestone_id(project.id, template.key),
            title=template.title,
            start=start,
            end=add_days(start, duration),
            duration=duration,
            color=template.color,
            indent=template.indent,
            parent=template.parent_key,  # re-mapped to an id afterwards
            completed=0,
            is_expanded=True,
            project_id=str(project.id),
            project_name=project.display_name,
            key=template.key,
        )

    def _resolve_parents(
        self,
        milestones: List[Milestone],
        id_by_key: Dict[str, str],
        indent_by_key: Dict[str, int],
    ) -> List[Milestone]:
        """Map template parent keys to generated ids; clear anything dangling."""
        resolved: List[Milestone] = []

        for milestone in milestones:
            parent_key: Optional[str] = milestone.parent
            parent_id: Optional[str] = None

            if parent_key is not None:
                if parent_key not in id_by_key:
                    logger.warning(
                        f"Template '{milestone.key}' references unknown parent "
                        f"'{parent_key}', clearing"
                    )
                elif indent_by_key[parent_key] >= milestone.indent:
                    logger.warning(
                        f"Template '{milestone.key}' parent '{parent_key}' is not "
                        f"shallower (indent {indent_by_key[parent_key]} >= "
                        f"{milestone.indent}), clearing"
                    )
                else:
                    parent_id = id_by_key[parent_key]

            resolved.append(milestone.model_copy(update={"parent": parent_id}))

        return resolved


# Convenience function
def generate_schedule(
    project: Any,
    catalog: Any = None,
) -> List[Milestone]:
    """Generate milestones with the given (or standard) catalog."""
    return ScheduleGenerator(catalog=catalog).generate(project)
