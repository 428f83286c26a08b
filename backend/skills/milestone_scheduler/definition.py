"""
Milestone Scheduler - Data Definitions

Pydantic models for milestone templates, generated milestones and the
render geometry derived from them.

Author: Timeline Team
"""

from datetime import date
from typing import Any, List, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


DEFAULT_MILESTONE_COLOR = "#3B82F6"
UNNAMED_TEMPLATE_TITLE = "Unnamed Milestone"


class MilestoneTemplate(BaseModel):
    """
    Catalog blueprint for one generated milestone.

    Templates are immutable; nesting (indent / parent_key) drives grouping
    and visibility only, never timing.
    """

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., min_length=1, description="Stable symbolic id, unique within the catalog.")
    title: str = Field(default=UNNAMED_TEMPLATE_TITLE, description="Display title.")
    duration: int = Field(default=0, ge=0, description="Nominal duration in days.")
    color: str = Field(default=DEFAULT_MILESTONE_COLOR, description="Bar color.")
    indent: int = Field(default=0, ge=0, description="Nesting depth.")
    parent_key: Optional[str] = Field(
        default=None,
        description="Key of the parent template (must have a lower indent).",
    )


class MilestoneCatalog(BaseModel):
    """Ordered, immutable collection of templates."""

    model_config = ConfigDict(frozen=True)

    templates: Tuple[MilestoneTemplate, ...] = Field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.templates)

    def keys(self) -> List[str]:
        return [t.key for t in self.templates]

    def get(self, key: str) -> Optional[MilestoneTemplate]:
        for template in self.templates:
            if template.key == key:
                return template
        return None

    @classmethod
    def from_entries(cls, entries: Any) -> "MilestoneCatalog":
        """Build a catalog from raw entries, skipping malformed ones."""
        from .catalog import normalize_entries

        return cls(templates=tuple(normalize_entries(entries)))

    @classmethod
    def from_json_file(cls, path: Any) -> "MilestoneCatalog":
        """Load a catalog from a JSON file holding a list of entries."""
        from .catalog import load_catalog_file

        return load_catalog_file(path)


class Project(BaseModel):
    """
    External project record. Only `id` and the anchor date matter here;
    everything else is carried for display.
    """

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = Field(default=None, description="Project id.")
    name: Optional[str] = Field(default=None)
    project_number: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("project_number", "projectNumber"),
    )
    contract_date: Any = Field(
        default=None,
        validation_alias=AliasChoices("contract_date", "contractDate"),
        description="Anchor date (date, datetime or string). "
                    "Unparsable values fall back to today.",
    )

    @property
    def display_name(self) -> str:
        if self.project_number:
            return self.project_number
        if self.name:
            return self.name
        return f"Project {str(self.id or '')[:8]}"


class Milestone(BaseModel):
    """A dated, optionally nested item on a project timeline."""

    id: str
    title: str
    start: date
    end: date
    duration: int = Field(default=0, ge=0, description="Duration in days.")
    color: str = DEFAULT_MILESTONE_COLOR
    indent: int = Field(default=0, ge=0)
    parent: Optional[str] = Field(default=None, description="Parent milestone id.")
    completed: int = Field(default=0, ge=0, le=100, description="Percent complete.")
    is_expanded: bool = True
    project_id: Optional[str] = None
    project_name: Optional[str] = None
    key: Optional[str] = Field(default=None, description="Originating template key.")
    dependencies: List[str] = Field(
        default_factory=list,
        description="Ids this milestone depends on. Informational only; "
                    "dates are never derived from them.",
    )


class MilestoneForm(BaseModel):
    """
    Raw payload of the milestone edit form.

    Every field may arrive as a string, a number, or not at all; the editor
    coerces them before anything is stored.
    """

    model_config = ConfigDict(extra="ignore")

    id: Any = Field(default="", description="Blank or temporary ids are minted on save.")
    title: Any = None
    start: Any = None
    duration: Any = None
    completed: Any = None
    indent: Any = None
    parent: Any = None
    color: Any = None
    is_expanded: Any = True
    project_id: Any = None
    project_name: Any = None
    key: Any = None
    dependencies: Any = Field(default_factory=list)

    @classmethod
    def from_milestone(cls, milestone: Milestone) -> "MilestoneForm":
        return cls(**milestone.model_dump())


class MilestoneBar(BaseModel):
    """Horizontal placement of one milestone, in percent of the span."""

    milestone_id: str
    offset_percent: float = Field(ge=0.0, le=100.0)
    width_percent: float = Field(gt=0.0)
    visible: bool = True


class TimelineDay(BaseModel):
    """One header cell of the timeline."""

    day: date
    day_number: int
    month_label: str
    is_weekend: bool
    is_first_of_month: bool
    is_monday: bool

    @property
    def shows_month(self) -> bool:
        return self.is_first_of_month or self.is_monday


class DependencyLink(BaseModel):
    """Connector from a dependency to the milestone that depends on it."""

    source_id: str
    target_id: str


class TimelineLayout(BaseModel):
    """Everything a renderer needs for one project's timeline."""

    span_days: int = Field(ge=1)
    origin: Optional[date] = Field(
        default=None,
        description="Date at offset 0 (earliest start). None for an empty set.",
    )
    bars: List[MilestoneBar] = Field(default_factory=list)
    days: List[TimelineDay] = Field(default_factory=list)
    links: List[DependencyLink] = Field(default_factory=list)


# Custom Exceptions

class MilestoneSchedulerError(Exception):
    """Base exception for the milestone scheduler."""
    pass


class InvalidProjectError(MilestoneSchedulerError):
    """The project record has no usable id."""
    def __init__(self, project_id: Any = None):
        self.project_id = project_id
        super().__init__(
            f"Invalid project id: {project_id!r}. "
            f"A non-empty id is required to generate milestones."
        )


class InvalidCatalogError(MilestoneSchedulerError):
    """A catalog file could not be read as a list of templates."""
    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid milestone catalog '{source}': {reason}")
