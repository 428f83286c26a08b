"""
Milestone Scheduler Skill

Generates, edits and lays out a project's hierarchical milestone timeline.
Dates follow a sequential chain in template order; nesting only drives
indentation and expand/collapse visibility.
"""

from .definition import (
    DependencyLink,
    InvalidCatalogError,
    InvalidProjectError,
    Milestone,
    MilestoneBar,
    MilestoneCatalog,
    MilestoneForm,
    MilestoneSchedulerError,
    MilestoneTemplate,
    Project,
    TimelineDay,
    TimelineLayout,
)

from .catalog import (
    DEFAULT_CATALOG,
    STANDARD_TEMPLATES,
    build_catalog,
    load_catalog_file,
)

from .policies import (
    add_days,
    clamp,
    clamp_percent,
    date_or_default,
    days_until_max,
    field_of,
    int_or_default,
    parse_date,
    sanitize_id_part,
)

from .generator import (
    ScheduleGenerator,
    generate_schedule,
    milestone_id,
)

from .geometry import (
    TimelineGeometry,
    start_offset_percent,
    total_span_days,
    width_percent,
    DEFAULT_SPAN_DAYS,
    MAX_HEADER_DAYS,
    MIN_SPAN_DAYS,
    SPAN_PADDING_DAYS,
)

from .editor import (
    MilestoneEditor,
    is_temporary_id,
    NEW_MILESTONE_TITLE,
    PERMANENT_ID_TOKEN,
    TEMP_ID_PREFIX,
    UNTITLED_MILESTONE_TITLE,
)

from .visibility import (
    dependency_links,
    find_milestone,
    is_visible,
    visible_milestones,
)

__all__ = [
    # Classes
    "MilestoneEditor",
    "ScheduleGenerator",
    "TimelineGeometry",
    # Models
    "DependencyLink",
    "Milestone",
    "MilestoneBar",
    "MilestoneCatalog",
    "MilestoneForm",
    "MilestoneTemplate",
    "Project",
    "TimelineDay",
    "TimelineLayout",
    # Exceptions
    "InvalidCatalogError",
    "InvalidProjectError",
    "MilestoneSchedulerError",
    # Functions
    "add_days",
    "build_catalog",
    "clamp",
    "clamp_percent",
    "date_or_default",
    "days_until_max",
    "dependency_links",
    "field_of",
    "find_milestone",
    "generate_schedule",
    "int_or_default",
    "is_temporary_id",
    "is_visible",
    "load_catalog_file",
    "milestone_id",
    "parse_date",
    "sanitize_id_part",
    "start_offset_percent",
    "total_span_days",
    "visible_milestones",
    "width_percent",
    # Constants
    "DEFAULT_CATALOG",
    "DEFAULT_SPAN_DAYS",
    "MAX_HEADER_DAYS",
    "MIN_SPAN_DAYS",
    "NEW_MILESTONE_TITLE",
    "PERMANENT_ID_TOKEN",
    "SPAN_PADDING_DAYS",
    "STANDARD_TEMPLATES",
    "TEMP_ID_PREFIX",
    "UNTITLED_MILESTONE_TITLE",
]
