"""
Milestone Scheduler - Template Catalog

The standard construction-project milestone catalog plus the loaders that
turn raw entries (dicts, JSON files) into an immutable MilestoneCatalog.

Author: Timeline Team
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Union

from .definition import (
    DEFAULT_MILESTONE_COLOR,
    UNNAMED_TEMPLATE_TITLE,
    InvalidCatalogError,
    MilestoneCatalog,
    MilestoneTemplate,
)
from .policies import field_of, int_or_default

logger = logging.getLogger(__name__)


# Ordered as they appear on the timeline; parents precede their children.
STANDARD_TEMPLATES: List[Dict[str, Any]] = [
    {"key": "notice", "title": "Notice to Proceed", "duration": 0, "color": "#4f46e5", "indent": 0},
    {"key": "projectStart", "title": "Project Start", "duration": 0, "color": "#3B82F6", "indent": 0},
    {"key": "mobilization", "title": "Mobilization", "duration": 10, "color": "#EF4444", "indent": 0},
    {"key": "mobilize", "title": "Mobilize", "duration": 16, "color": "#EF4444", "indent": 1, "parent_key": "mobilization"},
    {"key": "construction", "title": "Construction", "duration": 34, "color": "#EC4899", "indent": 0},
    {"key": "belowGrade", "title": "Below Grade", "duration": 13, "color": "#8B5CF6", "indent": 1, "parent_key": "construction"},
    {"key": "gradeSite", "title": "Grade Site", "duration": 8, "color": "#3B82F6", "indent": 2, "parent_key": "belowGrade"},
    {"key": "setFoundations", "title": "Set Foundations", "duration": 9, "color": "#EF4444", "indent": 2, "parent_key": "belowGrade"},
    {"key": "installConduit", "title": "Install Conduit", "duration": 3, "color": "#10B981", "indent": 2, "parent_key": "belowGrade"},
    {"key": "digCableTrench", "title": "Dig Cable Trench", "duration": 4, "color": "#6366F1", "indent": 2, "parent_key": "belowGrade"},
    {"key": "aboveGrade", "title": "Above Grade", "duration": 23, "color": "#8B5CF6", "indent": 1, "parent_key": "construction"},
    {"key": "erectSteelStructures", "title": "Erect Steel Structures", "duration": 8, "color": "#3B82F6", "indent": 2, "parent_key": "aboveGrade"},
    {"key": "installEquipment", "title": "Install Equipment", "duration": 6, "color": "#EF4444", "indent": 2, "parent_key": "aboveGrade"},
    {"key": "installGrounding", "title": "Install Grounding", "duration": 2, "color": "#10B981", "indent": 2, "parent_key": "aboveGrade"},
    {"key": "installBusAndJumpers", "title": "Install Bus and Jumpers", "duration": 8, "color": "#6366F1", "indent": 2, "parent_key": "aboveGrade"},
    {"key": "layControlCable", "title": "Lay Control Cable", "duration": 12, "color": "#EC4899", "indent": 2, "parent_key": "aboveGrade"},
    {"key": "fence", "title": "Fence", "duration": 7, "color": "#8B5CF6", "indent": 1, "parent_key": "construction"},
    {"key": "installFence", "title": "Install Fence", "duration": 7, "color": "#3B82F6", "indent": 2, "parent_key": "fence"},
    {"key": "siteRestoration", "title": "Site Restoration", "duration": 26, "color": "#EF4444", "indent": 1, "parent_key": "construction"},
    {"key": "removeEquipment", "title": "Remove Equipment", "duration": 5, "color": "#10B981", "indent": 2, "parent_key": "siteRestoration"},
    {"key": "layStoning", "title": "Lay Stoning", "duration": 2, "color": "#6366F1", "indent": 2, "parent_key": "siteRestoration"},
    {"key": "layRoadway", "title": "Lay Roadway", "duration": 4, "color": "#EC4899", "indent": 2, "parent_key": "siteRestoration"},
    {"key": "projectCloseout", "title": "Project Closeout", "duration": 10, "color": "#8B5CF6", "indent": 0},
    {"key": "substantialCompletion", "title": "Substantial Completion", "duration": 18, "color": "#EF4444", "indent": 1, "parent_key": "projectCloseout"},
    {"key": "projectComplete", "title": "Project Complete", "duration": 0, "color": "#10B981", "indent": 0},
]


def _normalize_entry(entry: Any) -> Union[MilestoneTemplate, None]:
    """Turn one raw entry into a template, or None if it has no usable key."""
    if isinstance(entry, MilestoneTemplate):
        return entry
    if entry is None:
        return None

    key = field_of(entry, "key")
    if not isinstance(key, str) or not key.strip():
        return None

    title = field_of(entry, "title")
    if not isinstance(title, str) or not title.strip():
        title = UNNAMED_TEMPLATE_TITLE

    color = field_of(entry, "color")
    if not isinstance(color, str) or not color.strip():
        color = DEFAULT_MILESTONE_COLOR

    # "parent" is accepted as an alias of "parent_key"
    parent_key = field_of(entry, "parent_key") or field_of(entry, "parent")
    if not isinstance(parent_key, str) or not parent_key.strip():
        parent_key = None

    return MilestoneTemplate(
        key=key.strip(),
        title=title,
        duration=max(0, int_or_default(field_of(entry, "duration"), 0)),
        color=color,
        indent=max(0, int_or_default(field_of(entry, "indent"), 0)),
        parent_key=parent_key,
    )


def normalize_entries(entries: Any) -> List[MilestoneTemplate]:
    """
    Normalize raw catalog entries.

    Entries without a key, and later entries repeating a key, are skipped
    with a warning; malformed fields are defaulted.
    """
    if isinstance(entries, MilestoneCatalog):
        return list(entries.templates)
    if entries is None or isinstance(entries, (str, bytes, dict)):
        logger.warning("Milestone catalog is not a list of entries, using none")
        return []

    templates: List[MilestoneTemplate] = []
    seen = set()

    for position, entry in enumerate(entries):
        try:
            template = _normalize_entry(entry)
        except Exception as e:
            logger.warning(f"Skipping malformed template #{position}: {e}")
            continue

        if template is None:
            logger.warning(f"Skipping template #{position}: missing key")
            continue
        if template.key in seen:
            logger.warning(f"Skipping template #{position}: duplicate key '{template.key}'")
            continue

        seen.add(template.key)
        templates.append(template)

    return templates


def load_catalog_file(path: Union[str, Path]) -> MilestoneCatalog:
    """
    Load a JSON catalog (a list of template objects).

    Raises:
        InvalidCatalogError: If the file is missing, unreadable or not a list.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise InvalidCatalogError(str(path), "file not found")
    except (OSError, ValueError) as e:
        raise InvalidCatalogError(str(path), str(e))

    if not isinstance(raw, list):
        raise InvalidCatalogError(str(path), "expected a JSON list of templates")

    catalog = MilestoneCatalog(templates=tuple(normalize_entries(raw)))
    logger.info(f"Loaded {len(catalog)} milestone templates from {path}")
    return catalog


def build_catalog(entries: Iterable[Any]) -> MilestoneCatalog:
    return MilestoneCatalog(templates=tuple(normalize_entries(entries)))


DEFAULT_CATALOG: MilestoneCatalog = build_catalog(STANDARD_TEMPLATES)
