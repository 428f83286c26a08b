"""
Milestone Scheduler - Visibility Resolver

Decides which milestones are on screen given the expand/collapse state of
their parents. Re-derived on every call; nothing is cached.

Author: Timeline Team
"""

from typing import Any, Dict, List, Optional, Sequence

from .definition import DependencyLink
from .policies import field_of


def _index(milestones: Sequence[Any]) -> Dict[str, Any]:
    return {
        str(field_of(m, "id")): m
        for m in milestones
        if field_of(m, "id") is not None
    }


def find_milestone(milestone_id: Optional[str], milestones: Sequence[Any]) -> Optional[Any]:
    if milestone_id is None:
        return None
    for milestone in milestones:
        if field_of(milestone, "id") == milestone_id:
            return milestone
    return None


def is_visible(milestone: Any, milestones: Sequence[Any]) -> bool:
    """
    True unless the milestone's parent is in the set and collapsed.

    A parent id that does not resolve (deleted parent, stale data) leaves
    the milestone visible so orphans are never silently hidden.
    """
    parent_id = field_of(milestone, "parent")
    if not parent_id:
        return True

    parent = find_milestone(parent_id, milestones)
    if parent is None:
        return True

    return bool(field_of(parent, "is_expanded", True))


def visible_milestones(milestones: Sequence[Any]) -> List[Any]:
    """Order-preserving filter of the currently displayed milestones."""
    return [m for m in milestones if is_visible(m, milestones)]


def dependency_links(milestones: Sequence[Any]) -> List[DependencyLink]:
    """
    Connectors for recorded dependencies between two visible milestones.

    Dependencies are display-only: they never move dates. Ids that do not
    resolve, or that point at a hidden milestone, produce no link.
    """
    by_id = _index(milestones)
    links: List[DependencyLink] = []

    for milestone in milestones:
        target_id = field_of(milestone, "id")
        if target_id is None or not is_visible(milestone, milestones):
            continue

        for source_id in field_of(milestone, "dependencies") or []:
            source = by_id.get(str(source_id))
            if source is None or not is_visible(source, milestones):
                continue
            links.append(DependencyLink(source_id=str(source_id), target_id=str(target_id)))

    return links
