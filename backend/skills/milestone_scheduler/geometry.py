"""
Milestone Scheduler - Timeline Geometry

Computes the visible timespan of a milestone set and each milestone's
horizontal placement (left offset and width, both in percent of the span).
The percentages are meant to be used directly as CSS left/width values.

All functions are pure. Milestones may be Milestone models or plain
mappings (e.g. persisted JSON); unparsable dates never raise.

Author: Timeline Team
"""

from datetime import date, timedelta
from typing import Any, List, Optional, Sequence, Tuple

from .definition import MilestoneBar, TimelineDay, TimelineLayout
from .policies import clamp_percent, days_until_max, field_of, int_or_default, parse_date
from .visibility import dependency_links, is_visible


DEFAULT_SPAN_DAYS = 60
SPAN_PADDING_DAYS = 14
MIN_SPAN_DAYS = 30
MIN_BAR_DAYS = 1
MAX_HEADER_DAYS = 3660

# Widest distance two representable dates can be apart
_MAX_DAY_DISTANCE = (date.max - date.min).days


class TimelineGeometry:
    """
    Timeline span and bar geometry for one milestone set.

    Usage:
        geometry = TimelineGeometry()
        span = geometry.total_span_days(milestones)
        left = geometry.start_offset_percent(milestones[0], milestones)
        width = geometry.width_percent(milestones[0], milestones)
    """

    def __init__(
        self,
        default_span_days: int = DEFAULT_SPAN_DAYS,
        padding_days: int = SPAN_PADDING_DAYS,
        min_span_days: int = MIN_SPAN_DAYS,
        max_header_days: int = MAX_HEADER_DAYS,
    ):
        self.default_span_days = max(1, default_span_days)
        self.padding_days = max(0, padding_days)
        self.min_span_days = max(1, min_span_days)
        self.max_header_days = max(0, max_header_days)

    def bounds(self, milestones: Sequence[Any]) -> Tuple[Optional[date], Optional[date]]:
        """Earliest parsable start and latest parsable end of the set."""
        starts = [d for d in (parse_date(field_of(m, "start")) for m in milestones) if d]
        ends = [d for d in (parse_date(field_of(m, "end")) for m in milestones) if d]

        earliest = min(starts) if starts else None
        latest = max(ends) if ends else None
        return earliest, latest

    def total_span_days(self, milestones: Sequence[Any]) -> int:
        if not milestones:
            return self.default_span_days

        earliest, latest = self.bounds(milestones)
        if earliest is None:
            return self.default_span_days
        if latest is None or latest < earliest:
            latest = earliest

        span = (latest - earliest).days + self.padding_days
        return max(span, self.min_span_days)

    def start_offset_percent(self, milestone: Any, milestones: Sequence[Any]) -> float:
        earliest, _ = self.bounds(milestones)
        if earliest is None:
            return 0.0

        start = parse_date(field_of(milestone, "start")) or earliest
        days = max((start - earliest).days, 0)
        return clamp_percent(days / self.total_span_days(milestones) * 100)

    def width_percent(self, milestone: Any, milestones: Sequence[Any]) -> float:
        duration = int_or_default(field_of(milestone, "duration"), 0)
        days = min(max(duration, MIN_BAR_DAYS), _MAX_DAY_DISTANCE)
        return days / self.total_span_days(milestones) * 100

    def timeline_days(self, milestones: Sequence[Any]) -> List[TimelineDay]:
        """
        Header cells, one per day of the span, starting at the earliest start.

        At most `max_header_days` cells are produced, and never past date.max.
        """
        earliest, _ = self.bounds(milestones)
        if earliest is None:
            return []

        count = min(
            self.total_span_days(milestones),
            self.max_header_days,
            days_until_max(earliest) + 1,
        )

        days = []
        for i in range(count):
            current = earliest + timedelta(days=i)
            days.append(TimelineDay(
                day=current,
                day_number=current.day,
                month_label=current.strftime("%b"),
                is_weekend=current.weekday() >= 5,
                is_first_of_month=current.day == 1,
                is_monday=current.weekday() == 0,
            ))
        return days

    def layout(self, milestones: Sequence[Any]) -> TimelineLayout:
        """Span, bars, header days and dependency links in one pass."""
        earliest, _ = self.bounds(milestones)

        bars = []
        for milestone in milestones:
            milestone_id = field_of(milestone, "id")
            if milestone_id is None:
                continue
            bars.append(MilestoneBar(
                milestone_id=str(milestone_id),
                offset_percent=self.start_offset_percent(milestone, milestones),
                width_percent=self.width_percent(milestone, milestones),
                visible=is_visible(milestone, milestones),
            ))

        return TimelineLayout(
            span_days=self.total_span_days(milestones),
            origin=earliest,
            bars=bars,
            days=self.timeline_days(milestones),
            links=dependency_links(milestones),
        )


_default_geometry = TimelineGeometry()


def total_span_days(milestones: Sequence[Any]) -> int:
    return _default_geometry.total_span_days(milestones)


def start_offset_percent(milestone: Any, milestones: Sequence[Any]) -> float:
    return _default_geometry.start_offset_percent(milestone, milestones)


def width_percent(milestone: Any, milestones: Sequence[Any]) -> float:
    return _default_geometry.width_percent(milestone, milestones)
