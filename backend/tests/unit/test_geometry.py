"""
Unit tests for TimelineGeometry.

Tests cover:
- Span computation (default, padding, minimum)
- Bar offset and width percentages
- Header days and the combined layout
"""

from datetime import date

import pytest

from skills.milestone_scheduler import (
    TimelineGeometry,
    start_offset_percent,
    total_span_days,
    width_percent,
)


# =============================================================================
# SPAN
# =============================================================================


class TestTotalSpan:

    def test_empty_set_uses_default(self, geometry):
        assert geometry.total_span_days([]) == 60

    def test_padding_applied(self, geometry, make_milestone):
        milestones = [
            make_milestone("a", start=date(2025, 1, 1), duration=0),
            make_milestone("b", start=date(2025, 1, 1), duration=100),
        ]
        assert geometry.total_span_days(milestones) == 114

    def test_minimum_span(self, geometry, make_milestone):
        milestones = [make_milestone("a", duration=2)]
        assert geometry.total_span_days(milestones) == 30

    def test_unparsable_dates_use_default(self, geometry):
        milestones = [{"id": "x", "start": "banana", "end": "banana", "duration": 3}]
        assert geometry.total_span_days(milestones) == 60

    def test_plain_mappings(self, geometry):
        milestones = [
            {"id": "x", "start": "2025-01-01", "end": "2025-03-01", "duration": 59},
        ]
        assert geometry.total_span_days(milestones) == 59 + 14

    def test_custom_settings(self, make_milestone):
        geometry = TimelineGeometry(default_span_days=90, padding_days=0, min_span_days=5)
        assert geometry.total_span_days([]) == 90
        assert geometry.total_span_days([make_milestone("a", duration=10)]) == 10

    def test_module_level_helpers(self, make_milestone):
        milestones = [make_milestone("a", duration=100)]
        assert total_span_days(milestones) == 114
        assert width_percent(milestones[0], milestones) == pytest.approx(100 / 114 * 100)
        assert start_offset_percent(milestones[0], milestones) == 0.0


# =============================================================================
# BAR PLACEMENT
# =============================================================================


class TestBars:
    """Generated three-milestone example: span 30 days from 2025-01-01."""

    @pytest.fixture
    def milestones(self, generator, sample_project):
        return generator.generate(sample_project())

    def test_span(self, geometry, milestones):
        assert geometry.total_span_days(milestones) == 30

    def test_offsets(self, geometry, milestones):
        offsets = [geometry.start_offset_percent(m, milestones) for m in milestones]
        assert offsets == pytest.approx([0.0, 0.0, 33.33], abs=0.01)

    def test_widths(self, geometry, milestones):
        widths = [geometry.width_percent(m, milestones) for m in milestones]
        assert widths == pytest.approx([3.33, 33.33, 16.67], abs=0.01)

    def test_zero_duration_still_visible(self, geometry, milestones):
        assert geometry.width_percent(milestones[0], milestones) > 0

    def test_unparsable_start_sits_at_origin(self, geometry, make_milestone):
        milestones = [make_milestone("a", start=date(2025, 1, 10), duration=5)]
        broken = {"id": "x", "start": "banana", "duration": 2}
        assert geometry.start_offset_percent(broken, milestones) == 0.0

    def test_offset_clamped(self, geometry, make_milestone):
        milestones = [make_milestone("a", duration=1)]
        far = make_milestone("far", start=date(2026, 1, 1))
        before = make_milestone("before", start=date(2024, 1, 1))
        assert geometry.start_offset_percent(far, milestones) == 100.0
        assert geometry.start_offset_percent(before, milestones) == 0.0

    def test_width_of_bad_duration(self, geometry, make_milestone):
        milestones = [make_milestone("a", duration=20)]
        assert geometry.width_percent({"duration": "n/a"}, milestones) == pytest.approx(100 / 34)


# =============================================================================
# HEADER DAYS AND LAYOUT
# =============================================================================


class TestTimelineDays:

    def test_one_cell_per_span_day(self, geometry, generator, sample_project):
        milestones = generator.generate(sample_project())
        days = geometry.timeline_days(milestones)

        assert len(days) == 30
        assert days[0].day == date(2025, 1, 1)
        assert days[-1].day == date(2025, 1, 30)

    def test_cell_flags(self, geometry, make_milestone):
        # 2025-03-01 is a Saturday
        days = geometry.timeline_days([make_milestone("a", start=date(2025, 3, 1))])
        first, monday = days[0], days[2]

        assert first.is_first_of_month and first.is_weekend and first.shows_month
        assert first.month_label == "Mar"
        assert monday.is_monday and not monday.is_weekend and monday.shows_month
        assert not days[3].shows_month

    def test_empty_set(self, geometry):
        assert geometry.timeline_days([]) == []

    def test_header_capped_for_long_spans(self, geometry, make_milestone):
        milestones = [
            make_milestone("first", start=date(1, 1, 1)),
            make_milestone("last", start=date(9999, 12, 31)),
        ]

        layout = geometry.layout(milestones)

        assert len(layout.days) == 3660
        assert layout.span_days == (date(9999, 12, 31) - date(1, 1, 1)).days + 14
        assert layout.bars[1].offset_percent == pytest.approx(100.0, abs=0.01)

    def test_header_stops_at_date_max(self, geometry, make_milestone):
        milestones = [make_milestone("late", start=date(9999, 12, 25), duration=5)]

        days = geometry.timeline_days(milestones)

        assert len(days) == 7
        assert days[-1].day == date.max

    def test_configured_header_cap(self, make_milestone):
        geometry = TimelineGeometry(max_header_days=10)
        assert len(geometry.timeline_days([make_milestone("a", duration=100)])) == 10

    def test_huge_duration_width(self, geometry, make_milestone):
        milestones = [make_milestone("a", duration=20)]
        assert geometry.width_percent({"duration": "9" * 400}, milestones) > 100


class TestLayout:

    def test_layout_combines_everything(self, geometry, make_milestone):
        milestones = [
            make_milestone("p", duration=10, is_expanded=False),
            make_milestone("c", start=date(2025, 1, 11), duration=5, indent=1, parent="p"),
            make_milestone("d", start=date(2025, 1, 11), duration=1, dependencies=["p"]),
        ]

        layout = geometry.layout(milestones)

        assert layout.span_days == 30
        assert layout.origin == date(2025, 1, 1)
        assert [b.milestone_id for b in layout.bars] == ["p", "c", "d"]
        assert [b.visible for b in layout.bars] == [True, False, True]
        assert len(layout.days) == 30
        assert [(l.source_id, l.target_id) for l in layout.links] == [("p", "d")]

    def test_empty_layout(self, geometry):
        layout = geometry.layout([])
        assert layout.span_days == 60
        assert layout.origin is None
        assert layout.bars == [] and layout.days == [] and layout.links == []
