"""
Pytest configuration and shared fixtures.

This module provides common fixtures for testing the Milestone Scheduler.
Clocks are frozen so dates and minted ids are deterministic.

Usage:
    def test_example(generator, sample_project):
        milestones = generator.generate(sample_project())
"""

import os
from datetime import date, timedelta
from unittest.mock import MagicMock

import pytest

# Solo consola durante los tests
os.environ.setdefault("LOG_TO_FILE", "false")

from skills.milestone_scheduler import (
    Milestone,
    MilestoneCatalog,
    MilestoneEditor,
    Project,
    ScheduleGenerator,
    TimelineGeometry,
)


FIXED_TODAY = date(2025, 3, 10)
FIXED_CLOCK_MS = 1_741_600_000_000


# =============================================================================
# CLOCK FIXTURES
# =============================================================================


@pytest.fixture
def today():
    """Frozen "today" used by generator and editor."""
    return lambda: FIXED_TODAY


@pytest.fixture
def clock_ms():
    """Frozen millisecond clock used to mint ids."""
    return lambda: FIXED_CLOCK_MS


# =============================================================================
# CATALOG FIXTURES
# =============================================================================


@pytest.fixture
def small_catalog():
    """
    Three-template catalog: a (0d), b (10d), c (5d, child of b).

    Usage:
        def test_example(small_catalog):
            assert small_catalog.keys() == ["a", "b", "c"]
    """
    return MilestoneCatalog.from_entries([
        {"key": "a", "title": "Kickoff", "duration": 0, "indent": 0},
        {"key": "b", "title": "Build", "duration": 10, "indent": 0},
        {"key": "c", "title": "Inspect", "duration": 5, "indent": 1, "parent_key": "b"},
    ])


# =============================================================================
# PROJECT / MILESTONE FIXTURES
# =============================================================================


@pytest.fixture
def sample_project():
    """
    Factory fixture for Project records.

    Usage:
        def test_example(sample_project):
            project = sample_project(contract_date="2025-06-01")
    """
    def _create_project(
        id: str | None = "P1",
        contract_date="2025-01-01",
        name: str | None = "Substation Upgrade",
        project_number: str | None = None,
    ):
        return Project(
            id=id,
            contract_date=contract_date,
            name=name,
            project_number=project_number,
        )
    return _create_project


@pytest.fixture
def make_milestone():
    """
    Factory fixture for consistent Milestone instances.

    Usage:
        def test_example(make_milestone):
            m = make_milestone("m1", start=date(2025, 1, 1), duration=3)
    """
    def _create_milestone(
        id: str,
        start: date = date(2025, 1, 1),
        duration: int = 0,
        indent: int = 0,
        parent: str | None = None,
        is_expanded: bool = True,
        dependencies: list[str] | None = None,
    ):
        return Milestone(
            id=id,
            title=f"Milestone {id}",
            start=start,
            end=start + timedelta(days=duration),
            duration=duration,
            indent=indent,
            parent=parent,
            is_expanded=is_expanded,
            project_id="P1",
            dependencies=dependencies or [],
        )
    return _create_milestone


# =============================================================================
# ENGINE FIXTURES
# =============================================================================


@pytest.fixture
def generator(small_catalog, today):
    return ScheduleGenerator(catalog=small_catalog, today=today)


@pytest.fixture
def editor(today, clock_ms):
    return MilestoneEditor(today=today, clock_ms=clock_ms)


@pytest.fixture
def geometry():
    return TimelineGeometry()


@pytest.fixture
def on_update():
    """MagicMock standing in for the external persistence hook."""
    return MagicMock()


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
