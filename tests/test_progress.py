"""Tests for the project progress engine and its strategies."""

from datetime import date, datetime

import pytest
from pydantic import ValidationError

from staffhub.core.config import Settings
from staffhub.main import build_container
from staffhub.schemas.project import Project, ProjectStatus
from staffhub.services.progress import (
    AttendanceWeightedStrategy,
    ProgressEngine,
    RandomizedBlendStrategy,
    TeamSnapshot,
    TimeRatioStrategy,
    build_strategy,
    days_remaining,
)

START = date(2024, 1, 1)
END = date(2024, 1, 11)
MIDPOINT = date(2024, 1, 6)


def _project(**overrides) -> Project:
    fields = {"id": 7, "name": "Remote Project", "start_date": START, "end_date": END, "status": "ACTIVE"}
    fields.update(overrides)
    return Project(**fields)


def _team(size: int, present_days: int = 0) -> TeamSnapshot:
    return TeamSnapshot(member_ids=frozenset(range(1, size + 1)), present_days=present_days)


@pytest.fixture
def engine() -> ProgressEngine:
    return ProgressEngine(TimeRatioStrategy())


# ── Status table ────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "status, persisted, expected",
    [
        (ProjectStatus.COMPLETED, 30, 100),
        (ProjectStatus.CANCELLED, 80, 0),
        (ProjectStatus.PLANNING, 80, 0),
        (ProjectStatus.ON_HOLD, 40, 40),
        (ProjectStatus.ON_HOLD, None, 0),
        (ProjectStatus.ACTIVE, 90, 50),
    ],
)
def test_status_table(engine, status, persisted, expected):
    project = _project(status=status, progress=persisted)
    assert engine.compute(project, now=MIDPOINT) == expected


def test_unknown_status_is_treated_as_active(engine):
    project = _project(status="Archived")
    assert project.status is None
    assert engine.compute(project, now=MIDPOINT) == 50


def test_status_override_wins_over_stored_status(engine):
    project = _project(status=ProjectStatus.PLANNING)
    assert engine.compute(project, now=MIDPOINT, status=ProjectStatus.ACTIVE) == 50


# ── Time ratio ──────────────────────────────────────────────────────
@pytest.mark.parametrize(
    "now, expected",
    [
        (MIDPOINT, 50),
        (date(2023, 12, 1), 0),
        (START, 0),
        (END, 100),
        (date(2025, 1, 1), 100),
        (datetime(2024, 1, 1, 12), 5),
    ],
)
def test_time_ratio(engine, now, expected):
    assert engine.compute(_project(), now=now) == expected


def test_time_ratio_without_dates_is_zero(engine):
    assert engine.compute(_project(start_date=None), now=MIDPOINT) == 0
    assert engine.compute(_project(end_date=None), now=MIDPOINT) == 0


def test_days_remaining_rounds_up():
    assert days_remaining(_project(), now=datetime(2024, 1, 9, 12)) == 2
    assert days_remaining(_project(), now=date(2024, 1, 13)) == -2
    assert days_remaining(_project(end_date=None), now=MIDPOINT) == 0


# ── Attendance weighted ─────────────────────────────────────────────
@pytest.mark.parametrize("present_days, expected", [(0, 0), (3, 6), (49, 98), (60, 100)])
def test_attendance_weighted(present_days, expected):
    engine = ProgressEngine(AttendanceWeightedStrategy(weight_per_day=2))
    assert engine.compute(_project(), now=MIDPOINT, team=_team(1, present_days)) == expected


def test_attendance_weighted_without_team_is_zero():
    engine = ProgressEngine(AttendanceWeightedStrategy())
    assert engine.compute(_project(), now=MIDPOINT) == 0


@pytest.mark.asyncio
async def test_attendance_weighted_uses_local_team_when_offline(unreachable, session):
    config = Settings(PROGRESS_STRATEGY="attendance_weighted", FALLBACK_LATENCY_MS=0)
    container = build_container(config, transport=unreachable, session=session)
    try:
        project = await container.projects.get_project(1)
        progress = await container.progress.progress_for(project, now=MIDPOINT)
    finally:
        await container.client.aclose()

    # Employees 65 and 66 have 8 + 4 PRESENT days; the inactive duplicate adds nothing.
    assert progress == 24


@pytest.mark.asyncio
async def test_team_is_not_fetched_for_inactive_projects(unreachable, session):
    config = Settings(PROGRESS_STRATEGY="attendance_weighted", FALLBACK_LATENCY_MS=0)
    container = build_container(config, transport=unreachable, session=session)
    try:
        project = _project(status=ProjectStatus.COMPLETED)
        assert await container.progress.progress_for(project, now=MIDPOINT) == 100
    finally:
        await container.client.aclose()
    assert unreachable.attempts == []


# ── Randomized blend ────────────────────────────────────────────────
def test_randomized_blend_is_stable_per_project():
    strategy = RandomizedBlendStrategy(spread=10)
    engine = ProgressEngine(strategy)
    first = engine.compute(_project(), now=MIDPOINT, team=_team(2))
    second = engine.compute(_project(), now=MIDPOINT, team=_team(2))
    assert first == second
    assert -10 <= strategy.perturbation(_project()) <= 10
    assert first == 50 + strategy.perturbation(_project()) + 6


def test_randomized_blend_is_clamped():
    engine = ProgressEngine(RandomizedBlendStrategy(spread=10, bonus_per_member=3, bonus_cap=20))
    assert engine.compute(_project(), now=date(2030, 1, 1), team=_team(10)) == 100
    assert 0 <= engine.compute(_project(), now=date(2020, 1, 1)) <= 10


def test_team_bonus_is_capped():
    strategy = RandomizedBlendStrategy(bonus_per_member=3, bonus_cap=20)
    assert strategy.team_bonus(_team(4)) == 12
    assert strategy.team_bonus(_team(10)) == 20


# ── Factory / settings ──────────────────────────────────────────────
@pytest.mark.parametrize(
    "name, cls",
    [
        ("time_ratio", TimeRatioStrategy),
        ("attendance_weighted", AttendanceWeightedStrategy),
        ("randomized_blend", RandomizedBlendStrategy),
    ],
)
def test_build_strategy(name, cls):
    assert isinstance(build_strategy(name), cls)


def test_build_strategy_rejects_unknown_name():
    with pytest.raises(ValueError):
        build_strategy("vibes")


def test_build_strategy_reads_settings():
    config = Settings(PROGRESS_STRATEGY="Attendance-Weighted", ATTENDANCE_WEIGHT_PER_DAY=5)
    strategy = build_strategy(config=config)
    assert isinstance(strategy, AttendanceWeightedStrategy)
    assert strategy.weight_per_day == 5


def test_settings_reject_unknown_strategy():
    with pytest.raises(ValidationError):
        Settings(PROGRESS_STRATEGY="vibes")


def test_settings_strip_trailing_slash():
    assert Settings(API_BASE_URL="http://api.local/api/").API_BASE_URL == "http://api.local/api"


@pytest.mark.parametrize("url", ["localhost:8080/api", "ftp://files.local/api", "/api"])
def test_settings_require_http_scheme(url):
    with pytest.raises(ValidationError):
        Settings(API_BASE_URL=url)


# ── Status changes ──────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_putting_on_hold_freezes_current_progress(engine):
    frozen = await engine.progress_on_status_change(_project(), ProjectStatus.ON_HOLD, now=MIDPOINT)
    assert frozen == 50

    held = _project(status=ProjectStatus.ON_HOLD, progress=frozen)
    assert engine.compute(held, now=date(2024, 1, 10)) == 50


@pytest.mark.asyncio
async def test_status_change_to_completed(engine):
    assert await engine.progress_on_status_change(
        _project(), ProjectStatus.COMPLETED, now=MIDPOINT
    ) == 100


@pytest.mark.asyncio
async def test_auto_complete_offline(offline):
    project = await offline.projects.get_project(1)
    updated = await offline.progress.auto_complete(project)
    assert updated.status is ProjectStatus.COMPLETED
    assert updated.progress == 100
    assert (await offline.projects.get_project(1)).status is ProjectStatus.COMPLETED


@pytest.mark.asyncio
async def test_auto_complete_is_noop_when_already_done(offline):
    assert await offline.progress.auto_complete(_project(status=ProjectStatus.COMPLETED)) is None
    assert await offline.progress.auto_complete(_project(id=None)) is None


@pytest.mark.asyncio
async def test_auto_complete_needs_project_service(engine):
    with pytest.raises(RuntimeError):
        await engine.auto_complete(_project())
