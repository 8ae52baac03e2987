"""
Project progress — a status state machine with pluggable strategies for
active projects.

| status            | progress                         |
|-------------------|----------------------------------|
| COMPLETED         | 100                              |
| CANCELLED         | 0                                |
| PLANNING          | 0                                |
| ON_HOLD           | persisted ``progress`` or 0      |
| ACTIVE / unknown  | active strategy                  |

Persisted ``progress`` is ignored for every status except ON_HOLD.
"""

from __future__ import annotations

import logging
import math
import random
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, time

from staffhub.core.config import Settings, settings as default_settings
from staffhub.schemas.project import Project, ProjectStatus
from staffhub.services.attendance import AttendanceService
from staffhub.services.project import AssignmentService, ProjectService

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 86400


@dataclass(frozen=True)
class TeamSnapshot:
    """Who is on a project and how many PRESENT days they have logged."""

    member_ids: frozenset[int] = frozenset()
    present_days: int = 0

    @property
    def size(self) -> int:
        return len(self.member_ids)


# ── Helpers ─────────────────────────────────────────────────────────
def _as_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value.astimezone().replace(tzinfo=None) if value.tzinfo else value
    return datetime.combine(value, time.min)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _clamp(value: int, low: int = 0, high: int = 100) -> int:
    return max(low, min(high, value))


def time_ratio(project: Project, now: date | datetime) -> float | None:
    """Elapsed share of the project's schedule in [0, 1]; ``None`` without dates."""
    if project.start_date is None or project.end_date is None:
        return None
    start = _as_datetime(project.start_date)
    end = _as_datetime(project.end_date)
    current = _as_datetime(now)
    if current < start:
        return 0.0
    if current >= end:
        return 1.0
    return (current - start).total_seconds() / (end - start).total_seconds()


def days_remaining(project: Project, *, now: date | datetime) -> int:
    """Whole days until ``end_date`` rounded up; negative once overdue."""
    if project.end_date is None:
        return 0
    delta = _as_datetime(project.end_date) - _as_datetime(now)
    return math.ceil(delta.total_seconds() / _SECONDS_PER_DAY)


# ── Strategies ──────────────────────────────────────────────────────
class ProgressStrategy(ABC):
    """Strategy Pattern: how an ACTIVE project's progress is derived."""

    name: str = ""
    needs_team: bool = False

    @abstractmethod
    def active_progress(self, project: Project, *, now: datetime, team: TeamSnapshot) -> int:
        raise NotImplementedError


class TimeRatioStrategy(ProgressStrategy):
    """Share of the schedule already elapsed."""

    name = "time_ratio"

    def active_progress(self, project: Project, *, now: datetime, team: TeamSnapshot) -> int:
        ratio = time_ratio(project, now)
        if ratio is None:
            return 0
        return _round_half_up(ratio * 100)


class AttendanceWeightedStrategy(ProgressStrategy):
    """Every PRESENT day logged by a team member adds a fixed amount."""

    name = "attendance_weighted"
    needs_team = True

    def __init__(self, weight_per_day: int = 2) -> None:
        self.weight_per_day = weight_per_day

    def active_progress(self, project: Project, *, now: datetime, team: TeamSnapshot) -> int:
        if not team.size:
            return 0
        return min(self.weight_per_day * team.present_days, 100)


class RandomizedBlendStrategy(ProgressStrategy):
    """Time ratio, nudged by a per-project random offset plus a team-size bonus.

    The offset comes from a generator seeded with the project id, so a given
    project always gets the same value.
    """

    name = "randomized_blend"
    needs_team = True

    def __init__(self, spread: int = 10, bonus_per_member: int = 3, bonus_cap: int = 20) -> None:
        self.spread = spread
        self.bonus_per_member = bonus_per_member
        self.bonus_cap = bonus_cap

    def perturbation(self, project: Project) -> int:
        return random.Random(project.id or 0).randint(-self.spread, self.spread)

    def team_bonus(self, team: TeamSnapshot) -> int:
        return min(self.bonus_per_member * team.size, self.bonus_cap)

    def active_progress(self, project: Project, *, now: datetime, team: TeamSnapshot) -> int:
        ratio = time_ratio(project, now) or 0.0
        blended = _round_half_up(ratio * 100) + self.perturbation(project) + self.team_bonus(team)
        return _clamp(blended)


def build_strategy(name: str | None = None, *, config: Settings | None = None) -> ProgressStrategy:
    """Factory: strategy selected by ``PROGRESS_STRATEGY`` unless *name* is given."""
    config = config or default_settings
    name = name or config.PROGRESS_STRATEGY
    if name == TimeRatioStrategy.name:
        return TimeRatioStrategy()
    if name == AttendanceWeightedStrategy.name:
        return AttendanceWeightedStrategy(weight_per_day=config.ATTENDANCE_WEIGHT_PER_DAY)
    if name == RandomizedBlendStrategy.name:
        return RandomizedBlendStrategy(
            spread=config.PERTURBATION_SPREAD,
            bonus_per_member=config.TEAM_BONUS_PER_MEMBER,
            bonus_cap=config.TEAM_BONUS_CAP,
        )
    raise ValueError(f"Unknown progress strategy: {name!r}")


# ── Engine ──────────────────────────────────────────────────────────
class ProgressEngine:
    def __init__(
        self,
        strategy: ProgressStrategy,
        *,
        assignments: AssignmentService | None = None,
        attendance: AttendanceService | None = None,
        projects: ProjectService | None = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.strategy = strategy
        self._assignments = assignments
        self._attendance = attendance
        self._projects = projects
        self._clock = clock

    def compute(
        self,
        project: Project,
        *,
        now: date | datetime,
        team: TeamSnapshot | None = None,
        status: ProjectStatus | None = None,
    ) -> int:
        """Progress of *project* (optionally as if it had *status*). Pure."""
        status = status or project.status
        if status is ProjectStatus.COMPLETED:
            return 100
        if status in (ProjectStatus.CANCELLED, ProjectStatus.PLANNING):
            return 0
        if status is ProjectStatus.ON_HOLD:
            return project.progress or 0
        return _clamp(
            self.strategy.active_progress(project, now=_as_datetime(now), team=team or TeamSnapshot())
        )

    async def team_for(self, project: Project) -> TeamSnapshot:
        """Collect team membership and PRESENT days from the façades."""
        if project.id is None or self._assignments is None:
            return TeamSnapshot()
        member_ids = await self._assignments.get_team_member_ids(project.id)
        present_days = 0
        if member_ids and self._attendance is not None:
            present_days = await self._attendance.count_present_days(member_ids)
        return TeamSnapshot(member_ids=frozenset(member_ids), present_days=present_days)

    async def progress_for(
        self,
        project: Project,
        *,
        now: date | datetime | None = None,
        status: ProjectStatus | None = None,
    ) -> int:
        now = now or self._clock()
        effective = status or project.status
        team = None
        if self.strategy.needs_team and effective not in (
            ProjectStatus.COMPLETED,
            ProjectStatus.CANCELLED,
            ProjectStatus.PLANNING,
            ProjectStatus.ON_HOLD,
        ):
            team = await self.team_for(project)
        progress = self.compute(project, now=now, team=team, status=status)
        logger.debug(
            "Project %s (%s): %d%% via %s",
            project.name,
            effective.value if effective else "unset",
            progress,
            self.strategy.name,
        )
        return progress

    async def progress_on_status_change(
        self,
        project: Project,
        new_status: ProjectStatus,
        *,
        now: date | datetime | None = None,
    ) -> int:
        """Value to persist when *project* is moved to *new_status*.

        Putting a project on hold freezes whatever progress it shows right now.
        """
        if new_status is ProjectStatus.ON_HOLD:
            return await self.progress_for(project, now=now)
        return await self.progress_for(project, now=now, status=new_status)

    async def auto_complete(self, project: Project) -> Project | None:
        """Mark *project* COMPLETED at 100%; ``None`` when nothing changed."""
        if project.id is None or project.status is ProjectStatus.COMPLETED:
            return None
        if self._projects is None:
            raise RuntimeError("auto_complete needs a ProjectService")
        completed = project.model_copy(update={"status": ProjectStatus.COMPLETED, "progress": 100})
        updated = await self._projects.update_project(project.id, completed)
        logger.info("Project '%s' auto-completed", project.name)
        return updated
