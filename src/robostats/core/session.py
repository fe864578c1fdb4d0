"""State behind one /team message.

A TeamSession is created per command invocation and owned by the view that
renders it. It remembers which page and season the user is looking at and
lazily fetches whatever each page needs, caching it for later renders.

Season-scoped data (awards, events, skills ranking) is dropped whenever the
season changes. The team itself, the season list, and the vrc-data-analysis
statistics are fetched at most once per session.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Generic, TypeVar

from robostats.api.base import RequestFailed
from robostats.core.pages import TeamPage

if TYPE_CHECKING:
    from robostats.api.robotevents import RobotEventsClient
    from robostats.api.skills import SkillsCache
    from robostats.api.vrc_data_analysis import DataAnalysisClient
    from robostats.models.robotevents import Award, Event, Season, SkillsRanking, Team
    from robostats.models.vrc_data_analysis import TeamInfo

logger = logging.getLogger(__name__)

T = TypeVar("T")

# RobotEvents program id for the VEX Robotics Competition. vrc-data-analysis
# only tracks teams in this program.
VRC_PROGRAM_ID = 1

# Large enough that a season's awards/events fit on one page.
SEASON_PAGE_SIZE = 250

_UNSET = object()


class CachedField(Generic[T]):
    """A value that is fetched on first use and then remembered.

    Concurrent callers share one in-flight fetch. Failed fetches are not
    cached, so the next call tries again. ``None`` is a valid cached value.
    A fetch that was in flight when ``clear()`` ran is returned to its caller
    but not stored.
    """

    def __init__(self) -> None:
        self._value: object = _UNSET
        self._generation = 0
        self._lock = asyncio.Lock()

    @property
    def is_cached(self) -> bool:
        return self._value is not _UNSET

    def peek(self) -> T | None:
        """The cached value, or None if nothing has been fetched yet."""
        return None if self._value is _UNSET else self._value  # type: ignore[return-value]

    async def get_or_fetch(self, fetch: Callable[[], Awaitable[T]]) -> T:
        async with self._lock:
            if self._value is not _UNSET:
                return self._value  # type: ignore[return-value]
            generation = self._generation
            value = await fetch()
            if generation == self._generation:
                self._value = value
            return value

    def clear(self) -> None:
        self._generation += 1
        self._value = _UNSET


@dataclasses.dataclass
class TeamPageData:
    """Everything the presentation layer needs to draw one page.

    Per-source ``*_failed`` flags let a page report one upstream failure
    without hiding data that did load.
    """

    team: Team
    page: TeamPage
    season: Season | None = None
    awards: list[Award] | None = None
    awards_failed: bool = False
    events: list[Event] | None = None
    events_failed: bool = False
    skills_ranking: SkillsRanking | None = None
    skills_failed: bool = False
    team_info: TeamInfo | None = None
    team_info_failed: bool = False
    team_info_supported: bool = True


class TeamSession:
    """Page/season state and lazily fetched data for one /team message."""

    def __init__(
        self,
        team_number: str,
        program_id: int | None = None,
        *,
        robotevents: RobotEventsClient,
        data_analysis: DataAnalysisClient,
        skills_cache: SkillsCache,
    ) -> None:
        self.team_number = team_number.strip()
        self.program_id = program_id
        self.robotevents = robotevents
        self.data_analysis = data_analysis
        self.skills_cache = skills_cache

        self.current_page = TeamPage.OVERVIEW
        self.current_season: Season | None = None

        self._team: CachedField[Team | None] = CachedField()
        self._seasons: CachedField[list[Season]] = CachedField()
        self._awards: CachedField[list[Award]] = CachedField()
        self._events: CachedField[list[Event]] = CachedField()
        self._skills_ranking: CachedField[SkillsRanking | None] = CachedField()
        self._team_info: CachedField[TeamInfo] = CachedField()

    # --- Data resolution ---

    @property
    def team(self) -> Team | None:
        return self._team.peek()

    @property
    def active_seasons(self) -> list[Season]:
        return self._seasons.peek() or []

    async def resolve_team(self) -> Team | None:
        """Look the team up on RobotEvents, once.

        Returns None when upstream has no team under this number. Raises
        RequestFailed on transport or parse failure.
        """

        async def fetch() -> Team | None:
            teams = await self.robotevents.find_teams(self.team_number, self.program_id)
            if not teams:
                logger.info(
                    "team_not_found number=%s program=%s", self.team_number, self.program_id
                )
                return None
            return teams[0]

        return await self._team.get_or_fetch(fetch)

    async def initialize_seasons(self) -> list[Season]:
        """Fetch the team's active seasons and select the most recent one.

        Must be called after ``resolve_team`` found a team. Raises RequestFailed.
        """
        team = self._require_team()
        first_fetch = not self._seasons.is_cached
        seasons = await self._seasons.get_or_fetch(
            lambda: self.robotevents.team_active_seasons(team)
        )
        if first_fetch:
            self.current_season = seasons[0] if seasons else None
        return seasons

    def _require_team(self) -> Team:
        team = self._team.peek()
        if team is None:
            msg = "team has not been resolved"
            raise RuntimeError(msg)
        return team

    # --- Transitions ---

    def change_page(self, page: TeamPage) -> None:
        self.current_page = page

    def change_season(self, season_id: int) -> None:
        """Select another active season and drop everything fetched for the old one.

        Raises ValueError if ``season_id`` isn't one of the team's active seasons.
        """
        season = next((s for s in self.active_seasons if s.id == season_id), None)
        if season is None:
            msg = f"season {season_id} is not active for team {self.team_number}"
            raise ValueError(msg)
        self.current_season = season
        self._awards.clear()
        self._events.clear()
        self._skills_ranking.clear()

    @property
    def show_season_selector(self) -> bool:
        return bool(self.active_seasons) and self.current_page is not TeamPage.OVERVIEW

    @property
    def is_vrc(self) -> bool:
        team = self._team.peek()
        return team is not None and team.program.id == VRC_PROGRAM_ID

    # --- Rendering ---

    async def load_page(self) -> TeamPageData:
        """Fetch (or reuse) the data for the current page."""
        team = self._require_team()
        data = TeamPageData(team=team, page=self.current_page, season=self.current_season)
        season_id = self.current_season.id if self.current_season else None

        if self.current_page is TeamPage.AWARDS:
            try:
                data.awards = await self._awards.get_or_fetch(
                    lambda: self.robotevents.team_awards(
                        team, season_id, per_page=SEASON_PAGE_SIZE
                    )
                )
            except RequestFailed:
                logger.warning("team_awards_failed team=%s season=%s", team.number, season_id)
                data.awards_failed = True

        elif self.current_page is TeamPage.EVENTS:
            try:
                data.events = await self._events.get_or_fetch(
                    lambda: self.robotevents.team_events(
                        team, season_id, per_page=SEASON_PAGE_SIZE
                    )
                )
            except RequestFailed:
                logger.warning("team_events_failed team=%s season=%s", team.number, season_id)
                data.events_failed = True

        elif self.current_page is TeamPage.STATS:
            await self._load_stats(team, data)

        return data

    async def _load_stats(self, team: Team, data: TeamPageData) -> None:
        """Skills ranking and match statistics, each failing independently."""
        if self.current_season is not None:
            season_id = self.current_season.id
            try:
                data.skills_ranking = await self._skills_ranking.get_or_fetch(
                    lambda: self.skills_cache.get_team_ranking(
                        team, season_id, self.robotevents
                    )
                )
            except RequestFailed:
                logger.warning("team_skills_failed team=%s season=%s", team.number, season_id)
                data.skills_failed = True

        if not self.is_vrc:
            data.team_info_supported = False
            return
        try:
            data.team_info = await self._team_info.get_or_fetch(
                lambda: self.data_analysis.team_info(team.number)
            )
        except RequestFailed:
            logger.warning("team_info_failed team=%s", team.number)
            data.team_info_failed = True
