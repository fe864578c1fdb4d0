"""Process-wide cache of RobotEvents skills leaderboards.

Upstream only serves whole season/grade leaderboards, so entries are keyed by
(season id, grade) and shared by every team in that bracket. A single lock
guards the whole cache, including while a fetch is in flight.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from robostats.config import DEFAULT_SKILLS_CACHE_TTL

if TYPE_CHECKING:
    from robostats.api.robotevents import RobotEventsClient
    from robostats.models.robotevents import Grade, SkillsRanking, Team

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Entry:
    rankings: list[SkillsRanking]
    fetched_at: float


class SkillsCache:
    """Season/grade skills leaderboards with a fixed time-to-live."""

    def __init__(
        self,
        ttl: float = DEFAULT_SKILLS_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[tuple[int, Grade], _Entry] = {}
        self._lock = asyncio.Lock()

    async def get_team_ranking(
        self,
        team: Team,
        season_id: int,
        client: RobotEventsClient,
    ) -> SkillsRanking | None:
        """Return ``team``'s leaderboard row for the season, or None if it has no runs.

        Raises RequestFailed when the leaderboard has to be fetched and the
        fetch fails. Nothing is cached in that case.
        """
        key = (season_id, team.grade)
        async with self._lock:
            entry = self._entries.get(key)
            if entry is None or self._clock() - entry.fetched_at >= self.ttl:
                rankings = await client.season_skills(season_id, team.grade)
                entry = _Entry(rankings=rankings, fetched_at=self._clock())
                self._entries[key] = entry
                logger.info(
                    "skills_cache_refreshed season=%s grade=%s rows=%d",
                    season_id,
                    team.grade,
                    len(rankings),
                )

        for ranking in entry.rankings:
            if ranking.team.id == team.id:
                return ranking
        return None
