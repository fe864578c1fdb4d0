"""RobotEvents API client.

v2 (``/api/v2``) requires a bearer token and wraps lists in a paginated
``{meta, data}`` envelope. The legacy v1 skills leaderboard is public and
returns a bare array.
"""

from __future__ import annotations

from typing import Any, TypeVar
from urllib.parse import quote

import httpx

from robostats.api.base import DEFAULT_TIMEOUT, create_http_client, get_json, parse
from robostats.models.robotevents import (
    Award,
    Event,
    Grade,
    PaginatedResponse,
    Program,
    Season,
    Skill,
    SkillsRanking,
    Team,
)

API_BASE = "https://www.robotevents.com/api/v2"
API_V1_BASE = "https://www.robotevents.com/api"

T = TypeVar("T")


class RobotEventsClient:
    """Thin async wrapper over the RobotEvents REST API."""

    def __init__(
        self,
        bearer_token: str,
        http: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.bearer_token = bearer_token
        self.http = http or create_http_client()
        self.timeout = timeout

    async def _get_page(
        self,
        endpoint: str,
        model: type[T],
        params: dict[str, Any] | None = None,
        per_page: int | None = None,
    ) -> PaginatedResponse[T]:
        query = {k: v for k, v in (params or {}).items() if v is not None}
        if per_page is not None:
            query["per_page"] = per_page
        payload = await get_json(
            self.http,
            f"{API_BASE}{endpoint}",
            params=query,
            headers={"Authorization": f"Bearer {self.bearer_token}"},
            timeout=self.timeout,
        )
        return parse(PaginatedResponse[model], payload, source=f"robotevents {endpoint}")

    async def find_teams(
        self,
        number: str,
        program_id: int | None = None,
        *,
        per_page: int | None = None,
    ) -> list[Team]:
        """Teams registered under ``number``, optionally within one program."""
        page = await self._get_page(
            "/teams",
            Team,
            {"number[]": number, "program[]": program_id},
            per_page,
        )
        return page.data

    async def list_seasons(
        self,
        *,
        team_id: int | None = None,
        program_id: int | None = None,
        per_page: int | None = None,
    ) -> list[Season]:
        page = await self._get_page(
            "/seasons",
            Season,
            {"team[]": team_id, "program[]": program_id},
            per_page,
        )
        return page.data

    async def team_active_seasons(self, team: Team) -> list[Season]:
        """Seasons ``team`` competed in, most recent first."""
        return await self.list_seasons(team_id=team.id)

    async def list_programs(self) -> list[Program]:
        page = await self._get_page("/programs", Program)
        return page.data

    async def team_awards(
        self,
        team: Team,
        season_id: int | None = None,
        *,
        per_page: int | None = None,
    ) -> list[Award]:
        page = await self._get_page(
            f"/teams/{team.id}/awards", Award, {"season[]": season_id}, per_page
        )
        return page.data

    async def team_events(
        self,
        team: Team,
        season_id: int | None = None,
        *,
        per_page: int | None = None,
    ) -> list[Event]:
        page = await self._get_page(
            f"/teams/{team.id}/events", Event, {"season[]": season_id}, per_page
        )
        return page.data

    async def team_skills(
        self,
        team: Team,
        season_id: int | None = None,
        *,
        per_page: int | None = None,
    ) -> list[Skill]:
        page = await self._get_page(
            f"/teams/{team.id}/skills", Skill, {"season[]": season_id}, per_page
        )
        return page.data

    async def season_skills(self, season_id: int, grade: Grade) -> list[SkillsRanking]:
        """Whole-grade skills leaderboard for a season (v1, unauthenticated)."""
        url = (
            f"{API_V1_BASE}/seasons/{season_id}/skills"
            f"?grade_level={quote(str(grade))}&post_season=0"
        )
        payload = await get_json(self.http, url, timeout=self.timeout)
        return parse(list[SkillsRanking], payload, source="robotevents v1 skills")
