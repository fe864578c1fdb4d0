"""vrc-data-analysis.com client. Public API, no authentication."""

from __future__ import annotations

from typing import TypeVar
from urllib.parse import quote

import httpx

from robostats.api.base import DEFAULT_TIMEOUT, create_http_client, get_json, parse
from robostats.models.vrc_data_analysis import AllianceStrength, Prediction, TeamInfo

API_BASE = "https://vrc-data-analysis.com/v1"

Alliance = tuple[str, str]
T = TypeVar("T")


def _alliance_path(red: Alliance, blue: Alliance) -> str:
    return "/".join(quote(number, safe="") for number in (*red, *blue))


class DataAnalysisClient:
    """Async wrapper over the vrc-data-analysis REST API."""

    def __init__(
        self,
        http: httpx.AsyncClient | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self.http = http or create_http_client()
        self.timeout = timeout

    async def _get(self, endpoint: str, model: type[T]) -> T:
        payload = await get_json(self.http, f"{API_BASE}{endpoint}", timeout=self.timeout)
        return parse(model, payload, source=f"vrc-data-analysis {endpoint}")

    async def team_info(self, team_number: str) -> TeamInfo:
        """TrueSkill rating and match statistics for a VRC team."""
        return await self._get(f"/team/{quote(team_number, safe='')}", TeamInfo)

    async def predict_match(self, red: Alliance, blue: Alliance) -> Prediction:
        """Win probability for a red vs. blue match. "AVG" stands in for an average team."""
        return await self._get(f"/predict/{_alliance_path(red, blue)}", Prediction)

    async def ccwm_strength(self, red: Alliance, blue: Alliance) -> AllianceStrength:
        return await self._get(f"/ccwmstrength/{_alliance_path(red, blue)}", AllianceStrength)
