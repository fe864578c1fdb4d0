"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from factories import make_season, make_team, make_team_info

from robostats.api.robotevents import RobotEventsClient
from robostats.api.vrc_data_analysis import DataAnalysisClient
from robostats.config import Settings
from robostats.models.robotevents import Season, Team


@pytest.fixture
def settings() -> Settings:
    """Test settings that never read a real .env file."""
    return Settings(
        _env_file=None,
        discord_bot_token="test-discord-token-not-real",
        robotevents_token="test-robotevents-token-not-real",
    )


@pytest.fixture
def team() -> Team:
    return make_team()


@pytest.fixture
def seasons() -> list[Season]:
    return [
        make_season(181, "VRC 2023-2024: Over Under"),
        make_season(173, "VRC 2022-2023: Spin Up"),
    ]


@pytest.fixture
def robotevents(team: Team, seasons: list[Season]) -> AsyncMock:
    """A RobotEvents client mock that finds ``team`` and its ``seasons``."""
    client = AsyncMock(spec=RobotEventsClient)
    client.find_teams.return_value = [team]
    client.team_active_seasons.return_value = seasons
    client.team_awards.return_value = []
    client.team_events.return_value = []
    client.season_skills.return_value = []
    client.list_programs.return_value = []
    return client


@pytest.fixture
def data_analysis() -> AsyncMock:
    client = AsyncMock(spec=DataAnalysisClient)
    client.team_info.return_value = make_team_info()
    return client
