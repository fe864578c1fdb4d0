"""Tests for application configuration."""

import pytest
from pydantic import ValidationError

from robostats.config import DEFAULT_SKILLS_CACHE_TTL, DEFAULT_VIEW_TIMEOUT, Settings


@pytest.fixture(autouse=True)
def _clear_token_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DISCORD_BOT_TOKEN", raising=False)
    monkeypatch.delenv("ROBOTEVENTS_TOKEN", raising=False)


class TestRequiredSecrets:
    def test_missing_tokens_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None)

    def test_missing_robotevents_token_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, discord_bot_token="abc")

    def test_blank_token_rejected(self) -> None:
        with pytest.raises(ValidationError, match="ROBOTEVENTS_TOKEN"):
            Settings(_env_file=None, discord_bot_token="abc", robotevents_token="   ")

    def test_tokens_read_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DISCORD_BOT_TOKEN", "from-env-discord")
        monkeypatch.setenv("ROBOTEVENTS_TOKEN", "from-env-robotevents")
        settings = Settings(_env_file=None)
        assert settings.discord_bot_token == "from-env-discord"
        assert settings.robotevents_token == "from-env-robotevents"


class TestDefaults:
    def test_defaults(self, settings: Settings) -> None:
        assert settings.robostats_request_timeout == 10.0
        assert settings.robostats_skills_cache_ttl == DEFAULT_SKILLS_CACHE_TTL == 43200
        assert settings.robostats_view_timeout == DEFAULT_VIEW_TIMEOUT == 180
        assert settings.discord_guild_id == ""
        assert settings.robostats_log_level == "INFO"
