"""Application settings via pydantic-settings. Loads from environment and .env file."""

from __future__ import annotations

from pydantic import model_validator
from pydantic_settings import BaseSettings

# RobotEvents skills leaderboards are refreshed at most twice a day.
DEFAULT_SKILLS_CACHE_TTL = 12 * 60 * 60

# Select menus on a /team message stop responding after this many idle seconds.
DEFAULT_VIEW_TIMEOUT = 3 * 60


class Settings(BaseSettings):
    """RoboStats configuration.

    Both tokens are required; every other value has a default and can be
    overridden via environment variables or a .env file.
    """

    # Secrets
    discord_bot_token: str
    robotevents_token: str

    # Discord
    discord_guild_id: str = ""  # Sync commands to one guild instead of globally

    # Upstream APIs
    robostats_request_timeout: float = 10.0
    robostats_skills_cache_ttl: int = DEFAULT_SKILLS_CACHE_TTL

    # Interactions
    robostats_view_timeout: int = DEFAULT_VIEW_TIMEOUT

    # Logging
    robostats_log_level: str = "INFO"

    model_config = {"env_prefix": "", "env_file": ".env", "extra": "ignore"}

    @model_validator(mode="after")
    def _require_tokens(self) -> Settings:
        """Reject blank secrets; the bot cannot do anything without them."""
        missing = [
            name.upper()
            for name in ("discord_bot_token", "robotevents_token")
            if not getattr(self, name).strip()
        ]
        if missing:
            msg = f"{', '.join(missing)} must be set (environment or .env file)."
            raise ValueError(msg)
        return self
