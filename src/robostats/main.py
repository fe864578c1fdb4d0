"""Process entry point: load settings, configure logging, run the bot."""

import asyncio
import contextlib
import logging

from robostats.config import Settings
from robostats.discord.bot import run_bot

logger = logging.getLogger(__name__)


def main(settings: Settings | None = None) -> None:
    """Run RoboStats until interrupted. Missing tokens fail before connecting."""
    settings = settings or Settings()

    logging.basicConfig(
        level=getattr(logging, settings.robostats_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # discord.py is chatty at INFO; keep our own logs readable.
    logging.getLogger("discord").setLevel(logging.WARNING)

    logger.info("robostats_starting guild_id=%s", settings.discord_guild_id or "global")
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(run_bot(settings))
    logger.info("robostats_stopped")


if __name__ == "__main__":
    main()
