"""Discord bot for RoboStats.

Registers the slash commands, owns the upstream API clients and the shared
skills cache, and turns command invocations into embeds. Per-command state
for /team lives in a TeamSession owned by the message's TeamView.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

import discord
import httpx
from discord import Intents, app_commands
from discord.ext import commands

from robostats.api.base import RequestFailed, create_http_client
from robostats.api.robotevents import RobotEventsClient
from robostats.api.skills import SkillsCache
from robostats.api.vrc_data_analysis import DataAnalysisClient
from robostats.core.pages import TeamPage
from robostats.core.session import TeamSession
from robostats.discord.embeds import (
    build_ping_embed,
    build_prediction_embed,
    build_prediction_error_embed,
    build_wiki_embed,
    program_code,
)
from robostats.discord.views import TeamView
from robostats.discord.wiki import WIKI_ARTICLES, find_article
from robostats.models.robotevents import Program

if TYPE_CHECKING:
    from robostats.config import Settings

logger = logging.getLogger(__name__)

TEAM_NOT_FOUND_MESSAGE = "Failed to find a RobotEvents team with this number."
ROBOTEVENTS_UNAVAILABLE_MESSAGE = "Failed to connect to RobotEvents."
SEASONS_UNAVAILABLE_MESSAGE = "Failed to get season information about team from RobotEvents."

# Used for the /team program choices until (or unless) RobotEvents answers.
DEFAULT_PROGRAMS: tuple[Program, ...] = (
    Program(id=1, name="VEX V5 Robotics Competition", code="VRC"),
    Program(id=4, name="VEX U Robotics Competition", code="VEXU"),
    Program(id=41, name="VEX IQ Robotics Competition", code="VIQRC"),
    Program(id=46, name="TSA VEX V5 Robotics Competition", code="TSA VRC"),
    Program(id=47, name="TSA VEX IQ Robotics Competition", code="TSA VIQRC"),
    Program(id=57, name="VEX AI Robotics Competition", code="VAIRC"),
)

_PAGE_CHOICES = [
    app_commands.Choice(name="Overview", value=TeamPage.OVERVIEW.value),
    app_commands.Choice(name="Awards", value=TeamPage.AWARDS.value),
    app_commands.Choice(name="Stats", value=TeamPage.STATS.value),
    app_commands.Choice(name="Events", value=TeamPage.EVENTS.value),
]


class RoboStatsBot(commands.Bot):
    """The RoboStats Discord bot.

    API clients may be injected (tests do); otherwise both share one pooled
    httpx client that is closed with the bot.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        robotevents: RobotEventsClient | None = None,
        data_analysis: DataAnalysisClient | None = None,
        skills_cache: SkillsCache | None = None,
    ) -> None:
        super().__init__(
            command_prefix="!",
            intents=Intents.default(),
            description="RoboStats -- VEX Robotics Competition team lookups.",
        )
        self.settings = settings
        self._api_http: httpx.AsyncClient | None = None
        if robotevents is None or data_analysis is None:
            self._api_http = create_http_client()
        timeout = settings.robostats_request_timeout
        self.robotevents = robotevents or RobotEventsClient(
            settings.robotevents_token, http=self._api_http, timeout=timeout
        )
        self.data_analysis = data_analysis or DataAnalysisClient(
            http=self._api_http, timeout=timeout
        )
        self.skills_cache = skills_cache or SkillsCache(ttl=settings.robostats_skills_cache_ttl)
        self.programs: list[Program] = list(DEFAULT_PROGRAMS)
        self._setup_commands()

    def _setup_commands(self) -> None:
        """Register slash commands on the bot's command tree."""

        @self.tree.command(name="ping", description="Ping the bot")
        async def ping_command(interaction: discord.Interaction) -> None:
            await self._handle_ping(interaction)

        @self.tree.command(
            name="wiki",
            description="Link an article from the Purdue Sigbots Wiki",
        )
        @app_commands.describe(article="The article to link")
        @app_commands.choices(
            article=[
                app_commands.Choice(name=entry.title, value=key)
                for key, entry in WIKI_ARTICLES.items()
            ]
        )
        async def wiki_command(interaction: discord.Interaction, article: str) -> None:
            await self._handle_wiki(interaction, article)

        @self.tree.command(
            name="predict",
            description='Predict the outcome of a VRC match. Use "AVG" for an average team.',
        )
        @app_commands.describe(
            r1="Red alliance partner 1",
            r2="Red alliance partner 2",
            b1="Blue alliance partner 1",
            b2="Blue alliance partner 2",
        )
        async def predict_command(
            interaction: discord.Interaction,
            r1: str,
            r2: str,
            b1: str,
            b2: str,
        ) -> None:
            await self._handle_predict(interaction, r1, r2, b1, b2)

        self._register_team_command()

    def _register_team_command(self) -> None:
        """(Re)register /team with program choices built from ``self.programs``."""
        self.tree.remove_command("team")
        program_choices = [
            app_commands.Choice(name=program_code(program)[:100], value=program.id)
            for program in self.programs[:25]
        ]

        @self.tree.command(name="team", description="Displays information about a team")
        @app_commands.describe(
            number="Team number, e.g. 90241A",
            program="Only search this program",
            page="The page to open to",
        )
        @app_commands.choices(program=program_choices, page=_PAGE_CHOICES)
        async def team_command(
            interaction: discord.Interaction,
            number: str,
            program: int | None = None,
            page: str = TeamPage.OVERVIEW.value,
        ) -> None:
            await self._handle_team(interaction, number, program, page)

    async def setup_hook(self) -> None:
        """Fetch the program list for /team choices, then sync slash commands."""
        try:
            programs = await self.robotevents.list_programs()
        except RequestFailed:
            logger.warning("program_list_unavailable using_builtin=%d", len(self.programs))
        else:
            if programs:
                self.programs = programs
                self._register_team_command()
                logger.info("program_list_loaded count=%d", len(programs))

        if self.settings.discord_guild_id:
            guild = discord.Object(id=int(self.settings.discord_guild_id))
            self.tree.copy_global_to(guild=guild)
            await self.tree.sync(guild=guild)
            logger.info("discord_commands_synced guild_id=%s", self.settings.discord_guild_id)
        else:
            await self.tree.sync()
            logger.info("discord_commands_synced globally")

    async def on_ready(self) -> None:
        user = self.user
        logger.info("discord_bot_ready user=%s", user.name if user else "unknown")

    async def close(self) -> None:
        await super().close()
        if self._api_http is not None:
            await self._api_http.aclose()

    # --- Slash command handlers ---

    async def _handle_ping(self, interaction: discord.Interaction) -> None:
        latency = self.latency
        latency_ms = None if math.isnan(latency) or math.isinf(latency) else latency * 1000
        await interaction.response.send_message(embed=build_ping_embed(latency_ms))

    async def _handle_wiki(self, interaction: discord.Interaction, article: str) -> None:
        entry = find_article(article)
        if entry is None:
            await interaction.response.send_message(
                "Couldn't find the article you were looking for.", ephemeral=True
            )
            return
        await interaction.response.send_message(embed=build_wiki_embed(entry))

    async def _handle_predict(
        self,
        interaction: discord.Interaction,
        r1: str,
        r2: str,
        b1: str,
        b2: str,
    ) -> None:
        """Handle /predict. Alliance strength is optional garnish on the prediction."""
        teams = [t.strip() for t in (r1, r2, b1, b2)]
        for idx, number in enumerate(teams, 1):
            if not number:
                await interaction.response.send_message(
                    f"Invalid team number at argument {idx}.", ephemeral=True
                )
                return

        await interaction.response.defer()
        red = (teams[0], teams[1])
        blue = (teams[2], teams[3])
        try:
            prediction = await self.data_analysis.predict_match(red, blue)
        except RequestFailed:
            await interaction.followup.send(embed=build_prediction_error_embed())
            return

        try:
            strength = await self.data_analysis.ccwm_strength(red, blue)
        except RequestFailed:
            logger.info("alliance_strength_unavailable red=%s blue=%s", red, blue)
            strength = None

        await interaction.followup.send(embed=build_prediction_embed(prediction, strength))

    async def _handle_team(
        self,
        interaction: discord.Interaction,
        number: str,
        program: int | None = None,
        page: str = TeamPage.OVERVIEW.value,
    ) -> None:
        """Handle /team: resolve the team, load its seasons, and post the first page."""
        number = number.strip()
        if not number:
            await interaction.response.send_message("Invalid team number.", ephemeral=True)
            return
        try:
            start_page = TeamPage(page)
        except ValueError:
            await interaction.response.send_message("Invalid page.", ephemeral=True)
            return

        await interaction.response.defer()
        session = TeamSession(
            number,
            program,
            robotevents=self.robotevents,
            data_analysis=self.data_analysis,
            skills_cache=self.skills_cache,
        )

        try:
            team = await session.resolve_team()
        except RequestFailed:
            await interaction.followup.send(ROBOTEVENTS_UNAVAILABLE_MESSAGE)
            return
        if team is None:
            await interaction.followup.send(TEAM_NOT_FOUND_MESSAGE)
            return

        try:
            await session.initialize_seasons()
        except RequestFailed:
            await interaction.followup.send(SEASONS_UNAVAILABLE_MESSAGE)
            return

        session.change_page(start_page)
        view = TeamView(
            session,
            owner_id=interaction.user.id,
            timeout=self.settings.robostats_view_timeout,
        )
        embed = await view.render()
        view.message = await interaction.followup.send(embed=embed, view=view, wait=True)
        logger.info("team_command number=%s page=%s", team.number, start_page.value)


async def run_bot(settings: Settings) -> None:
    """Start the bot and block until it disconnects."""
    async with RoboStatsBot(settings) as bot:
        await bot.start(settings.discord_bot_token)
