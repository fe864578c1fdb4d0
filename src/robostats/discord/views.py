"""Discord UI views -- select menus for navigating a /team message.

TeamView: page selector plus (when the team has active seasons and the page
isn't the overview) a season selector. Both menus are rebuilt on every
render so the active option stays highlighted after the message is edited.
"""

from __future__ import annotations

import contextlib
import logging
from typing import TYPE_CHECKING

import discord

from robostats.config import DEFAULT_VIEW_TIMEOUT
from robostats.core.pages import (
    PAGE_SELECT_ID,
    SEASON_SELECT_ID,
    PageSelection,
    parse_selection,
)
from robostats.discord.embeds import (
    build_page_options,
    build_season_options,
    build_team_page_embed,
)

if TYPE_CHECKING:
    from robostats.core.session import TeamSession

logger = logging.getLogger(__name__)


class TeamSelect(discord.ui.Select["TeamView"]):
    """A select menu that forwards its choice to the owning TeamView."""

    async def callback(self, interaction: discord.Interaction) -> None:
        if self.view is None:
            return
        await self.view.handle_selection(interaction, self.custom_id, list(self.values))


class TeamView(discord.ui.View):
    """Page/season navigation for one /team session."""

    def __init__(
        self,
        session: TeamSession,
        *,
        owner_id: int,
        timeout: float = DEFAULT_VIEW_TIMEOUT,
    ) -> None:
        super().__init__(timeout=timeout)
        self.session = session
        self.owner_id = owner_id
        self.message: discord.Message | None = None
        self.refresh_components()

    def refresh_components(self) -> None:
        """Rebuild the select menus from the session's current state."""
        self.clear_items()
        self.add_item(
            TeamSelect(
                custom_id=PAGE_SELECT_ID,
                placeholder="Select a page",
                options=build_page_options(self.session.current_page),
                row=0,
            )
        )
        if self.session.show_season_selector:
            current = self.session.current_season
            self.add_item(
                TeamSelect(
                    custom_id=SEASON_SELECT_ID,
                    placeholder="Select a season",
                    options=build_season_options(
                        self.session.active_seasons,
                        current.id if current else None,
                    ),
                    row=1,
                )
            )

    async def render(self) -> discord.Embed:
        """Load the current page's data and rebuild the menus to match."""
        data = await self.session.load_page()
        self.refresh_components()
        return build_team_page_embed(data)

    async def interaction_check(self, interaction: discord.Interaction) -> bool:
        if interaction.user.id != self.owner_id:
            await interaction.response.send_message(
                "Only the person who ran this command can use these menus.",
                ephemeral=True,
            )
            return False
        return True

    async def handle_selection(
        self,
        interaction: discord.Interaction,
        custom_id: str,
        values: list[str],
    ) -> None:
        try:
            selection = parse_selection(custom_id, values)
            if isinstance(selection, PageSelection):
                self.session.change_page(selection.page)
            else:
                self.session.change_season(selection.season_id)
        except ValueError:
            logger.warning(
                "team_view_unhandled_selection custom_id=%s values=%s", custom_id, values
            )
            await interaction.response.send_message("Unhandled interaction.", ephemeral=True)
            return

        await interaction.response.defer()
        embed = await self.render()
        await interaction.edit_original_response(embed=embed, view=self)

    async def on_timeout(self) -> None:
        """Grey out the menus once the session expires."""
        for item in self.children:
            if isinstance(item, discord.ui.Select):
                item.disabled = True
        if self.message is not None:
            with contextlib.suppress(discord.HTTPException):
                await self.message.edit(view=self)
        logger.info("team_view_expired team=%s", self.session.team_number)

    async def on_error(
        self,
        interaction: discord.Interaction,
        error: Exception,
        item: discord.ui.Item,  # noqa: ARG002
    ) -> None:
        logger.error(
            "team_view_error team=%s", self.session.team_number, exc_info=error
        )
        msg = "Something went wrong updating this message. Try running /team again."
        with contextlib.suppress(discord.HTTPException):
            if interaction.response.is_done():
                await interaction.followup.send(msg, ephemeral=True)
            else:
                await interaction.response.send_message(msg, ephemeral=True)
