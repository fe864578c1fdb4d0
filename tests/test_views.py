"""Tests for the /team navigation view.

Views need a running event loop, so every test here is async.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import discord
import pytest

from robostats.api.skills import SkillsCache
from robostats.core.pages import PAGE_SELECT_ID, SEASON_SELECT_ID, TeamPage
from robostats.core.session import TeamSession
from robostats.discord.views import TeamSelect, TeamView

OWNER_ID = 12345


def make_interaction(user_id: int = OWNER_ID) -> AsyncMock:
    interaction = AsyncMock(spec=discord.Interaction)
    interaction.response = AsyncMock()
    interaction.response.is_done = MagicMock(return_value=False)
    interaction.followup = AsyncMock()
    interaction.user = MagicMock(spec=discord.Member)
    interaction.user.id = user_id
    return interaction


def select_ids(view: TeamView) -> list[str]:
    return [item.custom_id for item in view.children if isinstance(item, TeamSelect)]


@pytest.fixture
async def session(robotevents: AsyncMock, data_analysis: AsyncMock) -> TeamSession:
    session = TeamSession(
        "90241A",
        robotevents=robotevents,
        data_analysis=data_analysis,
        skills_cache=SkillsCache(),
    )
    await session.resolve_team()
    await session.initialize_seasons()
    return session


class TestComponents:
    async def test_overview_has_page_select_only(self, session: TeamSession) -> None:
        view = TeamView(session, owner_id=OWNER_ID)
        assert select_ids(view) == [PAGE_SELECT_ID]

    async def test_other_pages_add_season_select(self, session: TeamSession) -> None:
        session.change_page(TeamPage.AWARDS)
        view = TeamView(session, owner_id=OWNER_ID)
        assert select_ids(view) == [PAGE_SELECT_ID, SEASON_SELECT_ID]

        season_select = view.children[1]
        assert isinstance(season_select, TeamSelect)
        assert [o.default for o in season_select.options] == [True, False]

    async def test_no_season_select_without_seasons(
        self, robotevents: AsyncMock, data_analysis: AsyncMock
    ) -> None:
        robotevents.team_active_seasons.return_value = []
        session = TeamSession(
            "90241A",
            robotevents=robotevents,
            data_analysis=data_analysis,
            skills_cache=SkillsCache(),
        )
        await session.resolve_team()
        await session.initialize_seasons()
        session.change_page(TeamPage.EVENTS)
        view = TeamView(session, owner_id=OWNER_ID)
        assert select_ids(view) == [PAGE_SELECT_ID]

    async def test_render_rebuilds_components(self, session: TeamSession) -> None:
        view = TeamView(session, owner_id=OWNER_ID)
        session.change_page(TeamPage.STATS)
        embed = await view.render()
        assert embed.author.name == "Stats"
        assert select_ids(view) == [PAGE_SELECT_ID, SEASON_SELECT_ID]


class TestHandleSelection:
    async def test_page_change_edits_message(self, session: TeamSession) -> None:
        view = TeamView(session, owner_id=OWNER_ID)
        interaction = make_interaction()

        await view.handle_selection(interaction, PAGE_SELECT_ID, ["option_team_awards"])

        assert session.current_page is TeamPage.AWARDS
        interaction.response.defer.assert_awaited_once()
        interaction.edit_original_response.assert_awaited_once()
        kwargs = interaction.edit_original_response.call_args.kwargs
        assert kwargs["embed"].author.name == "Awards"
        assert kwargs["view"] is view
        assert select_ids(view) == [PAGE_SELECT_ID, SEASON_SELECT_ID]

    async def test_season_change_refetches(
        self, session: TeamSession, robotevents: AsyncMock
    ) -> None:
        session.change_page(TeamPage.EVENTS)
        view = TeamView(session, owner_id=OWNER_ID)
        await view.render()

        interaction = make_interaction()
        await view.handle_selection(interaction, SEASON_SELECT_ID, ["option_season_173"])

        assert session.current_season is not None and session.current_season.id == 173
        assert robotevents.team_events.await_count == 2
        kwargs = interaction.edit_original_response.call_args.kwargs
        assert kwargs["embed"].footer.text == "VRC 2022-2023: Spin Up"

    @pytest.mark.parametrize(
        ("custom_id", "values"),
        [
            ("team_page_response", ["option_team_awards"]),
            (PAGE_SELECT_ID, ["option_team_nope"]),
            (SEASON_SELECT_ID, ["option_season_999"]),
        ],
    )
    async def test_unhandled(
        self, session: TeamSession, custom_id: str, values: list[str]
    ) -> None:
        view = TeamView(session, owner_id=OWNER_ID)
        interaction = make_interaction()

        await view.handle_selection(interaction, custom_id, values)

        interaction.response.send_message.assert_awaited_once_with(
            "Unhandled interaction.", ephemeral=True
        )
        interaction.edit_original_response.assert_not_awaited()
        assert session.current_page is TeamPage.OVERVIEW


class TestOwnership:
    async def test_owner_allowed(self, session: TeamSession) -> None:
        view = TeamView(session, owner_id=OWNER_ID)
        assert await view.interaction_check(make_interaction()) is True

    async def test_other_user_rejected(self, session: TeamSession) -> None:
        view = TeamView(session, owner_id=OWNER_ID)
        interaction = make_interaction(user_id=999)
        assert await view.interaction_check(interaction) is False
        interaction.response.send_message.assert_awaited_once()
        assert interaction.response.send_message.call_args.kwargs["ephemeral"] is True


class TestLifecycle:
    async def test_timeout_disables_menus(self, session: TeamSession) -> None:
        session.change_page(TeamPage.AWARDS)
        view = TeamView(session, owner_id=OWNER_ID)
        view.message = AsyncMock(spec=discord.Message)

        await view.on_timeout()

        assert all(item.disabled for item in view.children if isinstance(item, TeamSelect))
        view.message.edit.assert_awaited_once_with(view=view)

    async def test_timeout_without_message(self, session: TeamSession) -> None:
        view = TeamView(session, owner_id=OWNER_ID)
        await view.on_timeout()
        assert all(item.disabled for item in view.children if isinstance(item, TeamSelect))

    async def test_error_after_defer_uses_followup(self, session: TeamSession) -> None:
        view = TeamView(session, owner_id=OWNER_ID)
        interaction = make_interaction()
        interaction.response.is_done = MagicMock(return_value=True)

        await view.on_error(interaction, RuntimeError("boom"), view.children[0])

        interaction.followup.send.assert_awaited_once()
        assert interaction.followup.send.call_args.kwargs["ephemeral"] is True
        interaction.response.send_message.assert_not_awaited()
