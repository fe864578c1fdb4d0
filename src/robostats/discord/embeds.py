"""Discord embed and select-option builders for RoboStats.

Every builder is a pure function: it takes already-fetched data and returns
a styled ``discord.Embed`` (or select options) ready to send. No network
access happens here.
"""

from __future__ import annotations

from collections.abc import Sequence
from types import MappingProxyType
from typing import TYPE_CHECKING

import discord

from robostats.core.pages import TeamPage, season_option_id

if TYPE_CHECKING:
    from robostats.core.session import TeamPageData
    from robostats.discord.wiki import WikiArticle
    from robostats.models.robotevents import Award, Event, Program, Season, Team
    from robostats.models.vrc_data_analysis import AllianceStrength, Prediction

ROBOTEVENTS_URL = "https://www.robotevents.com"
VRC_DATA_ANALYSIS_URL = "https://www.vrc-data-analysis.com/"

COLOR_RED = discord.Colour.from_rgb(210, 38, 48)  # VRC / VEXU, red alliance
COLOR_BLUE = discord.Colour.from_rgb(0, 119, 200)  # VIQRC, blue alliance
COLOR_GRAY = discord.Colour.from_rgb(91, 91, 91)  # VAIRC
COLOR_ERROR = discord.Colour.from_rgb(231, 76, 60)

PROGRAM_COLORS: MappingProxyType[str, discord.Colour] = MappingProxyType(
    {
        "VRC": COLOR_RED,
        "VEXU": COLOR_RED,
        "TSA VRC": COLOR_RED,
        "VIQRC": COLOR_BLUE,
        "TSA VIQRC": COLOR_BLUE,
        "VAIRC": COLOR_GRAY,
    }
)

# Discord limits
_MAX_FIELDS = 25
_MAX_FIELD_NAME = 256
_MAX_FIELD_VALUE = 1024
_MAX_DESCRIPTION = 4096
_MAX_SELECT_OPTIONS = 25

PREDICTION_BAR_LENGTH = 17

_PAGE_OPTIONS: tuple[tuple[TeamPage, str, str, str], ...] = (
    (TeamPage.OVERVIEW, "Team Overview", "\U0001f5ff", "General information about the team"),
    (TeamPage.AWARDS, "Awards", "\U0001f3c6", "Awards from events throughout the season"),
    (TeamPage.STATS, "Stats", "\U0001f4ca", "Team statistics & rankings"),
    (TeamPage.EVENTS, "Events", "\U0001f5d3\ufe0f", "Event attendance from this team"),
)


# ---------------------------------------------------------------------------
# Team identity helpers
# ---------------------------------------------------------------------------


def program_code(program: Program) -> str:
    """Short program code. RobotEvents sometimes omits it; those are VRC."""
    return program.code or "VRC"


def program_color(code: str | None) -> discord.Colour:
    """Accent color for a program code, or the default color if unmapped."""
    return PROGRAM_COLORS.get(code or "VRC", discord.Colour.default())


def team_title(team: Team) -> str:
    return f"{team.number} ({program_code(team.program)}, {team.grade})"


def team_url(team: Team) -> str:
    return f"{ROBOTEVENTS_URL}/teams/{program_code(team.program)}/{team.number}"


def event_url(event: Event) -> str:
    return f"{ROBOTEVENTS_URL}/{event.sku}.html"


def _truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 1] + "…"


# ---------------------------------------------------------------------------
# /team pages
# ---------------------------------------------------------------------------


def build_team_page_embed(data: TeamPageData) -> discord.Embed:
    """Build the embed for whichever page ``data`` was loaded for."""
    team = data.team
    embed = discord.Embed(
        title=team_title(team),
        url=team_url(team),
        color=program_color(team.program.code),
    )

    if data.page is TeamPage.AWARDS:
        _add_awards(embed, data)
    elif data.page is TeamPage.EVENTS:
        _add_events(embed, data)
    elif data.page is TeamPage.STATS:
        _add_stats(embed, data)
    else:
        _add_overview(embed, team)

    if data.page is not TeamPage.OVERVIEW and data.season is not None:
        embed.set_footer(text=data.season.name)
    else:
        embed.set_footer(text="RoboStats")
    return embed


def _add_overview(embed: discord.Embed, team: Team) -> None:
    embed.description = team.team_name or None
    embed.add_field(name="Organization", value=team.organization or "Unknown", inline=True)
    embed.add_field(name="Location", value=team.location.display(), inline=True)
    embed.add_field(name="Robot Name", value=team.robot_name or "Unnamed", inline=True)
    embed.add_field(name="Registered", value="Yes" if team.registered else "No", inline=True)


def group_awards_by_event(awards: Sequence[Award]) -> list[tuple[str, list[Award]]]:
    """Group awards under their event, keeping upstream event order."""
    groups: dict[int, tuple[str, list[Award]]] = {}
    for award in awards:
        groups.setdefault(award.event.id, (award.event.name, []))[1].append(award)
    return [(name, sorted(items, key=lambda a: a.order)) for name, items in groups.values()]


def _season_suffix(data: TeamPageData) -> str:
    # Without a season the lists cover every season the team competed in.
    return " this season" if data.season is not None else ""


def _add_awards(embed: discord.Embed, data: TeamPageData) -> None:
    embed.set_author(name="Awards")
    if data.awards_failed:
        embed.description = "Failed to fetch awards from RobotEvents."
        return
    if not data.awards:
        embed.description = f"This team has not won any awards{_season_suffix(data)}."
        return

    groups = group_awards_by_event(data.awards)
    embed.description = f"{len(data.awards)} award(s) across {len(groups)} event(s)."
    for name, awards in groups[:_MAX_FIELDS]:
        lines = "\n".join(f"\U0001f3c6 {award.title}" for award in awards)
        embed.add_field(
            name=_truncate(name, _MAX_FIELD_NAME),
            value=_truncate(lines, _MAX_FIELD_VALUE),
            inline=False,
        )


def _add_events(embed: discord.Embed, data: TeamPageData) -> None:
    embed.set_author(name="Events")
    if data.events_failed:
        embed.description = "Failed to fetch events from RobotEvents."
        return
    if not data.events:
        embed.description = f"This team has not attended any events{_season_suffix(data)}."
        return

    lines: list[str] = []
    length = 0
    for i, event in enumerate(data.events):
        line = f"[{event.name}]({event_url(event)})"
        remaining = len(data.events) - i
        # Leave room for the "...and N more" trailer.
        if length + len(line) + 1 > _MAX_DESCRIPTION - 32:
            lines.append(f"...and {remaining} more")
            break
        lines.append(line)
        length += len(line) + 1
    embed.description = "\n".join(lines)


def _add_stats(embed: discord.Embed, data: TeamPageData) -> None:
    embed.set_author(name="Stats")

    if data.season is None:
        embed.add_field(name="Skills", value="No season selected.", inline=False)
    elif data.skills_failed:
        embed.add_field(
            name="Skills", value="Failed to fetch skills data from RobotEvents.", inline=False
        )
    elif data.skills_ranking is None:
        embed.add_field(name="Skills", value="No skills runs this season.", inline=False)
    else:
        scores = data.skills_ranking.scores
        embed.add_field(name="Skills Ranking", value=f"#{data.skills_ranking.rank}", inline=True)
        embed.add_field(name="Skills Score", value=str(scores.score), inline=True)
        embed.add_field(
            name="Driver / Programming",
            value=f"{scores.driver} / {scores.programming}",
            inline=True,
        )

    if not data.team_info_supported:
        embed.add_field(
            name="TrueSkill",
            value="TrueSkill and match statistics are only available for VRC teams.",
            inline=False,
        )
    elif data.team_info_failed or data.team_info is None:
        embed.add_field(
            name="TrueSkill",
            value="Failed to fetch match statistics from vrc-data-analysis.",
            inline=False,
        )
    else:
        info = data.team_info
        embed.add_field(
            name="TrueSkill",
            value=f"{info.trueskill:.1f} (#{info.trueskill_ranking})",
            inline=True,
        )
        embed.add_field(
            name="Record",
            value=f"{info.total_wins}-{info.total_losses}-{info.total_ties}",
            inline=True,
        )
        embed.add_field(name="AWP / Match", value=f"{info.awp_per_match:.2f}", inline=True)
        embed.add_field(name="OPR", value=f"{info.opr:.1f}", inline=True)
        embed.add_field(name="DPR", value=f"{info.dpr:.1f}", inline=True)
        embed.add_field(name="CCWM", value=f"{info.ccwm:.1f}", inline=True)


# ---------------------------------------------------------------------------
# /team select menus
# ---------------------------------------------------------------------------


def build_page_options(current_page: TeamPage) -> list[discord.SelectOption]:
    return [
        discord.SelectOption(
            label=label,
            value=page.option_id,
            emoji=emoji,
            description=description,
            default=page is current_page,
        )
        for page, label, emoji, description in _PAGE_OPTIONS
    ]


def build_season_options(
    seasons: Sequence[Season],
    current_season_id: int | None,
) -> list[discord.SelectOption]:
    """One option per active season, most recent first, capped at Discord's limit."""
    return [
        discord.SelectOption(
            label=_truncate(season.name, 100),
            value=season_option_id(season.id),
            description=f"{season.years_start}-{season.years_end}",
            default=season.id == current_season_id,
        )
        for season in seasons[:_MAX_SELECT_OPTIONS]
    ]


# ---------------------------------------------------------------------------
# Other commands
# ---------------------------------------------------------------------------


def build_ping_embed(latency_ms: float | None = None) -> discord.Embed:
    embed = discord.Embed(title="Pong!")
    if latency_ms is not None:
        embed.description = f"Gateway latency: {latency_ms:.0f} ms"
    return embed


def build_wiki_embed(article: WikiArticle) -> discord.Embed:
    return discord.Embed(title=article.title, url=article.url, description="Here you go!")


def progress_bar(length: int, percent: float) -> str:
    """Red/blue bar where the red share is ``percent`` of ``length`` cells."""
    percent = min(max(percent, 0.0), 100.0)
    red = round(length * percent / 100.0)
    return "\U0001f7e5" * red + "\U0001f7e6" * (length - red)


def build_prediction_embed(
    prediction: Prediction,
    strength: AllianceStrength | None = None,
) -> discord.Embed:
    """Build a match prediction embed, with alliance strength if it loaded."""
    embed = discord.Embed(
        title=(
            f"{prediction.red1} {prediction.red2} (\U0001f534) vs "
            f"{prediction.blue1} {prediction.blue2} (\U0001f535)"
        ),
        url=VRC_DATA_ANALYSIS_URL,
        description=(
            f"{prediction.prediction_msg}\n\n"
            f"{progress_bar(PREDICTION_BAR_LENGTH, prediction.red_win_probability)}"
        ),
        color=COLOR_RED if prediction.red_win_probability > 50.0 else COLOR_BLUE,
    )
    embed.set_author(name="Match Prediction Results")
    if strength is not None:
        embed.add_field(name="Red Strength", value=f"{strength.red_strength:.2f}", inline=True)
        embed.add_field(name="Blue Strength", value=f"{strength.blue_strength:.2f}", inline=True)
    embed.set_footer(text="Match predictions provided by vrc-data-analysis.com")
    return embed


def build_prediction_error_embed() -> discord.Embed:
    return discord.Embed(
        title="Failed to fetch match prediction data from vrc-data-analysis.",
        color=COLOR_ERROR,
    )
