"""Pages of the /team message and the select-menu values that switch between them.

Discord hands back select-menu choices as (custom_id, values) strings.
``parse_selection`` turns them into typed selections at the interaction
boundary so nothing past it has to look at raw option ids.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

PAGE_SELECT_ID = "team_page_select"
SEASON_SELECT_ID = "team_season_select"

_PAGE_OPTION_PREFIX = "option_team_"
_SEASON_OPTION_PREFIX = "option_season_"


class TeamPage(str, Enum):
    OVERVIEW = "overview"
    AWARDS = "awards"
    STATS = "stats"
    EVENTS = "events"

    @property
    def option_id(self) -> str:
        return f"{_PAGE_OPTION_PREFIX}{self.value}"


def season_option_id(season_id: int) -> str:
    return f"{_SEASON_OPTION_PREFIX}{season_id}"


class UnknownSelection(ValueError):
    """A component interaction this bot does not know how to handle."""


@dataclass(frozen=True)
class PageSelection:
    page: TeamPage


@dataclass(frozen=True)
class SeasonSelection:
    season_id: int


Selection = PageSelection | SeasonSelection


def parse_selection(custom_id: str, values: list[str]) -> Selection:
    """Decode one select-menu interaction.

    Raises UnknownSelection for unrecognized component ids, empty value lists,
    or option values that don't match the component they came from.
    """
    if not values:
        raise UnknownSelection(f"{custom_id}: no value selected")
    value = values[0]

    if custom_id == PAGE_SELECT_ID and value.startswith(_PAGE_OPTION_PREFIX):
        try:
            return PageSelection(TeamPage(value.removeprefix(_PAGE_OPTION_PREFIX)))
        except ValueError as exc:
            raise UnknownSelection(f"{custom_id}: unknown page {value!r}") from exc

    if custom_id == SEASON_SELECT_ID and value.startswith(_SEASON_OPTION_PREFIX):
        raw_id = value.removeprefix(_SEASON_OPTION_PREFIX)
        if not raw_id.isdigit():
            raise UnknownSelection(f"{custom_id}: bad season id {raw_id!r}")
        return SeasonSelection(int(raw_id))

    raise UnknownSelection(f"{custom_id}: unexpected value {value!r}")
