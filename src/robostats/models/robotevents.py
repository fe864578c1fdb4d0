"""RobotEvents records: teams, seasons, programs, awards, events, and skills.

v2 endpoints return snake_case JSON wrapped in a ``{meta, data}`` envelope.
The v1 skills leaderboard returns a bare camelCase array.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class Grade(str, Enum):
    """Competition age bracket, serialized the way RobotEvents spells it."""

    COLLEGE = "College"
    HIGH_SCHOOL = "High School"
    MIDDLE_SCHOOL = "Middle School"
    ELEMENTARY_SCHOOL = "Elementary School"

    def __str__(self) -> str:
        return self.value


class Program(BaseModel):
    """A VEX competition program (VRC, VIQRC, VEXU, ...).

    Seasons reference their program with ``abbr`` instead of ``code``.
    """

    id: int
    name: str
    code: str | None = Field(default=None, validation_alias=AliasChoices("code", "abbr"))


class IdInfo(BaseModel):
    """A bare reference to another RobotEvents record."""

    id: int
    name: str
    code: str | None = None


class Meta(BaseModel):
    """Pagination metadata attached to every v2 list response."""

    current_page: int = 1
    first_page_url: str | None = None
    from_: int | None = Field(default=None, alias="from")
    last_page: int = 1
    last_page_url: str | None = None
    prev_page_url: str | None = None
    next_page_url: str | None = None
    path: str | None = None
    per_page: int = 25
    to: int | None = None
    total: int = 0


class PaginatedResponse(BaseModel, Generic[T]):
    meta: Meta
    data: list[T]


class Coordinates(BaseModel):
    lat: float = 0.0
    lon: float = 0.0


class Location(BaseModel):
    venue: str | None = None
    address_1: str | None = None
    address_2: str | None = None
    city: str | None = None
    region: str | None = None
    postcode: str | None = None
    country: str | None = None
    coordinates: Coordinates = Field(default_factory=Coordinates)

    def display(self) -> str:
        """City, region and country joined, skipping blanks."""
        parts = [p for p in (self.city, self.region, self.country) if p]
        return ", ".join(parts) or "Unknown"


class Team(BaseModel):
    """A registered RobotEvents team."""

    id: int
    number: str
    team_name: str = ""
    robot_name: str | None = None
    organization: str = ""
    location: Location = Field(default_factory=Location)
    registered: bool = False
    program: Program
    grade: Grade


class Season(BaseModel):
    id: int
    name: str
    program: Program
    start: str | None = None
    end: str | None = None
    years_start: int
    years_end: int


class AwardDesignation(str, Enum):
    TOURNAMENT = "tournament"
    DIVISION = "division"


class AwardClassification(str, Enum):
    CHAMPION = "champion"
    FINALIST = "finalist"
    SEMIFINALIST = "semifinalist"
    QUARTERFINALIST = "quarterfinalist"


class TeamAwardWinner(BaseModel):
    division: IdInfo | None = None
    team: IdInfo


class Award(BaseModel):
    """An award won at an event. ``order`` ranks awards within one event."""

    id: int
    event: IdInfo
    order: int = 0
    title: str
    qualifications: list[str] = Field(default_factory=list)
    designation: AwardDesignation | None = None
    classification: AwardClassification | None = None
    team_winners: list[TeamAwardWinner] = Field(default_factory=list)
    individual_winners: list[str] = Field(default_factory=list)


class Event(BaseModel):
    id: int
    sku: str
    name: str
    start: str | None = None
    end: str | None = None
    season: IdInfo | None = None
    program: IdInfo
    location: Location | None = None


class Skill(BaseModel):
    """One skills run summary for a team at a single event (v2)."""

    id: int
    event: IdInfo
    team: IdInfo
    type: str
    season: IdInfo | None = None
    division: IdInfo | None = None
    rank: int | None = None
    score: int = 0
    attempts: int = 0


# ---------------------------------------------------------------------------
# v1 skills leaderboard
# ---------------------------------------------------------------------------


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SkillsEvent(_CamelModel):
    season_name: str | None = None
    sku: str | None = None
    start_date: str | None = None


class SkillsTeam(_CamelModel):
    id: int
    team: str
    team_name: str | None = None
    organization: str | None = None
    city: str | None = None
    region: str | None = None
    country: str | None = None
    grade_level: str | None = None
    program: str | None = None
    event_region: str | None = None
    event_region_id: int | None = None
    affiliations: list[str] = Field(default_factory=list)
    link: str | None = None
    team_reg_id: int | None = None


class SkillsScores(_CamelModel):
    score: int = 0
    programming: int = 0
    driver: int = 0
    max_programming: int = 0
    max_driver: int = 0
    prog_stop_time: int = 0
    driver_stop_time: int = 0
    combined_stop_time: int = 0
    prog_scored_at: str | None = None
    driver_scored_at: str | None = None


class SkillsRanking(_CamelModel):
    """One row of a season/grade skills leaderboard."""

    rank: int
    team: SkillsTeam
    event: SkillsEvent = Field(default_factory=SkillsEvent)
    scores: SkillsScores = Field(default_factory=SkillsScores)
    eligible: bool = False
