"""vrc-data-analysis.com records. Only VRC teams are covered upstream."""

from __future__ import annotations

from pydantic import BaseModel


class TeamInfo(BaseModel):
    """Match statistics and TrueSkill rating for one team.

    Not season-scoped: upstream only tracks the current season.
    """

    team_number: str
    team_name: str = ""
    opr: float = 0.0
    dpr: float = 0.0
    ccwm: float = 0.0
    mu: float = 0.0
    sigma: float = 0.0
    trueskill: float = 0.0
    trueskill_ranking: int = 0
    total_wins: int = 0
    total_losses: int = 0
    total_ties: int = 0
    ap_per_match: float = 0.0
    awp_per_match: float = 0.0
    wp_per_match: float = 0.0
    score_auto_max: float | None = None
    score_driver_max: float | None = None
    score_total_max: float | None = None


class Prediction(BaseModel):
    red1: str
    red2: str
    blue1: str
    blue2: str
    prediction_msg: str = ""
    red_win_probability: float


class AllianceStrength(BaseModel):
    """CCWM-based strength comparison between two alliances."""

    red_strength: float
    blue_strength: float
    r1_awp_per_match: float = 0.0
    r2_awp_per_match: float = 0.0
    b1_awp_per_match: float = 0.0
    b2_awp_per_match: float = 0.0
    message: str = ""
