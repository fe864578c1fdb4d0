"""Articles linkable with /wiki. Built once at import and never mutated."""

from __future__ import annotations

from types import MappingProxyType
from typing import NamedTuple


class WikiArticle(NamedTuple):
    url: str
    title: str


WIKI_ARTICLES: MappingProxyType[str, WikiArticle] = MappingProxyType(
    {
        "main": WikiArticle("https://wiki.purduesigbots.com/", "Sigbots: Main Page"),
        "building": WikiArticle(
            "https://wiki.purduesigbots.com/hardware/misc.-vex-parts",
            "Sigbots: Useful Building Techniques",
        ),
        "structure": WikiArticle(
            "https://wiki.purduesigbots.com/hardware/misc.-vex-parts-1/structure",
            "Sigbots: Structural Parts",
        ),
        "motion": WikiArticle(
            "https://wiki.purduesigbots.com/hardware/misc.-vex-parts-1/motion",
            "Sigbots: Motion Parts",
        ),
        "joints": WikiArticle(
            "https://wiki.purduesigbots.com/hardware/vex-joints", "Sigbots: Joints"
        ),
        "drives": WikiArticle(
            "https://wiki.purduesigbots.com/hardware/vex-drivetrains", "Sigbots: Drivetrains"
        ),
        "lifts": WikiArticle(
            "https://wiki.purduesigbots.com/hardware/lifts", "Sigbots: Lift Mechanisms"
        ),
        "intakes": WikiArticle(
            "https://wiki.purduesigbots.com/hardware/intakes", "Sigbots: Intake Mechanisms"
        ),
        "launchers": WikiArticle(
            "https://wiki.purduesigbots.com/hardware/shooting-mechanisms",
            "Sigbots: Launching Mechanisms",
        ),
        "pneumatics": WikiArticle(
            "https://wiki.purduesigbots.com/hardware/pneumatics", "Sigbots: Pneumatics"
        ),
    }
)


def find_article(key: str) -> WikiArticle | None:
    return WIKI_ARTICLES.get(key.strip().lower())
