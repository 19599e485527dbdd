"""Random Barcelona restaurant suggestions."""

from __future__ import annotations

import random
import re
from dataclasses import dataclass

from supbot.sdk.types import HelpOutput, Input, Output, Plugin, error, new_help_output, success

SUGGESTIONS = 3

_INTEGER = re.compile(r"[+-]?[0-9]+")
_EMOJIS = ("🍽️", "🥘", "🍴")
_COSTS = {1: "$", 2: "$$", 3: "$$$"}
_RATINGS = {1: "⭐", 2: "⭐⭐", 3: "⭐⭐⭐"}
_UNKNOWN = "❓"


@dataclass
class Restaurant:
    name: str
    url: str
    cuisine: str
    rating: int
    cost: int


def _parse_int(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid syntax: {text!r}")
    return int(text)


def parse_restaurants(data: str) -> list[Restaurant]:
    """Parse ``name#url#cuisine#rating#cost`` lines that follow a header line.

    Lines with fewer than five fields are skipped; a bad rating or cost raises
    ValueError, as does data with no lines after the header.
    """
    lines = data.strip().split("\n")
    if len(lines) <= 1:
        raise ValueError("no restaurant data found")

    restaurants = []
    for line in lines[1:]:
        line = line.strip()
        if not line:
            continue
        parts = line.split("#")
        if len(parts) < 5:
            continue
        name, url, cuisine = (part.strip() for part in parts[:3])
        try:
            rating = _parse_int(parts[3].strip())
        except ValueError as err:
            raise ValueError(f"error parsing rating for restaurant {name}: {err}") from err
        try:
            cost = _parse_int(parts[4].strip())
        except ValueError as err:
            raise ValueError(f"error parsing cost for restaurant {name}: {err}") from err
        restaurants.append(
            Restaurant(name=name, url=url, cuisine=cuisine, rating=rating, cost=cost)
        )
    return restaurants


def cost_to_emoji(cost: int) -> str:
    """Return the dollar signs for a cost level 1-3, or a question mark."""
    return _COSTS.get(cost, _UNKNOWN)


def rating_to_emoji(rating: int) -> str:
    """Return the stars for a rating 1-3, or a question mark."""
    return _RATINGS.get(rating, _UNKNOWN)


class EatBcnPlugin(Plugin):
    """Suggests three distinct restaurants picked at random from a list."""

    def __init__(self, restaurant_data: str, rng: random.Random | None = None) -> None:
        self._data = restaurant_data
        self._rng = rng if rng is not None else random.Random()

    def name(self) -> str:
        return "eat-bcn"

    def topics(self) -> list[str]:
        return ["eat-bcn"]

    def handle_message(self, request: Input) -> Output:
        try:
            restaurants = parse_restaurants(self._data)
        except ValueError:
            return error("🚫 Sorry, couldn't load the restaurant list!")

        if len(restaurants) < SUGGESTIONS:
            return error("🚫 Not enough restaurants in the list!")

        picks = self._rng.sample(range(len(restaurants)), SUGGESTIONS)
        blocks = [
            f"{emoji} {r.name}\n"
            f"🔗 {r.url}\n"
            f"Cost: {cost_to_emoji(r.cost)}\n"
            f"Rating: {rating_to_emoji(r.rating)}\n"
            f"Cuisine: {r.cuisine}\n\n"
            for emoji, r in zip(_EMOJIS, (restaurants[i] for i in picks))
        ]
        message = (
            "🍻 Here are 3 random Barcelona restaurant suggestions:\n\n"
            + "".join(blocks)
            + "¡Buen provecho! 🎉"
        )
        return success(message)

    def get_help(self) -> HelpOutput:
        return new_help_output(
            "eat-bcn",
            "Get random Barcelona restaurant suggestions",
            ".sup eat-bcn",
            [".sup eat-bcn"],
            "utility",
        )

    def get_required_env_vars(self) -> list[str]:
        return []

    def version(self) -> str:
        return "0.1.0"