"""Random integers between given bounds."""

from __future__ import annotations

import random
import re

from supbot.sdk.types import HelpOutput, Input, Output, Plugin, error, new_help_output, success

_USAGE = ".sup random <max> or .sup random <min> <max>"
_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


def _parse_int(text: str) -> int:
    if not _INTEGER.fullmatch(text):
        raise ValueError(f"invalid integer: {text!r}")
    value = int(text)
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"integer out of range: {text!r}")
    return value


class RandomPlugin(Plugin):
    """Rolls a random number in ``[min, max]``; ``min`` defaults to 0."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng if rng is not None else random.Random()

    def name(self) -> str:
        return "random"

    def topics(self) -> list[str]:
        return ["random"]

    def handle_message(self, request: Input) -> Output:
        message = request.message.strip()
        if not message:
            return error(f"Please provide at least one number. Usage: {_USAGE}")

        parts = message.split()
        if len(parts) == 1:
            low = 0
            try:
                high = _parse_int(parts[0])
            except ValueError:
                return error(
                    f"Invalid maximum value '{parts[0]}'. Please provide a valid number."
                )
        elif len(parts) == 2:
            try:
                low = _parse_int(parts[0])
            except ValueError:
                return error(
                    f"Invalid minimum value '{parts[0]}'. Please provide a valid number."
                )
            try:
                high = _parse_int(parts[1])
            except ValueError:
                return error(
                    f"Invalid maximum value '{parts[1]}'. Please provide a valid number."
                )
        else:
            return error(f"Too many arguments. Usage: {_USAGE}")

        if low >= high:
            return error(
                f"Minimum value ({low}) must be less than maximum value ({high})."
            )

        number = self._rng.randrange(high - low + 1) + low
        return success(f"🎲 {number}")

    def get_help(self) -> HelpOutput:
        return new_help_output(
            "random",
            "Generate a random number between two values",
            _USAGE,
            [
                ".sup random 10",
                ".sup random 1 10",
                ".sup random 100 999",
                ".sup random -50 50",
            ],
            "utility",
        )

    def get_required_env_vars(self) -> list[str]:
        return []

    def version(self) -> str:
        return "0.1.1"