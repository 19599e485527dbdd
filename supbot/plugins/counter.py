"""Per-user named counters kept in the host's persistent storage."""

from __future__ import annotations

import re

from supbot.sdk.runtime import HostError, PluginContext
from supbot.sdk.types import HelpOutput, Input, Output, Plugin, error, new_help_output, success

DEFAULT_COUNTER = "default"

_INCREMENT = frozenset({"increment", "inc", "+"})
_DECREMENT = frozenset({"decrement", "dec", "-"})
_INTEGER = re.compile(r"[+-]?[0-9]+")


class _CounterMissing(Exception):
    """The counter has no usable stored value."""


class CounterPlugin(Plugin):
    """Increments, decrements, resets and shows counters per sender."""

    def __init__(self, context: PluginContext) -> None:
        self._storage = context.storage()

    def name(self) -> str:
        return "counter"

    def topics(self) -> list[str]:
        return ["counter"]

    def handle_message(self, request: Input) -> Output:
        args = request.message.split()
        action = args[0] if args else ""
        counter_name = args[1] if len(args) > 1 else DEFAULT_COUNTER
        store_key = f"{request.sender}:{counter_name}"

        if action in _INCREMENT:
            return self._increment(store_key)
        if action in _DECREMENT:
            return self._decrement(store_key)
        if action == "reset":
            return self._reset(store_key)
        if action == "list":
            return success(
                "Counter listing not implemented yet. Use specific counter names or 'default'."
            )
        return self._show(store_key)

    def _increment(self, store_key: str) -> Output:
        count = self._count_or_zero(store_key) + 1
        try:
            self._save(store_key, count)
        except HostError as err:
            return error(f"Failed to store counter: {err}")
        return success(f"Counter incremented to {count}")

    def _decrement(self, store_key: str) -> Output:
        count = max(self._count_or_zero(store_key) - 1, 0)
        try:
            self._save(store_key, count)
        except HostError as err:
            return error(f"Failed to store counter: {err}")
        return success(f"Counter decremented to {count}")

    def _reset(self, store_key: str) -> Output:
        try:
            self._save(store_key, 0)
        except HostError as err:
            return error(f"Failed to reset counter: {err}")
        return success("Counter reset to 0")

    def _show(self, store_key: str) -> Output:
        try:
            count = self._current_count(store_key)
        except (HostError, _CounterMissing):
            return success("Counter value: 0 (not set)")
        return success(f"Counter value: {count}")

    def _count_or_zero(self, store_key: str) -> int:
        try:
            return self._current_count(store_key)
        except (HostError, _CounterMissing):
            return 0

    def _current_count(self, store_key: str) -> int:
        text = self._storage.get(store_key).decode("utf-8", errors="replace")
        if not _INTEGER.fullmatch(text):
            raise _CounterMissing(
                f"failed to parse counter value from store: {text!r}"
            )
        return int(text)

    def _save(self, store_key: str, count: int) -> None:
        self._storage.set(store_key, str(count))

    def get_help(self) -> HelpOutput:
        return new_help_output(
            "counter",
            "Manages counters for users",
            ".sup counter [action] [name]",
            [
                ".sup counter",
                ".sup counter increment mycount",
                ".sup counter + mycount",
                ".sup counter decrement mycount",
                ".sup counter - mycount",
                ".sup counter reset mycount",
                ".sup counter list",
            ],
            "utility",
        )

    def get_required_env_vars(self) -> list[str]:
        return []

    def version(self) -> str:
        return "1.1.0"