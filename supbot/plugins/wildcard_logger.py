"""Logs every message and answers a couple of trigger phrases."""

from __future__ import annotations

import sys
from datetime import datetime
from typing import TextIO

from supbot.sdk.types import HelpOutput, Input, Output, Plugin, new_help_output, success

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class WildcardLoggerPlugin(Plugin):
    """Receives all messages, writes a log line for each, replies to triggers."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def name(self) -> str:
        return "wildcard-logger"

    def topics(self) -> list[str]:
        return ["*"]

    def handle_message(self, request: Input) -> Output:
        info = request.info
        timestamp = datetime.fromtimestamp(info.timestamp).strftime(_TIME_FORMAT)
        chat_type = "group" if info.is_group else "private"
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(
            f"[{timestamp}] [{chat_type}] {info.push_name} ({request.sender}): "
            f"{request.message}\n"
        )

        message = request.message.strip().lower()
        if "hello bot" in message:
            return success("👋 Hello there! I'm watching all messages.")
        if "bot status" in message:
            return success("🤖 Wildcard logger is active and monitoring all messages.")
        return success("")

    def get_help(self) -> HelpOutput:
        return new_help_output(
            "wildcard-logger",
            "Logs all messages and responds to specific triggers",
            "Automatically receives all messages",
            [
                "Say 'hello bot' - bot will greet you",
                "Say 'bot status' - bot will report its status",
            ],
            "utility",
        )

    def get_required_env_vars(self) -> list[str]:
        return []

    def version(self) -> str:
        return "0.1.0"