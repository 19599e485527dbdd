"""Echoes messages back, with a few formatting commands."""

from __future__ import annotations

from supbot.sdk.types import HelpOutput, Input, Output, Plugin, error, new_help_output, success


def reverse(text: str) -> str:
    """Return ``text`` with its characters in reverse order."""
    return text[::-1]


class EchoPlugin(Plugin):
    """Echoes the message, or transforms the sender's name on command."""

    def name(self) -> str:
        return "echo"

    def topics(self) -> list[str]:
        return ["echo"]

    def handle_message(self, request: Input) -> Output:
        message = request.message.strip()
        if not message:
            return error("Please provide a message to echo. Usage: .sup echo <message>")

        push_name = request.info.push_name
        command = message.lower()
        if command == "reverse":
            return success(f"🔄 {reverse(push_name)}")
        if command == "upper":
            return success(f"📢 {push_name.upper()}")
        if command == "lower":
            return success(f"🔇 {push_name.lower()}")
        if command == "info":
            return self._info(request)

        prefix = "📢" if request.info.is_group else "🔊"
        return success(f"{prefix} Echo from {push_name}: {message}")

    @staticmethod
    def _info(request: Input) -> Output:
        chat_type = "group chat" if request.info.is_group else "private chat"
        return success(
            "ℹ️ Message Info:\n"
            f"👤 Sender: {request.info.push_name}\n"
            f"💬 Chat Type: {chat_type}\n"
            f"🆔 Message ID: {request.info.id}\n"
            f"⏰ Timestamp: {request.info.timestamp}\n"
            f"📧 JID: {request.sender}"
        )

    def get_help(self) -> HelpOutput:
        return new_help_output(
            "echo",
            "Echo messages with various formatting options",
            ".sup echo <message|command>",
            [
                ".sup echo hello world",
                ".sup echo reverse",
                ".sup echo upper",
                ".sup echo lower",
                ".sup echo info",
            ],
            "utility",
        )

    def get_required_env_vars(self) -> list[str]:
        return []

    def version(self) -> str:
        return "0.1.0"