"""A minimal greeting plugin."""

from __future__ import annotations

from supbot.sdk.types import HelpOutput, Input, Output, Plugin, success


class HelloPlugin(Plugin):
    """Greets the sender and repeats what they said."""

    def name(self) -> str:
        return "hello"

    def topics(self) -> list[str]:
        return ["hello"]

    def handle_message(self, request: Input) -> Output:
        push_name = request.info.push_name
        if request.message == "":
            return success(f"Hello {push_name}! How can I help you?")
        return success(f"Hello {push_name}! You said: {request.message}")

    def get_help(self) -> HelpOutput:
        return HelpOutput(
            name="hello",
            description="A simple hello world plugin",
            usage=".sup hello [message]",
            examples=[".sup hello", ".sup hello world"],
            category="examples",
        )

    def get_required_env_vars(self) -> list[str]:
        return []

    def version(self) -> str:
        return "0.1.0"