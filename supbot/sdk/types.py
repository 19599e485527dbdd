"""Message, reply and help types shared by plugins and their host."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import Any


def _as_object(data: Any, what: str) -> dict[str, Any]:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TypeError(f"{what}: expected a JSON object, got {type(data).__name__}")
    return data


def _field(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if kind is int:
        ok = isinstance(value, int) and not isinstance(value, bool)
    else:
        ok = isinstance(value, kind)
    if not ok:
        raise TypeError(
            f"field {key!r}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _string_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise TypeError(f"field {key!r}: expected a list of strings")
    return list(value)


@dataclass
class MessageInfo:
    """Details about an incoming message."""

    id: str = ""
    timestamp: int = 0
    push_name: str = ""
    is_group: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "push_name": self.push_name,
            "is_group": self.is_group,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "MessageInfo":
        obj = _as_object(data, "info")
        return cls(
            id=_field(obj, "id", str, ""),
            timestamp=_field(obj, "timestamp", int, 0),
            push_name=_field(obj, "push_name", str, ""),
            is_group=_field(obj, "is_group", bool, False),
        )


@dataclass
class Input:
    """The data passed to a plugin for one message."""

    message: str = ""
    sender: str = ""
    info: MessageInfo = field(default_factory=MessageInfo)

    @classmethod
    def from_dict(cls, data: Any) -> "Input":
        obj = _as_object(data, "input")
        return cls(
            message=_field(obj, "message", str, ""),
            sender=_field(obj, "sender", str, ""),
            info=MessageInfo.from_dict(obj.get("info")),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "sender": self.sender,
            "info": self.info.to_dict(),
        }


@dataclass
class Output:
    """A plugin's response; empty ``error`` and ``reply`` are left out of the dict."""

    success: bool = False
    error: str = ""
    reply: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"success": self.success}
        if self.error:
            data["error"] = self.error
        if self.reply:
            data["reply"] = self.reply
        return data

    @classmethod
    def from_dict(cls, data: Any) -> "Output":
        obj = _as_object(data, "output")
        return cls(
            success=_field(obj, "success", bool, False),
            error=_field(obj, "error", str, ""),
            reply=_field(obj, "reply", str, ""),
        )


@dataclass
class HelpOutput:
    """Help information describing a plugin."""

    name: str = ""
    description: str = ""
    usage: str = ""
    examples: list[str] = field(default_factory=list)
    category: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "usage": self.usage,
            "examples": list(self.examples),
            "category": self.category,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "HelpOutput":
        obj = _as_object(data, "help")
        return cls(
            name=_field(obj, "name", str, ""),
            description=_field(obj, "description", str, ""),
            usage=_field(obj, "usage", str, ""),
            examples=_string_list(obj, "examples"),
            category=_field(obj, "category", str, ""),
        )


class Plugin(abc.ABC):
    """The interface every plugin implements."""

    @abc.abstractmethod
    def name(self) -> str:
        """Return the plugin's name."""

    @abc.abstractmethod
    def topics(self) -> list[str]:
        """Return the topics whose messages the plugin receives."""

    @abc.abstractmethod
    def handle_message(self, request: Input) -> Output:
        """Handle one message and return the response."""

    @abc.abstractmethod
    def get_help(self) -> HelpOutput:
        """Return help information."""

    @abc.abstractmethod
    def get_required_env_vars(self) -> list[str]:
        """Return the environment variables the plugin needs."""

    @abc.abstractmethod
    def version(self) -> str:
        """Return the plugin's version."""


def success(reply: str) -> Output:
    """Return a successful output carrying ``reply``."""
    return Output(success=True, reply=reply)


def error(message: str) -> Output:
    """Return a failed output carrying ``message``."""
    return Output(success=False, error=message)


def new_help_output(
    name: str, description: str, usage: str, examples: list[str], category: str
) -> HelpOutput:
    """Build a HelpOutput from its parts."""
    return HelpOutput(
        name=name,
        description=description,
        usage=usage,
        examples=list(examples),
        category=category,
    )