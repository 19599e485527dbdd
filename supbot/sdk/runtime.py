"""Plugin-side runtime: host calls, storage, and the exported entry points."""

from __future__ import annotations

import abc
import json
from typing import Any, Callable, NamedTuple, Union

from supbot.sdk.types import HelpOutput, Input, Output, Plugin

NOT_REGISTERED = "Plugin not registered. Pass a plugin instance to PluginRunner."

Data = Union[bytes, str]


class HostError(Exception):
    """Raised when a call to the host fails."""


class Host(abc.ABC):
    """Functions the host provides to plugins.

    Functions returning bytes signal failure with an empty result; functions
    returning an int signal success with 0.
    """

    @abc.abstractmethod
    def read_file(self, path: str) -> bytes:
        """Return the contents of ``path``."""

    @abc.abstractmethod
    def send_image(self, payload: bytes) -> int:
        """Send an image described by a JSON payload."""

    @abc.abstractmethod
    def list_directory(self, path: str) -> bytes:
        """Return a JSON listing response for ``path``."""

    @abc.abstractmethod
    def get_cache(self, key: str) -> bytes:
        """Return a JSON response holding the cached value for ``key``."""

    @abc.abstractmethod
    def set_cache(self, payload: bytes) -> int:
        """Store a JSON ``{"key", "value"}`` payload in the cache."""

    @abc.abstractmethod
    def get_store(self, key: str) -> bytes:
        """Return a JSON response holding the stored value for ``key``."""

    @abc.abstractmethod
    def set_store(self, payload: bytes) -> int:
        """Store a JSON ``{"key", "value"}`` payload persistently."""


class CallResult(NamedTuple):
    code: int
    output: bytes


def _dump(obj: Any) -> bytes:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def _text(value: Data) -> str:
    return value.decode("utf-8", errors="replace") if isinstance(value, bytes) else value


def _key_value_payload(key: str, value: Data) -> bytes:
    return _dump({"key": key, "value": _text(value)})


def _parse_response(raw: bytes, what: str) -> dict[str, Any]:
    try:
        response = json.loads(raw)
        if not isinstance(response, dict):
            raise ValueError("expected a JSON object")
    except ValueError as err:
        raise HostError(f"failed to parse {what} response: {err}") from err
    return response


def _value_response(raw: bytes, key: str, what: str) -> bytes:
    if not raw:
        raise HostError(f"failed to get {what} value for key {key}")
    response = _parse_response(raw, what)
    if not response.get("success"):
        raise HostError(f"{what} get failed: {response.get('error') or ''}")
    return (response.get("data") or "").encode("utf-8")


class Storage:
    """Persistent key/value storage provided by the host."""

    def __init__(self, host: Host) -> None:
        self._host = host

    def get(self, key: str) -> bytes:
        """Return the value stored under ``key``; raises HostError on failure."""
        return _value_response(self._host.get_store(key), key, "store")

    def set(self, key: str, value: Data) -> None:
        """Store ``value`` under ``key``; raises HostError on failure."""
        code = self._host.set_store(_key_value_payload(key, value))
        if code != 0:
            raise HostError(f"failed to set store value, error code: {code}")


class PluginContext:
    """Host services available to a plugin."""

    def __init__(self, host: Host) -> None:
        self._host = host

    def read_file(self, path: str) -> bytes:
        """Return a file's contents read through the host."""
        data = self._host.read_file(path)
        if not data:
            raise HostError(f"failed to read file {path}")
        return data

    def send_image(self, recipient: str, image_path: str) -> None:
        """Ask the host to send an image to ``recipient``."""
        code = self._host.send_image(_dump({"recipient": recipient, "image_path": image_path}))
        if code != 0:
            raise HostError(f"failed to send image, error code: {code}")

    def list_directory(self, path: str) -> list[str]:
        """Return the names in a directory inside the plugin's data directory."""
        raw = self._host.list_directory(path)
        if not raw:
            raise HostError(f"failed to list directory {path}")
        response = _parse_response(raw, "directory listing")
        if not response.get("success"):
            raise HostError(f"directory listing failed: {response.get('error') or ''}")
        return list(response.get("files") or [])

    def get_cache(self, key: str) -> bytes:
        """Return the cached value for ``key``."""
        return _value_response(self._host.get_cache(key), key, "cache")

    def set_cache(self, key: str, value: Data) -> None:
        """Cache ``value`` under ``key``."""
        code = self._host.set_cache(_key_value_payload(key, value))
        if code != 0:
            raise HostError(f"failed to set cache value, error code: {code}")

    def storage(self) -> Storage:
        """Return the plugin's persistent storage."""
        return Storage(self._host)


class PluginRunner:
    """Exposes a plugin through the entry points the host calls."""

    def __init__(self, plugin: Plugin | None) -> None:
        self.plugin = plugin
        self._functions: dict[str, Callable[[Data], CallResult]] = {
            "handle_message": self.handle_message,
            "get_help": lambda _data: self.get_help(),
            "get_required_env_vars": lambda _data: self.get_required_env_vars(),
            "get_name": lambda _data: self.get_name(),
            "get_topics": lambda _data: self.get_topics(),
            "get_version": lambda _data: self.get_version(),
        }

    def handle_message(self, data: Data) -> CallResult:
        """Decode a JSON Input, run the plugin and return its JSON Output."""
        if self.plugin is None:
            return CallResult(1, _dump(Output(success=False, error=NOT_REGISTERED).to_dict()))
        try:
            request = Input.from_dict(json.loads(data))
        except (ValueError, TypeError) as err:
            failure = Output(success=False, error=f"Failed to parse input: {err}")
            return CallResult(1, _dump(failure.to_dict()))
        output = self.plugin.handle_message(request)
        return CallResult(0, _dump(output.to_dict()))

    def get_help(self) -> CallResult:
        if self.plugin is None:
            return CallResult(1, _dump({"error": NOT_REGISTERED, "success": False}))
        help_out: HelpOutput = self.plugin.get_help()
        return CallResult(0, _dump(help_out.to_dict()))

    def get_required_env_vars(self) -> CallResult:
        if self.plugin is None:
            return CallResult(1, _dump({"error": NOT_REGISTERED}))
        return CallResult(0, _dump(list(self.plugin.get_required_env_vars())))

    def get_name(self) -> CallResult:
        if self.plugin is None:
            return CallResult(1, _dump({"error": NOT_REGISTERED}))
        return CallResult(0, self.plugin.name().encode("utf-8"))

    def get_topics(self) -> CallResult:
        if self.plugin is None:
            return CallResult(1, _dump({"error": NOT_REGISTERED}))
        return CallResult(0, _dump(list(self.plugin.topics())))

    def get_version(self) -> CallResult:
        if self.plugin is None:
            return CallResult(1, _dump({"error": NOT_REGISTERED}))
        return CallResult(0, self.plugin.version().encode("utf-8"))

    def call(self, function: str, data: Data = b"") -> CallResult:
        """Call an entry point by its exported name."""
        try:
            entry = self._functions[function]
        except KeyError:
            raise ValueError(f"unknown function: {function}") from None
        return entry(data)