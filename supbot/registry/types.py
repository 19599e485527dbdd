"""Data types of the plugin registry index."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_TIME_RE = re.compile(r"^(.*T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(.*)$")


def format_time(value: datetime) -> str:
    """Format ``value`` as RFC 3339 with trimmed fractional seconds."""
    if value.tzinfo is None:
        value = value.astimezone()
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if len(text) < 19:
        text = f"{value.year:04d}{text[text.index('-'):]}"
    fraction = f"{value.microsecond:06d}".rstrip("0")
    if fraction:
        text += "." + fraction
    offset = value.utcoffset() or timedelta(0)
    seconds = int(offset.total_seconds())
    if seconds == 0:
        return text + "Z"
    sign = "+" if seconds > 0 else "-"
    hours, minutes = divmod(abs(seconds) // 60, 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


def parse_time(text: str) -> datetime:
    """Parse an RFC 3339 timestamp, keeping at most microsecond precision."""
    match = _TIME_RE.match(text.strip())
    if not match:
        raise ValueError(f"invalid timestamp: {text!r}")
    base, fraction, zone = match.groups()
    if zone in ("Z", "z"):
        zone = "+00:00"
    normalized = base
    if fraction:
        normalized += "." + fraction[:6].ljust(6, "0")
    return datetime.fromisoformat(normalized + zone)


def _time_field(data: dict[str, Any], key: str) -> datetime:
    raw = data.get(key)
    return parse_time(raw) if raw else ZERO_TIME


@dataclass
class Version:
    version: str = ""
    release_date: datetime = ZERO_TIME
    sha256: str = ""
    size: int = 0
    min_sup_version: str = ""

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": self.version,
            "release_date": format_time(self.release_date),
            "sha256": self.sha256,
            "size": self.size,
        }
        if self.min_sup_version:
            data["min_sup_version"] = self.min_sup_version
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Version":
        return cls(
            version=data.get("version") or "",
            release_date=_time_field(data, "release_date"),
            sha256=data.get("sha256") or "",
            size=int(data.get("size") or 0),
            min_sup_version=data.get("min_sup_version") or "",
        )


@dataclass
class Plugin:
    name: str = ""
    description: str = ""
    author: str = ""
    home_url: str = ""
    category: str = ""
    tags: list[str] = field(default_factory=list)
    versions: dict[str, Version] = field(default_factory=dict)
    latest: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "author": self.author,
            "home_url": self.home_url,
            "category": self.category,
            "tags": list(self.tags),
            "versions": {key: v.to_dict() for key, v in self.versions.items()},
            "latest": self.latest,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Plugin":
        versions = data.get("versions") or {}
        return cls(
            name=data.get("name") or "",
            description=data.get("description") or "",
            author=data.get("author") or "",
            home_url=data.get("home_url") or "",
            category=data.get("category") or "",
            tags=list(data.get("tags") or []),
            versions={
                key: Version.from_dict(value)
                for key, value in versions.items()
                if value is not None
            },
            latest=data.get("latest") or "",
        )


@dataclass
class Index:
    version: str = ""
    updated_at: datetime = ZERO_TIME
    plugins: dict[str, Plugin] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "updated_at": format_time(self.updated_at),
            "plugins": {key: p.to_dict() for key, p in self.plugins.items()},
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Index":
        plugins = data.get("plugins") or {}
        return cls(
            version=data.get("version") or "",
            updated_at=_time_field(data, "updated_at"),
            plugins={
                key: Plugin.from_dict(value)
                for key, value in plugins.items()
                if value is not None
            },
        )


@dataclass
class PluginInfo:
    name: str
    version: str
    author: str = ""
    description: str = ""
    home_url: str = ""
    category: str = ""
    tags: list[str] = field(default_factory=list)
    installed: bool = False
    available: bool = False