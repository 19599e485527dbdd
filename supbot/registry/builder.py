"""Build a plugin registry index from a directory tree of WASM plugins."""

from __future__ import annotations

import gzip
import hashlib
import json
import os
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator

from supbot import log
from supbot.registry.types import Index, Plugin, Version

INDEX_VERSION = "1.0.0"
INDEX_JSON = "index.json"
INDEX_GZ = "index.json.gz"
INDEX_CHECKSUM = "index.json.gz.sha256"

_STRING_FIELDS = ("name", "description", "author", "home_url", "category")
_JSON_ESCAPES = {
    "&": "\\u0026",
    "<": "\\u003c",
    ">": "\\u003e",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def compress_data(data: bytes) -> bytes:
    """Return ``data`` gzip-compressed, with a zero modification time."""
    return gzip.compress(data, mtime=0)


@dataclass
class PluginMetadata:
    name: str = ""
    description: str = ""
    author: str = ""
    home_url: str = ""
    category: str = ""
    tags: list[str] = field(default_factory=list)


def _default_metadata(plugin_name: str) -> PluginMetadata:
    return PluginMetadata(
        name=plugin_name,
        description=f"WASM plugin: {plugin_name}",
        author="Unknown",
        home_url="",
        category="utility",
        tags=[],
    )


def _apply_metadata(metadata: PluginMetadata, data: Any) -> None:
    if not isinstance(data, dict):
        raise ValueError("failed to parse metadata JSON: expected an object")
    for key in _STRING_FIELDS:
        if key not in data or data[key] is None:
            continue
        value = data[key]
        if not isinstance(value, str):
            raise ValueError(f"failed to parse metadata JSON: {key} must be a string")
        setattr(metadata, key, value)
    if "tags" in data:
        tags = data["tags"]
        if tags is None:
            metadata.tags = []
        elif isinstance(tags, list) and all(isinstance(t, str) for t in tags):
            metadata.tags = list(tags)
        else:
            raise ValueError("failed to parse metadata JSON: tags must be a list of strings")


def _sha256_hex(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def _index_json(index: Index) -> bytes:
    data = index.to_dict()
    plugins = {}
    for name in sorted(data["plugins"]):
        plugin = data["plugins"][name]
        plugin["versions"] = {v: plugin["versions"][v] for v in sorted(plugin["versions"])}
        plugins[name] = plugin
    data["plugins"] = plugins
    text = json.dumps(data, indent=2, ensure_ascii=False)
    for char, escaped in _JSON_ESCAPES.items():
        text = text.replace(char, escaped)
    return text.encode("utf-8")


def _raise(err: OSError) -> None:
    raise err


class Builder:
    """Scans ``<base_dir>/plugins/<name>/<version>/<name>.wasm`` into an Index."""

    def __init__(self, base_dir: str | os.PathLike) -> None:
        self.base_dir = Path(base_dir)
        self.plugins_dir = self.base_dir / "plugins"

    def build_index(self) -> Index:
        """Scan the plugins directory and return the resulting index."""
        index = Index(
            version=INDEX_VERSION,
            updated_at=datetime.now().astimezone(),
            plugins={},
        )
        if not self.plugins_dir.exists():
            raise FileNotFoundError(
                f"plugins directory does not exist: {self.plugins_dir}"
            )
        try:
            for wasm_path in self._wasm_files():
                self._process_wasm_file(wasm_path, index)
        except OSError as err:
            raise OSError(f"failed to walk plugins directory: {err}") from err

        self._set_latest_versions(index)
        log.debug("Built index", plugins=len(index.plugins))
        return index

    def _wasm_files(self) -> Iterator[Path]:
        for root, dirs, files in os.walk(self.plugins_dir, onerror=_raise):
            dirs.sort()
            for name in sorted(files):
                if name.endswith(".wasm"):
                    yield Path(root) / name

    def _process_wasm_file(self, wasm_path: Path, index: Index) -> None:
        rel_path = wasm_path.relative_to(self.plugins_dir)
        parts = rel_path.parts
        if len(parts) < 3:
            log.warn(
                "Skipping WASM file with invalid path structure",
                path=rel_path.as_posix(),
            )
            return

        plugin_name, version, filename = parts[:3]
        expected = f"{plugin_name}.wasm"
        if filename != expected:
            log.warn(
                "WASM filename mismatch",
                path=rel_path.as_posix(),
                expected=expected,
                actual=filename,
            )

        stat = wasm_path.stat()
        checksum = _sha256_hex(wasm_path.read_bytes())

        if plugin_name not in index.plugins:
            metadata_path = self.plugins_dir / plugin_name / "metadata.json"
            try:
                metadata = self.load_metadata(metadata_path, plugin_name)
            except (OSError, ValueError) as err:
                log.warn(
                    "Failed to load metadata, using defaults",
                    path=str(metadata_path),
                    error=str(err),
                )
                metadata = _default_metadata(plugin_name)
            index.plugins[plugin_name] = Plugin(
                name=metadata.name,
                description=metadata.description,
                author=metadata.author,
                home_url=metadata.home_url,
                category=metadata.category,
                tags=list(metadata.tags),
                versions={},
            )

        index.plugins[plugin_name].versions[version] = Version(
            version=version,
            release_date=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).astimezone(),
            sha256=checksum,
            size=stat.st_size,
        )
        log.debug(
            "Processed plugin version",
            name=plugin_name,
            version=version,
            size=stat.st_size,
        )

    def load_metadata(
        self, metadata_path: str | os.PathLike, plugin_name: str
    ) -> PluginMetadata:
        """Load ``metadata.json`` over defaults; missing file gives the defaults.

        Raises OSError if the file cannot be read and ValueError if it is not
        valid metadata JSON.
        """
        metadata = _default_metadata(plugin_name)
        path = Path(metadata_path)
        if not path.exists():
            return metadata
        try:
            raw = path.read_bytes()
        except OSError as err:
            raise OSError(f"failed to read metadata file: {err}") from err
        try:
            data = json.loads(raw)
        except ValueError as err:
            raise ValueError(f"failed to parse metadata JSON: {err}") from err
        _apply_metadata(metadata, data)
        if not metadata.name:
            metadata.name = plugin_name
        return metadata

    @staticmethod
    def _set_latest_versions(index: Index) -> None:
        for plugin_name, plugin in index.plugins.items():
            if not plugin.versions:
                continue
            latest_version = ""
            latest_time: datetime | None = None
            for version, info in plugin.versions.items():
                if not latest_version or (
                    latest_time is not None and info.release_date > latest_time
                ):
                    latest_version = version
                    latest_time = info.release_date
            plugin.latest = latest_version
            log.debug("Set latest version", plugin=plugin_name, version=latest_version)

    def write_index(self, index: Index, output_dir: str | os.PathLike) -> None:
        """Write index.json, its gzip copy and the gzip copy's SHA-256 file."""
        out = Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)

        json_data = _index_json(index)
        index_path = out / INDEX_JSON
        index_path.write_bytes(json_data)

        compressed = compress_data(json_data)
        compressed_path = out / INDEX_GZ
        compressed_path.write_bytes(compressed)

        checksum_path = out / INDEX_CHECKSUM
        checksum_path.write_text(f"{_sha256_hex(compressed)}  {INDEX_GZ}\n")

        log.debug("Wrote index files", dir=str(out), plugins=len(index.plugins))
        print("Successfully generated registry index:")
        print(f"  - {index_path} ({len(json_data)} bytes)")
        print(f"  - {compressed_path} ({len(compressed)} bytes)")
        print(f"  - {checksum_path}")
        print(f"  - {len(index.plugins)} plugins indexed")