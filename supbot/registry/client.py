"""Client for fetching the plugin index and plugins from a registry."""

from __future__ import annotations

import gzip
import hashlib
import json
import os
import zlib
from pathlib import Path

import requests

from supbot import log
from supbot.registry.types import Index, PluginInfo

DEFAULT_REGISTRY_URL = "https://sup-registry.rbel.co"
INDEX_FILE = "index.json.gz"
INDEX_CHECKSUM_FILE = "index.json.gz.sha256"
USER_AGENT = "sup-cli/1.0"
TIMEOUT_SECONDS = 30.0


class RegistryError(Exception):
    """Raised when the registry cannot be reached or returns bad data."""


def _sup_dir() -> Path:
    return Path.home() / ".local" / "share" / "sup"


class RegistryClient:
    """Fetches the registry index and downloads plugins with checksum checks."""

    def __init__(self, registry_url: str | None = None) -> None:
        self.registry_url = registry_url or DEFAULT_REGISTRY_URL
        base = _sup_dir()
        self.cache_dir = base / "cache"
        self.plugins_dir = base / "plugins"
        self.timeout = TIMEOUT_SECONDS
        self._session = requests.Session()
        self._session.headers["User-Agent"] = USER_AGENT

    def fetch_index(self) -> Index:
        """Download, verify and decode the registry index."""
        try:
            Path(self.cache_dir).mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise RegistryError(f"failed to create cache directory: {err}") from err

        index_url = f"{self.registry_url}/{INDEX_FILE}"
        checksum_url = f"{self.registry_url}/{INDEX_CHECKSUM_FILE}"
        log.debug("Fetching index from registry", url=index_url)

        try:
            expected = self._fetch_checksum(checksum_url)
        except RegistryError as err:
            raise RegistryError(f"failed to fetch index checksum: {err}") from err

        try:
            index_data = self._fetch_file(index_url)
        except RegistryError as err:
            raise RegistryError(f"failed to fetch index: {err}") from err

        try:
            self.verify_checksum(index_data, expected)
        except RegistryError as err:
            raise RegistryError(f"index checksum verification failed: {err}") from err

        try:
            json_data = gzip.decompress(index_data)
        except (OSError, EOFError, zlib.error) as err:
            raise RegistryError(f"failed to decompress index: {err}") from err

        try:
            raw = json.loads(json_data)
            if not isinstance(raw, dict):
                raise ValueError("expected a JSON object")
            index = Index.from_dict(raw)
        except (ValueError, TypeError, AttributeError) as err:
            raise RegistryError(f"failed to parse index JSON: {err}") from err

        log.debug(
            "Successfully fetched index",
            plugins=len(index.plugins),
            version=index.version,
        )
        return index

    def download_plugin(
        self,
        plugin_name: str,
        version: str | None,
        target_dir: str | os.PathLike,
    ) -> Path:
        """Download one plugin version into ``target_dir``; return the file path."""
        try:
            index = self.fetch_index()
        except RegistryError as err:
            raise RegistryError(f"failed to fetch index: {err}") from err

        plugin = index.plugins.get(plugin_name)
        if plugin is None:
            raise RegistryError(f"plugin '{plugin_name}' not found in registry")

        if not version or version == "latest":
            version = plugin.latest

        version_info = plugin.versions.get(version)
        if version_info is None:
            raise RegistryError(
                f"version '{version}' not found for plugin '{plugin_name}'"
            )

        log.debug("Downloading plugin", name=plugin_name, version=version)
        url = self.download_url(plugin_name, version)
        log.debug("Fetching plugin from URL", url=url)

        try:
            plugin_data = self._fetch_file(url)
        except RegistryError as err:
            raise RegistryError(f"failed to download plugin: {err}") from err

        try:
            self.verify_checksum(plugin_data, version_info.sha256)
        except RegistryError as err:
            raise RegistryError(f"plugin checksum verification failed: {err}") from err

        target = Path(target_dir)
        try:
            target.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            raise RegistryError(f"failed to create target directory: {err}") from err

        plugin_path = target / f"{plugin_name}.wasm"
        try:
            plugin_path.write_bytes(plugin_data)
        except OSError as err:
            raise RegistryError(f"failed to write plugin file: {err}") from err

        log.debug(
            "Successfully downloaded plugin",
            name=plugin_name,
            version=version,
            path=str(plugin_path),
        )
        return plugin_path

    def download_url(self, plugin_name: str, version: str) -> str:
        """Return the URL of a plugin version's WASM file."""
        return f"{self.registry_url}/plugins/{plugin_name}/{version}/{plugin_name}.wasm"

    def list_plugins(self) -> list[PluginInfo]:
        """Return the registry's plugins, sorted by name, marking installed ones."""
        try:
            index = self.fetch_index()
        except RegistryError as err:
            raise RegistryError(f"failed to fetch index: {err}") from err

        plugins_dir = Path(self.plugins_dir)
        infos = []
        for name in sorted(index.plugins):
            plugin = index.plugins[name]
            if plugin.latest not in plugin.versions:
                continue
            infos.append(
                PluginInfo(
                    name=name,
                    version=plugin.latest,
                    author=plugin.author,
                    description=plugin.description,
                    home_url=plugin.home_url,
                    category=plugin.category,
                    tags=list(plugin.tags),
                    installed=(plugins_dir / f"{name}.wasm").exists(),
                    available=True,
                )
            )
        return infos

    def verify_checksum(self, data: bytes, expected_checksum: str) -> None:
        """Raise RegistryError unless ``data`` has the given SHA-256 hex digest."""
        actual = hashlib.sha256(data).hexdigest()
        if actual != expected_checksum:
            raise RegistryError(
                f"checksum mismatch: expected {expected_checksum}, got {actual}"
            )

    def _fetch_file(self, url: str) -> bytes:
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.RequestException as err:
            raise RegistryError(f"failed to fetch URL {url}: {err}") from err
        with response:
            if response.status_code != 200:
                raise RegistryError(
                    f"HTTP error {response.status_code} when fetching {url}"
                )
            return response.content

    def _fetch_checksum(self, url: str) -> str:
        text = self._fetch_file(url).decode("utf-8", errors="replace").strip()
        parts = text.split()
        return parts[0] if parts else text