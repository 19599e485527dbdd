"""Random image roulette over the plugin's data directory."""

from __future__ import annotations

import posixpath
import random

from supbot.sdk.runtime import HostError, PluginContext
from supbot.sdk.types import HelpOutput, Input, Output, Plugin, error, new_help_output, success

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")


def _extension(filename: str) -> str:
    name = filename.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    return name[dot:] if dot >= 0 else ""


def _join(*parts: str) -> str:
    present = [part for part in parts if part]
    return posixpath.normpath(posixpath.join(*present)) if present else ""


def is_image_file(filename: str) -> bool:
    """Return whether ``filename`` has an image extension, ignoring case."""
    return _extension(filename).lower() in IMAGE_EXTENSIONS


class RuletaPlugin(Plugin):
    """Picks a random image below a directory and sends it to the sender."""

    def __init__(self, context: PluginContext, rng: random.Random | None = None) -> None:
        self._context = context
        self._rng = rng if rng is not None else random.Random()

    def name(self) -> str:
        return "ruleta"

    def topics(self) -> list[str]:
        return ["ruleta"]

    def handle_message(self, request: Input) -> Output:
        search_dir = request.message.strip() or "."

        try:
            images = self.find_image_files(search_dir)
        except HostError as err:
            return error(f"Failed to scan directory '{search_dir}': {err}")

        if not images:
            return error(
                f"No image files found in directory '{search_dir}'.\n\n"
                "Supported formats: .jpg, .jpeg, .png, .gif, .webp"
            )

        selected = images[self._rng.randrange(len(images))]
        try:
            self._context.send_image(request.sender, selected)
        except HostError as err:
            return error(f"Failed to send image '{selected}': {err}")

        return success("🎰 Ruleta rulz!")

    def find_image_files(self, root_dir: str) -> list[str]:
        """Return image paths found recursively below ``root_dir``.

        Raises HostError if ``root_dir`` itself cannot be listed; unreadable
        subdirectories are skipped.
        """
        images: list[str] = []
        self._scan(root_dir, "", images)
        return images

    def _scan(self, base_dir: str, current: str, images: list[str]) -> None:
        scan_path = _join(base_dir, current) if current else base_dir
        for entry in self._context.list_directory(scan_path):
            rel_path = _join(current, entry) if current else entry
            full_path = _join(base_dir, rel_path)
            try:
                self._context.list_directory(full_path)
            except HostError:
                if is_image_file(entry):
                    images.append(full_path)
                continue
            try:
                self._scan(base_dir, rel_path, images)
            except HostError:
                continue

    def get_help(self) -> HelpOutput:
        return new_help_output(
            "ruleta",
            "Random image roulette - picks and sends a random image from the plugin directory",
            ".sup ruleta [directory]",
            [
                ".sup ruleta",
                ".sup ruleta images",
                ".sup ruleta memes/funny",
            ],
            "fun",
        )

    def get_required_env_vars(self) -> list[str]:
        return []

    def version(self) -> str:
        return "0.1.0"