"""Local filesystem implementations of the discovery gateways."""

from __future__ import annotations

import asyncio
import logging
import os
import xml.etree.ElementTree as ET
from typing import Iterable

from cartree.config.models import (
    DEFAULT_CARTRIDGE_NATURES,
    DEFAULT_EXCLUDED_DIRECTORIES,
    DEFAULT_MARKER_FILENAME,
    DiscoverySettings,
)

from .abc import CartridgeValidator, FileSystem

LOGGER = logging.getLogger(__name__)


class LocalFileSystem(FileSystem):
    """Query the local disk, running blocking calls in worker threads."""

    def __init__(
        self,
        *,
        marker_filename: str = DEFAULT_MARKER_FILENAME,
        excluded_directories: Iterable[str] = DEFAULT_EXCLUDED_DIRECTORIES,
        follow_symlinks: bool = False,
    ) -> None:
        self.marker_filename = marker_filename
        self.excluded_directories = frozenset(excluded_directories)
        self.follow_symlinks = follow_symlinks

    @classmethod
    def from_settings(cls, settings: DiscoverySettings) -> "LocalFileSystem":
        return cls(
            marker_filename=settings.marker_filename,
            excluded_directories=settings.excluded_directories,
            follow_symlinks=settings.follow_symlinks,
        )

    async def path_exists(self, path: str) -> bool:
        return await asyncio.to_thread(os.path.exists, path)

    async def list_directories(self, path: str) -> list[str]:
        return await asyncio.to_thread(self._scan_names, path, True)

    async def list_files(self, path: str) -> list[str]:
        return await asyncio.to_thread(self._scan_names, path, False)

    async def find_marker_files(self, root: str) -> list[str]:
        return await asyncio.to_thread(self._walk_markers, root)

    def _scan_names(self, path: str, directories: bool) -> list[str]:
        names: list[str] = []
        with os.scandir(path) as entries:
            for entry in entries:
                if directories and entry.is_dir():
                    names.append(entry.name)
                elif not directories and entry.is_file():
                    names.append(entry.name)
        return names

    def _walk_markers(self, root: str) -> list[str]:
        root = os.path.abspath(root)

        def _on_error(exc: OSError) -> None:
            # Only an unreadable workspace root fails the search.
            if os.path.abspath(exc.filename or "") == root:
                raise exc
            LOGGER.debug("Skipping unreadable directory during marker search: %s", exc)

        matches: list[str] = []
        for directory, dirnames, filenames in os.walk(
            root, onerror=_on_error, followlinks=self.follow_symlinks
        ):
            dirnames[:] = [name for name in dirnames if name not in self.excluded_directories]
            if self.marker_filename in filenames:
                candidate = os.path.join(directory, self.marker_filename)
                if os.path.isfile(candidate):
                    matches.append(candidate)
        LOGGER.debug("Found %d marker file(s) beneath %s", len(matches), root)
        return matches


class ProjectNatureValidator(CartridgeValidator):
    """Accept marker files whose Eclipse project description declares a cartridge nature.

    A `.project` file is a small XML document; cartridges list a nature such as
    ``com.demandware.studio.core.beehiveNature`` under ``<natures>``. Files that
    are not well-formed XML are treated as unrelated projects.
    """

    def __init__(self, natures: Iterable[str] = DEFAULT_CARTRIDGE_NATURES) -> None:
        self.natures = frozenset(natures)

    @classmethod
    def from_settings(cls, settings: DiscoverySettings) -> "ProjectNatureValidator":
        return cls(settings.cartridge_natures)

    async def is_valid_cartridge(self, marker_path: str) -> bool:
        content = await asyncio.to_thread(_read_bytes, marker_path)
        try:
            document = ET.fromstring(content)
        except ET.ParseError as exc:
            LOGGER.debug("Ignoring malformed project file %s: %s", marker_path, exc)
            return False

        declared = {(nature.text or "").strip() for nature in document.iter("nature")}
        return not self.natures.isdisjoint(declared)


def _read_bytes(path: str) -> bytes:
    with open(path, "rb") as handle:
        return handle.read()


__all__ = ["LocalFileSystem", "ProjectNatureValidator"]
