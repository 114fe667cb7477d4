"""Fake discovery gateways for testing.

Both fakes are in-memory and deterministic. They have no public setup
methods; all state is supplied to the constructor.
"""

from __future__ import annotations

import asyncio
from typing import Iterable, Mapping

from .abc import CartridgeValidator, FileSystem


class FakeFileSystem(FileSystem):
    """In-memory filesystem keyed by absolute path strings."""

    def __init__(
        self,
        *,
        existing_paths: Iterable[str] = (),
        directories: Mapping[str, list[str]] | None = None,
        files: Mapping[str, list[str]] | None = None,
        marker_files: Mapping[str, list[str]] | None = None,
        search_error: str | None = None,
        list_error: str | None = None,
        directory_delay: float = 0.0,
        file_delay: float = 0.0,
    ) -> None:
        """Create a fake filesystem.

        Args:
            existing_paths: Paths reported as existing in addition to every
                path that has directory, file, or marker entries.
            directories: Subdirectory names per directory path.
            files: File names per directory path.
            marker_files: Marker file paths returned per search root.
            search_error: If set, find_marker_files() raises OSError with this message.
            list_error: If set, list_directories() and list_files() raise OSError
                with this message.
            directory_delay: Seconds list_directories() sleeps before answering.
            file_delay: Seconds list_files() sleeps before answering.
        """
        self._directories = dict(directories or {})
        self._files = dict(files or {})
        self._marker_files = dict(marker_files or {})
        self._existing = set(existing_paths)
        self._existing.update(self._directories, self._files, self._marker_files)
        self._search_error = search_error
        self._list_error = list_error
        self._directory_delay = directory_delay
        self._file_delay = file_delay
        self._listed: list[str] = []
        self._searches: list[str] = []

    @property
    def listed_paths(self) -> list[str]:
        """Paths passed to list_directories(), in call order."""
        return list(self._listed)

    @property
    def search_count(self) -> int:
        return len(self._searches)

    async def path_exists(self, path: str) -> bool:
        return path in self._existing

    async def list_directories(self, path: str) -> list[str]:
        self._listed.append(path)
        if self._directory_delay:
            await asyncio.sleep(self._directory_delay)
        if self._list_error is not None:
            raise OSError(self._list_error)
        return list(self._directories.get(path, []))

    async def list_files(self, path: str) -> list[str]:
        if self._file_delay:
            await asyncio.sleep(self._file_delay)
        if self._list_error is not None:
            raise OSError(self._list_error)
        return list(self._files.get(path, []))

    async def find_marker_files(self, root: str) -> list[str]:
        self._searches.append(root)
        if self._search_error is not None:
            raise OSError(self._search_error)
        return list(self._marker_files.get(root, []))


class FakeCartridgeValidator(CartridgeValidator):
    """Validator that accepts a configured set of marker paths."""

    def __init__(
        self,
        *,
        valid_paths: Iterable[str] = (),
        delays: Mapping[str, float] | None = None,
        errors: Mapping[str, str] | None = None,
    ) -> None:
        """Create a fake validator.

        Args:
            valid_paths: Marker paths that validate as cartridges.
            delays: Per-path sleep before answering, used to make
                validations finish out of submission order.
            errors: Per-path OSError message raised once the path's delay has
                elapsed.
        """
        self._valid = frozenset(valid_paths)
        self._delays = dict(delays or {})
        self._errors = dict(errors or {})
        self._submitted: list[str] = []
        self._completed: list[str] = []

    @property
    def submitted(self) -> list[str]:
        return list(self._submitted)

    @property
    def completed(self) -> list[str]:
        return list(self._completed)

    async def is_valid_cartridge(self, marker_path: str) -> bool:
        self._submitted.append(marker_path)
        delay = self._delays.get(marker_path, 0.0)
        if delay:
            await asyncio.sleep(delay)
        self._completed.append(marker_path)
        if marker_path in self._errors:
            raise OSError(self._errors[marker_path])
        return marker_path in self._valid


__all__ = ["FakeFileSystem", "FakeCartridgeValidator"]
