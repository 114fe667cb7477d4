"""Filesystem and validation abstractions used by the discovery engine.

Both gateways are asynchronous so the engine can fan out work on a single
event loop. Real implementations live in ``real.py``; in-memory fakes for
tests live in ``fake.py``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class FileSystem(ABC):
    """Read-only filesystem queries needed to build the tree."""

    @abstractmethod
    async def path_exists(self, path: str) -> bool:
        """Return True if ``path`` exists."""
        ...

    @abstractmethod
    async def list_directories(self, path: str) -> list[str]:
        """Return the names of the immediate subdirectories of ``path``.

        Names are returned in the order the filesystem enumerates them.
        """
        ...

    @abstractmethod
    async def list_files(self, path: str) -> list[str]:
        """Return the names of the immediate files in ``path``."""
        ...

    @abstractmethod
    async def find_marker_files(self, root: str) -> list[str]:
        """Return absolute paths of every marker file beneath ``root``.

        The search recurses, does not follow symbolic links, and skips
        version-control and dependency-manager directories.
        """
        ...


class CartridgeValidator(ABC):
    """Decides whether a marker file denotes a genuine cartridge."""

    @abstractmethod
    async def is_valid_cartridge(self, marker_path: str) -> bool:
        """Return True if the marker file at ``marker_path`` belongs to a cartridge."""
        ...
