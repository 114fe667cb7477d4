"""Cartridge discovery and one-level directory listing."""

from __future__ import annotations

import asyncio
import logging
import os
from typing import Awaitable, Callable, Sequence, TypeVar

from .abc import CartridgeValidator, FileSystem
from .errors import DiscoveryError
from .models import ChildListing

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


async def filter_async(
    items: Sequence[T], predicate: Callable[[T], Awaitable[bool]]
) -> list[T]:
    """Evaluate ``predicate`` for every item concurrently and keep the accepted ones.

    The result preserves the order of ``items`` no matter which predicate
    finishes first.

    Raises:
        Exception: The first failure in input order, once every predicate has settled.
    """
    verdicts = await asyncio.gather(*(predicate(item) for item in items), return_exceptions=True)
    for verdict in verdicts:
        if isinstance(verdict, BaseException):
            raise verdict
    return [item for item, keep in zip(items, verdicts) if keep]


class DiscoveryEngine:
    """Locate cartridges in a workspace and list directory children on demand."""

    def __init__(self, filesystem: FileSystem, validator: CartridgeValidator) -> None:
        self.filesystem = filesystem
        self.validator = validator

    async def discover_cartridges(self, workspace_root: str) -> list[str]:
        """Return the directories of every validated cartridge beneath ``workspace_root``.

        Args:
            workspace_root: Absolute path of the workspace to search.

        Returns:
            list[str]: Cartridge directories in marker discovery order. Empty
            when the root is missing or nothing validates.

        Raises:
            DiscoveryError: If the marker file search fails.
        """
        if not await self.filesystem.path_exists(workspace_root):
            return []

        try:
            markers = await self.filesystem.find_marker_files(workspace_root)
        except Exception as exc:
            raise DiscoveryError(f"Marker search failed in {workspace_root}: {exc}") from exc

        if not markers:
            LOGGER.debug("No marker files beneath %s", workspace_root)
            return []

        accepted = await filter_async(markers, self.validator.is_valid_cartridge)
        LOGGER.debug(
            "Validated %d of %d marker file(s) beneath %s",
            len(accepted),
            len(markers),
            workspace_root,
        )
        return [os.path.dirname(marker) for marker in accepted]

    async def list_children(self, location: str) -> ChildListing:
        """List the immediate subdirectories and files of ``location``.

        Both queries run concurrently; directories always come first in the
        returned listing.
        """
        directories, files = await asyncio.gather(
            self.filesystem.list_directories(location),
            self.filesystem.list_files(location),
        )
        return ChildListing(directories=directories, files=files)


__all__ = ["DiscoveryEngine", "filter_async"]
