"""Lazy tree provider over the cartridges of a workspace."""

from __future__ import annotations

import logging
from typing import Callable, Optional

from cartree.discovery.engine import DiscoveryEngine
from cartree.events import EventEmitter, Subscription
from cartree.host.abc import DocumentEvents, UserNotifier

from .models import (
    TreeNode,
    cartridge_node,
    file_node,
    folder_node,
    no_cartridges_node,
    no_files_node,
)

LOGGER = logging.getLogger(__name__)

EMPTY_WORKSPACE_MESSAGE = "No dependency in empty workspace"
MISSING_WORKSPACE_MESSAGE = "No workspace!"


class CartridgeTreeProvider:
    """Answer root and child queries for a host tree view.

    Nothing is cached between queries: every call rebuilds its nodes from the
    filesystem and the current active file. The only state held is the active
    file and the change signal.

    The provider assumes a single event loop delivers every call. A host that
    calls it from several threads must serialize ``refresh`` against
    ``get_children`` itself.
    """

    def __init__(
        self,
        workspace_root: Optional[str],
        *,
        engine: DiscoveryEngine,
        notifier: UserNotifier,
        document_events: Optional[DocumentEvents] = None,
        active_file: Optional[str] = None,
    ) -> None:
        """Initialize the provider.

        Args:
            workspace_root: Absolute path of the workspace, or None when no
                workspace is open.
            engine: Discovery engine used for every query.
            notifier: Surface for "nothing to show" messages.
            document_events: Optional source of document-opened events; each
                event refreshes the tree with the opened path.
            active_file: Initial active file used for expansion hints.
        """
        self._workspace_root = workspace_root or ""
        self._engine = engine
        self._notifier = notifier
        self._active_file = active_file
        self._changes: EventEmitter[Optional[TreeNode]] = EventEmitter()
        self._document_subscription: Optional[Subscription] = None
        if document_events is not None:
            self._document_subscription = document_events.on_document_opened(self.refresh)

    @property
    def workspace_root(self) -> str:
        return self._workspace_root

    @property
    def active_file(self) -> Optional[str]:
        return self._active_file

    def on_did_change_tree_data(
        self, listener: Callable[[Optional[TreeNode]], None]
    ) -> Subscription:
        """Subscribe to change notifications; the payload is None for "whole tree"."""
        return self._changes.subscribe(listener)

    def refresh(self, path: Optional[str] = None) -> None:
        """Optionally move the active file to ``path`` and signal a change.

        The signal fires even without a path so a host can force a re-render
        with the current state.
        """
        if path:
            self._active_file = path
        LOGGER.info("Refreshing tree (active file: %s)", self._active_file)
        self._changes.fire(None)

    def get_tree_item(self, node: TreeNode) -> TreeNode:
        return node

    async def get_children(self, node: Optional[TreeNode] = None) -> list[TreeNode]:
        """Return the root nodes when ``node`` is None, otherwise the node's children."""
        if node is None:
            return await self.get_root_nodes()
        return await self._get_node_children(node)

    async def get_root_nodes(self) -> list[TreeNode]:
        """Return one node per validated cartridge, or a placeholder when none exist.

        Raises:
            DiscoveryError: If the marker file search fails.
        """
        if not self._workspace_root:
            self._notifier.notify(EMPTY_WORKSPACE_MESSAGE)
            return []

        if not await self._engine.filesystem.path_exists(self._workspace_root):
            self._notifier.notify(MISSING_WORKSPACE_MESSAGE)
            return []

        active_file = self._active_file
        cartridges = await self._engine.discover_cartridges(self._workspace_root)
        if not cartridges:
            return [no_cartridges_node(self._workspace_root)]
        return [cartridge_node(path, active_file) for path in cartridges]

    async def _get_node_children(self, node: TreeNode) -> list[TreeNode]:
        active_file = self._active_file
        listing = await self._engine.list_children(node.location)
        if listing.is_empty:
            return [no_files_node()]

        children: list[TreeNode] = [
            folder_node(name, node, active_file) for name in listing.directories
        ]
        children.extend(file_node(name, node) for name in listing.files)
        LOGGER.debug("Listed %d child node(s) under %s", len(children), node.location)
        return children

    def dispose(self) -> None:
        """Stop listening for document events and drop every change listener."""
        if self._document_subscription is not None:
            self._document_subscription.dispose()
            self._document_subscription = None
        self._changes.clear()


__all__ = ["CartridgeTreeProvider", "EMPTY_WORKSPACE_MESSAGE", "MISSING_WORKSPACE_MESSAGE"]
