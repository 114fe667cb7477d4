"""Lazy tree view model over workspace cartridges."""

from .errors import InvalidNodeNameError, TreeError
from .models import (
    CartridgeNode,
    ExpansionHint,
    FileNode,
    FolderNode,
    Node,
    NodeKind,
    OpenAction,
    TreeNode,
    WorkspacePlaceholderNode,
)
from .provider import CartridgeTreeProvider

__all__ = [
    "InvalidNodeNameError",
    "TreeError",
    "CartridgeNode",
    "ExpansionHint",
    "FileNode",
    "FolderNode",
    "Node",
    "NodeKind",
    "OpenAction",
    "TreeNode",
    "WorkspacePlaceholderNode",
    "CartridgeTreeProvider",
]
