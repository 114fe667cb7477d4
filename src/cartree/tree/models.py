"""Node models for the cartridge tree.

Nodes are plain frozen values rebuilt on every query. Two nodes compare equal
when they share a kind and a location, which is what a host needs to diff one
rendering against the next.
"""

from __future__ import annotations

import os
from enum import Enum
from typing import Annotated, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .errors import InvalidNodeNameError

NO_CARTRIDGES_LABEL = "No cartridges found in this workspace."
NO_FILES_LABEL = "No files"


class NodeKind(str, Enum):
    """Tag distinguishing the four node variants."""

    WORKSPACE = "workspace"
    CARTRIDGE = "cartridge"
    FOLDER = "folder"
    FILE = "file"


class ExpansionHint(str, Enum):
    """Whether the host should render a node's children expanded, collapsed, or not at all."""

    NONE = "none"
    COLLAPSED = "collapsed"
    EXPANDED = "expanded"


class OpenAction(BaseModel):
    """Instruction for the host to open ``target`` when a file node is activated."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    verb: Literal["open"] = "open"
    target: str

    @field_validator("target")
    @classmethod
    def _require_target(cls, value: str) -> str:
        if not value:
            raise ValueError("open target must not be empty")
        return value


class TreeNode(BaseModel):
    """Fields shared by every node variant.

    Attributes:
        kind: Variant tag.
        label: Display string; a status message for placeholders.
        location: Absolute path the node represents; empty for some placeholders.
        expansion_hint: Rendering hint for the node's children.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: NodeKind
    label: str
    location: str
    expansion_hint: ExpansionHint

    @property
    def identity(self) -> Tuple[NodeKind, str]:
        """Return the ``(kind, location)`` pair used for equality."""
        return (self.kind, self.location)

    @property
    def is_placeholder(self) -> bool:
        return False

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeNode):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)


class _LocatedNode(TreeNode):
    @field_validator("location")
    @classmethod
    def _require_location(cls, value: str) -> str:
        if not value:
            raise ValueError("location must not be empty")
        return value


class WorkspacePlaceholderNode(TreeNode):
    """Stand-in shown at the root when a workspace holds no cartridges."""

    kind: Literal[NodeKind.WORKSPACE] = NodeKind.WORKSPACE
    expansion_hint: Literal[ExpansionHint.NONE] = ExpansionHint.NONE

    @property
    def is_placeholder(self) -> bool:
        return True


class CartridgeNode(_LocatedNode):
    """A validated cartridge root."""

    kind: Literal[NodeKind.CARTRIDGE] = NodeKind.CARTRIDGE
    expansion_hint: Literal[ExpansionHint.COLLAPSED, ExpansionHint.EXPANDED]


class FolderNode(_LocatedNode):
    """A directory beneath a cartridge."""

    kind: Literal[NodeKind.FOLDER] = NodeKind.FOLDER
    expansion_hint: Literal[ExpansionHint.COLLAPSED, ExpansionHint.EXPANDED]


class FileNode(TreeNode):
    """A file beneath a cartridge, or the "no files" placeholder when ``open_action`` is unset."""

    kind: Literal[NodeKind.FILE] = NodeKind.FILE
    expansion_hint: Literal[ExpansionHint.NONE] = ExpansionHint.NONE
    open_action: Optional[OpenAction] = None

    @model_validator(mode="after")
    def _open_action_matches_location(self) -> FileNode:
        if self.open_action is not None and self.open_action.target != self.location:
            raise ValueError("open_action target must equal the file location")
        return self

    @property
    def is_placeholder(self) -> bool:
        return not self.location


Node = Annotated[
    Union[WorkspacePlaceholderNode, CartridgeNode, FolderNode, FileNode],
    Field(discriminator="kind"),
]


def is_within(location: str, active_file: Optional[str]) -> bool:
    """Return True when ``location`` is a segment-aligned prefix of ``active_file``.

    ``/ws/cart`` contains ``/ws/cart/a.isml`` but not ``/ws/cart1/a.isml``.
    """
    if not active_file or not location:
        return False
    if active_file == location:
        return True
    prefix = location if location.endswith(os.sep) else location + os.sep
    return active_file.startswith(prefix)


def expansion_for(location: str, active_file: Optional[str]) -> ExpansionHint:
    """Return ``EXPANDED`` for ancestors of the active file and ``COLLAPSED`` otherwise."""
    if is_within(location, active_file):
        return ExpansionHint.EXPANDED
    return ExpansionHint.COLLAPSED


def join_child(parent: TreeNode, name: str) -> str:
    """Join a single child ``name`` onto ``parent.location``.

    Raises:
        InvalidNodeNameError: If the name is empty, a relative marker, or holds a separator.
    """
    if not name or name in (".", ".."):
        raise InvalidNodeNameError(f"Invalid child name {name!r} under {parent.location!r}")
    if os.sep in name or (os.altsep and os.altsep in name):
        raise InvalidNodeNameError(f"Child name {name!r} must not contain a path separator")
    if not parent.location:
        raise InvalidNodeNameError(f"Cannot place {name!r} under a node without a location")
    return os.path.join(parent.location, name)


def folder_node(name: str, parent: TreeNode, active_file: Optional[str]) -> FolderNode:
    location = join_child(parent, name)
    return FolderNode(
        label=name,
        location=location,
        expansion_hint=expansion_for(location, active_file),
    )


def file_node(name: str, parent: TreeNode) -> FileNode:
    location = join_child(parent, name)
    return FileNode(label=name, location=location, open_action=OpenAction(target=location))


def cartridge_node(path: str, active_file: Optional[str]) -> CartridgeNode:
    """Build the root node for the cartridge directory at ``path``."""
    label = os.path.basename(path.rstrip(os.sep)) or path
    hint = expansion_for(path, active_file)
    return CartridgeNode(label=label, location=path, expansion_hint=hint)


def no_cartridges_node(workspace_root: str) -> WorkspacePlaceholderNode:
    return WorkspacePlaceholderNode(label=NO_CARTRIDGES_LABEL, location=workspace_root)


def no_files_node() -> FileNode:
    return FileNode(label=NO_FILES_LABEL, location="")


__all__ = [
    "NodeKind",
    "ExpansionHint",
    "OpenAction",
    "TreeNode",
    "WorkspacePlaceholderNode",
    "CartridgeNode",
    "FolderNode",
    "FileNode",
    "Node",
    "NO_CARTRIDGES_LABEL",
    "NO_FILES_LABEL",
    "is_within",
    "expansion_for",
    "join_child",
    "folder_node",
    "file_node",
    "cartridge_node",
    "no_cartridges_node",
    "no_files_node",
]
