"""Unit tests for tree node construction helpers."""

import pytest
from pydantic import TypeAdapter, ValidationError

from cartree.tree import InvalidNodeNameError
from cartree.tree.models import (
    NO_CARTRIDGES_LABEL,
    NO_FILES_LABEL,
    CartridgeNode,
    ExpansionHint,
    FileNode,
    FolderNode,
    Node,
    NodeKind,
    OpenAction,
    cartridge_node,
    expansion_for,
    file_node,
    folder_node,
    is_within,
    no_cartridges_node,
    no_files_node,
)

CARTRIDGE = CartridgeNode(
    label="cart1", location="/ws/cart1", expansion_hint=ExpansionHint.COLLAPSED
)


def test_folder_under_active_path_is_expanded() -> None:
    node = folder_node("templates", CARTRIDGE, "/ws/cart1/templates/home.isml")

    assert node.kind is NodeKind.FOLDER
    assert node.label == "templates"
    assert node.location == "/ws/cart1/templates"
    assert node.expansion_hint is ExpansionHint.EXPANDED


def test_folder_outside_active_path_is_collapsed() -> None:
    node = folder_node("scripts", CARTRIDGE, "/ws/cart1/templates/home.isml")

    assert node.expansion_hint is ExpansionHint.COLLAPSED
    assert folder_node("scripts", CARTRIDGE, None).expansion_hint is ExpansionHint.COLLAPSED


def test_expansion_requires_segment_aligned_prefix() -> None:
    assert is_within("/ws/cart", "/ws/cart/a.isml")
    assert is_within("/ws/cart", "/ws/cart")
    assert not is_within("/ws/cart", "/ws/cart1/a.isml")
    assert not is_within("", "/ws/cart/a.isml")
    assert expansion_for("/ws/cart1", "/ws/cart10/x") is ExpansionHint.COLLAPSED


def test_file_node_carries_open_action() -> None:
    node = file_node("README.md", CARTRIDGE)

    assert node.location == "/ws/cart1/README.md"
    assert node.expansion_hint is ExpansionHint.NONE
    assert node.open_action == OpenAction(verb="open", target="/ws/cart1/README.md")
    assert not node.is_placeholder


@pytest.mark.parametrize("name", ["", ".", "..", "a/b"])
def test_invalid_child_names_fail_fast(name: str) -> None:
    with pytest.raises(InvalidNodeNameError):
        folder_node(name, CARTRIDGE, None)
    with pytest.raises(ValueError):
        file_node(name, CARTRIDGE)


def test_placeholders() -> None:
    empty = no_files_node()
    assert empty.kind is NodeKind.FILE
    assert empty.label == NO_FILES_LABEL
    assert empty.location == ""
    assert empty.open_action is None
    assert empty.is_placeholder

    workspace = no_cartridges_node("/ws")
    assert workspace.kind is NodeKind.WORKSPACE
    assert workspace.label == NO_CARTRIDGES_LABEL
    assert workspace.location == "/ws"
    assert workspace.expansion_hint is ExpansionHint.NONE


def test_cartridge_node_label_and_hint() -> None:
    node = cartridge_node("/ws/cart2", "/ws/cart2/cartridge/templates/x.isml")

    assert node.label == "cart2"
    assert node.expansion_hint is ExpansionHint.EXPANDED


def test_equality_uses_kind_and_location() -> None:
    collapsed = FolderNode(label="a", location="/ws/a", expansion_hint=ExpansionHint.COLLAPSED)
    expanded = FolderNode(label="renamed", location="/ws/a", expansion_hint=ExpansionHint.EXPANDED)
    as_cartridge = CartridgeNode(
        label="a", location="/ws/a", expansion_hint=ExpansionHint.COLLAPSED
    )

    assert collapsed == expanded
    assert hash(collapsed) == hash(expanded)
    assert collapsed != as_cartridge
    assert len({collapsed, expanded, as_cartridge}) == 2


def test_nodes_are_frozen() -> None:
    node = file_node("README.md", CARTRIDGE)

    with pytest.raises(ValidationError):
        node.label = "other"  # type: ignore[misc]


def test_located_kinds_reject_empty_location() -> None:
    with pytest.raises(ValidationError):
        FolderNode(label="x", location="", expansion_hint=ExpansionHint.COLLAPSED)
    with pytest.raises(ValidationError):
        FolderNode(label="x", location="/ws/x", expansion_hint=ExpansionHint.NONE)


def test_node_union_dispatches_on_kind() -> None:
    adapter = TypeAdapter(Node)
    payload = file_node("README.md", CARTRIDGE).model_dump()

    restored = adapter.validate_python(payload)

    assert isinstance(restored, FileNode)
    assert restored.open_action is not None
    assert restored.open_action.target == "/ws/cart1/README.md"


def test_open_action_requires_matching_file_location() -> None:
    with pytest.raises(ValidationError):
        FileNode(label="x", location="", open_action=OpenAction(target="/ws/cart1/x"))
    with pytest.raises(ValidationError):
        FileNode(label="x", location="/ws/cart1/x", open_action=OpenAction(target="/ws/cart1/y"))
    with pytest.raises(ValidationError):
        OpenAction(target="")
