"""Command line interface for cartree."""

from __future__ import annotations

import asyncio
import difflib
import os
from typing import Any, Optional

import click
import yaml
from rich.console import Console
from rich.syntax import Syntax
from rich.tree import Tree

from cartree.config import CartreeConfig, ConfigError, ConfigManager, resolve_with_precedence
from cartree.config.resolver import assign_path
from cartree.discovery import (
    DiscoveryEngine,
    DiscoveryError,
    LocalFileSystem,
    ProjectNatureValidator,
)
from cartree.host import ConsoleNotifier, DocumentOpenedEmitter
from cartree.logs import configure_logging
from cartree.tree import CartridgeTreeProvider, ExpansionHint, NodeKind, TreeNode

console = Console()

_KIND_STYLES = {
    NodeKind.WORKSPACE: "yellow",
    NodeKind.CARTRIDGE: "bold cyan",
    NodeKind.FOLDER: "blue",
    NodeKind.FILE: "white",
}


def _load_config() -> CartreeConfig:
    """Load configuration and configure logging, converting failures for click."""
    try:
        config = ConfigManager().load()
        configure_logging(config.logging)
    except (ConfigError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    return config


def _build_provider(
    config: CartreeConfig,
    workspace: str,
    *,
    active_file: Optional[str],
    quiet: bool,
    document_events: Optional[DocumentOpenedEmitter] = None,
) -> CartridgeTreeProvider:
    engine = DiscoveryEngine(
        LocalFileSystem.from_settings(config.discovery),
        ProjectNatureValidator.from_settings(config.discovery),
    )
    return CartridgeTreeProvider(
        os.path.abspath(workspace) if workspace else "",
        engine=engine,
        notifier=ConsoleNotifier(quiet=quiet),
        document_events=document_events,
        active_file=os.path.abspath(active_file) if active_file else None,
    )


async def _expand(
    provider: CartridgeTreeProvider, nodes: list[TreeNode], depth: int, level: int = 0
) -> list[dict[str, Any]]:
    """Materialize ``nodes`` and fetch children only where the host would show them.

    Nodes hinted as expanded are always opened; collapsed nodes are opened
    while ``level`` is below ``depth``.
    """
    rendered: list[dict[str, Any]] = []
    for node in nodes:
        entry: dict[str, Any] = {"node": node, "children": None}
        hint = node.expansion_hint
        if hint == ExpansionHint.EXPANDED or (hint == ExpansionHint.COLLAPSED and level < depth):
            children = await provider.get_children(node)
            entry["children"] = await _expand(provider, children, depth, level + 1)
        rendered.append(entry)
    return rendered


async def _render(provider: CartridgeTreeProvider, depth: int) -> list[dict[str, Any]]:
    roots = await provider.get_root_nodes()
    return await _expand(provider, roots, depth)


def _to_payload(entries: list[dict[str, Any]]) -> list[dict[str, Any]]:
    payload = []
    for entry in entries:
        data = entry["node"].model_dump(mode="json")
        if entry["children"] is not None:
            data["children"] = _to_payload(entry["children"])
        payload.append(data)
    return payload


def _add_branches(tree: Tree, entries: list[dict[str, Any]]) -> None:
    for entry in entries:
        node: TreeNode = entry["node"]
        style = _KIND_STYLES[node.kind]
        marker = ""
        if node.expansion_hint == ExpansionHint.COLLAPSED and entry["children"] is None:
            marker = " [dim]…[/dim]"
        branch = tree.add(f"[{style}]{node.label}[/{style}]{marker}")
        if entry["children"] is not None:
            _add_branches(branch, entry["children"])


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="cartree")
def cli() -> None:
    """cartree shows the cartridges of a workspace as a lazily expanded tree."""


@cli.command()
@click.argument("workspace", type=click.Path(file_okay=False, path_type=str))
@click.option("--active", "active_file", type=str, help="File whose ancestors start expanded.")
@click.option(
    "--open",
    "opened",
    multiple=True,
    type=str,
    help="Simulate opening a document; repeatable, applied in order.",
)
@click.option("--depth", type=click.IntRange(min=0), help="Also expand collapsed nodes to DEPTH.")
@click.option("--json", "json_output", is_flag=True, help="Emit the rendered tree as JSON.")
@click.option("--quiet", is_flag=True, help="Suppress workspace notifications.")
def tree(
    workspace: str,
    active_file: Optional[str],
    opened: tuple[str, ...],
    depth: Optional[int],
    json_output: bool,
    quiet: bool,
) -> None:
    """Render the cartridge tree for WORKSPACE.

    Args:
        workspace: Workspace root directory.
        active_file: Initial active file.
        opened: Documents announced as opened after the provider is built.
        depth: Depth to which collapsed nodes are expanded as well.
        json_output: Whether to print JSON instead of a rich tree.
        quiet: Whether to hide notifications.

    Raises:
        click.ClickException: If configuration cannot be loaded or discovery fails.
    """
    config = _load_config()
    events = DocumentOpenedEmitter()
    provider = _build_provider(
        config,
        workspace,
        active_file=active_file,
        quiet=quiet or json_output or config.cli.quiet_default,
        document_events=events,
    )
    refreshes: list[Optional[TreeNode]] = []
    subscription = provider.on_did_change_tree_data(refreshes.append)
    for path in opened:
        events.open_document(os.path.abspath(path))

    max_depth = depth if depth is not None else config.cli.max_depth
    try:
        entries = asyncio.run(_render(provider, max_depth))
    except DiscoveryError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        subscription.dispose()
        provider.dispose()

    if json_output:
        console.print_json(
            data={
                "workspace": provider.workspace_root,
                "active_file": provider.active_file,
                "refreshes": len(refreshes),
                "nodes": _to_payload(entries),
            }
        )
        return

    root = Tree(f"[bold]{provider.workspace_root or '(no workspace)'}[/bold]")
    _add_branches(root, entries)
    console.print(root)


@cli.command()
@click.argument("workspace", type=click.Path(file_okay=False, path_type=str))
@click.option("--json", "json_output", is_flag=True, help="Emit cartridge paths as JSON.")
def cartridges(workspace: str, json_output: bool) -> None:
    """List validated cartridge roots beneath WORKSPACE."""
    config = _load_config()
    provider = _build_provider(
        config, workspace, active_file=None, quiet=json_output or config.cli.quiet_default
    )
    try:
        nodes = asyncio.run(provider.get_root_nodes())
    except DiscoveryError as exc:
        raise click.ClickException(str(exc)) from exc
    finally:
        provider.dispose()

    found = [node for node in nodes if node.kind == NodeKind.CARTRIDGE]
    if json_output:
        console.print_json(data={"cartridges": [node.location for node in found]})
        return
    if not found:
        console.print("[yellow]No cartridges found.[/yellow]")
        return
    for node in found:
        console.print(f"[cyan]{node.label}[/cyan]  {node.location}")


@cli.group()
def config() -> None:
    """Manage cartree configuration files and overrides."""


@config.command("view")
@click.option("--no-env", is_flag=True, help="Ignore environment overrides when displaying output.")
def config_view(no_env: bool) -> None:
    """Display the effective configuration after applying precedence rules."""
    manager = ConfigManager()
    try:
        manager.ensure_exists()
        effective = manager.load(include_env=not no_env)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    yaml_text = yaml.safe_dump(effective.model_dump(mode="python"), sort_keys=False)
    console.print(Syntax(yaml_text, "yaml", word_wrap=True))


@config.command("set")
@click.argument("key")
@click.option("--value", required=True, help="Value to assign to KEY.")
def config_set(key: str, value: str) -> None:
    """Persist a configuration value expressed as a dotted KEY.

    Args:
        key: Dotted path such as `discovery.marker_filename`.
        value: YAML literal written into the configuration file.

    Raises:
        click.ClickException: If parsing, assignment, or validation fails.
    """
    manager = ConfigManager()
    segments = [segment.strip() for segment in key.split(".") if segment.strip()]
    if not segments:
        raise click.ClickException("KEY must specify a dotted path such as 'logging.level'.")

    try:
        parsed_value = yaml.safe_load(value)
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Unable to parse value: {exc}") from exc

    try:
        manager.ensure_exists()
        before = manager.read_text().splitlines()
        file_data = manager.load_file_overrides()
        assign_path(file_data, segments, parsed_value)
        resolve_with_precedence(defaults=CartreeConfig(), file_overrides=file_data)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(file_data)
    after = manager.read_text().splitlines()
    # The timestamp line always changes; only report real edits.
    diff = list(
        difflib.unified_diff(
            before,
            after,
            fromfile="config.yaml (before)",
            tofile="config.yaml (after)",
            lineterm="",
        )
    )
    changed = [
        line
        for line in diff
        if line.startswith(("+", "-"))
        and not line.startswith(("+++", "---"))
        and "Last updated" not in line
    ]
    if not changed:
        console.print("[yellow]No changes applied; value already up to date.[/yellow]")
        return

    console.print(Syntax("\n".join(diff), "diff", word_wrap=False))
    console.print(f"[green]Updated {'.'.join(segments)}.[/green]")


@config.command("edit")
def config_edit() -> None:
    """Open the configuration file in an editor and validate the result."""
    manager = ConfigManager()
    manager.ensure_exists()

    original = manager.read_text()
    edited = click.edit(original, extension=".yaml")
    if edited is None or edited == original:
        console.print("[yellow]No changes detected.[/yellow]")
        return

    try:
        parsed = yaml.safe_load(edited) or {}
    except yaml.YAMLError as exc:
        raise click.ClickException(f"Invalid YAML: {exc}") from exc
    if not isinstance(parsed, dict):
        raise click.ClickException("Configuration file must contain a top-level mapping.")

    try:
        resolve_with_precedence(defaults=CartreeConfig(), file_overrides=parsed)
    except ConfigError as exc:
        raise click.ClickException(str(exc)) from exc

    manager.save(parsed)
    console.print("[green]Configuration updated successfully.[/green]")


if __name__ == "__main__":
    cli()
