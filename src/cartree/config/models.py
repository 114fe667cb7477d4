"""Configuration models describing cartree settings."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MARKER_FILENAME = ".project"
DEFAULT_EXCLUDED_DIRECTORIES = (".git", ".svn", ".hg", "node_modules", "bower_components")
DEFAULT_CARTRIDGE_NATURES = ("com.demandware.studio.core.beehiveNature",)


class CartreeBaseModel(BaseModel):
    """Shared configuration for cartree Pydantic models."""

    model_config = ConfigDict(extra="forbid")


class DiscoverySettings(CartreeBaseModel):
    """Options governing how cartridges are located in a workspace.

    Attributes:
        marker_filename: Exact file name whose presence marks a candidate cartridge root.
        excluded_directories: Directory names pruned from the marker search.
        follow_symlinks: Whether the marker search descends into symlinked directories.
        cartridge_natures: Project natures that identify a marker file as a cartridge.
    """

    marker_filename: str = DEFAULT_MARKER_FILENAME
    excluded_directories: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_DIRECTORIES)
    )
    follow_symlinks: bool = False
    cartridge_natures: List[str] = Field(default_factory=lambda: list(DEFAULT_CARTRIDGE_NATURES))


class LoggingSettings(CartreeBaseModel):
    """Runtime logging configuration.

    Attributes:
        level: Logging verbosity level.
    """

    level: str = "WARNING"


class CLIOptions(CartreeBaseModel):
    """CLI behavior defaults and presentation preferences.

    Attributes:
        quiet_default: Whether commands suppress notifications by default.
        max_depth: Depth up to which `cartree tree` expands collapsed nodes.
    """

    quiet_default: bool = False
    max_depth: int = Field(default=0, ge=0)


class CartreeConfig(CartreeBaseModel):
    """Top-level configuration struct for cartree.

    Attributes:
        discovery: Cartridge discovery settings.
        logging: Logging configuration.
        cli: CLI presentation defaults.
    """

    discovery: DiscoverySettings = Field(default_factory=DiscoverySettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    cli: CLIOptions = Field(default_factory=CLIOptions)


__all__ = [
    "CartreeBaseModel",
    "DiscoverySettings",
    "LoggingSettings",
    "CLIOptions",
    "CartreeConfig",
    "DEFAULT_MARKER_FILENAME",
    "DEFAULT_EXCLUDED_DIRECTORIES",
    "DEFAULT_CARTRIDGE_NATURES",
]
