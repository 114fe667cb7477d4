"""Cartridge discovery for workspaces."""

from .abc import CartridgeValidator, FileSystem
from .engine import DiscoveryEngine, filter_async
from .errors import DiscoveryError
from .models import ChildListing
from .real import LocalFileSystem, ProjectNatureValidator

__all__ = [
    "CartridgeValidator",
    "FileSystem",
    "DiscoveryEngine",
    "filter_async",
    "DiscoveryError",
    "ChildListing",
    "LocalFileSystem",
    "ProjectNatureValidator",
]
