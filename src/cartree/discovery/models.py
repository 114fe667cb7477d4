"""Discovery result models."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ChildListing(BaseModel):
    """Immediate children of one directory, folders kept ahead of files.

    Attributes:
        directories: Subdirectory names in filesystem enumeration order.
        files: File names in filesystem enumeration order.
    """

    model_config = ConfigDict(frozen=True)

    directories: List[str] = Field(default_factory=list)
    files: List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.directories and not self.files

    @property
    def count(self) -> int:
        return len(self.directories) + len(self.files)


__all__ = ["ChildListing"]
