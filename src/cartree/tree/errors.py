"""Tree model errors."""


class TreeError(Exception):
    """Base exception for tree construction failures."""


class InvalidNodeNameError(TreeError, ValueError):
    """Raised when a child name cannot be joined onto its parent location."""
