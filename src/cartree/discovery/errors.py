"""Discovery errors."""


class DiscoveryError(Exception):
    """Raised when the workspace-wide marker file search fails."""
