"""Exception classes for the wedding dashboard."""


class DashboardError(Exception):
    """Base exception for the wedding dashboard."""
    pass


class SnapshotError(DashboardError):
    """A record snapshot could not be fetched or parsed."""
    pass


class ConfigError(DashboardError):
    """Configuration-related errors."""
    pass
