class SyncError(Exception):
    """Base error for the upload sync."""
    pass


class ConfigError(SyncError):
    """Missing or invalid configuration."""
    pass


class ChannelNotFoundError(SyncError):
    """The channel lookup returned no items."""
    pass
