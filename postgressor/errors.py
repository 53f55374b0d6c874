"""Exception types raised by postgressor."""


class PostgressorError(Exception):
    """Base class for postgressor failures."""

    def __init__(self, message: str, details: str | None = None):
        self.message = message
        self.details = details
        super().__init__(message)


class ConfigurationError(PostgressorError):
    """Raised when connection parameters cannot be resolved.

    Covers a missing connection source, an unsupported adapter and a
    malformed connection string or config file. Always fatal: nothing is
    executed once this is raised.
    """
