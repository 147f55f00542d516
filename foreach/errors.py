class ForEachError(Exception):
    """Base class for failures that end a run with a non-zero status."""


class ConfigurationError(ForEachError):
    pass


class LaunchError(ForEachError):
    """The process-creation mechanism itself failed."""
