"""Exceptions raised by the engine."""


class FormatError(ValueError):
    """A board string could not be parsed."""


class ConfigError(ValueError):
    """An engine configuration file is invalid."""
