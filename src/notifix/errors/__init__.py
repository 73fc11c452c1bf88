"""Custom error types used in notifix."""


class NotifixError(Exception):
    """Base class for notifix errors."""


class ConfigurationError(NotifixError, ValueError):
    """Invalid notification configuration."""


class InvalidInputError(NotifixError, ValueError):
    """Caller input that the notification core rejects."""


class ProviderError(NotifixError):
    """A count provider returned something that is not a count."""
