"""Exceptions for the OpenWebIf TV integration."""


class OpenWebIfError(Exception):
    """Base error for the integration."""


class OpenWebIfApiError(OpenWebIfError):
    """General API error."""


class OpenWebIfConnectionError(OpenWebIfApiError):
    """Request failed, timed out or returned a non-2xx status."""


class OpenWebIfAuthError(OpenWebIfConnectionError):
    """Authentication failed."""


class OpenWebIfConfigError(OpenWebIfError):
    """Device configuration is missing or malformed."""


class OpenWebIfPersistenceError(OpenWebIfError):
    """Reading or writing a storage file failed."""


class InvalidChannelError(OpenWebIfError):
    """Channel identifier is outside the configured channel list."""
