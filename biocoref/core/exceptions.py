"""Exceptions raised at the configuration and loading boundaries."""


class CoreferenceError(Exception):
    """Base class for package errors."""


class ConfigurationError(CoreferenceError):
    """Unknown component name, bad component arguments or an unreadable config file."""


class DocumentLoadError(CoreferenceError):
    """Input document failed validation or references something that does not exist."""
