"""
Custom exceptions for minorephem.

This module defines domain-specific exceptions used throughout the application
to provide clear error context and enable precise error handling.
"""


class MinorEphemError(Exception):
    """Base exception for all minorephem-specific errors."""
    pass


class ConvergenceError(MinorEphemError):
    """Raised when numerical algorithms fail to converge."""
    pass


class InputError(MinorEphemError):
    """Raised when input required for a computation is missing or malformed."""
    pass


class CatalogFileError(InputError):
    """Raised when the orbit catalog file cannot be read."""
    pass


class RecordNotFoundError(InputError):
    """Raised when no catalog record matches a designation."""
    pass


class CatalogParsingError(InputError):
    """Raised when catalog parsing fails."""
    pass


class InvalidEpochError(InputError):
    """Raised when a packed epoch cannot be decoded."""
    pass


class InvalidTimestampError(InputError):
    """Raised when a timestamp cannot be parsed."""
    pass


class JobFileError(InputError):
    """Raised when a job file is unreadable or lacks required fields."""
    pass


class SiteNotFoundError(InputError):
    """Raised when an observatory code is not in the site list."""
    pass


class ConfigurationError(InputError):
    """Raised when command line configuration is invalid."""
    pass


class EphemerisLoadError(InputError):
    """Raised when a planetary ephemeris kernel cannot be loaded or downloaded."""
    pass


class DataSaveError(MinorEphemError):
    """Raised when results cannot be written to a file."""
    pass


__all__ = [
    'MinorEphemError',
    'ConvergenceError',
    'InputError',
    'CatalogFileError',
    'RecordNotFoundError',
    'CatalogParsingError',
    'InvalidEpochError',
    'InvalidTimestampError',
    'JobFileError',
    'SiteNotFoundError',
    'ConfigurationError',
    'EphemerisLoadError',
    'DataSaveError'
]
