# app/core/errors.py

class ValidationError(Exception):
    """Bad input for a single operation (range, filter, preset, file)."""


class InvalidRangeError(ValidationError):
    """Report range boundary missing or not a YYYY-MM-DD date."""


class StoreUnavailableError(Exception):
    """The record store could not complete the operation."""
