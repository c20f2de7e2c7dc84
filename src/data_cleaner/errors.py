from __future__ import annotations


class DataCleanerError(Exception):
    """Base class for errors raised by data_cleaner."""


class ValidationError(DataCleanerError, ValueError):
    """Raised for invalid configuration such as an empty field list or a threshold out of range."""


__all__ = ["DataCleanerError", "ValidationError"]
