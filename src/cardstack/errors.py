"""Exceptions raised by the cardstack core.

Lookups that miss are not errors: they return None or False.
"""


class CardstackError(Exception):
    """Base class for all cardstack errors."""


class ValidationError(CardstackError):
    """A field value or argument was rejected."""


class PersistenceError(CardstackError):
    """Writing or removing a board document failed."""


class DecodeError(CardstackError, ValueError):
    """A board document could not be decoded."""
