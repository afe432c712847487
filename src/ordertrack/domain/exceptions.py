"""Domain-level exceptions.

Everything the order tracker reports to a user derives from
DomainException, so the CLI can catch one type and print the message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """An order is not in the list a transition expects it in."""


class EntityNotFoundError(DomainException):
    """The order (or list position) is not on the board."""


class OrderParseError(DomainException):
    """An order file could not be turned into a valid order."""
