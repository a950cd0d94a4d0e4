class SplitError(Exception):
    """Base class for errors raised by the splitting core."""


class ValidationError(SplitError, ValueError):
    """Malformed identifier or amount, or an inconsistent share record.

    Subclasses ValueError so pydantic reports it as a field error when it is
    raised from inside a validator.
    """


class NotFoundError(SplitError, LookupError):
    """The referenced expense or group does not exist."""


class AmountOutOfRangeError(SplitError, ArithmeticError):
    """An amount or a computed total does not fit the money representation."""
