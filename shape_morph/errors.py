"""Exceptions raised by the calculator family."""


class CalculatorError(Exception):
    """Base class for segment calculator failures."""


class InvalidConversionError(CalculatorError, ValueError):
    """A segment was asked to convert to an unspecified or unsupported kind."""


class InvalidCommandError(CalculatorError, ValueError):
    """A path command could not be built from a segment."""


class MorphError(CalculatorError):
    """Two segments cannot be interpolated into each other."""
