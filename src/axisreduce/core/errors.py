"""Exceptions raised by axisreduce."""

__all__ = ["AxisReduceError", "InvalidShapeError", "NonNumericError"]


class AxisReduceError(Exception):
    """Base class for all axisreduce errors."""


class InvalidShapeError(AxisReduceError):
    """The table is empty along an axis, ragged, or not two-dimensional."""


class NonNumericError(AxisReduceError):
    """A cell cannot be interpreted as a real number.

    Attributes:
        column: Name of the offending column, if known.
    """

    def __init__(self, message: str, column: str | None = None) -> None:
        super().__init__(message)
        self.column = column
