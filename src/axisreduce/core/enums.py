"""Enumerations for reduction axes, strategies and statistics."""

from enum import Enum

__all__ = ["Axis", "Strategy", "Statistic"]


class Axis(Enum):
    """Dimension of a table that a reduction iterates over.

    The value is the NumPy/pandas axis along which the statistic is taken:
    reducing each column collapses the row dimension (axis 0) and vice versa.
    """

    COLUMNS = 0
    ROWS = 1

    @classmethod
    def from_by_row(cls, by_row: bool) -> "Axis":
        """Map the boolean row selector onto an axis.

        Args:
            by_row: ``True`` to reduce each row, ``False`` for each column.

        Returns:
            The matching Axis member.
        """
        return cls.ROWS if by_row else cls.COLUMNS

    def length(self, shape: tuple[int, int]) -> int:
        """Number of results a reduction over this axis produces.

        Args:
            shape: ``(nrow, ncol)`` of the table.

        Returns:
            ``ncol`` for COLUMNS, ``nrow`` for ROWS.
        """
        nrow, ncol = shape
        return ncol if self is Axis.COLUMNS else nrow


class Strategy(Enum):
    """Equivalent ways of iterating a statistic over a table."""

    FUNCTION = "function"
    LOOP = "loop"
    VECTORIZED = "vectorized"


class Statistic(Enum):
    """Summary statistics a table can be reduced to."""

    MEDIAN = "median"
    MEAN = "mean"
