"""Reduce a table to one statistic per column or per row.

Examples:
    >>> from axisreduce import reduce
    >>> reduce({"a": [53, 1, 51, 23, 28, 12, 87, 0, 47], "e": range(1, 10)})
    array([28.,  5.])
    >>> reduce([[1, 3], [2, 4]], by_row=True)
    array([2., 3.])
"""

import typing as tp

import numpy as np
from pydantic import BaseModel, ConfigDict, Field

from axisreduce.core.config import settings
from axisreduce.core.data_models import Table
from axisreduce.core.enums import Axis, Statistic, Strategy
from axisreduce.core.errors import AxisReduceError
from axisreduce.functional.reducers import STRATEGIES
from axisreduce.logger.logger import logger

__all__ = ["AxisReducer", "reduce"]


class AxisReducer(BaseModel):
    """Computes one statistic per column or per row of a table.

    The reducer is immutable and holds no state between calls, so one instance
    can be shared across threads.

    Attributes:
        strategy: How the axis is iterated (custom function, loop, vectorized).
            All strategies return the same values.
        statistic: Statistic to compute, median by default.
    """

    strategy: Strategy = Field(
        default_factory=lambda: settings.STRATEGY,
        description="Iteration strategy; defaults to the configured one.",
    )
    statistic: Statistic = Field(
        Statistic.MEDIAN, description="Statistic computed for each axis slice."
    )

    model_config = ConfigDict(frozen=True)

    def reduce(self, table: tp.Any, by_row: bool = False) -> np.ndarray:
        """Reduce ``table`` along the selected axis.

        Args:
            table: A :class:`Table` or anything :meth:`Table.coerce` accepts.
            by_row: ``True`` for one result per row, ``False`` (default) for
                one result per column.

        Returns:
            Unnamed 1-D float64 array, length ``ncol`` or ``nrow``, in source
            order. A fresh array on every call.

        Raises:
            InvalidShapeError: The table has no rows or columns, or is ragged.
            NonNumericError: A cell is not a real number.
            TypeError: ``by_row`` is not a boolean.
        """
        if not isinstance(by_row, (bool, np.bool_)):
            raise TypeError(f"by_row must be a bool, got {type(by_row).__name__}.")

        try:
            table = Table.coerce(table)
        except AxisReduceError as exc:
            logger.warning("Rejected input table: %s", exc)
            raise

        axis = Axis.from_by_row(bool(by_row))
        logger.debug(
            "Reducing %dx%d table over %s with %s (%s)",
            table.nrow,
            table.ncol,
            axis.name.lower(),
            self.statistic.value,
            self.strategy.value,
        )
        return STRATEGIES[self.strategy](table.matrix, axis, self.statistic)


def reduce(
    table: tp.Any,
    by_row: bool = False,
    strategy: tp.Optional[tp.Union[Strategy, str]] = None,
    statistic: tp.Union[Statistic, str] = Statistic.MEDIAN,
) -> np.ndarray:
    """Compute one statistic (median by default) per column or per row.

    Args:
        table: A :class:`Table` or anything :meth:`Table.coerce` accepts.
        by_row: ``True`` for one result per row, ``False`` for one per column.
        strategy: Iteration strategy (enum or its value, e.g. ``"loop"``).
            Defaults to the configured ``AXISREDUCE_STRATEGY``.
        statistic: Statistic to compute (enum or value, e.g. ``"mean"``).

    Returns:
        Unnamed 1-D float64 array in source order.
    """
    reducer = AxisReducer(
        strategy=settings.STRATEGY if strategy is None else strategy,
        statistic=statistic,
    )
    return reducer.reduce(table, by_row=by_row)
