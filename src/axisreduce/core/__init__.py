"""Core data structures, enums and errors."""

from axisreduce.core.data_models import Table
from axisreduce.core.enums import Axis, Strategy, Statistic
from axisreduce.core.errors import AxisReduceError, InvalidShapeError, NonNumericError

__all__ = [
    "Table",
    "Axis",
    "Strategy",
    "Statistic",
    "AxisReduceError",
    "InvalidShapeError",
    "NonNumericError",
]
