"""axisreduce: reduce a numeric table to one statistic per column or row.

The same reduction is available through three interchangeable strategies:
a custom function applied over an axis, an explicit loop, and vectorized
mapping of a jitted kernel.
"""

from axisreduce.core.data_models import Table
from axisreduce.core.enums import Axis, Strategy, Statistic
from axisreduce.core.errors import AxisReduceError, InvalidShapeError, NonNumericError
from axisreduce.reducer import AxisReducer, reduce

__version__ = "0.1.0"

__all__ = [
    "reduce",
    "AxisReducer",
    "Table",
    "Axis",
    "Strategy",
    "Statistic",
    "AxisReduceError",
    "InvalidShapeError",
    "NonNumericError",
]
