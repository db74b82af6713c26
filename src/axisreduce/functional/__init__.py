"""Functional primitives for axisreduce.

Stateless statistics kernels and the reducers that map them over a table
axis. Nothing here holds state, so the pieces compose freely.
"""

from axisreduce.functional.statistics import median, mean, jit_median, jit_mean
from axisreduce.functional.reducers import (
    apply_reduce,
    loop_reduce,
    vectorized_reduce,
    STRATEGIES,
)

__all__ = [
    "median",
    "mean",
    "jit_median",
    "jit_mean",
    "apply_reduce",
    "loop_reduce",
    "vectorized_reduce",
    "STRATEGIES",
]
