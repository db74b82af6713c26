"""Three equivalent ways of reducing a matrix to one statistic per axis slice.

    - **FUNCTION**: hand a custom statistic to ``pandas.DataFrame.apply``.
    - **LOOP**: walk the axis indices explicitly, writing each result into an
      output array allocated once at its final length.
    - **VECTORIZED**: map the jitted kernel over the axis with ``jax.vmap``.

All reducers take a ``(nrow, ncol)`` float64 matrix and return a 1-D float64
array of length ``ncol`` (``Axis.COLUMNS``) or ``nrow`` (``Axis.ROWS``), in
source order. They never modify their input.
"""

import functools
import typing as tp

import jax
import jax.numpy as jnp
import numpy as np
import pandas as pd

from axisreduce.core.enums import Axis, Statistic, Strategy
from axisreduce.core.errors import InvalidShapeError
from axisreduce.functional.statistics import JAX_KERNELS, NUMPY_KERNELS

__all__ = [
    "apply_reduce",
    "loop_reduce",
    "vectorized_reduce",
    "STRATEGIES",
]


def apply_reduce(
    matrix: np.ndarray, axis: Axis, statistic: Statistic = Statistic.MEDIAN
) -> np.ndarray:
    """Reduce each column or row by applying the statistic through pandas.

    Args:
        matrix: Float64 array of shape ``(nrow, ncol)``.
        axis: COLUMNS for one result per column, ROWS for one per row.
        statistic: Statistic to compute.

    Returns:
        1-D float64 array in axis order.
    """
    kernel = NUMPY_KERNELS[statistic]
    result = pd.DataFrame(matrix).apply(kernel, axis=axis.value, raw=True)
    return result.to_numpy(dtype=np.float64)


def loop_reduce(
    matrix: np.ndarray,
    axis: Axis,
    statistic: Statistic = Statistic.MEDIAN,
    out: tp.Optional[np.ndarray] = None,
) -> np.ndarray:
    """Reduce each column or row with an explicit loop over axis indices.

    The output is sized once up front and filled by position; nothing is
    appended inside the loop.

    Args:
        matrix: Float64 array of shape ``(nrow, ncol)``.
        axis: COLUMNS for one result per column, ROWS for one per row.
        statistic: Statistic to compute.
        out: Optional pre-allocated float64 array of the result length. It is
            filled in place and returned.

    Returns:
        1-D float64 array in axis order (``out`` itself when given).

    Raises:
        InvalidShapeError: ``out`` has the wrong shape.
        TypeError: ``out`` is not a float64 array.
    """
    kernel = NUMPY_KERNELS[statistic]
    n = axis.length(matrix.shape)

    if out is None:
        out = np.empty(n, dtype=np.float64)
    elif out.shape != (n,):
        raise InvalidShapeError(f"out has shape {out.shape}, expected ({n},).")
    elif out.dtype != np.float64:
        raise TypeError(f"out must have dtype float64, got {out.dtype}.")

    for i in range(n):
        values = matrix[:, i] if axis is Axis.COLUMNS else matrix[i, :]
        out[i] = kernel(values)
    return out


@functools.lru_cache(maxsize=None)
def _batched_kernel(statistic: Statistic, axis: Axis) -> tp.Callable:
    # Columns are matrix[:, j], so map over dimension 1; rows over dimension 0
    in_axes = 1 if axis is Axis.COLUMNS else 0
    return jax.jit(jax.vmap(JAX_KERNELS[statistic], in_axes=in_axes))


def vectorized_reduce(
    matrix: np.ndarray, axis: Axis, statistic: Statistic = Statistic.MEDIAN
) -> np.ndarray:
    """Reduce each column or row by vectorized mapping of a jitted kernel.

    Args:
        matrix: Float64 array of shape ``(nrow, ncol)``.
        axis: COLUMNS for one result per column, ROWS for one per row.
        statistic: Statistic to compute.

    Returns:
        1-D float64 NumPy array in axis order.
    """
    batched = _batched_kernel(statistic, axis)
    return np.array(batched(jnp.asarray(matrix)), dtype=np.float64)


STRATEGIES: tp.Dict[Strategy, tp.Callable[..., np.ndarray]] = {
    Strategy.FUNCTION: apply_reduce,
    Strategy.LOOP: loop_reduce,
    Strategy.VECTORIZED: vectorized_reduce,
}
