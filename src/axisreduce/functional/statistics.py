"""Summary statistics used to reduce a table axis.

Each statistic exists twice: as a plain NumPy function, used when iterating
with a custom function or an explicit loop, and as a JAX-jitted kernel that
the vectorized strategy maps over an axis with :func:`jax.vmap`. Both follow
the same definition so that every strategy returns the same numbers.

Median definition:
    Sort the values ascending. With an odd count the median is the middle
    value; with an even count it is the arithmetic mean of the two middle
    values. Integers are promoted to float64 first.

Note:
    When ``ENABLE_X64`` is set (the default) this module switches JAX to 64-bit
    arithmetic on import; otherwise the jitted kernels run in float32.

Examples:
    >>> median([1, 2, 3, 4, 5])
    3.0
    >>> median([1, 2, 3, 4])
    2.5
"""

import typing as tp

import jax
import jax.numpy as jnp
import numpy as np

from axisreduce.core.config import settings
from axisreduce.core.enums import Statistic
from axisreduce.core.errors import InvalidShapeError

if settings.ENABLE_X64:
    jax.config.update("jax_enable_x64", True)

__all__ = [
    "median",
    "mean",
    "jit_median",
    "jit_mean",
    "NUMPY_KERNELS",
    "JAX_KERNELS",
]


def _as_vector(values: tp.Any) -> np.ndarray:
    x = np.asarray(values, dtype=np.float64).ravel()
    if x.size == 0:
        raise InvalidShapeError("Cannot summarize an empty sequence.")
    return x


def median(values: tp.Any) -> float:
    """Median of a sequence of real numbers.

    Args:
        values: Numbers to summarize; any array-like, flattened.

    Returns:
        The middle value, or the mean of the two middle values for an even
        count.

    Raises:
        InvalidShapeError: ``values`` is empty.
    """
    x = np.sort(_as_vector(values))
    mid = x.size // 2
    if x.size % 2:
        return float(x[mid])
    return float((x[mid - 1] + x[mid]) / 2.0)


def mean(values: tp.Any) -> float:
    """Arithmetic mean of a sequence of real numbers.

    Raises:
        InvalidShapeError: ``values`` is empty.
    """
    x = _as_vector(values)
    return float(np.sum(x) / x.size)


@jax.jit
def jit_median(values: jax.Array) -> jax.Array:
    """Median of a non-empty 1-D array, same definition as :func:`median`."""
    x = jnp.sort(values)
    # Shape is static under jit, so this branch is resolved at trace time
    n = x.shape[0]
    mid = n // 2
    if n % 2:
        return x[mid]
    return (x[mid - 1] + x[mid]) / 2.0


@jax.jit
def jit_mean(values: jax.Array) -> jax.Array:
    """Arithmetic mean of a non-empty 1-D array."""
    return jnp.sum(values) / values.shape[0]


NUMPY_KERNELS: tp.Dict[Statistic, tp.Callable[[tp.Any], float]] = {
    Statistic.MEDIAN: median,
    Statistic.MEAN: mean,
}

JAX_KERNELS: tp.Dict[Statistic, tp.Callable[[jax.Array], jax.Array]] = {
    Statistic.MEDIAN: jit_median,
    Statistic.MEAN: jit_mean,
}
