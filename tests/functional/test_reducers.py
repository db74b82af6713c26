import numpy as np
import pytest
from axisreduce.core.enums import Axis, Statistic, Strategy
from axisreduce.core.errors import InvalidShapeError
from axisreduce.functional.reducers import (
    apply_reduce,
    loop_reduce,
    vectorized_reduce,
    STRATEGIES,
)

REDUCERS = [apply_reduce, loop_reduce, vectorized_reduce]


@pytest.fixture
def square():
    # row0=[1, 3], row1=[2, 4]
    return np.array([[1.0, 3.0], [2.0, 4.0]])


@pytest.fixture
def random_matrix():
    rng = np.random.default_rng(7)
    return rng.normal(size=(7, 4))


@pytest.mark.parametrize("reducer", REDUCERS)
def test_column_medians(reducer, square):
    np.testing.assert_array_equal(reducer(square, Axis.COLUMNS), [1.5, 3.5])


@pytest.mark.parametrize("reducer", REDUCERS)
def test_row_medians(reducer, square):
    np.testing.assert_array_equal(reducer(square, Axis.ROWS), [2.0, 3.0])


@pytest.mark.parametrize("reducer", REDUCERS)
def test_result_lengths_and_dtype(reducer, random_matrix):
    by_column = reducer(random_matrix, Axis.COLUMNS)
    by_row = reducer(random_matrix, Axis.ROWS)
    assert by_column.shape == (4,)
    assert by_row.shape == (7,)
    assert by_column.dtype == np.float64
    assert by_row.dtype == np.float64


@pytest.mark.parametrize("axis", [Axis.COLUMNS, Axis.ROWS])
@pytest.mark.parametrize("statistic", [Statistic.MEDIAN, Statistic.MEAN])
def test_strategies_agree(axis, statistic, random_matrix):
    expected = loop_reduce(random_matrix, axis, statistic)
    np.testing.assert_allclose(apply_reduce(random_matrix, axis, statistic), expected)
    np.testing.assert_allclose(
        vectorized_reduce(random_matrix, axis, statistic), expected
    )


def test_matches_numpy_median(random_matrix):
    np.testing.assert_allclose(
        loop_reduce(random_matrix, Axis.COLUMNS), np.median(random_matrix, axis=0)
    )
    np.testing.assert_allclose(
        loop_reduce(random_matrix, Axis.ROWS), np.median(random_matrix, axis=1)
    )


def test_loop_fills_preallocated_output(square):
    out = np.zeros(2)
    result = loop_reduce(square, Axis.ROWS, out=out)
    assert result is out
    np.testing.assert_array_equal(out, [2.0, 3.0])


def test_loop_rejects_wrong_output_shape(square):
    with pytest.raises(InvalidShapeError):
        loop_reduce(square, Axis.ROWS, out=np.zeros(3))


def test_loop_rejects_wrong_output_dtype(square):
    with pytest.raises(TypeError):
        loop_reduce(square, Axis.ROWS, out=np.zeros(2, dtype=np.int64))


@pytest.mark.parametrize("reducer", REDUCERS)
def test_input_untouched(reducer, random_matrix):
    before = random_matrix.copy()
    reducer(random_matrix, Axis.COLUMNS)
    reducer(random_matrix, Axis.ROWS)
    np.testing.assert_array_equal(random_matrix, before)


def test_every_strategy_registered():
    assert set(STRATEGIES) == set(Strategy)
