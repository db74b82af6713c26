from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
import json
import logging
import os
import subprocess
import sys

import numpy as np
import pandas as pd
import pytest
from pydantic import ValidationError
import axisreduce.reducer as reducer_module
from axisreduce import (
    AxisReducer,
    InvalidShapeError,
    NonNumericError,
    Statistic,
    Strategy,
    Table,
    reduce,
)

ALL_STRATEGIES = list(Strategy)


@pytest.fixture
def scores():
    return pd.DataFrame(
        {
            "a": [53, 1, 51, 23, 28, 12, 87, 0, 47],
            "d": [5, 5, 5, 5, 5, 5, 5, 5, 5],
            "e": [1, 2, 3, 4, 5, 6, 7, 8, 9],
        }
    )


@pytest.fixture
def random_table():
    rng = np.random.default_rng(11)
    return Table.from_array(rng.integers(-50, 50, size=(6, 5)))


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_column_medians(strategy, scores):
    np.testing.assert_array_equal(reduce(scores, strategy=strategy), [28.0, 5.0, 5.0])


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_row_medians(strategy):
    result = reduce([[1, 3], [2, 4]], by_row=True, strategy=strategy)
    np.testing.assert_array_equal(result, [2.0, 3.0])


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_single_column(strategy):
    np.testing.assert_array_equal(reduce([1, 2, 3, 4, 5], strategy=strategy), [3.0])
    np.testing.assert_array_equal(reduce([1, 2, 3, 4], strategy=strategy), [2.5])


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_result_lengths(strategy, random_table):
    assert len(reduce(random_table, strategy=strategy)) == random_table.ncol
    assert len(reduce(random_table, by_row=True, strategy=strategy)) == random_table.nrow


@pytest.mark.parametrize("strategy", ALL_STRATEGIES)
def test_row_reduction_equals_transposed_column_reduction(strategy, random_table):
    np.testing.assert_allclose(
        reduce(random_table, by_row=True, strategy=strategy),
        reduce(random_table.transpose(), by_row=False, strategy=strategy),
    )


def test_idempotent_and_fresh_results(scores):
    first = reduce(scores)
    second = reduce(scores)
    np.testing.assert_array_equal(first, second)
    assert first is not second


def test_input_frame_not_mutated(scores):
    before = scores.copy()
    reduce(scores, by_row=True)
    pd.testing.assert_frame_equal(scores, before)


def test_result_is_unnamed_array(scores):
    result = reduce(scores)
    assert type(result) is np.ndarray
    assert result.ndim == 1


def test_mean_statistic(scores):
    np.testing.assert_allclose(
        reduce(scores, statistic="mean"), scores.mean(axis=0).to_numpy()
    )


def test_reducer_accepts_string_values():
    reducer = AxisReducer(strategy="function", statistic="median")
    assert reducer.strategy is Strategy.FUNCTION
    assert reducer.statistic is Statistic.MEDIAN


def test_unknown_strategy_rejected():
    with pytest.raises(ValidationError):
        reduce([[1, 2]], strategy="recursive")


@pytest.mark.parametrize("data", [{}, [], pd.DataFrame(), {"a": []}])
def test_empty_table_raises(data):
    with pytest.raises(InvalidShapeError):
        reduce(data)
    with pytest.raises(InvalidShapeError):
        reduce(data, by_row=True)


def test_non_numeric_raises():
    with pytest.raises(NonNumericError):
        reduce({"a": [1, 2], "b": ["x", "y"]})


def test_by_row_must_be_bool(scores):
    with pytest.raises(TypeError):
        reduce(scores, by_row=1)


def test_rejected_input_is_logged(caplog):
    # The package logger does not propagate, so capture on it directly
    package_logger = reducer_module.logger
    caplog.set_level(logging.WARNING, logger=package_logger.name)
    package_logger.addHandler(caplog.handler)
    try:
        with pytest.raises(InvalidShapeError):
            reduce({})
    finally:
        package_logger.removeHandler(caplog.handler)

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert warnings[0].name == "axisreduce"
    assert "no columns" in warnings[0].getMessage()


def test_vectorized_strategy_in_32_bit_mode():
    script = (
        "import json, jax; from axisreduce import reduce; "
        "r = reduce([[1.5, 3.0], [2.0, 4.25]], by_row=True, strategy='vectorized'); "
        "print(json.dumps([bool(jax.config.jax_enable_x64), str(r.dtype), r.tolist()]))"
    )
    env = {k: v for k, v in os.environ.items() if k != "JAX_ENABLE_X64"}
    env["AXISREDUCE_ENABLE_X64"] = "0"
    src = str(Path(__file__).resolve().parents[1] / "src")
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [src, env.get("PYTHONPATH")]))

    completed = subprocess.run(
        [sys.executable, "-c", script], env=env, capture_output=True, text=True, check=True
    )
    x64, dtype, values = json.loads(completed.stdout.strip().splitlines()[-1])
    assert x64 is False
    assert dtype == "float64"
    np.testing.assert_allclose(values, [2.25, 3.125])


def test_concurrent_calls_agree(random_table):
    reducer = AxisReducer(strategy=Strategy.LOOP)
    expected = reducer.reduce(random_table, by_row=True)
    with ThreadPoolExecutor(max_workers=4) as pool:
        results = list(
            pool.map(lambda _: reducer.reduce(random_table, by_row=True), range(16))
        )
    for result in results:
        np.testing.assert_array_equal(result, expected)
