"""Table model for rectangular numeric data.

A :class:`Table` is an ordered collection of named, equal-length numeric
columns. Every constructor funnels through the same coercion step so that the
invariants hold no matter where the data came from:

    - At least one row and one column
    - All columns have the same length (rectangular)
    - Every cell is a finite-or-infinite real number (no missing values);
      integers and booleans are promoted to float64

The underlying matrix is stored row-major with shape ``(nrow, ncol)`` and is
flagged read-only, so a Table can be shared freely between callers.

Examples:
    >>> table = Table.from_columns({"a": [1, 2, 3], "b": [4.5, 5.0, 6.5]})
    >>> table.shape
    (3, 2)
    >>> Table.from_rows([[1, 3], [2, 4]]).names
    ['V1', 'V2']
"""

from collections.abc import Mapping
import typing as tp

import numpy as np
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from axisreduce.core.dtypes import ColumnNames, default_names
from axisreduce.core.errors import InvalidShapeError, NonNumericError

__all__ = ["Table"]


def _to_real(name: str, values: tp.Any) -> np.ndarray:
    """Convert one column to a float64 vector or raise NonNumericError."""
    if not pd.api.types.is_list_like(values):
        raise InvalidShapeError(
            f"Column {name!r} must be a sequence of values, got {type(values).__name__}."
        )

    try:
        series = pd.Series(values) if not isinstance(values, pd.Series) else values
    except (TypeError, ValueError) as exc:
        raise NonNumericError(
            f"Column {name!r} cannot be read as a sequence of values.", column=name
        ) from exc

    if len(series) == 0:
        return np.empty(0, dtype=np.float64)

    # to_numeric would turn timestamps into epoch nanoseconds
    if series.dtype.kind in "mM":
        raise NonNumericError(
            f"Column {name!r} holds {series.dtype} values, not real numbers.",
            column=name,
        )

    try:
        numeric = pd.to_numeric(series, errors="raise")
    except (TypeError, ValueError) as exc:
        raise NonNumericError(
            f"Column {name!r} contains values that are not real numbers.", column=name
        ) from exc

    # Integers beyond int64 stay as Python ints in an object column
    if numeric.dtype == object:
        try:
            numeric = numeric.astype(np.float64)
        except (TypeError, ValueError, OverflowError) as exc:
            raise NonNumericError(
                f"Column {name!r} contains values that are not real numbers.",
                column=name,
            ) from exc

    if not (
        pd.api.types.is_bool_dtype(numeric)
        or pd.api.types.is_integer_dtype(numeric)
        or pd.api.types.is_float_dtype(numeric)
    ):
        raise NonNumericError(
            f"Column {name!r} has dtype {numeric.dtype}, expected real numbers.",
            column=name,
        )

    if numeric.isna().any():
        raise NonNumericError(f"Column {name!r} contains missing values.", column=name)

    return numeric.to_numpy(dtype=np.float64)


def _is_row_sequence(item: tp.Any) -> bool:
    return isinstance(item, (list, tuple, np.ndarray, pd.Series))


class Table(BaseModel):
    """Immutable rectangular table of named numeric columns.

    Use the ``from_*`` constructors or :meth:`coerce` rather than building the
    model directly; they raise :class:`InvalidShapeError` and
    :class:`NonNumericError` instead of a generic validation error.

    Attributes:
        names: Column names in source order.
        matrix: Read-only float64 array of shape ``(nrow, ncol)``.
    """

    names: ColumnNames = Field(..., description="Column names in source order.")
    matrix: np.ndarray = Field(
        ..., description="Row-major float64 values, shape (nrow, ncol)."
    )

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @field_validator("matrix")
    @classmethod
    def _freeze_matrix(cls, matrix: np.ndarray) -> np.ndarray:
        if matrix.ndim != 2 or 0 in matrix.shape:
            raise ValueError(f"matrix must be a non-empty 2-D array, got {matrix.shape}")
        frozen = np.array(matrix, dtype=np.float64)
        frozen.setflags(write=False)
        return frozen

    @model_validator(mode="after")
    def _check_names(self) -> "Table":
        if len(self.names) != self.matrix.shape[1]:
            raise ValueError(
                f"{len(self.names)} names given for {self.matrix.shape[1]} columns"
            )
        return self

    # =========================================================================
    # Constructors
    # =========================================================================

    @classmethod
    def _from_columns(
        cls, names: tp.Sequence[str], columns: tp.Sequence[tp.Any]
    ) -> "Table":
        if len(columns) == 0:
            raise InvalidShapeError("Table has no columns.")

        reals = [_to_real(str(name), values) for name, values in zip(names, columns)]

        lengths = {str(name): len(col) for name, col in zip(names, reals)}
        if len(set(lengths.values())) > 1:
            raise InvalidShapeError(f"Columns have unequal lengths: {lengths}.")
        if len(reals[0]) == 0:
            raise InvalidShapeError("Table has no rows.")

        return cls(names=list(names), matrix=np.column_stack(reals))

    @classmethod
    def from_columns(cls, columns: tp.Mapping[tp.Any, tp.Any]) -> "Table":
        """Build a table from a mapping of column name to values.

        Args:
            columns: Ordered mapping, e.g. ``{"a": [1, 2], "b": [3.0, 4.0]}``.

        Returns:
            A new Table.

        Raises:
            InvalidShapeError: No columns, no rows, unequal column lengths, or a
                column given as a scalar instead of a sequence.
            NonNumericError: A value is not a real number.
        """
        return cls._from_columns(list(columns.keys()), list(columns.values()))

    @classmethod
    def from_rows(
        cls,
        rows: tp.Sequence[tp.Sequence[tp.Any]],
        names: tp.Optional[tp.Sequence[str]] = None,
    ) -> "Table":
        """Build a table from row-major nested sequences.

        Args:
            rows: One sequence per row, e.g. ``[[1, 3], [2, 4]]``.
            names: Optional column names; defaults to ``V1 .. Vn``.

        Returns:
            A new Table.

        Raises:
            InvalidShapeError: No rows, no columns, ragged rows, or a name
                count that does not match the row width.
            NonNumericError: A value is not a real number.
        """
        rows = list(rows)
        if not rows:
            raise InvalidShapeError("Table has no rows.")
        if not all(_is_row_sequence(row) for row in rows):
            raise InvalidShapeError("Every row must be a sequence of values.")

        rows = [list(row) for row in rows]
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise InvalidShapeError(
                f"Rows have unequal lengths: {[len(row) for row in rows]}."
            )
        if width == 0:
            raise InvalidShapeError("Table has no columns.")

        names = default_names(width) if names is None else list(names)
        if len(names) != width:
            raise InvalidShapeError(f"{len(names)} names given for {width} columns.")

        columns = [[row[j] for row in rows] for j in range(width)]
        return cls._from_columns(names, columns)

    @classmethod
    def from_array(
        cls, array: tp.Any, names: tp.Optional[tp.Sequence[str]] = None
    ) -> "Table":
        """Build a table from a 2-D array-like (rows by columns).

        A 1-D input is read as a single column.

        Args:
            array: NumPy/JAX array or nested list.
            names: Optional column names; defaults to ``V1 .. Vn``.

        Returns:
            A new Table.

        Raises:
            InvalidShapeError: Empty, ragged, or more than two dimensions.
            NonNumericError: A value is not a real number.
        """
        try:
            array = np.asarray(array)
        except ValueError as exc:
            raise InvalidShapeError("Array is ragged, not rectangular.") from exc

        if array.ndim == 1:
            array = array.reshape(-1, 1)
        if array.ndim != 2:
            raise InvalidShapeError(
                f"Expected a 1-D or 2-D array, got {array.ndim} dimensions."
            )

        nrow, ncol = array.shape
        if ncol == 0:
            raise InvalidShapeError("Table has no columns.")
        if nrow == 0:
            raise InvalidShapeError("Table has no rows.")

        names = default_names(ncol) if names is None else list(names)
        if len(names) != ncol:
            raise InvalidShapeError(f"{len(names)} names given for {ncol} columns.")

        return cls._from_columns(names, [array[:, j] for j in range(ncol)])

    @classmethod
    def from_frame(cls, frame: pd.DataFrame) -> "Table":
        """Build a table from a pandas DataFrame, keeping its column order.

        Raises:
            InvalidShapeError: The frame has no rows or no columns.
            NonNumericError: A column is not numeric.
        """
        if frame.shape[1] == 0:
            raise InvalidShapeError("Table has no columns.")
        if frame.shape[0] == 0:
            raise InvalidShapeError("Table has no rows.")
        names = [str(name) for name in frame.columns]
        return cls._from_columns(
            names, [frame.iloc[:, j].reset_index(drop=True) for j in range(frame.shape[1])]
        )

    @classmethod
    def coerce(cls, data: tp.Any) -> "Table":
        """Turn any supported table-like input into a Table.

        Supported inputs: Table (returned as is), pandas DataFrame, mapping of
        columns, row-major nested list/tuple, and anything NumPy can turn into
        an array (read as rows by columns, or a single column when 1-D).

        Raises:
            InvalidShapeError: The input is empty or not rectangular.
            NonNumericError: A value is not a real number.
        """
        if isinstance(data, Table):
            return data
        if isinstance(data, pd.DataFrame):
            return cls.from_frame(data)
        if isinstance(data, Mapping):
            return cls.from_columns(data)
        if isinstance(data, (list, tuple)) and data and _is_row_sequence(data[0]):
            return cls.from_rows(data)
        return cls.from_array(data)

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def nrow(self) -> int:
        return self.matrix.shape[0]

    @property
    def ncol(self) -> int:
        return self.matrix.shape[1]

    @property
    def shape(self) -> tp.Tuple[int, int]:
        return self.nrow, self.ncol

    def column(self, key: tp.Union[int, str]) -> np.ndarray:
        """Values of one column, by position or by name (first match)."""
        if isinstance(key, str):
            try:
                key = self.names.index(key)
            except ValueError:
                raise KeyError(key) from None
        return self.matrix[:, key]

    def row(self, index: int) -> np.ndarray:
        """Values of one row across all columns."""
        return self.matrix[index, :]

    def transpose(self) -> "Table":
        """Swap rows and columns; original row ``i`` becomes column ``V{i+1}``."""
        return Table(names=default_names(self.nrow), matrix=self.matrix.T)

    def to_frame(self) -> pd.DataFrame:
        """Copy the table into a pandas DataFrame."""
        return pd.DataFrame(self.matrix.copy(), columns=list(self.names))

    def equals(self, other: "Table") -> bool:
        """True when both tables have the same names and identical values."""
        return self.names == other.names and np.array_equal(self.matrix, other.matrix)

    def __str__(self) -> str:
        return f"Table(nrow={self.nrow}, ncol={self.ncol}, names={self.names})"
