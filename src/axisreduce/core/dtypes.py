"""Type definitions and validators for tables."""

from typing import Annotated, Any, List

import annotated_types as at
from pydantic.functional_validators import BeforeValidator

__all__ = [
    "ColumnNames",
    "default_names",
]


def default_names(n: int) -> List[str]:
    """Names given to unnamed columns: ``V1 .. Vn``."""
    return [f"V{i + 1}" for i in range(n)]


def stringify_names(names: Any) -> Any:
    """Validator turning every column label into a string.

    Args:
        names: Sequence of column labels (ints from a DataFrame, strings, ...).

    Returns:
        A list of strings, or the input untouched if it is not a list/tuple so
        that pydantic reports the type error itself.
    """
    if isinstance(names, (list, tuple)):
        return [str(name) for name in names]
    return names


# At least one column name, all coerced to strings
ColumnNames = Annotated[List[str], at.MinLen(1), BeforeValidator(stringify_names)]
