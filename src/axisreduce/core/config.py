import os
import typing as tp

from pydantic import BaseModel, Field
from pydantic.functional_validators import BeforeValidator

from axisreduce.core.enums import Strategy

__all__ = ["Settings", "settings"]

# Aliases the logging module also understands
_LEVEL_ALIASES = {"WARN": "WARNING", "FATAL": "CRITICAL"}


def _normalize_level(value: tp.Any) -> tp.Any:
    if isinstance(value, str):
        level = value.strip().upper()
        return _LEVEL_ALIASES.get(level, level)
    return value


def _env_flag(value: str) -> bool:
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


LogLevel = tp.Annotated[
    tp.Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
    BeforeValidator(_normalize_level),
]


class Settings(BaseModel):
    LOG_LEVEL: LogLevel = "INFO"
    STRATEGY: Strategy = Field(
        Strategy.LOOP, description="Strategy used when reduce() is not given one."
    )
    ENABLE_X64: bool = Field(
        True, description="Run JAX kernels in 64-bit so they match NumPy exactly."
    )

    @classmethod
    def load(cls, environ: tp.Optional[tp.Mapping[str, str]] = None) -> "Settings":
        environ = os.environ if environ is None else environ

        values: tp.Dict[str, tp.Any] = {}
        level = environ.get("AXISREDUCE_LOG_LEVEL") or environ.get("LOG_LEVEL")
        if level:
            values["LOG_LEVEL"] = level
        if "AXISREDUCE_STRATEGY" in environ:
            values["STRATEGY"] = environ["AXISREDUCE_STRATEGY"].strip().lower()
        if "AXISREDUCE_ENABLE_X64" in environ:
            values["ENABLE_X64"] = _env_flag(environ["AXISREDUCE_ENABLE_X64"])

        return cls(**values)


settings = Settings.load()
