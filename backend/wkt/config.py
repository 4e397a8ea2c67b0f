from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field


# Each collection level costs a handful of interpreter frames; this stays well clear
# of the default recursion limit of 1000.
MAX_DEPTH_LIMIT = 128


class ParseOptions(BaseModel):
    """
    Knobs for the parts of the WKT grammar that readers in the wild disagree on.
    """

    model_config = ConfigDict(frozen=True)

    # Stop after the first complete geometry instead of requiring end of input.
    allow_trailing: bool = False
    # Accept "1e10" / "2.5E-3".
    allow_exponent: bool = True
    # Accept "+1.5" (otherwise '+' is an unexpected character).
    allow_plus_sign: bool = False
    # Untagged geometries take their dimension from the first coordinate (3 -> Z, 4 -> ZM).
    infer_dimensions: bool = False
    max_depth: int = Field(default=32, ge=1, le=MAX_DEPTH_LIMIT)


_FALSY = {"0", "false", "no", "off"}


def _env_flag(name: str) -> bool | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower() not in _FALSY


@lru_cache(maxsize=1)
def default_options() -> ParseOptions:
    """
    Process-wide defaults, overridable through WKT_* environment variables.

    Cached: call `clear_options_cache()` after changing the environment.
    """
    values: dict[str, object] = {}
    for field_name, env_name in (
        ("allow_trailing", "WKT_ALLOW_TRAILING"),
        ("allow_exponent", "WKT_ALLOW_EXPONENT"),
        ("allow_plus_sign", "WKT_ALLOW_PLUS_SIGN"),
        ("infer_dimensions", "WKT_INFER_DIMENSIONS"),
    ):
        flag = _env_flag(env_name)
        if flag is not None:
            values[field_name] = flag

    depth = (os.getenv("WKT_MAX_DEPTH") or "").strip()
    if depth:
        # Left as a string so pydantic reports a bad value as a ValidationError.
        values["max_depth"] = depth

    return ParseOptions.model_validate(values)


def clear_options_cache() -> None:
    default_options.cache_clear()
