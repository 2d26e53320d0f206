"""
JSON conversion helpers.

Results are frozen dataclasses holding floats, tuples, numpy scalars and
datetimes. to_jsonable() maps them onto plain JSON types:

    - dataclasses -> dict (fields in declaration order)
    - tuples / lists / numpy arrays -> list
    - numpy scalars -> Python scalars
    - datetime -> ISO-8601 string
    - NaN / +-Inf -> None (strict JSON has no non-finite numbers)
"""

from __future__ import annotations

import dataclasses
import json
import math
from datetime import datetime
from enum import Enum
from typing import Any

import numpy as np


def to_jsonable(obj: Any) -> Any:
    """Recursively convert obj into JSON-compatible Python objects."""
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {
            f.name: to_jsonable(getattr(obj, f.name))
            for f in dataclasses.fields(obj)
        }
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, dict):
        return {_key(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    if isinstance(obj, np.ndarray):
        return [to_jsonable(v) for v in obj.tolist()]
    if isinstance(obj, np.bool_):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (float, np.floating)):
        value = float(obj)
        return value if math.isfinite(value) else None
    return obj


def dumps(obj: Any, indent: int | None = None) -> str:
    """Serialize obj to a strict JSON string."""
    return json.dumps(to_jsonable(obj), indent=indent, allow_nan=False)


def _key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if isinstance(key, (float, np.floating)):
        return repr(float(key))
    return str(key)
