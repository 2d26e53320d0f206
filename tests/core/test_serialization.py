"""
Tests for JSON conversion of result objects.
"""

import enum
import json
import math
from dataclasses import dataclass
from datetime import datetime, timezone

import numpy as np
import pytest

from pysimstudy.core.serialization import dumps, to_jsonable


@dataclass(frozen=True)
class Inner:
    interval: tuple[float, float]
    count: int


@dataclass(frozen=True)
class Outer:
    name: str
    inner: Inner
    by_threshold: dict


class Color(enum.Enum):
    RED = 'red'


class TestToJsonable:

    def test_dataclass_field_order(self):
        obj = Outer("a", Inner((0.1, 0.2), 3), {})
        result = to_jsonable(obj)
        assert list(result) == ["name", "inner", "by_threshold"]
        assert result["inner"] == {"interval": [0.1, 0.2], "count": 3}

    def test_float_keys_become_strings(self):
        result = to_jsonable({0.05: 1, 0.01: 2})
        assert result == {"0.05": 1, "0.01": 2}

    @pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan, np.float64("nan")])
    def test_non_finite_to_none(self, value):
        assert to_jsonable(value) is None

    def test_numpy_scalars(self):
        assert to_jsonable(np.int64(4)) == 4
        assert type(to_jsonable(np.int64(4))) is int
        assert to_jsonable(np.bool_(True)) is True
        assert to_jsonable(np.float32(0.5)) == 0.5

    def test_numpy_array(self):
        assert to_jsonable(np.array([1.0, np.inf])) == [1.0, None]

    def test_datetime_iso(self):
        ts = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert to_jsonable(ts) == "2026-01-02T03:04:05+00:00"

    def test_enum_value(self):
        assert to_jsonable(Color.RED) == 'red'


class TestDumps:

    def test_strict_json(self):
        text = dumps({"x": math.inf, "y": [1, 2]})
        assert json.loads(text) == {"x": None, "y": [1, 2]}
        assert "Infinity" not in text

    def test_indent(self):
        assert "\n" in dumps({"a": 1}, indent=2)
