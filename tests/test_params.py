"""Tests for parameter classification and binding"""

import pytest

from sqlite_common.params import (
    INT_MAX,
    INT_MIN,
    LONG_MAX,
    IntParam,
    LongParam,
    NullableIntParam,
    ObjectParam,
    StrParam,
    bind_params,
    to_param,
)


class TestToParam:
    """Test suite for to_param classification"""

    def test_small_int(self):
        assert to_param(42) == IntParam(42)
        assert to_param(INT_MIN) == IntParam(INT_MIN)

    def test_int_beyond_32_bits_is_long(self):
        assert to_param(INT_MAX + 1) == LongParam(INT_MAX + 1)
        assert to_param(-(2**40)) == LongParam(-(2**40))

    def test_none_is_null_integer(self):
        assert to_param(None) == NullableIntParam(None)

    def test_string(self):
        assert to_param("alice") == StrParam("alice")

    def test_bool_is_not_an_integer_param(self):
        assert to_param(True) == ObjectParam(True)

    def test_other_values_are_objects(self):
        assert to_param(1.5) == ObjectParam(1.5)
        assert to_param(b"\x00\x01") == ObjectParam(b"\x00\x01")

    def test_explicit_params_pass_through(self):
        param = LongParam(7)
        assert to_param(param) is param


class TestParamChecks:
    """Test suite for range and type checks on explicit params"""

    def test_int_param_overflow(self):
        with pytest.raises(OverflowError):
            IntParam(INT_MAX + 1)

    def test_nullable_int_param_overflow(self):
        with pytest.raises(OverflowError):
            NullableIntParam(INT_MIN - 1)

    def test_long_param_overflow(self):
        with pytest.raises(OverflowError):
            LongParam(LONG_MAX + 1)

    def test_oversized_raw_int_rejected(self):
        with pytest.raises(OverflowError):
            to_param(2**64)

    def test_str_param_type(self):
        with pytest.raises(TypeError):
            StrParam(3)


class TestBindParams:
    """Test suite for bind_params"""

    def test_positional_order_preserved(self):
        values = [1, None, "x", 2**40, 1.5, NullableIntParam(5)]
        assert bind_params(values) == (1, None, "x", 2**40, 1.5, 5)

    def test_empty(self):
        assert bind_params([]) == ()
