"""Shared fixtures for the tamc test suite."""

import sys

import pytest


@pytest.fixture
def int_digit_limit():
    """Pin the interpreter's int() digit limit to its default of 4300."""
    if not hasattr(sys, "set_int_max_str_digits"):
        pytest.skip("interpreter has no integer string conversion limit")
    previous = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(4300)
    yield 4300
    sys.set_int_max_str_digits(previous)
