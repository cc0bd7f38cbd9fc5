import math

import pytest

from escapetime.fractal.arithmetic import ComplexValue, add, escaped, sq_mod, square


def test_add_and_multiply():
    a = ComplexValue(1.0, 2.0)
    b = ComplexValue(3.0, 4.0)
    assert a + b == ComplexValue(4.0, 6.0)
    assert a * b == ComplexValue(-5.0, 10.0)
    assert a * 2.0 == ComplexValue(2.0, 4.0)
    assert a + 1.0 == ComplexValue(2.0, 2.0)


def test_square_matches_builtin_complex():
    value = ComplexValue(0.3, -1.7)
    assert complex(value.square()) == pytest.approx(complex(0.3, -1.7) ** 2)


def test_abs_2_and_escape_threshold():
    assert ComplexValue(3.0, 4.0).abs_2() == 25.0
    assert ComplexValue(3.0, 3.0).escaped()
    assert not ComplexValue(1.0, 1.0).escaped()
    # exactly on the escape radius is still bounded
    assert not ComplexValue(2.0, 0.0).escaped()


def test_non_finite_values_count_as_escaped():
    assert ComplexValue(math.nan, 0.0).escaped()
    assert ComplexValue(0.0, math.inf).escaped()


def test_compiled_helpers():
    assert sq_mod(3.0, 4.0) == 25.0
    assert square(1.0, 2.0) == (-3.0, 4.0)
    assert add(1.0, 2.0, 0.5, -0.5) == (1.5, 1.5)
    assert escaped(4.5, 4)
    assert not escaped(4.0, 4)
    assert escaped(math.nan, 4)
    assert escaped(math.inf, 4)
