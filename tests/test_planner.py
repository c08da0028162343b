import math

import pytest

from piloom.errors import InvalidInputError
from piloom.planner import BITS_PER_DECIMAL_DIGIT, DIGITS_PER_TERM, plan, working_context


def test_plan_known_values():
    p = plan(15)
    assert p.decimal_digits == 15
    assert p.bit_precision == 50
    assert p.iteration_count == 2
    p = plan(1000)
    assert p.bit_precision == 3322
    assert p.iteration_count == 71


def test_bit_precision_covers_requested_digits():
    for digits in range(1, 3000, 7):
        p = plan(digits)
        assert p.bit_precision >= digits * math.log2(10)
        assert p.iteration_count >= digits / DIGITS_PER_TERM


def test_single_digit_still_has_a_term():
    p = plan(1)
    assert p.iteration_count >= 1
    assert p.bit_precision == int(BITS_PER_DECIMAL_DIGIT) + 1


def test_working_precision_is_whole_limbs_above_plan():
    for digits in (1, 19, 20, 100, 12345):
        p = plan(digits)
        assert p.working_precision % 64 == 0
        assert p.working_precision > p.bit_precision


@pytest.mark.parametrize("bad", [0, -1, 2.5, "10", True, None])
def test_plan_rejects_invalid_digits(bad):
    with pytest.raises(InvalidInputError):
        plan(bad)


def test_invalid_input_is_a_value_error():
    with pytest.raises(ValueError):
        plan(0)


def test_working_context_is_private():
    a = working_context(64)
    b = working_context(256)
    assert a.prec == 64
    assert b.prec == 256
    assert a.mpf(1) / 3 != b.mpf(1) / 3
