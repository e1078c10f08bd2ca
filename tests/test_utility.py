import pytest
from hypothesis import given
from hypothesis import strategies as st

from diskfs.utility import div_round_down, div_round_up


def test_exact_division_is_the_same_both_ways():
    assert div_round_up(256, 128) == div_round_down(256, 128) == 2


def test_partial_sector_rounds_up():
    assert div_round_up(129, 128) == 2
    assert div_round_down(129, 128) == 1


def test_zero_bytes_needs_zero_sectors():
    assert div_round_up(0, 128) == 0


def test_division_by_zero_raises():
    with pytest.raises(ZeroDivisionError):
        div_round_up(5, 0)
    with pytest.raises(ZeroDivisionError):
        div_round_down(5, 0)


@given(st.integers(min_value=0, max_value=10**9), st.integers(min_value=1, max_value=10**6))
def test_round_up_is_smallest_cover(n, s):
    q = div_round_up(n, s)
    assert q * s >= n
    assert (q - 1) * s < n or q == 0


@given(st.integers(min_value=0, max_value=10**9), st.integers(min_value=1, max_value=10**6))
def test_round_down_matches_floor_for_non_negative(n, s):
    assert div_round_down(n, s) == n // s


@given(st.integers(min_value=-10**6, max_value=-1), st.integers(min_value=1, max_value=1000))
def test_negative_numerator_truncates_toward_zero(n, s):
    assert div_round_down(n, s) == -((-n) // s)
    assert div_round_up(n, s) == div_round_down(n, s)