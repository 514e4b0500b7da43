import pytest

from cart_pricing.engine.models import QuantityBreak
from cart_pricing.engine.quantity_breaks import find_applicable_break, resolve_break, resolve_unit_price

BREAKS = (
    QuantityBreak(minimum_quantity=10, price=90),
    QuantityBreak(minimum_quantity=50, price=80),
)


@pytest.mark.parametrize("quantity,expected", [
    (1, 100), (9, 100), (10, 90), (49, 90), (50, 80), (500, 80),
], ids=lambda v: str(v))
def test_largest_qualifying_minimum_wins(quantity, expected):
    assert resolve_unit_price(100, BREAKS, quantity) == expected


def test_break_order_is_irrelevant():
    reversed_breaks = tuple(reversed(BREAKS))
    for qty in (1, 10, 25, 50, 99):
        assert resolve_unit_price(100, reversed_breaks, qty) == resolve_unit_price(100, BREAKS, qty)


def test_below_every_minimum_returns_base_price():
    assert resolve_unit_price(42.5, BREAKS, 3) == 42.5


@pytest.mark.parametrize("breaks", [(), [], None], ids=["tuple", "list", "none"])
def test_empty_breaks_return_base_price(breaks):
    assert resolve_unit_price(100, breaks, 1000) == 100


@pytest.mark.parametrize("bad_break", [
    QuantityBreak(minimum_quantity=5, price=0),
    QuantityBreak(minimum_quantity=5, price=-10),
    QuantityBreak(minimum_quantity=5, price=None),
    QuantityBreak(minimum_quantity=None, price=70),
    QuantityBreak(minimum_quantity=5, price=float("inf")),
    QuantityBreak(minimum_quantity=5, price=float("nan")),
], ids=["zero-price", "negative-price", "non-numeric-price", "non-numeric-minimum", "infinite-price", "nan-price"])
def test_non_candidate_breaks_are_never_selected(bad_break):
    assert resolve_unit_price(100, (bad_break,), 1000) == 100
    # A bad entry does not spoil the good ones around it
    assert resolve_unit_price(100, (bad_break,) + BREAKS, 20) == 90


def test_first_break_wins_at_equal_minimum():
    breaks = (
        QuantityBreak(minimum_quantity=10, price=90),
        QuantityBreak(minimum_quantity=10, price=70),
    )
    assert resolve_unit_price(100, breaks, 10) == 90


def test_zero_minimum_never_applies():
    breaks = (QuantityBreak(minimum_quantity=0, price=50),)
    assert resolve_unit_price(100, breaks, 5) == 100


def test_non_monotonic_table_still_uses_largest_minimum():
    breaks = (
        QuantityBreak(minimum_quantity=10, price=70),
        QuantityBreak(minimum_quantity=20, price=95),
    )
    assert resolve_unit_price(100, breaks, 25) == 95


def test_fractional_prices_are_not_rounded():
    breaks = (QuantityBreak(minimum_quantity=3, price=9.999),)
    assert resolve_unit_price(12.5, breaks, 3) == 9.999


def test_find_applicable_break_returns_the_rule():
    match = find_applicable_break(BREAKS, 60)
    assert match == QuantityBreak(minimum_quantity=50, price=80)
    assert find_applicable_break(BREAKS, 2) is None


def test_resolve_break_reports_the_matching_rule():
    assert resolve_break(100, BREAKS, 20) == (90, QuantityBreak(minimum_quantity=10, price=90))
    assert resolve_break(100, BREAKS, 2) == (100, None)
    assert resolve_break(100, (), 20) == (100, None)
