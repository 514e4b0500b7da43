"""
Quantity-break resolution.

Given a base price and a set of "buy at least N, pay X each" breaks, pick
the unit price that applies to a purchased quantity. Breaks are compared,
never positioned: the list may arrive in any order.
"""
import logging
from typing import Iterable, Optional

from .models import QuantityBreak

logger = logging.getLogger(__name__)


def find_applicable_break(
    quantity_breaks: Iterable[QuantityBreak],
    quantity: float,
) -> Optional[QuantityBreak]:
    """
    Return the candidate break with the largest minimum <= quantity.

    Only a strictly larger minimum replaces the current best, so the first
    break wins among duplicates. The running best starts at zero: a break
    with a minimum of zero or less never applies.
    """
    best = None
    highest_minimum = 0.0

    for qb in quantity_breaks:
        if not qb.is_candidate:
            logger.debug("Discarding break %s", qb)
            continue
        if quantity >= qb.minimum_quantity and qb.minimum_quantity > highest_minimum:
            best = qb
            highest_minimum = qb.minimum_quantity

    return best


def resolve_break(
    base_price: float,
    quantity_breaks: Optional[Iterable[QuantityBreak]],
    quantity: float,
) -> tuple[float, Optional[QuantityBreak]]:
    """
    Resolve the unit price for a quantity, along with the break that set it.

    Args:
        base_price: Price when no break applies
        quantity_breaks: Breaks to consider (may be empty or None)
        quantity: Purchased quantity

    Returns:
        (price, break) where break is None and price is base_price when
        no break qualifies
    """
    if not quantity_breaks:
        return base_price, None

    match = find_applicable_break(quantity_breaks, quantity)
    if match is None:
        logger.debug("No quantity break matches %s, using base price", quantity)
        return base_price, None

    logger.debug("Break %s+ applies at %s", match.minimum_quantity, match.price)
    return match.price, match


def resolve_unit_price(
    base_price: float,
    quantity_breaks: Optional[Iterable[QuantityBreak]],
    quantity: float,
) -> float:
    """Resolve the unit price for a quantity (base_price when no break qualifies)."""
    price, _ = resolve_break(base_price, quantity_breaks, quantity)
    return price
