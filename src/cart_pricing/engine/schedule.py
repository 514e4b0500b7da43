"""
Price schedule - Tabulates what a pricing metafield charges per quantity.

Runs the same resolver and override rule as the engine over a range of
quantities, for checking a metafield before it is published.
"""
import math
from typing import Iterable, Optional

import pandas as pd

from .metadata import parse_pricing_record
from .parsing import format_amount, parse_amount
from .quantity_breaks import resolve_break

SCHEDULE_COLUMNS = [
    'quantity', 'break_minimum', 'resolved_price', 'surcharge', 'unit_price', 'overridden', 'amount',
]


def price_schedule(
    metafield_value: str,
    quantities: Optional[Iterable[int]] = None,
    surcharge: float = 0.0,
    max_quantity: int = 100,
) -> pd.DataFrame:
    """
    Build a price schedule for a combined pricing metafield.

    Args:
        metafield_value: Raw combined metafield JSON
        quantities: Quantities to evaluate (default: 1..max_quantity)
        surcharge: Additive surcharge per unit
        max_quantity: Upper bound when quantities is not given

    Returns:
        DataFrame with one row per quantity (see SCHEDULE_COLUMNS)

    Raises:
        MetadataParseError: if the metafield cannot be parsed
        NumericParseError: if surcharge is negative or not finite
    """
    pricing = parse_pricing_record(metafield_value, surcharge=parse_amount(surcharge))
    if quantities is None:
        quantities = range(1, max_quantity + 1)

    rows = []
    for qty in quantities:
        resolved, matched = resolve_break(pricing.base_price, pricing.quantity_breaks, qty)
        unit_price = resolved + pricing.surcharge
        rows.append({
            'quantity': qty,
            'break_minimum': matched.minimum_quantity if matched else None,
            'resolved_price': resolved,
            'surcharge': pricing.surcharge,
            'unit_price': unit_price,
            'overridden': unit_price != pricing.base_price,
            'amount': format_amount(unit_price) if math.isfinite(unit_price) else None,
        })

    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def price_steps(schedule: pd.DataFrame) -> pd.DataFrame:
    """Collapse a schedule to the rows where the unit price changes."""
    if schedule.empty:
        return schedule
    changed = schedule['unit_price'].ne(schedule['unit_price'].shift())
    return schedule[changed].reset_index(drop=True)
