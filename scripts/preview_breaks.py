#!/usr/bin/env python
"""
Print the price schedule a pricing metafield produces.

Usage:
    python scripts/preview_breaks.py pricebreaks.json [--surcharge 5] [--max-qty 100] [--all]
"""
import argparse
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from cart_pricing.engine.errors import MetadataParseError, NumericParseError
from cart_pricing.engine.parsing import parse_amount
from cart_pricing.engine.schedule import price_schedule, price_steps


def surcharge_arg(value: str) -> float:
    """argparse type: a finite, non-negative surcharge."""
    try:
        return parse_amount(value)
    except NumericParseError:
        raise argparse.ArgumentTypeError(f"invalid surcharge: {value!r}")


def main():
    parser = argparse.ArgumentParser(description="Preview quantity-break pricing")
    parser.add_argument('metafield', type=Path, help="File holding the combined metafield JSON")
    parser.add_argument('--surcharge', type=surcharge_arg, default=0.0, help="Per-unit surcharge")
    parser.add_argument('--max-qty', type=int, default=100, help="Highest quantity to evaluate")
    parser.add_argument('--all', action='store_true', help="Show every quantity, not just price steps")
    args = parser.parse_args()

    value = args.metafield.read_text(encoding='utf-8')
    try:
        schedule = price_schedule(value, surcharge=args.surcharge, max_quantity=args.max_qty)
    except MetadataParseError as e:
        print(f"❌ Invalid pricing metafield: {e}")
        sys.exit(1)

    table = schedule if args.all else price_steps(schedule)
    print(table.to_string(index=False))
    print()
    print(f"Quantities overridden: {int(schedule['overridden'].sum())} of {len(schedule)}")


if __name__ == "__main__":
    main()
