#!/usr/bin/env python
"""
Run the pricing engine on a host input file and print every line's trace.

Usage:
    python scripts/debug_cart.py cart.json [--no-surcharge]
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Add src to path
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

from cart_pricing.config.settings import Settings
from cart_pricing.engine import PricingEngine


def debug(input_path: Path, surcharge_enabled: bool):
    with open(input_path, 'r', encoding='utf-8') as f:
        input_data = json.load(f)

    engine = PricingEngine(Settings.load(surcharge_enabled=surcharge_enabled))
    result = engine.explain(input_data)

    print(result.get_trace_text())
    for outcome in result.outcomes:
        status = "APPLIED" if outcome.applied else f"SKIPPED ({outcome.skip_reason})"
        print(f"\n--- Line {outcome.line_id}: {status} ---")
        print(outcome.get_trace_text())

    print("\nOperations:")
    print(json.dumps(result.to_function_result(), indent=2))


def main():
    parser = argparse.ArgumentParser(description="Explain cart pricing for a host input file")
    parser.add_argument('input', type=Path, help="JSON file with {\"cart\": {\"lines\": [...]}}")
    parser.add_argument('--no-surcharge', action='store_true', help="Ignore the surcharge metafield")
    parser.add_argument('-v', '--verbose', action='store_true', help="Show engine debug logging")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)
    debug(args.input, surcharge_enabled=not args.no_surcharge)


if __name__ == "__main__":
    main()
