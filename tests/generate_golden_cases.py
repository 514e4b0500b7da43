"""
Generate golden test cases by running the current pricing engine on sample data.
This captures current behavior as a regression baseline.

Review the diff before committing a regenerated golden_cases.csv.
"""
import pandas as pd
import sys
import os

# Add src and tests to path
tests_path = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, os.path.join(os.path.dirname(tests_path), 'src'))
sys.path.insert(0, tests_path)

from cart_pricing.engine import PricingEngine
from factories import amounts, cart_input, cart_line, pricing_metafield, surcharge_metafield

STANDARD_BREAKS = [(10, 90), (50, 80)]


def generate_golden_cases():
    engine = PricingEngine()

    # (case name, quantity, surcharge)
    scenarios = [
        ('below-breaks-with-surcharge', 5, '5'),
        ('first-break-with-surcharge', 20, '5'),
        ('second-break-with-surcharge', 60, '5'),
        ('zero-quantity-no-surcharge', 0, '0'),
        ('single-unit-no-surcharge', 1, '0'),
        ('first-break-threshold', 10, '0'),
        ('just-below-second-break', 49, '0'),
        ('second-break-threshold', 50, '0'),
        ('fractional-surcharge', 9, '2.5'),
        ('surcharge-lands-on-base', 60, '20'),
        ('large-quantity', 10000, '0'),
    ]

    cases = []
    for name, qty, surcharge in scenarios:
        metafields = [pricing_metafield(100, STANDARD_BREAKS)]
        if surcharge != '0':
            metafields.append(surcharge_metafield(surcharge))

        result = engine.run(cart_input(cart_line("line-1", qty, metafields)))
        cases.append({
            'case': name,
            'quantity': qty,
            'surcharge': surcharge,
            'expected_amount': amounts(result).get("line-1", ""),
        })

    # Write to CSV
    df = pd.DataFrame(cases)
    output_path = os.path.join(tests_path, 'golden_cases.csv')
    df.to_csv(output_path, index=False)
    print(f"Generated {len(cases)} golden test cases")
    print(f"Output: {output_path}")
    print()
    print(df.to_string(index=False))


if __name__ == "__main__":
    generate_golden_cases()
