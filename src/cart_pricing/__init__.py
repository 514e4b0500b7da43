"""
Cart Pricing Package

Quantity-break pricing for cart lines.
Resolves each line's unit price from product metafields (base price,
quantity breaks, optional surcharge) and emits fixed-price overrides.
"""

__version__ = "1.0.0"
