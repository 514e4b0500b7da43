"""Engine subpackage - quantity-break pricing for cart lines."""
from .pricing_engine import PricingEngine, run
from .line_evaluator import LineEvaluator
from .quantity_breaks import resolve_break, resolve_unit_price
from .models import Cart, CartLine, PriceOverride, RunResult

__all__ = [
    'PricingEngine', 'run', 'LineEvaluator', 'resolve_break', 'resolve_unit_price',
    'Cart', 'CartLine', 'PriceOverride', 'RunResult',
]
