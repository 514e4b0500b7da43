"""
Pricing Engine - Turns a host cart into price-override operations.

- Structured RunResult/LineOutcome output with per-line trace
- One LineEvaluator call per line, in cart order
- Host-shaped `{"operations": [...]}` payload via `run`
- Any fault outside the line loop yields an empty operation list
"""
import logging
from typing import Any, Optional

from ..config.settings import Settings, get_settings
from .line_evaluator import LineEvaluator
from .models import Cart, RunResult

logger = logging.getLogger(__name__)


class PricingEngine:
    """
    Stateless cart pricing engine.

    Holds only settings; every call is independent, so one instance can
    serve any number of carts.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.line_evaluator = LineEvaluator(self.settings)

    def calculate(self, cart: Optional[Cart]) -> RunResult:
        """
        Evaluate every line of a cart.

        Args:
            cart: Cart built from host input, or None

        Returns:
            RunResult with one outcome per line
        """
        result = RunResult()

        if cart is None or not cart.lines:
            logger.info("No cart lines found")
            result.add_trace("Cart", "No cart lines found")
            return result

        result.add_trace("Cart", "Processing cart lines", str(len(cart.lines)))
        for line in cart.lines:
            result.outcomes.append(self.line_evaluator.evaluate(line))

        result.add_trace("Result", "Returning operations", str(len(result.overrides)))
        return result

    def explain(self, input_data: Any) -> RunResult:
        """Build a cart from host input and evaluate it, never raising."""
        try:
            return self.calculate(Cart.from_input(input_data))
        except Exception as e:
            logger.error("Fatal pricing error: %s", e, exc_info=True)
            result = RunResult()
            result.add_trace("Fatal", str(e))
            return result

    def run(self, input_data: Any) -> dict:
        """
        Host entry point.

        Args:
            input_data: `{"cart": {"lines": [...]}}` as sent by the host

        Returns:
            `{"operations": [...]}`, empty on any fatal fault
        """
        result = self.explain(input_data)
        try:
            return result.to_function_result()
        except Exception as e:
            logger.error("Fatal pricing error: %s", e, exc_info=True)
            return {"operations": []}


def run(input_data: Any, settings: Optional[Settings] = None) -> dict:
    """Price a host cart with a fresh engine."""
    return PricingEngine(settings).run(input_data)
