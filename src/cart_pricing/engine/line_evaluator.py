"""
Line Evaluator - Decides whether and how to reprice a single cart line.

Every path out of `evaluate` returns a LineOutcome. Bad input on one line
turns into a skipped outcome with a reason; it never raises, so one line
cannot stop the rest of the cart from being priced.
"""
import logging
import math
from typing import Optional

from ..config.settings import Settings, get_settings
from .errors import MetadataParseError, NumericParseError, StructuralInputError
from .metadata import MetadataResolver
from .models import CartLine, LineOutcome, PriceOverride
from .parsing import format_amount, parse_amount
from .quantity_breaks import resolve_break

logger = logging.getLogger(__name__)


class LineEvaluator:
    """
    Prices one cart line.

    Evaluation order:
    1. Structural checks (id, merchandise, priceable kind)
    2. Metadata resolution (combined metafield, optional surcharge)
    3. Surcharge-only path when the combined metafield is absent
    4. Break resolution + surcharge
    5. Override only when the final price differs from the base price
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self.metadata_resolver = MetadataResolver(self.settings)

    def evaluate(self, line: CartLine) -> LineOutcome:
        """Evaluate a line, converting every failure into a skip."""
        outcome = LineOutcome(line_id=getattr(line, 'id', None))
        try:
            return self._evaluate(line, outcome)
        except StructuralInputError as e:
            logger.info("Invalid line data: %s", e)
            return outcome.skip(str(e))
        except MetadataParseError as e:
            logger.info("Line %s: unusable pricing metadata: %s", outcome.line_id, e)
            return outcome.skip(str(e))
        except Exception as e:
            logger.warning("Line %s processing error: %s", outcome.line_id, e, exc_info=True)
            return outcome.skip(f"Line processing error: {e}")

    def _check_structure(self, line: CartLine):
        if not line.id or line.merchandise is None:
            raise StructuralInputError("Invalid line data")

    def _read_quantity(self, line: CartLine, outcome: LineOutcome) -> float:
        try:
            quantity = parse_amount(line.quantity)
        except NumericParseError:
            # A missing, negative or infinite quantity can satisfy no break
            outcome.add_trace("Quantity", "Not a usable quantity, no break can apply", str(line.quantity))
            return 0.0
        outcome.add_trace("Quantity", "Line quantity", format_amount(quantity))
        return quantity

    def _evaluate(self, line: CartLine, outcome: LineOutcome) -> LineOutcome:
        self._check_structure(line)
        outcome.add_trace("Line", "Processing line", str(line.id))

        merchandise = line.merchandise
        if merchandise.typename not in self.settings.priceable_types:
            return outcome.skip(f"Not a priceable merchandise type ({merchandise.typename})")

        quantity = self._read_quantity(line, outcome)
        resolved = self.metadata_resolver.resolve(merchandise, outcome)

        if resolved.pricing is None:
            if resolved.surcharge > 0:
                override = PriceOverride(
                    cart_line_id=str(line.id),
                    unit_price_amount=format_amount(resolved.surcharge),
                )
                outcome.add_trace("Price Resolution", "Surcharge only, no pricing record")
                return outcome.apply(override)
            return outcome.skip("No price breaks or surcharge found")

        pricing = resolved.pricing
        resolved_price, matched = resolve_break(pricing.base_price, pricing.quantity_breaks, quantity)
        if matched is not None:
            outcome.add_trace("Price Resolution", f"Break {format_amount(matched.minimum_quantity)}+ applies",
                              format_amount(matched.price))
        else:
            outcome.add_trace("Price Resolution", "No break applies, using base price",
                              format_amount(pricing.base_price))

        final_price = resolved_price + pricing.surcharge
        if not math.isfinite(final_price):
            return outcome.skip("Final price is not a finite number")
        outcome.add_trace(
            "Final Price",
            f"{format_amount(resolved_price)} + {format_amount(pricing.surcharge)}",
            format_amount(final_price),
        )

        if final_price == pricing.base_price:
            return outcome.skip("Price unchanged from base price")

        logger.debug("Price change on %s: %s -> %s", line.id, pricing.base_price, final_price)
        return outcome.apply(PriceOverride(
            cart_line_id=str(line.id),
            unit_price_amount=format_amount(final_price),
        ))
