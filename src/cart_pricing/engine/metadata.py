"""
Metadata Resolver - Normalizes product metafields into PricingMetadata.

Two shapes are supported:
- a combined metafield holding base price + quantity breaks under a
  dynamically-named top-level key
- the same combined metafield plus a separate metafield holding a bare
  decimal surcharge

Both end up as one PricingMetadata record so the resolver and the line
evaluator never care where a value came from.
"""
import logging
from dataclasses import dataclass
from typing import Any, Optional

from ..config.settings import Settings
from .errors import MetadataParseError, NumericParseError
from .models import LineOutcome, Merchandise, PricingMetadata, QuantityBreak
from .parsing import load_pricing_payload, parse_amount, parse_optional_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedMetadata:
    """
    Metadata found for one product.

    `pricing` is None when the combined metafield is absent; the surcharge
    is still reported so the caller can apply it on its own.
    """
    pricing: Optional[PricingMetadata]
    surcharge: float = 0.0


def parse_quantity_breaks(raw: Any) -> tuple[QuantityBreak, ...]:
    """
    Turn the stored `quantity_breaks` value into QuantityBreak records.

    Anything that is not a list yields no breaks. Entries keep None for
    fields that are not numeric so the resolver can discard them.
    """
    if not isinstance(raw, list):
        return ()

    breaks = []
    for entry in raw:
        if not isinstance(entry, dict):
            breaks.append(QuantityBreak(minimum_quantity=None, price=None))
            continue
        price = entry.get('price')
        amount = price.get('amount') if isinstance(price, dict) else None
        breaks.append(QuantityBreak(
            minimum_quantity=parse_optional_number(entry.get('minimum_quantity')),
            price=parse_optional_number(amount),
        ))
    return tuple(breaks)


def parse_pricing_record(value: str, surcharge: float = 0.0) -> PricingMetadata:
    """
    Parse a combined pricing metafield value.

    Raises MetadataParseError when the payload is unusable.
    """
    key, record = load_pricing_payload(value)

    base = record.get('base_price')
    amount = base.get('amount') if isinstance(base, dict) else None
    if amount is None or amount == '':
        raise MetadataParseError("Missing base_price.amount")

    try:
        base_price = parse_amount(amount)
    except NumericParseError as e:
        raise MetadataParseError("Base price is not a valid number") from e

    return PricingMetadata(
        base_price=base_price,
        quantity_breaks=parse_quantity_breaks(record.get('quantity_breaks')),
        surcharge=surcharge,
        source_key=key,
    )


class MetadataResolver:
    """Reads pricing metafields from merchandise according to Settings."""

    def __init__(self, settings: Settings):
        self.settings = settings

    def read_surcharge(self, merchandise: Merchandise, outcome: LineOutcome) -> float:
        """Return the surcharge for this merchandise, 0.0 if absent or unparsable."""
        ref = self.settings.surcharge_metafield
        if ref is None:
            return 0.0

        metafield = merchandise.find_metafield(ref)
        if metafield is None or not metafield.value:
            return 0.0

        try:
            surcharge = parse_amount(metafield.value)
        except NumericParseError:
            logger.info("Ignoring unparsable surcharge %r", metafield.value)
            outcome.add_trace("Surcharge", f"Unparsable {ref} value ignored", str(metafield.value))
            return 0.0

        outcome.add_trace("Surcharge", f"Read from {ref}", str(surcharge))
        return surcharge

    def resolve(self, merchandise: Merchandise, outcome: LineOutcome) -> ResolvedMetadata:
        """
        Normalize the merchandise's metafields.

        Raises MetadataParseError when the combined metafield is present but
        malformed.
        """
        surcharge = self.read_surcharge(merchandise, outcome)

        ref = self.settings.price_breaks_metafield
        metafield = merchandise.find_metafield(ref)
        if metafield is None or not metafield.value:
            outcome.add_trace("Metadata", f"No {ref} metafield")
            return ResolvedMetadata(pricing=None, surcharge=surcharge)

        pricing = parse_pricing_record(metafield.value, surcharge=surcharge)
        outcome.add_trace("Metadata", f"Pricing record '{pricing.source_key}'", str(pricing.base_price))
        outcome.add_trace("Metadata", "Quantity breaks found", str(len(pricing.quantity_breaks)))
        return ResolvedMetadata(pricing=pricing, surcharge=surcharge)
