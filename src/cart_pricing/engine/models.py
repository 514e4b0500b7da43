"""
Data models for the cart pricing engine.

Uses dataclasses for structured, type-safe data representation.
Input models are built from the host's loosely-typed JSON by tolerant
`from_dict` constructors: missing fields become None instead of raising,
and the line evaluator decides what a missing field means.
"""
import math
from dataclasses import dataclass, field
from typing import Any, Optional

from ..config.settings import MetafieldRef


@dataclass
class TraceStep:
    """A single step in the pricing resolution trace."""
    step: str
    description: str
    value: Optional[str] = None


# ---------------------------------------------------------------------------
# Host input
# ---------------------------------------------------------------------------

@dataclass
class Metafield:
    """A namespaced string value attached to a product."""
    namespace: str
    key: str
    value: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> Optional['Metafield']:
        if not isinstance(data, dict):
            return None
        namespace = data.get('namespace')
        key = data.get('key')
        if not namespace or not key:
            return None
        return cls(namespace=str(namespace), key=str(key), value=data.get('value'))


@dataclass
class Merchandise:
    """The thing a cart line buys. Only product variants carry metafields."""
    typename: Optional[str]
    id: Optional[str] = None
    metafields: list[Metafield] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> Optional['Merchandise']:
        if not isinstance(data, dict):
            return None

        metafields = []
        product = data.get('product')
        if isinstance(product, dict):
            raw_fields = product.get('metafields')
            if isinstance(raw_fields, list):
                metafields.extend(m for m in map(Metafield.from_dict, raw_fields) if m)

            # Aliased single-metafield selections carry their own namespace/key
            for name, value in product.items():
                if name == 'metafields':
                    continue
                aliased = Metafield.from_dict(value)
                if aliased:
                    metafields.append(aliased)

        return cls(
            typename=data.get('__typename'),
            id=data.get('id'),
            metafields=metafields,
        )

    def find_metafield(self, ref: MetafieldRef) -> Optional[Metafield]:
        """Return the first metafield matching ref, if any."""
        for metafield in self.metafields:
            if ref.matches(metafield.namespace, metafield.key):
                return metafield
        return None


@dataclass
class CartLine:
    """A single cart line as supplied by the host."""
    id: Optional[str]
    quantity: Any
    merchandise: Optional[Merchandise] = None

    @classmethod
    def from_dict(cls, data: Any) -> 'CartLine':
        if not isinstance(data, dict):
            return cls(id=None, quantity=None)
        return cls(
            id=data.get('id'),
            quantity=data.get('quantity'),
            merchandise=Merchandise.from_dict(data.get('merchandise')),
        )


@dataclass
class Cart:
    """An ordered collection of cart lines."""
    lines: list[CartLine] = field(default_factory=list)

    @classmethod
    def from_input(cls, data: Any) -> Optional['Cart']:
        """
        Build a cart from the host input (`{"cart": {"lines": [...]}}`).

        Returns None when the input carries no cart at all.
        """
        if not isinstance(data, dict):
            return None
        cart = data.get('cart')
        if not isinstance(cart, dict):
            return None
        raw_lines = cart.get('lines')
        if not isinstance(raw_lines, list):
            return cls(lines=[])
        return cls(lines=[CartLine.from_dict(raw) for raw in raw_lines])


# ---------------------------------------------------------------------------
# Normalized pricing metadata
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class QuantityBreak:
    """
    A "buy at least N, pay X each" rule.

    Either field is None when the stored value was not numeric; such
    breaks are never selected, and neither are breaks whose price is not
    a finite number above zero.
    """
    minimum_quantity: Optional[float]
    price: Optional[float]

    @property
    def is_candidate(self) -> bool:
        return (
            self.minimum_quantity is not None
            and self.price is not None
            and math.isfinite(self.price)
            and self.price > 0
        )


@dataclass(frozen=True)
class PricingMetadata:
    """Base price, breaks and surcharge for one product, whatever the source shape."""
    base_price: float
    quantity_breaks: tuple[QuantityBreak, ...] = ()
    surcharge: float = 0.0
    source_key: Optional[str] = None


# ---------------------------------------------------------------------------
# Engine output
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class PriceOverride:
    """Instruction to fix a cart line's unit price."""
    cart_line_id: str
    unit_price_amount: str

    def to_operation(self) -> dict:
        """Render as a host `update` operation."""
        return {
            "update": {
                "cartLineId": self.cart_line_id,
                "price": {
                    "adjustment": {
                        "fixedPricePerUnit": {
                            "amount": self.unit_price_amount
                        }
                    }
                }
            }
        }


@dataclass
class LineOutcome:
    """Result of evaluating one cart line: an override, or a reason to skip."""
    line_id: Optional[str]
    override: Optional[PriceOverride] = None
    skip_reason: Optional[str] = None
    trace: list[TraceStep] = field(default_factory=list)

    @property
    def applied(self) -> bool:
        return self.override is not None

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the trace for this line."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def skip(self, reason: str) -> 'LineOutcome':
        """Mark the line as skipped and return self."""
        self.skip_reason = reason
        self.add_trace("Skip", reason)
        return self

    def apply(self, override: PriceOverride) -> 'LineOutcome':
        """Attach the override and return self."""
        self.override = override
        self.add_trace("Override", "Fixed unit price", override.unit_price_amount)
        return self

    def get_trace_text(self) -> str:
        """Get human-readable trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"→ {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"→ {t.step}: {t.description}")
        return "\n".join(lines)


@dataclass
class RunResult:
    """Complete result of one engine invocation."""
    outcomes: list[LineOutcome] = field(default_factory=list)
    trace: list[TraceStep] = field(default_factory=list)

    @property
    def overrides(self) -> list[PriceOverride]:
        return [o.override for o in self.outcomes if o.override is not None]

    def add_trace(self, step: str, description: str, value: str = None):
        """Add a step to the result-level trace."""
        self.trace.append(TraceStep(step=step, description=description, value=value))

    def get_trace_text(self) -> str:
        """Get human-readable result trace as formatted text."""
        lines = []
        for t in self.trace:
            if t.value:
                lines.append(f"• {t.step}: {t.description} = {t.value}")
            else:
                lines.append(f"• {t.step}: {t.description}")
        return "\n".join(lines)

    def to_function_result(self) -> dict:
        """Convert to the host's `{"operations": [...]}` payload."""
        return {"operations": [o.to_operation() for o in self.overrides]}
