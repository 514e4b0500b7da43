"""
Error types raised while reading pricing input.

None of these escape the engine: the line evaluator turns them into
skipped lines and the engine turns anything else into an empty result.
"""


class PricingError(Exception):
    """Base class for pricing input errors."""


class StructuralInputError(PricingError):
    """Cart, line or merchandise is missing a required field."""


class MetadataParseError(PricingError):
    """Pricing metafield is not valid JSON or lacks required fields."""


class NumericParseError(PricingError):
    """An amount or quantity is not a number."""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Not a number: {value!r}")
