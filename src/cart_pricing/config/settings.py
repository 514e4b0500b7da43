"""
Centralized settings for the cart pricing engine.
"""
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class MetafieldRef:
    """Namespace/key pair identifying a product metafield."""
    namespace: str
    key: str

    def matches(self, namespace: str, key: str) -> bool:
        return self.namespace == namespace and self.key == key

    def __str__(self) -> str:
        return f"{self.namespace}.{self.key}"


@dataclass(frozen=True)
class Settings:
    """Engine settings with sensible defaults."""

    # Combined metafield holding base price + quantity breaks
    price_breaks_metafield: MetafieldRef = MetafieldRef("custom", "pricebreaks")

    # Separate metafield holding the additive surcharge (None = not modeled)
    surcharge_metafield: Optional[MetafieldRef] = MetafieldRef("zakeke", "price")

    # Merchandise kinds that can be repriced
    priceable_types: tuple = ('ProductVariant',)

    @property
    def surcharge_enabled(self) -> bool:
        return self.surcharge_metafield is not None

    @classmethod
    def load(cls, surcharge_enabled: bool = True) -> 'Settings':
        """Build settings for either metafield shape."""
        if surcharge_enabled:
            return cls()
        return cls(surcharge_metafield=None)


# Default settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings.load()
    return _settings
