import os
import sys

import pytest

# Add src and tests to path for internal imports
tests_path = os.path.dirname(os.path.abspath(__file__))
src_path = os.path.join(os.path.dirname(tests_path), 'src')
for path in (src_path, tests_path):
    if path not in sys.path:
        sys.path.insert(0, path)

from cart_pricing.config.settings import Settings
from cart_pricing.engine import PricingEngine


@pytest.fixture
def engine():
    """Engine reading both the pricing and the surcharge metafield."""
    return PricingEngine(Settings.load(surcharge_enabled=True))


@pytest.fixture
def combined_only_engine():
    """Engine for the single combined-metafield shape."""
    return PricingEngine(Settings.load(surcharge_enabled=False))
