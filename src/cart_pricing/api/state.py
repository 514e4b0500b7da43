"""Shared engine instance for the API routes."""
from ..config.settings import get_settings
from ..engine import PricingEngine

engine = PricingEngine(get_settings())
