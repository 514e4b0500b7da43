"""Configuration subpackage."""
from .settings import Settings, MetafieldRef, get_settings

__all__ = ['Settings', 'MetafieldRef', 'get_settings']
