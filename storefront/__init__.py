"""Storefront client core: response normalization and optimistic cart state."""
__version__ = "0.1.0"
