"""Sticky notes: floating markdown editor windows plus a dashboard listing them."""

__version__ = "0.3.0"
