"""Stok Makmur: small-business inventory tracking service."""

__version__ = "1.0.0"
