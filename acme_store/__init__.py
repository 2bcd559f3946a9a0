"""Acme Store API: users, products, and the favorites linking them."""

__version__ = "0.1.0"
