"""Mechanic shop: customers, mechanics, cars and service requests on SQLite."""

__version__ = "0.1.0"
