"""Delivery fee engine for restaurant orders."""

__version__ = "0.1.0"
