"""Meal Mate client core: weekly dinner planning against the Meal Mate backend."""
__version__ = "0.1.0"
