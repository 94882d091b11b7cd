"""
Product Analytics Reports

Loads the product info, finance, reviews, traffic and brand tables and
runs the analytical report suite over them.
"""

__version__ = "1.0.0"
