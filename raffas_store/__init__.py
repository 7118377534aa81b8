"""Raffa's Treats on Stix storefront"""

__version__ = "1.0.0"
