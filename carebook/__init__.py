"""
carebook - availability and slot-booking engine for childcare providers.
"""

__version__ = "0.1.0"
