"""
Utility modules
"""

from .misc import setup_logging, find_symbol_ranges
__all__ = [
    'setup_logging',
    'find_symbol_ranges'
]
