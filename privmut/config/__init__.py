"""
Configuration module - sequence alphabets and label catalog loading
"""

from .alphabets import Alphabet, NUCLEOTIDES, AMINOACIDS, GAP
from .label_catalog import LabelCatalog, load_label_catalog

__all__ = [
    'Alphabet',
    'NUCLEOTIDES',
    'AMINOACIDS',
    'GAP',
    'LabelCatalog',
    'load_label_catalog',
]
