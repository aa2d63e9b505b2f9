"""
Private mutation search

This module provides the private mutation finders, including:
- Nucleotide private mutations relative to the nearest tree node
- Per-gene amino-acid private mutations
- Label attachment from a curated label catalog
"""

from .private_data import PrivateMutations, PrivateNucleotideMutations, PrivateAminoacidMutations
from .labels import LabelIndex, label_substitutions, label_deletions
from .nuc_finder import find_private_nuc_mutations
from .aa_finder import find_private_aa_mutations

__all__ = [
    'PrivateMutations',
    'PrivateNucleotideMutations',
    'PrivateAminoacidMutations',
    'LabelIndex',
    'label_substitutions',
    'label_deletions',
    'find_private_nuc_mutations',
    'find_private_aa_mutations',
]
