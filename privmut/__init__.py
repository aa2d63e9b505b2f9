"""
privmut - private mutations of a query relative to its nearest reference tree node

Main features:
- Private nucleotide substitutions, deletions and reversions
- Per-gene private amino-acid mutations
- Label attachment from a curated label catalog
- Per-query report with tabular export

Author: privmut developers
"""

__version__ = "0.1.0"
__author__ = "privmut developers"

# Export main API interfaces
from .api import find_private_mutations, reports_to_df, PrivateMutationsReport
from .analysis import AnalysisResult, analyze_aligned_sequence
from .config import LabelCatalog, load_label_catalog
from .private import (
    find_private_nuc_mutations,
    find_private_aa_mutations,
    PrivateNucleotideMutations,
    PrivateAminoacidMutations,
)
from .reference import ReferenceSequence, RefPeptide, Gene, build_gene_map

__all__ = [
    '__version__',
    '__author__',
    # Main API
    'find_private_mutations',
    'reports_to_df',
    'PrivateMutationsReport',
    # Finders
    'find_private_nuc_mutations',
    'find_private_aa_mutations',
    'PrivateNucleotideMutations',
    'PrivateAminoacidMutations',
    # Inputs
    'AnalysisResult',
    'analyze_aligned_sequence',
    'ReferenceSequence',
    'RefPeptide',
    'Gene',
    'build_gene_map',
    # Labels
    'LabelCatalog',
    'load_label_catalog',
]
