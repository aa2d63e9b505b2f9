"""
Reference data - reference sequence, reference peptides and gene map
"""

from .reference_data import (
    ReferenceSequence,
    RefPeptide,
    Gene,
    GeneMap,
    build_gene_map,
    as_reference,
)

__all__ = [
    'ReferenceSequence',
    'RefPeptide',
    'Gene',
    'GeneMap',
    'build_gene_map',
    'as_reference',
]
