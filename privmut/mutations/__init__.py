"""
Mutation value types - substitutions, deletions, labels and their string forms
"""

from .mutation import (
    Substitution,
    Deletion,
    DeletionRange,
    SymbolRange,
    LabeledSubstitution,
    LabeledDeletion,
    SubstitutionLabel,
    DeletionLabel,
    parse_substitution,
    parse_deletion_range,
    merge_deletions,
)

__all__ = [
    'Substitution',
    'Deletion',
    'DeletionRange',
    'SymbolRange',
    'LabeledSubstitution',
    'LabeledDeletion',
    'SubstitutionLabel',
    'DeletionLabel',
    'parse_substitution',
    'parse_deletion_range',
    'merge_deletions',
]
