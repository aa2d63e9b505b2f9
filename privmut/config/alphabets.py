#!/usr/bin/env python3
"""
Sequence alphabets

Nucleotide and amino-acid alphabets used by the private mutation finders.
Letters come from Biopython's IUPAC tables.
"""

from dataclasses import dataclass
from typing import FrozenSet

from Bio.Data import IUPACData


GAP = '-'
NUC_UNKNOWN = 'N'
AA_UNKNOWN = 'X'
AA_STOP = '*'


@dataclass(frozen=True)
class Alphabet:
    """
    Symbol alphabet of a sequence type

    Attributes:
        name: Alphabet name ('nucleotide' or 'aminoacid')
        known_letters: Letters that carry full information
        gap: Gap symbol
        unknown: Canonical symbol for a position without information
    """
    name: str
    known_letters: FrozenSet[str]
    gap: str = GAP
    unknown: str = NUC_UNKNOWN

    def is_gap(self, symbol: str) -> bool:
        return symbol == self.gap

    def is_unknown(self, symbol: str) -> bool:
        """Ambiguous or missing symbols cannot be classified"""
        return symbol != self.gap and symbol.upper() not in self.known_letters


NUCLEOTIDES = Alphabet(
    name='nucleotide',
    known_letters=frozenset(IUPACData.unambiguous_dna_letters),
    unknown=NUC_UNKNOWN,
)

AMINOACIDS = Alphabet(
    name='aminoacid',
    known_letters=frozenset(IUPACData.protein_letters + AA_STOP),
    unknown=AA_UNKNOWN,
)
