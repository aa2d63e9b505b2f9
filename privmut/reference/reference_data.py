#!/usr/bin/env python3
"""
Reference data accessors

Reference nucleotide sequence, per-gene reference peptides and the gene map.
All of these are loaded once per run by the caller and shared, read-only,
between queries.
"""

from typing import Dict, Iterable, Union
from dataclasses import dataclass

from ..config.alphabets import Alphabet, NUCLEOTIDES, AMINOACIDS
from ..errors import GeneMapError, PositionOutOfRangeError


@dataclass(frozen=True)
class ReferenceSequence:
    """
    Reference nucleotide sequence

    Attributes:
        name: Sequence name
        seq: Sequence string (uppercase)
    """
    name: str
    seq: str

    alphabet = NUCLEOTIDES

    def __post_init__(self):
        object.__setattr__(self, 'seq', self.seq.upper())

    def __len__(self) -> int:
        return len(self.seq)

    def symbol_at(self, pos: int) -> str:
        """
        Get reference symbol at position

        Raises:
            PositionOutOfRangeError: If pos is outside of the sequence
        """
        if pos < 0 or pos >= len(self.seq):
            raise PositionOutOfRangeError(pos, len(self.seq), f"reference sequence '{self.name}'")
        return self.seq[pos]


@dataclass(frozen=True)
class RefPeptide:
    """Reference peptide of one gene"""
    gene_name: str
    seq: str

    alphabet = AMINOACIDS

    def __post_init__(self):
        object.__setattr__(self, 'seq', self.seq.upper())

    def __len__(self) -> int:
        return len(self.seq)

    def symbol_at(self, pos: int) -> str:
        if pos < 0 or pos >= len(self.seq):
            raise PositionOutOfRangeError(pos, len(self.seq), f"reference peptide of gene '{self.gene_name}'")
        return self.seq[pos]


@dataclass(frozen=True)
class Gene:
    """
    Gene coordinate frame

    Attributes:
        gene_name: Gene name
        start: Start of the gene in the reference sequence (0-based)
        end: End of the gene in the reference sequence (exclusive)
        strand: '+' or '-'
        frame: Reading frame (0, 1 or 2)
    """
    gene_name: str
    start: int
    end: int
    strand: str = '+'
    frame: int = 0

    def __post_init__(self):
        if not self.gene_name:
            raise GeneMapError("Gene name cannot be empty")
        if self.start < 0 or self.end <= self.start:
            raise GeneMapError(f"Gene '{self.gene_name}' has invalid range: [{self.start}, {self.end})")
        if self.strand not in ('+', '-'):
            raise GeneMapError(f"Gene '{self.gene_name}' has invalid strand: '{self.strand}'")
        if self.frame not in (0, 1, 2):
            raise GeneMapError(f"Gene '{self.gene_name}' has invalid frame: {self.frame}")


GeneMap = Dict[str, Gene]

ReferenceLike = Union[ReferenceSequence, RefPeptide, str]


def build_gene_map(genes: Iterable[Gene]) -> GeneMap:
    """
    Build an ordered gene map from gene records

    Raises:
        GeneMapError: If a gene name occurs more than once
    """
    gene_map: GeneMap = {}
    for gene in genes:
        if gene.gene_name in gene_map:
            raise GeneMapError(f"Duplicate gene in gene map: '{gene.gene_name}'")
        gene_map[gene.gene_name] = gene
    return gene_map


def as_reference(ref: ReferenceLike, alphabet: Alphabet = NUCLEOTIDES, name: str = "reference"):
    """Wrap a plain string into the reference type matching the alphabet"""
    if isinstance(ref, (ReferenceSequence, RefPeptide)):
        return ref
    if alphabet is AMINOACIDS:
        return RefPeptide(gene_name=name, seq=ref)
    return ReferenceSequence(name=name, seq=ref)
