#!/usr/bin/env python3
"""
Query analysis result

Substitutions, deletions and unknown regions of one query sequence relative to
the reference, as produced by the upstream alignment and translation steps.
"""

import logging
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from Bio.Data import IUPACData

from ..config.alphabets import GAP, NUC_UNKNOWN, NUCLEOTIDES
from ..mutations.mutation import Deletion, DeletionRange, Substitution, SymbolRange
from ..utils.misc import find_symbol_ranges

logger = logging.getLogger(__name__)


@dataclass
class AnalysisResult:
    """
    Analysis result of a single query sequence

    Attributes:
        seq_name: Query sequence name
        substitutions: Nucleotide substitutions relative to the reference
        deletions: Deleted nucleotide ranges
        missing: Ranges of missing data (N)
        non_acgtns: Ranges of ambiguous nucleotides (IUPAC codes other than N)
        alignment_start: First aligned reference position (0-based)
        alignment_end: End of the aligned region (exclusive), None for the whole reference
        aa_substitutions: Amino-acid substitutions, each with its gene
        aa_deletions: Amino-acid deletions, each with its gene
        unknown_aa_ranges: Ranges of unknown amino acids (X) per gene
    """
    seq_name: str
    substitutions: List[Substitution] = field(default_factory=list)
    deletions: List[DeletionRange] = field(default_factory=list)
    missing: List[SymbolRange] = field(default_factory=list)
    non_acgtns: List[SymbolRange] = field(default_factory=list)
    alignment_start: int = 0
    alignment_end: Optional[int] = None
    aa_substitutions: List[Substitution] = field(default_factory=list)
    aa_deletions: List[Deletion] = field(default_factory=list)
    unknown_aa_ranges: Dict[str, List[SymbolRange]] = field(default_factory=dict)

    def __post_init__(self):
        """Validate result data consistency"""
        if self.alignment_start < 0:
            raise ValueError("alignment_start must be a non-negative integer")
        if self.alignment_end is not None and self.alignment_end < self.alignment_start:
            raise ValueError("alignment_end cannot be less than alignment_start")
        for sub in self.aa_substitutions:
            if not sub.gene:
                raise ValueError(f"Amino-acid substitution without gene: {sub}")
        for deletion in self.aa_deletions:
            if not deletion.gene:
                raise ValueError(f"Amino-acid deletion without gene: {deletion}")

    @property
    def total_substitutions(self) -> int:
        return len(self.substitutions)

    @property
    def total_deletions(self) -> int:
        return sum(d.length for d in self.deletions)

    @property
    def total_missing(self) -> int:
        return sum(r.length for r in self.missing)

    def aa_substitutions_for(self, gene_name: str) -> List[Substitution]:
        """Amino-acid substitutions of one gene"""
        return [sub for sub in self.aa_substitutions if sub.gene == gene_name]

    def aa_deletions_for(self, gene_name: str) -> List[Deletion]:
        """Amino-acid deletions of one gene"""
        return [d for d in self.aa_deletions if d.gene == gene_name]

    def unknown_aa_ranges_for(self, gene_name: str) -> List[SymbolRange]:
        return self.unknown_aa_ranges.get(gene_name, [])


def analyze_aligned_sequence(seq_name: str, ref_seq: str, qry_seq: str) -> AnalysisResult:
    """
    Build the nucleotide part of an AnalysisResult from a query aligned to the reference

    Leading and trailing gaps mark the unaligned region. Internal gaps become
    deletions, N runs become missing ranges and any other letter (IUPAC
    ambiguity codes, but also X, '?' or '.') becomes an ambiguous range.

    Args:
        seq_name: Query sequence name
        ref_seq: Reference sequence
        qry_seq: Query sequence aligned to the reference (same length, no insertions)

    Returns:
        AnalysisResult: Nucleotide substitutions, deletions and unknown ranges
    """
    if len(ref_seq) != len(qry_seq):
        raise ValueError(
            f"Aligned query '{seq_name}' has length {len(qry_seq)}, expected {len(ref_seq)}"
        )

    ref_seq = ref_seq.upper()
    qry_seq = qry_seq.upper()

    alignment_start = len(qry_seq) - len(qry_seq.lstrip(GAP))
    alignment_end = len(qry_seq.rstrip(GAP))
    if alignment_end <= alignment_start:
        alignment_start, alignment_end = 0, 0

    def _aligned(ranges: List[SymbolRange]) -> List[SymbolRange]:
        return [r for r in ranges if r.begin >= alignment_start and r.end <= alignment_end]

    substitutions = [
        Substitution(pos=i, ref=ref_seq[i], qry=qry_seq[i])
        for i in range(alignment_start, alignment_end)
        if qry_seq[i] != ref_seq[i] and qry_seq[i] in NUCLEOTIDES.known_letters
    ]
    deletions = [
        DeletionRange(start=r.begin, length=r.length)
        for r in _aligned(find_symbol_ranges(qry_seq, GAP))
    ]
    # Every letter that is neither a base, a gap nor N carries no information
    non_acgtn_letters = set(qry_seq) - NUCLEOTIDES.known_letters - {GAP, NUC_UNKNOWN}
    unexpected = non_acgtn_letters - set(IUPACData.ambiguous_dna_letters)
    if unexpected:
        logger.debug("Query '%s' has non-IUPAC letters: %s", seq_name, ''.join(sorted(unexpected)))

    return AnalysisResult(
        seq_name=seq_name,
        substitutions=substitutions,
        deletions=deletions,
        missing=_aligned(find_symbol_ranges(qry_seq, NUC_UNKNOWN)),
        non_acgtns=_aligned(find_symbol_ranges(qry_seq, non_acgtn_letters)),
        alignment_start=alignment_start,
        alignment_end=alignment_end,
    )
