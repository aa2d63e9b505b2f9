#!/usr/bin/env python3
"""
Private mutation diff

Compares query states against tree node states over one coordinate frame
(the reference sequence, or the reference peptide of one gene). The same
algorithm serves both alphabets; only the reference, the alphabet and the
query states differ.

For every position explicit in the node mutation map or the query:

1. Skip if the query state is unknown (missing, ambiguous or unaligned)
2. Skip if the query state equals the node state (shared mutation)
3. If the node mutated the position and the query carries the reference
   state, report a reversion
4. Otherwise report a private substitution, or a private deletion if the
   query state is a gap
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Set, Type, Union
from dataclasses import dataclass, field

import numpy as np

from ..config.alphabets import Alphabet
from ..errors import PositionOutOfRangeError
from ..mutations.mutation import Deletion, Substitution, SymbolRange, merge_deletions
from ..reference.reference_data import RefPeptide, ReferenceSequence
from .labels import LabelIndex, label_deletions, label_substitutions
from .private_data import PrivateMutations

logger = logging.getLogger(__name__)


def build_unknown_mask(length: int,
                       ranges: Iterable[SymbolRange],
                       aligned_start: int = 0,
                       aligned_end: Optional[int] = None,
                       context: str = "reference sequence") -> np.ndarray:
    """
    Build a per-position mask of positions without query information

    Args:
        length: Length of the reference frame
        ranges: Ranges of missing or ambiguous query symbols
        aligned_start: First aligned position
        aligned_end: End of the aligned region (exclusive), None for the whole frame
        context: Frame description used in error messages

    Returns:
        np.ndarray: Boolean array of the frame length, True where the query state is unknown
    """
    mask = np.zeros(length, dtype=bool)

    for symbol_range in ranges:
        if symbol_range.end > length:
            raise PositionOutOfRangeError(symbol_range.end - 1, length, context)
        mask[symbol_range.begin:symbol_range.end] = True

    # Outside of the aligned region nothing is known about the query
    mask[:min(aligned_start, length)] = True
    if aligned_end is not None:
        mask[min(aligned_end, length):] = True

    return mask


@dataclass
class DiffFrame:
    """
    Inputs of one diff

    Attributes:
        reference: Reference sequence or reference peptide of the frame
        node_mut_map: Node states at mutated positions
        qry_substitutions: Query states at substituted positions
        qry_deletions: Query deleted positions
        unknown_mask: True where the query state is unknown
        gene: Gene name for peptide frames
    """
    reference: Union[ReferenceSequence, RefPeptide]
    node_mut_map: Mapping[int, str]
    qry_substitutions: Dict[int, str] = field(default_factory=dict)
    qry_deletions: Set[int] = field(default_factory=set)
    unknown_mask: Optional[np.ndarray] = None
    gene: Optional[str] = None
    context: str = "reference sequence"

    def __post_init__(self):
        if self.unknown_mask is None:
            self.unknown_mask = np.zeros(len(self.reference), dtype=bool)
        elif len(self.unknown_mask) != len(self.reference):
            raise ValueError("unknown_mask must have the same length as the reference")

    @property
    def alphabet(self) -> Alphabet:
        return self.reference.alphabet

    def qry_symbol(self, pos: int) -> str:
        """Query state; positions without an explicit query change carry the reference state"""
        if pos in self.qry_substitutions:
            return self.qry_substitutions[pos].upper()
        if pos in self.qry_deletions:
            return self.alphabet.gap
        return self.reference.symbol_at(pos)

    def is_qry_unknown(self, pos: int, symbol: str) -> bool:
        return bool(self.unknown_mask[pos]) or self.alphabet.is_unknown(symbol)

    def positions(self) -> List[int]:
        """Positions explicit in the node or the query, ascending"""
        return sorted(set(self.node_mut_map) | set(self.qry_substitutions) | self.qry_deletions)


def find_private_mutations_in_frame(frame: DiffFrame,
                                    label_index: LabelIndex,
                                    result_cls: Type[PrivateMutations],
                                    **extra_fields) -> PrivateMutations:
    """
    Find private mutations of the query in one frame

    Args:
        frame: Diff inputs
        label_index: Label catalog index
        result_cls: Result record class to construct
        **extra_fields: Additional fields of the result record (e.g. gene_name)

    Returns:
        Result record with private substitutions, deletions, reversions and label partitions

    Raises:
        PositionOutOfRangeError: If a node or query position lies outside of the frame
    """
    private_substitutions: List[Substitution] = []
    private_deletions: List[Deletion] = []
    reversion_substitutions: List[Substitution] = []

    for pos in frame.positions():
        ref_symbol = frame.reference.symbol_at(pos)
        qry_symbol = frame.qry_symbol(pos)

        if frame.is_qry_unknown(pos, qry_symbol):
            continue

        node_has_mutation = pos in frame.node_mut_map
        node_symbol = frame.node_mut_map[pos].upper() if node_has_mutation else ref_symbol

        if qry_symbol == node_symbol:
            continue

        if node_has_mutation and qry_symbol == ref_symbol:
            reversion_substitutions.append(
                Substitution(pos=pos, ref=node_symbol, qry=ref_symbol, gene=frame.gene)
            )
        elif frame.alphabet.is_gap(qry_symbol):
            private_deletions.append(Deletion(pos=pos, ref=node_symbol, gene=frame.gene))
        else:
            private_substitutions.append(
                Substitution(pos=pos, ref=node_symbol, qry=qry_symbol, gene=frame.gene)
            )

    private_deletion_ranges = merge_deletions(private_deletions)
    labeled_substitutions, unlabeled_substitutions = label_substitutions(private_substitutions, label_index)
    labeled_deletions, unlabeled_deletions = label_deletions(private_deletion_ranges, label_index)

    logger.debug(
        "%s: %d private substitutions, %d private deletions, %d reversions, %d labeled",
        frame.context, len(private_substitutions), len(private_deletions),
        len(reversion_substitutions), len(labeled_substitutions) + len(labeled_deletions),
    )

    return result_cls(
        private_substitutions=private_substitutions,
        private_deletions=private_deletions,
        private_deletion_ranges=private_deletion_ranges,
        reversion_substitutions=reversion_substitutions,
        labeled_substitutions=labeled_substitutions,
        unlabeled_substitutions=unlabeled_substitutions,
        labeled_deletions=labeled_deletions,
        unlabeled_deletions=unlabeled_deletions,
        **extra_fields,
    )
