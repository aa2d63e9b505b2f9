#!/usr/bin/env python3
"""
Private nucleotide mutations

Finds the nucleotide changes of a query that are not inherited from its
nearest tree node.
"""

from typing import Dict, Sequence, Union

from ..analysis.analysis_result import AnalysisResult
from ..mutations.mutation import DeletionLabel, SubstitutionLabel
from ..reference.reference_data import ReferenceSequence, as_reference
from .diff import DiffFrame, build_unknown_mask, find_private_mutations_in_frame
from .labels import LabelIndex
from .private_data import PrivateNucleotideMutations


def find_private_nuc_mutations(
    node_mut_map: Dict[int, str],
    seq: AnalysisResult,
    ref_seq: Union[ReferenceSequence, str],
    substitution_label_map: Union[Sequence[SubstitutionLabel], LabelIndex, None] = None,
    deletion_label_map: Union[Sequence[DeletionLabel], LabelIndex, None] = None,
) -> PrivateNucleotideMutations:
    """
    Find private nucleotide mutations of a query

    Args:
        node_mut_map: Nucleotide states of the nearest tree node at its mutated positions (0-based)
        seq: Query analysis result
        ref_seq: Reference sequence
        substitution_label_map: Substitution label records, or a prebuilt LabelIndex
        deletion_label_map: Deletion label records, or a prebuilt LabelIndex

    Returns:
        PrivateNucleotideMutations: Private substitutions, deletions and reversions, ascending by position

    Raises:
        PositionOutOfRangeError: If a node or query position lies outside of the reference

    Examples:
        >>> node = {1: 'G'}
        >>> result = find_private_nuc_mutations(node, AnalysisResult(seq_name='q'), 'ACGT')
        >>> [str(s) for s in result.reversion_substitutions]
        ['G2C']
    """
    ref = as_reference(ref_seq)
    context = f"reference sequence '{ref.name}'"
    label_index = LabelIndex.from_records(substitution_label_map, deletion_label_map)

    qry_deletions = set()
    for deletion in seq.deletions:
        qry_deletions.update(deletion.positions())

    unknown_mask = build_unknown_mask(
        len(ref),
        list(seq.missing) + list(seq.non_acgtns),
        aligned_start=seq.alignment_start,
        aligned_end=seq.alignment_end,
        context=context,
    )

    frame = DiffFrame(
        reference=ref,
        node_mut_map=node_mut_map,
        qry_substitutions={sub.pos: sub.qry for sub in seq.substitutions},
        qry_deletions=qry_deletions,
        unknown_mask=unknown_mask,
        context=context,
    )

    return find_private_mutations_in_frame(frame, label_index, result_cls=PrivateNucleotideMutations)
