#!/usr/bin/env python3
"""
Private amino-acid mutations

Finds, gene by gene, the amino-acid changes of a query that are not inherited
from its nearest tree node.
"""

import logging
from typing import Dict, List, Mapping, Optional, Sequence, Union

from ..analysis.analysis_result import AnalysisResult
from ..config.alphabets import AMINOACIDS
from ..errors import GeneMapError, NonFatalError, RefPeptideNotFoundError
from ..mutations.mutation import DeletionLabel, SubstitutionLabel
from ..reference.reference_data import GeneMap, RefPeptide, as_reference
from .diff import DiffFrame, build_unknown_mask, find_private_mutations_in_frame
from .labels import LabelIndex
from .private_data import PrivateAminoacidMutations

logger = logging.getLogger(__name__)


def _find_private_aa_mutations_for_gene(
    gene_name: str,
    node_mut_map: Mapping[int, str],
    seq: AnalysisResult,
    ref_peptide: RefPeptide,
    label_index: LabelIndex,
) -> PrivateAminoacidMutations:
    """Run the diff over the reference peptide of one gene"""
    context = f"reference peptide of gene '{gene_name}'"

    unknown_mask = build_unknown_mask(
        len(ref_peptide),
        seq.unknown_aa_ranges_for(gene_name),
        context=context,
    )

    frame = DiffFrame(
        reference=ref_peptide,
        node_mut_map=node_mut_map,
        qry_substitutions={sub.pos: sub.qry for sub in seq.aa_substitutions_for(gene_name)},
        qry_deletions={d.pos for d in seq.aa_deletions_for(gene_name)},
        unknown_mask=unknown_mask,
        gene=gene_name,
        context=context,
    )

    return find_private_mutations_in_frame(
        frame, label_index, result_cls=PrivateAminoacidMutations, gene_name=gene_name
    )


def find_private_aa_mutations(
    node_mut_map: Mapping[str, Mapping[int, str]],
    seq: AnalysisResult,
    ref_peptides: Mapping[str, Union[RefPeptide, str]],
    gene_map: GeneMap,
    substitution_label_map: Union[Sequence[SubstitutionLabel], LabelIndex, None] = None,
    deletion_label_map: Union[Sequence[DeletionLabel], LabelIndex, None] = None,
    errors: Optional[List[NonFatalError]] = None,
) -> Dict[str, PrivateAminoacidMutations]:
    """
    Find private amino-acid mutations of a query, per gene

    Genes are processed in gene map order. A gene without a reference peptide
    is skipped: a RefPeptideNotFoundError is appended to `errors` and the
    remaining genes are processed as usual.

    Args:
        node_mut_map: Per-gene amino-acid states of the nearest tree node (gene -> position -> amino acid)
        seq: Query analysis result
        ref_peptides: Reference peptide per gene
        gene_map: Genes to process
        substitution_label_map: Substitution label records, or a prebuilt LabelIndex
        deletion_label_map: Deletion label records, or a prebuilt LabelIndex
        errors: Accumulator for non-fatal errors

    Returns:
        Dict[str, PrivateAminoacidMutations]: Results of the successfully processed genes

    Raises:
        PositionOutOfRangeError: If a node or query position lies outside of a reference peptide
    """
    label_index = LabelIndex.from_records(substitution_label_map, deletion_label_map)

    for gene_name in node_mut_map:
        if gene_name not in gene_map:
            logger.debug("Ignoring node mutations of gene '%s' absent from the gene map", gene_name)

    results: Dict[str, PrivateAminoacidMutations] = {}
    for gene_name in gene_map:
        try:
            if gene_name not in ref_peptides:
                raise RefPeptideNotFoundError(gene_name)

            ref_peptide = as_reference(ref_peptides[gene_name], AMINOACIDS, name=gene_name)
            if ref_peptide.gene_name != gene_name:
                raise GeneMapError(
                    f"Reference peptide of gene '{ref_peptide.gene_name}' is stored under gene '{gene_name}'"
                )
            results[gene_name] = _find_private_aa_mutations_for_gene(
                gene_name,
                node_mut_map.get(gene_name, {}),
                seq,
                ref_peptide,
                label_index,
            )
        except NonFatalError as e:
            logger.warning("%s: %s", seq.seq_name, e)
            if errors is not None:
                errors.append(e)

    return results
