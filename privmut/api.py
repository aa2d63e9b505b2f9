#!/usr/bin/env python3
"""
privmut Main API Module

Provides a per-query interface running both private mutation finders and
collecting their results and warnings into one report
"""

import logging
from typing import List, Optional, Dict, Any, Mapping, Union
from dataclasses import dataclass, field
import time
import pandas as pd

from .analysis.analysis_result import AnalysisResult
from .config.label_catalog import LabelCatalog
from .errors import NonFatalError, RefPeptideNotFoundError
from .private.aa_finder import find_private_aa_mutations
from .private.nuc_finder import find_private_nuc_mutations
from .private.private_data import PrivateAminoacidMutations, PrivateNucleotideMutations
from .reference.reference_data import GeneMap, RefPeptide, ReferenceSequence

logger = logging.getLogger(__name__)


@dataclass
class PrivateMutationsReport:
    """
    Private mutations of one query

    Attributes:
        seq_name: Query sequence name
        private_nuc_mutations: Nucleotide private mutations
        private_aa_mutations: Amino-acid private mutations per successfully processed gene
        warnings: Non-fatal errors raised while processing the query
        processing_time: Processing time in seconds
    """
    seq_name: str
    private_nuc_mutations: PrivateNucleotideMutations
    private_aa_mutations: Dict[str, PrivateAminoacidMutations] = field(default_factory=dict)
    warnings: List[NonFatalError] = field(default_factory=list)
    processing_time: float = 0.0

    @property
    def missing_genes(self) -> List[str]:
        """Genes skipped because their reference peptide was not found"""
        return [w.gene_name for w in self.warnings if isinstance(w, RefPeptideNotFoundError)]

    @property
    def total_private_aa_substitutions(self) -> int:
        return sum(m.total_private_substitutions for m in self.private_aa_mutations.values())

    @property
    def total_private_aa_deletions(self) -> int:
        return sum(m.total_private_deletions for m in self.private_aa_mutations.values())

    @property
    def total_aa_reversion_substitutions(self) -> int:
        return sum(m.total_reversion_substitutions for m in self.private_aa_mutations.values())

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert report to a flat dictionary

        Nucleotide columns use the 'privateNucMutations.' prefix. Amino-acid
        mutations of all genes are joined into 'privateAaMutations.*' columns.
        """
        row: Dict[str, Any] = {'seqName': self.seq_name}
        row.update(self.private_nuc_mutations.to_dict())

        aa_reversions = []
        aa_labeled = []
        aa_unlabeled = []
        aa_labeled_deletions = []
        aa_unlabeled_deletions = []
        for gene_result in self.private_aa_mutations.values():
            aa_reversions.extend(str(s) for s in gene_result.reversion_substitutions)
            aa_labeled.extend(str(s) for s in gene_result.labeled_substitutions)
            aa_unlabeled.extend(str(s) for s in gene_result.unlabeled_substitutions)
            aa_labeled_deletions.extend(str(d) for d in gene_result.labeled_deletions)
            aa_unlabeled_deletions.extend(str(d) for d in gene_result.unlabeled_deletions)

        row.update({
            'privateAaMutations.reversionSubstitutions': ','.join(aa_reversions),
            'privateAaMutations.labeledSubstitutions': ','.join(aa_labeled),
            'privateAaMutations.unlabeledSubstitutions': ','.join(aa_unlabeled),
            'privateAaMutations.labeledDeletions': ','.join(aa_labeled_deletions),
            'privateAaMutations.unlabeledDeletions': ','.join(aa_unlabeled_deletions),
            'privateAaMutations.totalPrivateSubstitutions': self.total_private_aa_substitutions,
            'privateAaMutations.totalPrivateDeletions': self.total_private_aa_deletions,
            'privateAaMutations.totalReversionSubstitutions': self.total_aa_reversion_substitutions,
            'warnings': ';'.join(str(w) for w in self.warnings),
        })
        return row

    def print_summary(self):
        """Print private mutations summary"""
        nuc = self.private_nuc_mutations
        print(f"Private Mutations Summary: {self.seq_name}")
        print(f"=" * 40)
        print(f"Processing time: {self.processing_time:.4f} seconds")
        print(f"")
        print(f"Nucleotide private mutations:")
        print(f"  Substitutions: {nuc.total_private_substitutions} "
              f"(labeled: {nuc.total_labeled_substitutions}, unlabeled: {nuc.total_unlabeled_substitutions})")
        print(f"  Deletions: {nuc.total_private_deletions}")
        print(f"  Reversions: {nuc.total_reversion_substitutions}")
        print(f"")
        print(f"Amino-acid private mutations ({len(self.private_aa_mutations)} genes):")
        for gene_name, gene_result in self.private_aa_mutations.items():
            print(f"  {gene_name}: {gene_result.total_private_substitutions} substitutions, "
                  f"{gene_result.total_private_deletions} deletions, "
                  f"{gene_result.total_reversion_substitutions} reversions")
        if self.warnings:
            print(f"")
            print(f"Warnings:")
            for warning in self.warnings:
                print(f"  {warning}")


def find_private_mutations(
    seq: AnalysisResult,
    ref_seq: Union[ReferenceSequence, str],
    node_nuc_mut_map: Mapping[int, str],
    node_aa_mut_map: Optional[Mapping[str, Mapping[int, str]]] = None,
    ref_peptides: Optional[Mapping[str, Union[RefPeptide, str]]] = None,
    gene_map: Optional[GeneMap] = None,
    label_catalog: Optional[LabelCatalog] = None,
    verbose: bool = False,
) -> PrivateMutationsReport:
    """
    Find private nucleotide and amino-acid mutations of one query

    Args:
        seq: Query analysis result
        ref_seq: Reference sequence
        node_nuc_mut_map: Nucleotide mutations of the nearest tree node
        node_aa_mut_map: Per-gene amino-acid mutations of the nearest tree node
        ref_peptides: Reference peptide per gene
        gene_map: Genes to process, None to skip amino-acid analysis
        label_catalog: Curated mutation labels, None for no labels
        verbose: Whether to log per-query details at INFO level

    Returns:
        PrivateMutationsReport: Results and non-fatal warnings

    Raises:
        PositionOutOfRangeError: If a mutation position lies outside of its reference
    """
    start_time = time.time()

    if label_catalog is None:
        label_catalog = LabelCatalog()

    nuc_index = label_catalog.nuc_index()
    private_nuc_mutations = find_private_nuc_mutations(
        node_nuc_mut_map, seq, ref_seq, nuc_index, nuc_index
    )

    warnings: List[NonFatalError] = []
    private_aa_mutations: Dict[str, PrivateAminoacidMutations] = {}
    if gene_map:
        aa_index = label_catalog.aa_index()
        private_aa_mutations = find_private_aa_mutations(
            node_aa_mut_map or {},
            seq,
            ref_peptides or {},
            gene_map,
            aa_index,
            aa_index,
            errors=warnings,
        )

    report = PrivateMutationsReport(
        seq_name=seq.seq_name,
        private_nuc_mutations=private_nuc_mutations,
        private_aa_mutations=private_aa_mutations,
        warnings=warnings,
        processing_time=time.time() - start_time,
    )

    if verbose:
        logger.info(
            "%s: %d substitutions, %d deleted and %d missing positions relative to the reference",
            seq.seq_name, seq.total_substitutions, seq.total_deletions, seq.total_missing,
        )
        logger.info(
            "%s: %d private nucleotide substitutions, %d deletions, %d reversions, %d genes, %d warnings",
            seq.seq_name,
            private_nuc_mutations.total_private_substitutions,
            private_nuc_mutations.total_private_deletions,
            private_nuc_mutations.total_reversion_substitutions,
            len(private_aa_mutations),
            len(warnings),
        )

    return report


def reports_to_df(reports: List[PrivateMutationsReport]) -> pd.DataFrame:
    """Convert reports to a pandas DataFrame with one row per query"""
    return pd.DataFrame([report.to_dict() for report in reports])
