#!/usr/bin/env python3
"""
Private amino-acid mutation tests
"""

import logging
import pytest

from privmut.analysis import AnalysisResult
from privmut.errors import (
    GeneMapError,
    NonFatalError,
    PositionOutOfRangeError,
    RefPeptideNotFoundError,
)
from privmut.mutations import (
    Deletion,
    DeletionLabel,
    DeletionRange,
    Substitution,
    SubstitutionLabel,
    SymbolRange,
)
from privmut.private import (
    PrivateAminoacidMutations,
    PrivateMutations,
    PrivateNucleotideMutations,
    find_private_aa_mutations,
)
from privmut.reference import Gene, RefPeptide, build_gene_map


@pytest.fixture
def gene_map():
    return build_gene_map([Gene('A', 0, 9), Gene('B', 9, 18)])


@pytest.fixture
def ref_peptides():
    return {'A': 'MKV', 'B': 'LLQ'}


class TestPerGene:
    """Per-gene processing"""

    def test_query_only_substitution(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q', aa_substitutions=[Substitution(pos=1, ref='K', qry='R', gene='A')])
        result = find_private_aa_mutations({}, seq, ref_peptides, gene_map)

        assert list(result) == ['A', 'B']
        assert isinstance(result['A'], PrivateAminoacidMutations)
        assert result['A'].gene_name == 'A'
        assert result['A'].private_deletions == []
        assert result['A'].private_substitutions == [Substitution(pos=1, ref='K', qry='R', gene='A')]
        assert str(result['A'].private_substitutions[0]) == "A:K2R"
        assert result['B'].is_empty

    def test_result_type(self, gene_map, ref_peptides):
        """Amino-acid results are not nucleotide results"""
        result = find_private_aa_mutations({}, AnalysisResult(seq_name='q'), ref_peptides, gene_map)

        assert isinstance(result['A'], PrivateMutations)
        assert not isinstance(result['A'], PrivateNucleotideMutations)
        assert not issubclass(PrivateNucleotideMutations, PrivateAminoacidMutations)

    def test_reversion(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q')
        result = find_private_aa_mutations({'A': {2: 'I'}}, seq, ref_peptides, gene_map)

        assert result['A'].reversion_substitutions == [Substitution(pos=2, ref='I', qry='V', gene='A')]
        assert str(result['A'].reversion_substitutions[0]) == "A:I3V"

    def test_shared_mutation(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q', aa_substitutions=[Substitution(pos=0, ref='L', qry='F', gene='B')])
        result = find_private_aa_mutations({'B': {0: 'F'}}, seq, ref_peptides, gene_map)

        assert result['B'].is_empty

    def test_node_mutation_changed(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q', aa_substitutions=[Substitution(pos=0, ref='L', qry='W', gene='B')])
        result = find_private_aa_mutations({'B': {0: 'F'}}, seq, ref_peptides, gene_map)

        assert result['B'].private_substitutions == [Substitution(pos=0, ref='F', qry='W', gene='B')]

    def test_stop_codon(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q', aa_substitutions=[Substitution(pos=2, ref='Q', qry='*', gene='B')])
        result = find_private_aa_mutations({}, seq, ref_peptides, gene_map)

        assert result['B'].private_substitutions == [Substitution(pos=2, ref='Q', qry='*', gene='B')]

    def test_deletion(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q', aa_deletions=[Deletion(pos=1, ref='K', gene='A'),
                                                         Deletion(pos=2, ref='V', gene='A')])
        result = find_private_aa_mutations({}, seq, ref_peptides, gene_map)

        assert result['A'].private_deletions == [Deletion(pos=1, ref='K', gene='A'), Deletion(pos=2, ref='V', gene='A')]
        assert result['A'].private_deletion_ranges == [DeletionRange(start=1, length=2, gene='A')]

    def test_mutations_of_other_genes_ignored(self, gene_map, ref_peptides):
        """Node genes absent from the gene map are not processed"""
        seq = AnalysisResult(seq_name='q')
        result = find_private_aa_mutations({'C': {0: 'W'}}, seq, ref_peptides, gene_map)

        assert list(result) == ['A', 'B']
        assert all(r.is_empty for r in result.values())

    def test_gene_map_order(self, ref_peptides):
        gene_map = build_gene_map([Gene('B', 9, 18), Gene('A', 0, 9)])
        result = find_private_aa_mutations({}, AnalysisResult(seq_name='q'), ref_peptides, gene_map)

        assert list(result) == ['B', 'A']

    def test_ref_peptide_objects(self, gene_map):
        ref_peptides = {'A': RefPeptide(gene_name='A', seq='mkv'), 'B': RefPeptide(gene_name='B', seq='LLQ')}
        result = find_private_aa_mutations({'A': {0: 'L'}}, AnalysisResult(seq_name='q'), ref_peptides, gene_map)

        assert result['A'].reversion_substitutions == [Substitution(pos=0, ref='L', qry='M', gene='A')]


class TestUnknownAminoAcids:
    """Unknown amino acids are excluded"""

    def test_unknown_substitution(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q', aa_substitutions=[Substitution(pos=1, ref='K', qry='X', gene='A')])
        result = find_private_aa_mutations({}, seq, ref_peptides, gene_map)

        assert result['A'].is_empty

    def test_unknown_range_suppresses_reversion(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q', unknown_aa_ranges={'A': [SymbolRange(begin=0, end=3, symbol='X')]})
        result = find_private_aa_mutations({'A': {2: 'I'}}, seq, ref_peptides, gene_map)

        assert result['A'].is_empty

    def test_unknown_range_of_other_gene(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q', unknown_aa_ranges={'B': [SymbolRange(begin=0, end=3, symbol='X')]})
        result = find_private_aa_mutations({'A': {2: 'I'}}, seq, ref_peptides, gene_map)

        assert len(result['A'].reversion_substitutions) == 1


class TestMissingRefPeptide:
    """Genes without a reference peptide"""

    def test_missing_peptide_is_non_fatal(self, gene_map):
        seq = AnalysisResult(seq_name='q', aa_substitutions=[
            Substitution(pos=1, ref='K', qry='R', gene='A'),
            Substitution(pos=0, ref='L', qry='F', gene='B'),
        ])
        errors = []
        result = find_private_aa_mutations({'B': {1: 'W'}}, seq, {'A': 'MKV'}, gene_map, errors=errors)

        assert list(result) == ['A']
        assert len(result['A'].private_substitutions) == 1
        assert len(errors) == 1
        assert isinstance(errors[0], RefPeptideNotFoundError)
        assert isinstance(errors[0], NonFatalError)
        assert errors[0].gene_name == 'B'
        assert "'B'" in str(errors[0])

    def test_missing_peptide_without_accumulator(self, gene_map):
        result = find_private_aa_mutations({}, AnalysisResult(seq_name='q'), {'B': 'LLQ'}, gene_map)

        assert list(result) == ['B']

    def test_missing_peptide_logged(self, gene_map, caplog):
        with caplog.at_level(logging.WARNING, logger='privmut'):
            find_private_aa_mutations({}, AnalysisResult(seq_name='q1'), {}, gene_map)

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 2
        assert 'q1' in warnings[0].getMessage()


class TestFatalErrors:
    """Contract violations propagate"""

    def test_position_out_of_range(self, gene_map, ref_peptides):
        errors = []
        with pytest.raises(PositionOutOfRangeError):
            find_private_aa_mutations({'A': {3: 'W'}}, AnalysisResult(seq_name='q'), ref_peptides, gene_map,
                                      errors=errors)
        assert errors == []

    def test_unknown_range_out_of_range(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q', unknown_aa_ranges={'A': [SymbolRange(begin=1, end=5, symbol='X')]})
        with pytest.raises(PositionOutOfRangeError):
            find_private_aa_mutations({}, seq, ref_peptides, gene_map)

    def test_peptide_stored_under_wrong_gene(self, gene_map):
        ref_peptides = {'A': RefPeptide(gene_name='B', seq='MKV'), 'B': 'LLQ'}
        with pytest.raises(GeneMapError):
            find_private_aa_mutations({}, AnalysisResult(seq_name='q'), ref_peptides, gene_map)

    def test_invalid_gene(self):
        with pytest.raises(GeneMapError):
            Gene('A', 10, 5)

    def test_duplicate_gene(self):
        with pytest.raises(GeneMapError):
            build_gene_map([Gene('A', 0, 9), Gene('A', 9, 18)])


class TestLabels:
    """Label attachment for amino-acid mutations"""

    def test_labeled_substitution(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q', aa_substitutions=[Substitution(pos=1, ref='K', qry='R', gene='A')])
        labels = [SubstitutionLabel(pos=1, qry='R', labels=('Alpha',), gene='A')]
        result = find_private_aa_mutations({}, seq, ref_peptides, gene_map, labels, [])

        assert [str(l) for l in result['A'].labeled_substitutions] == ["A:K2R|Alpha"]
        assert result['A'].unlabeled_substitutions == []

    def test_label_of_other_gene_not_applied(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q', aa_substitutions=[Substitution(pos=1, ref='K', qry='R', gene='A')])
        labels = [SubstitutionLabel(pos=1, qry='R', labels=('Alpha',), gene='B')]
        result = find_private_aa_mutations({}, seq, ref_peptides, gene_map, labels, [])

        assert result['A'].labeled_substitutions == []
        assert len(result['A'].unlabeled_substitutions) == 1

    def test_labeled_deletion(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q', aa_deletions=[Deletion(pos=1, ref='K', gene='A')])
        labels = [DeletionLabel(start=1, length=1, labels=('d',), gene='A')]
        result = find_private_aa_mutations({}, seq, ref_peptides, gene_map, [], labels)

        assert [str(l) for l in result['A'].labeled_deletions] == ["A:2|d"]
        assert result['A'].unlabeled_deletions == []

    def test_to_dict_prefix(self, gene_map, ref_peptides):
        seq = AnalysisResult(seq_name='q', aa_substitutions=[Substitution(pos=1, ref='K', qry='R', gene='A')])
        row = find_private_aa_mutations({}, seq, ref_peptides, gene_map)['A'].to_dict()

        assert row['privateAaMutations.A.unlabeledSubstitutions'] == "A:K2R"
        assert row['privateAaMutations.A.totalPrivateSubstitutions'] == 1
