#!/usr/bin/env python3
"""
Configuration tests - alphabets and label catalog
"""

import json
import pytest
import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from privmut.config import AMINOACIDS, GAP, NUCLEOTIDES, LabelCatalog, load_label_catalog
from privmut.errors import LabelCatalogError
from privmut.mutations import DeletionLabel, DeletionRange, Substitution, SubstitutionLabel
from privmut.private import LabelIndex


CATALOG = {
    "nucMutLabelMap": {
        "241T": ["20A"],
        "C3037T": ["20A", "20B"],
    },
    "nucDelLabelMap": {
        "11288-11296": ["21J"],
    },
    "aaMutLabelMap": {
        "S:N501Y": ["Alpha", "Beta"],
    },
    "aaDelLabelMap": {
        "S:69-70": "Alpha",
    },
}


class TestAlphabets:
    """Nucleotide and amino-acid alphabets"""

    def test_nucleotides(self):
        for letter in "ACGTacgt":
            assert not NUCLEOTIDES.is_unknown(letter)
        for letter in "NRYKMSWBDHV":
            assert NUCLEOTIDES.is_unknown(letter)

    def test_gap_is_known(self):
        assert NUCLEOTIDES.is_gap(GAP)
        assert not NUCLEOTIDES.is_unknown(GAP)
        assert not AMINOACIDS.is_unknown(GAP)

    def test_aminoacids(self):
        for letter in "ACDEFGHIKLMNPQRSTVWY*":
            assert not AMINOACIDS.is_unknown(letter)
        for letter in "XBZJ":
            assert AMINOACIDS.is_unknown(letter)
        assert AMINOACIDS.unknown == 'X'
        assert NUCLEOTIDES.unknown == 'N'


class TestLabelCatalog:
    """Label catalog loading"""

    def test_from_dict(self):
        catalog = LabelCatalog.from_dict(CATALOG)

        assert len(catalog) == 5
        assert catalog.nuc_substitution_labels == [
            SubstitutionLabel(pos=240, qry='T', labels=('20A',)),
            SubstitutionLabel(pos=3036, qry='T', labels=('20A', '20B'), ref='C'),
        ]
        assert catalog.nuc_deletion_labels == [DeletionLabel(start=11287, length=9, labels=('21J',))]
        assert catalog.aa_substitution_labels == [
            SubstitutionLabel(pos=500, qry='Y', labels=('Alpha', 'Beta'), ref='N', gene='S'),
        ]
        assert catalog.aa_deletion_labels == [DeletionLabel(start=68, length=2, labels=('Alpha',), gene='S')]

    def test_empty_sections(self):
        catalog = LabelCatalog.from_dict({})

        assert len(catalog) == 0
        assert len(catalog.nuc_index()) == 0

    def test_lowercase_symbols(self):
        catalog = LabelCatalog.from_dict({"nucMutLabelMap": {"c241t": ["20A"]}})
        assert catalog.nuc_substitution_labels[0].ref == 'C'
        assert catalog.nuc_substitution_labels[0].qry == 'T'

    def test_from_file(self, tmp_path):
        config_file = tmp_path / "labels.json"
        config_file.write_text(json.dumps(CATALOG), encoding='utf-8')

        catalog = LabelCatalog.from_file(config_file)
        assert catalog == LabelCatalog.from_dict(CATALOG)
        assert load_label_catalog(str(config_file)) == catalog

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LabelCatalog.from_file(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        config_file = tmp_path / "labels.json"
        config_file.write_text("{not json", encoding='utf-8')

        with pytest.raises(LabelCatalogError):
            LabelCatalog.from_file(config_file)

    def test_load_without_file(self):
        assert len(load_label_catalog()) == 0

    @pytest.mark.parametrize("config_data", [
        [],
        {"nucMutLabelMap": {"S:N501Y": ["Alpha"]}},
        {"aaMutLabelMap": {"N501Y": ["Alpha"]}},
        {"nucDelLabelMap": {"S:69-70": ["Alpha"]}},
        {"aaDelLabelMap": {"69-70": ["Alpha"]}},
        {"nucMutLabelMap": {"241T": [1, 2]}},
        {"nucMutLabelMap": {"T": ["20A"]}},
    ])
    def test_invalid_catalog(self, config_data):
        with pytest.raises(LabelCatalogError):
            LabelCatalog.from_dict(config_data)

    def test_indices_cached(self):
        catalog = LabelCatalog.from_dict(CATALOG)

        assert isinstance(catalog.nuc_index(), LabelIndex)
        assert catalog.nuc_index() is catalog.nuc_index()
        assert catalog.aa_index() is catalog.aa_index()

    def test_indices(self):
        catalog = LabelCatalog.from_dict(CATALOG)
        nuc_index = catalog.nuc_index()
        aa_index = catalog.aa_index()

        assert nuc_index.find_substitution_labels(Substitution(pos=240, ref='C', qry='T')) == ('20A',)
        assert nuc_index.find_deletion_labels(DeletionRange(start=11287, length=9)) == ('21J',)
        assert aa_index.find_substitution_labels(Substitution(pos=500, ref='N', qry='Y', gene='S')) == ('Alpha', 'Beta')
        assert aa_index.find_deletion_labels(DeletionRange(start=68, length=2, gene='S')) == ('Alpha',)
        assert nuc_index.find_substitution_labels(Substitution(pos=500, ref='N', qry='Y', gene='S')) == ()

    def test_summary(self):
        summary = LabelCatalog.from_dict(CATALOG).summary()

        assert "Nucleotide substitution labels: 2" in summary
        assert "Amino-acid deletion labels: 1" in summary
