#!/usr/bin/env python3
"""
Label catalog configuration

Loads curated mutation labels (e.g. clade- or lineage-defining markers) from
JSON and builds label indices for the private mutation finders.

File format (all sections optional, positions 1-based):

    {
      "nucMutLabelMap": {"241T": ["20A"], "C3037T": ["20A"]},
      "nucDelLabelMap": {"11288-11296": ["21J"]},
      "aaMutLabelMap":  {"S:N501Y": ["Alpha"]},
      "aaDelLabelMap":  {"S:69-70": ["Alpha"]}
    }
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
from dataclasses import dataclass, field

from ..errors import LabelCatalogError
from ..mutations.mutation import (
    DeletionLabel,
    SubstitutionLabel,
    parse_deletion_range,
    parse_substitution,
)

logger = logging.getLogger(__name__)


def _parse_labels(key: str, value) -> Tuple[str, ...]:
    if isinstance(value, str):
        return (value,)
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise LabelCatalogError(f"Labels of '{key}' must be a string or a list of strings")
    return tuple(value)


def _parse_substitution_labels(label_map: Dict, require_gene: bool) -> List[SubstitutionLabel]:
    records = []
    for key, value in label_map.items():
        gene, pos, ref, qry = parse_substitution(key)
        if require_gene and not gene:
            raise LabelCatalogError(f"Amino-acid label '{key}' must name a gene, e.g. 'S:N501Y'")
        if not require_gene and gene:
            raise LabelCatalogError(f"Nucleotide label '{key}' cannot name a gene")
        records.append(SubstitutionLabel(pos=pos, qry=qry.upper(), labels=_parse_labels(key, value),
                                         ref=ref.upper() if ref else None, gene=gene))
    return records


def _parse_deletion_labels(label_map: Dict, require_gene: bool) -> List[DeletionLabel]:
    records = []
    for key, value in label_map.items():
        gene, start, length = parse_deletion_range(key)
        if require_gene and not gene:
            raise LabelCatalogError(f"Amino-acid deletion label '{key}' must name a gene, e.g. 'S:69-70'")
        if not require_gene and gene:
            raise LabelCatalogError(f"Nucleotide deletion label '{key}' cannot name a gene")
        records.append(DeletionLabel(start=start, length=length, labels=_parse_labels(key, value), gene=gene))
    return records


@dataclass
class LabelCatalog:
    """
    Curated mutation label catalog

    Attributes:
        nuc_substitution_labels: Nucleotide substitution label records
        nuc_deletion_labels: Nucleotide deletion label records
        aa_substitution_labels: Amino-acid substitution label records
        aa_deletion_labels: Amino-acid deletion label records
    """
    nuc_substitution_labels: List[SubstitutionLabel] = field(default_factory=list)
    nuc_deletion_labels: List[DeletionLabel] = field(default_factory=list)
    aa_substitution_labels: List[SubstitutionLabel] = field(default_factory=list)
    aa_deletion_labels: List[DeletionLabel] = field(default_factory=list)
    _nuc_index: Optional[Any] = field(default=None, init=False, repr=False, compare=False)
    _aa_index: Optional[Any] = field(default=None, init=False, repr=False, compare=False)

    @classmethod
    def from_dict(cls, config_data: Dict) -> 'LabelCatalog':
        """Load catalog from dictionary"""
        if not isinstance(config_data, dict):
            raise LabelCatalogError("Label catalog must be a JSON object")

        return cls(
            nuc_substitution_labels=_parse_substitution_labels(config_data.get('nucMutLabelMap', {}), False),
            nuc_deletion_labels=_parse_deletion_labels(config_data.get('nucDelLabelMap', {}), False),
            aa_substitution_labels=_parse_substitution_labels(config_data.get('aaMutLabelMap', {}), True),
            aa_deletion_labels=_parse_deletion_labels(config_data.get('aaDelLabelMap', {}), True),
        )

    @classmethod
    def from_file(cls, config_file: Union[str, Path]) -> 'LabelCatalog':
        """Load catalog from JSON file"""
        config_path = Path(config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Label catalog file does not exist: {config_file}")

        with open(config_path, 'r', encoding='utf-8') as f:
            try:
                config_data = json.load(f)
            except json.JSONDecodeError as e:
                raise LabelCatalogError(f"Label catalog is not valid JSON: {config_file}: {e}") from e

        catalog = cls.from_dict(config_data)
        logger.info("Loaded label catalog %s (%d records)", config_path.name, len(catalog))
        return catalog

    def __len__(self) -> int:
        return (
            len(self.nuc_substitution_labels) + len(self.nuc_deletion_labels)
            + len(self.aa_substitution_labels) + len(self.aa_deletion_labels)
        )

    def nuc_index(self) -> "LabelIndex":
        """Index of the nucleotide labels, built on first use"""
        if self._nuc_index is None:
            from ..private.labels import LabelIndex
            self._nuc_index = LabelIndex(self.nuc_substitution_labels, self.nuc_deletion_labels)
        return self._nuc_index

    def aa_index(self) -> "LabelIndex":
        """Index of the amino-acid labels, built on first use"""
        if self._aa_index is None:
            from ..private.labels import LabelIndex
            self._aa_index = LabelIndex(self.aa_substitution_labels, self.aa_deletion_labels)
        return self._aa_index

    def summary(self) -> str:
        """Return catalog summary information"""
        lines = [
            "=== Label Catalog Summary ===",
            f"Nucleotide substitution labels: {len(self.nuc_substitution_labels)}",
            f"Nucleotide deletion labels: {len(self.nuc_deletion_labels)}",
            f"Amino-acid substitution labels: {len(self.aa_substitution_labels)}",
            f"Amino-acid deletion labels: {len(self.aa_deletion_labels)}",
        ]
        return "\n".join(lines)


def load_label_catalog(config_file: Optional[Union[str, Path]] = None) -> LabelCatalog:
    """
    Load a label catalog

    Args:
        config_file: JSON catalog path, None for an empty catalog

    Returns:
        LabelCatalog: Parsed catalog
    """
    if config_file is None:
        return LabelCatalog()
    return LabelCatalog.from_file(config_file)
