#!/usr/bin/env python3
"""
Label attachment

Matches private mutations against a curated label catalog. The catalog is
indexed once per run so that each lookup is a dictionary access.
"""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union
from collections import defaultdict

from ..mutations.mutation import (
    DeletionLabel,
    DeletionRange,
    LabeledDeletion,
    LabeledSubstitution,
    Substitution,
    SubstitutionLabel,
)


SubstitutionKey = Tuple[Optional[str], int, str]
DeletionKey = Tuple[Optional[str], int, int]


def _combine_labels(records: Iterable) -> Tuple[str, ...]:
    """Labels of all records in catalog order, without duplicates"""
    labels: List[str] = []
    for record in records:
        for label in record.labels:
            if label not in labels:
                labels.append(label)
    return tuple(labels)


class LabelIndex:
    """
    Index over substitution and deletion label records

    Substitution records are keyed by (gene, pos, qry); deletion records by
    (gene, start, length). Record order within a key follows catalog order.
    """

    def __init__(self,
                 substitution_labels: Sequence[SubstitutionLabel] = (),
                 deletion_labels: Sequence[DeletionLabel] = ()):
        self._substitutions: Dict[SubstitutionKey, List[SubstitutionLabel]] = defaultdict(list)
        self._deletions: Dict[DeletionKey, List[DeletionLabel]] = defaultdict(list)

        for record in substitution_labels:
            self._substitutions[(record.gene, record.pos, record.qry)].append(record)
        for record in deletion_labels:
            self._deletions[(record.gene, record.start, record.length)].append(record)

    @classmethod
    def from_records(cls,
                     substitution_labels: Union[Sequence[SubstitutionLabel], 'LabelIndex', None] = None,
                     deletion_labels: Union[Sequence[DeletionLabel], 'LabelIndex', None] = None) -> 'LabelIndex':
        """
        Build an index from catalog records

        Either argument may be a prebuilt LabelIndex. When both arguments are
        the same index it is returned as is, so that callers can index the
        catalog once per run and reuse it for every query.
        """
        if isinstance(substitution_labels, LabelIndex) and substitution_labels is deletion_labels:
            return substitution_labels
        if isinstance(substitution_labels, LabelIndex):
            substitution_labels = substitution_labels.substitution_records()
        if isinstance(deletion_labels, LabelIndex):
            deletion_labels = deletion_labels.deletion_records()
        return cls(substitution_labels or (), deletion_labels or ())

    def __len__(self) -> int:
        return sum(len(v) for v in self._substitutions.values()) + sum(len(v) for v in self._deletions.values())

    def substitution_records(self) -> List[SubstitutionLabel]:
        return [record for records in self._substitutions.values() for record in records]

    def deletion_records(self) -> List[DeletionLabel]:
        return [record for records in self._deletions.values() for record in records]

    def find_substitution_labels(self, sub: Substitution) -> Tuple[str, ...]:
        """Labels of all catalog records matching the substitution"""
        candidates = self._substitutions.get((sub.gene, sub.pos, sub.qry), [])
        return _combine_labels(record for record in candidates if record.matches(sub))

    def find_deletion_labels(self, deletion: DeletionRange) -> Tuple[str, ...]:
        candidates = self._deletions.get((deletion.gene, deletion.start, deletion.length), [])
        return _combine_labels(record for record in candidates if record.matches(deletion))


def label_substitutions(substitutions: List[Substitution],
                        index: LabelIndex) -> Tuple[List[LabeledSubstitution], List[Substitution]]:
    """
    Partition substitutions into labeled and unlabeled

    Args:
        substitutions: Private substitutions
        index: Label index

    Returns:
        (labeled, unlabeled), each in input order
    """
    labeled = []
    unlabeled = []
    for sub in substitutions:
        labels = index.find_substitution_labels(sub)
        if labels:
            labeled.append(LabeledSubstitution(substitution=sub, labels=labels))
        else:
            unlabeled.append(sub)
    return labeled, unlabeled


def label_deletions(deletions: List[DeletionRange],
                    index: LabelIndex) -> Tuple[List[LabeledDeletion], List[DeletionRange]]:
    """Partition deletion ranges into labeled and unlabeled"""
    labeled = []
    unlabeled = []
    for deletion in deletions:
        labels = index.find_deletion_labels(deletion)
        if labels:
            labeled.append(LabeledDeletion(deletion=deletion, labels=labels))
        else:
            unlabeled.append(deletion)
    return labeled, unlabeled
