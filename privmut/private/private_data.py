"""
Private mutation result data structures

This module defines the records returned by the private mutation finders.
"""

from typing import Any, Dict, List
from dataclasses import dataclass, field

from ..mutations.mutation import (
    Deletion,
    DeletionRange,
    LabeledDeletion,
    LabeledSubstitution,
    Substitution,
)


def _join(items: List[Any]) -> str:
    return ','.join(str(item) for item in items)


@dataclass
class PrivateMutations:
    """
    Private mutations of a query relative to its nearest tree node, in one frame

    Attributes:
        private_substitutions: Substitutions not inherited from the node (reversions excluded)
        private_deletions: Deleted positions not inherited from the node
        private_deletion_ranges: private_deletions merged into contiguous ranges
        reversion_substitutions: Positions where the query reverted a node mutation to the reference
        labeled_substitutions: private_substitutions that matched the label catalog
        unlabeled_substitutions: private_substitutions without a catalog match
        labeled_deletions: private_deletion_ranges that matched the label catalog
        unlabeled_deletions: private_deletion_ranges without a catalog match
    """
    private_substitutions: List[Substitution] = field(default_factory=list)
    private_deletions: List[Deletion] = field(default_factory=list)
    private_deletion_ranges: List[DeletionRange] = field(default_factory=list)
    reversion_substitutions: List[Substitution] = field(default_factory=list)
    labeled_substitutions: List[LabeledSubstitution] = field(default_factory=list)
    unlabeled_substitutions: List[Substitution] = field(default_factory=list)
    labeled_deletions: List[LabeledDeletion] = field(default_factory=list)
    unlabeled_deletions: List[DeletionRange] = field(default_factory=list)

    def __post_init__(self):
        """Validate that label partitions cover the private mutations"""
        if len(self.labeled_substitutions) + len(self.unlabeled_substitutions) != len(self.private_substitutions):
            raise ValueError("labeled and unlabeled substitutions must partition private substitutions")
        if len(self.labeled_deletions) + len(self.unlabeled_deletions) != len(self.private_deletion_ranges):
            raise ValueError("labeled and unlabeled deletions must partition private deletion ranges")

    @property
    def total_private_substitutions(self) -> int:
        return len(self.private_substitutions)

    @property
    def total_private_deletions(self) -> int:
        return len(self.private_deletions)

    @property
    def total_reversion_substitutions(self) -> int:
        return len(self.reversion_substitutions)

    @property
    def total_labeled_substitutions(self) -> int:
        return len(self.labeled_substitutions)

    @property
    def total_unlabeled_substitutions(self) -> int:
        return len(self.unlabeled_substitutions)

    @property
    def is_empty(self) -> bool:
        return not (self.private_substitutions or self.private_deletions or self.reversion_substitutions)

    def all_substitutions(self) -> List[Substitution]:
        """Private and reversion substitutions merged in position order"""
        return sorted(
            self.private_substitutions + self.reversion_substitutions,
            key=lambda sub: sub.sort_key(),
        )

    def to_dict(self, prefix: str) -> Dict[str, Any]:
        """
        Convert to a flat dictionary of tabular columns

        Mutation lists are comma-separated, labeled entries are
        formatted as 'C241T|label1&label2'.
        """
        return {
            f"{prefix}.reversionSubstitutions": _join(self.reversion_substitutions),
            f"{prefix}.labeledSubstitutions": _join(self.labeled_substitutions),
            f"{prefix}.unlabeledSubstitutions": _join(self.unlabeled_substitutions),
            f"{prefix}.labeledDeletions": _join(self.labeled_deletions),
            f"{prefix}.unlabeledDeletions": _join(self.unlabeled_deletions),
            f"{prefix}.totalReversionSubstitutions": self.total_reversion_substitutions,
            f"{prefix}.totalLabeledSubstitutions": self.total_labeled_substitutions,
            f"{prefix}.totalUnlabeledSubstitutions": self.total_unlabeled_substitutions,
            f"{prefix}.totalPrivateSubstitutions": self.total_private_substitutions,
            f"{prefix}.totalPrivateDeletions": self.total_private_deletions,
        }


@dataclass
class PrivateNucleotideMutations(PrivateMutations):
    """Private nucleotide mutations of a query"""

    def to_dict(self, prefix: str = "privateNucMutations") -> Dict[str, Any]:
        return super().to_dict(prefix=prefix)


@dataclass
class PrivateAminoacidMutations(PrivateMutations):
    """Private amino-acid mutations of one gene"""
    gene_name: str = ""

    def to_dict(self, prefix: str = "privateAaMutations") -> Dict[str, Any]:
        return super().to_dict(prefix=f"{prefix}.{self.gene_name}")
