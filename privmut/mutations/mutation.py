#!/usr/bin/env python3
"""
Mutation value types

Substitutions, deletions and their labeled variants, shared by the nucleotide
and amino-acid finders. Positions are 0-based; string forms are 1-based.
"""

from typing import List, Optional, Tuple
from dataclasses import dataclass, field
import re

from ..errors import LabelCatalogError


def _gene_prefix(gene: Optional[str]) -> str:
    return f"{gene}:" if gene else ""


@dataclass(frozen=True)
class Substitution:
    """
    Single-symbol substitution

    Attributes:
        pos: Position (0-based) in the reference sequence or peptide
        ref: Symbol before the change (reference or tree node state)
        qry: Symbol after the change (query state)
        gene: Gene name for amino-acid substitutions, None for nucleotides
    """
    pos: int
    ref: str
    qry: str
    gene: Optional[str] = None

    def __post_init__(self):
        if self.pos < 0:
            raise ValueError("Mutation position must be a non-negative integer")
        if len(self.ref) != 1 or len(self.qry) != 1:
            raise ValueError("Substitution symbols must be single characters")

    def sort_key(self) -> Tuple[str, int, str, str]:
        return (self.gene or "", self.pos, self.ref, self.qry)

    def __str__(self) -> str:
        """e.g. C241T or S:N501Y"""
        return f"{_gene_prefix(self.gene)}{self.ref}{self.pos + 1}{self.qry}"


@dataclass(frozen=True)
class Deletion:
    """Deletion of a single symbol at a position"""
    pos: int
    ref: str
    gene: Optional[str] = None

    def __post_init__(self):
        if self.pos < 0:
            raise ValueError("Mutation position must be a non-negative integer")

    def __str__(self) -> str:
        return f"{_gene_prefix(self.gene)}{self.ref}{self.pos + 1}-"


@dataclass(frozen=True)
class DeletionRange:
    """
    Contiguous deleted range

    Attributes:
        start: First deleted position (0-based)
        length: Number of deleted positions
        gene: Gene name for amino-acid deletions
    """
    start: int
    length: int
    gene: Optional[str] = None

    def __post_init__(self):
        if self.start < 0:
            raise ValueError("Deletion start must be a non-negative integer")
        if self.length < 1:
            raise ValueError("Deletion length must be at least 1")

    @property
    def end(self) -> int:
        """Exclusive end position"""
        return self.start + self.length

    def positions(self) -> range:
        return range(self.start, self.end)

    def __contains__(self, pos: int) -> bool:
        return self.start <= pos < self.end

    def __str__(self) -> str:
        """e.g. 11288-11296, S:69-70, or 241 for a single position"""
        prefix = _gene_prefix(self.gene)
        if self.length == 1:
            return f"{prefix}{self.start + 1}"
        return f"{prefix}{self.start + 1}-{self.end}"


@dataclass(frozen=True)
class SymbolRange:
    """Half-open range [begin, end) filled with one symbol (e.g. a run of N)"""
    begin: int
    end: int
    symbol: str = 'N'

    def __post_init__(self):
        if self.begin < 0 or self.end < self.begin:
            raise ValueError(f"Invalid range: [{self.begin}, {self.end})")

    @property
    def length(self) -> int:
        return self.end - self.begin

    def __contains__(self, pos: int) -> bool:
        return self.begin <= pos < self.end


@dataclass(frozen=True)
class LabeledSubstitution:
    """Private substitution together with the catalog labels it matched"""
    substitution: Substitution
    labels: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def pos(self) -> int:
        return self.substitution.pos

    def __str__(self) -> str:
        return f"{self.substitution}|{'&'.join(self.labels)}"


@dataclass(frozen=True)
class LabeledDeletion:
    """Private deletion range together with the catalog labels it matched"""
    deletion: DeletionRange
    labels: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def pos(self) -> int:
        return self.deletion.start

    def __str__(self) -> str:
        return f"{self.deletion}|{'&'.join(self.labels)}"


@dataclass(frozen=True)
class SubstitutionLabel:
    """
    Label catalog record for a substitution

    A record with ref=None matches any symbol before the change.
    """
    pos: int
    qry: str
    labels: Tuple[str, ...]
    ref: Optional[str] = None
    gene: Optional[str] = None

    def matches(self, sub: Substitution) -> bool:
        return (
            self.pos == sub.pos
            and self.qry == sub.qry
            and self.gene == sub.gene
            and (self.ref is None or self.ref == sub.ref)
        )


@dataclass(frozen=True)
class DeletionLabel:
    """Label catalog record for a deleted range"""
    start: int
    length: int
    labels: Tuple[str, ...]
    gene: Optional[str] = None

    def matches(self, deletion: DeletionRange) -> bool:
        return (
            self.start == deletion.start
            and self.length == deletion.length
            and self.gene == deletion.gene
        )


# 1-based string forms: "C241T", "241T", "S:N501Y", "S:501Y"
_SUBSTITUTION_RE = re.compile(r'^(?:(?P<gene>[^:]+):)?(?P<ref>[A-Za-z*\-]?)(?P<pos>\d+)(?P<qry>[A-Za-z*\-])$')
# "11288-11296", "241", "S:69-70"
_DELETION_RANGE_RE = re.compile(r'^(?:(?P<gene>[^:]+):)?(?P<begin>\d+)(?:-(?P<end>\d+))?$')


def parse_substitution(mut_str: str) -> Tuple[Optional[str], int, Optional[str], str]:
    """
    Parse a 1-based substitution string

    Args:
        mut_str: Substitution string, e.g. 'C241T', '241T' or 'S:N501Y'

    Returns:
        Tuple of (gene, 0-based position, ref or None, qry)

    Examples:
        >>> parse_substitution('C241T')
        (None, 240, 'C', 'T')
        >>> parse_substitution('S:501Y')
        ('S', 500, None, 'Y')
    """
    match = _SUBSTITUTION_RE.match(mut_str.strip())
    if match is None:
        raise LabelCatalogError(f"Invalid substitution: '{mut_str}'")

    pos = int(match.group('pos')) - 1
    if pos < 0:
        raise LabelCatalogError(f"Invalid substitution: '{mut_str}': position must be 1-based")

    ref = match.group('ref') or None
    return match.group('gene'), pos, ref, match.group('qry')


def parse_deletion_range(del_str: str) -> Tuple[Optional[str], int, int]:
    """
    Parse a 1-based inclusive deletion range string

    Args:
        del_str: Deletion string, e.g. '11288-11296' or 'S:69-70'

    Returns:
        Tuple of (gene, 0-based start, length)
    """
    match = _DELETION_RANGE_RE.match(del_str.strip())
    if match is None:
        raise LabelCatalogError(f"Invalid deletion range: '{del_str}'")

    begin = int(match.group('begin'))
    end = int(match.group('end')) if match.group('end') else begin
    if begin < 1 or end < begin:
        raise LabelCatalogError(f"Invalid deletion range: '{del_str}'")

    return match.group('gene'), begin - 1, end - begin + 1


def merge_deletions(deletions: List[Deletion]) -> List[DeletionRange]:
    """
    Merge single-position deletions into contiguous ranges

    Args:
        deletions: Deletions, in any order

    Returns:
        List[DeletionRange]: Ranges sorted by (gene, start)
    """
    if not deletions:
        return []

    sorted_deletions = sorted(deletions, key=lambda d: (d.gene or "", d.pos))
    ranges = []
    start = sorted_deletions[0].pos
    prev = sorted_deletions[0]

    for current in sorted_deletions[1:]:
        if current.gene == prev.gene and current.pos == prev.pos + 1:
            prev = current
            continue
        ranges.append(DeletionRange(start=start, length=prev.pos - start + 1, gene=prev.gene))
        start = current.pos
        prev = current

    ranges.append(DeletionRange(start=start, length=prev.pos - start + 1, gene=prev.gene))
    return ranges
