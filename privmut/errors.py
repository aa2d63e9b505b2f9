#!/usr/bin/env python3
"""
Error classes for private mutation search

Fatal errors signal a violated input contract and abort processing of the
query. Non-fatal errors are collected by the caller and reported as warnings.
"""


class PrivateMutationsError(Exception):
    """Base class for all privmut errors"""


class PositionOutOfRangeError(PrivateMutationsError, IndexError):
    """A mutation position lies outside of its reference sequence"""

    def __init__(self, pos: int, length: int, context: str = "reference sequence"):
        self.pos = pos
        self.length = length
        self.context = context
        super().__init__(
            f"Position {pos} is out of range for {context} of length {length}"
        )


class GeneMapError(PrivateMutationsError, ValueError):
    """Gene map record is structurally invalid"""


class LabelCatalogError(PrivateMutationsError, ValueError):
    """Label catalog entry cannot be parsed"""


class NonFatalError(PrivateMutationsError):
    """
    Condition that is reported upward but does not abort processing

    Instances are collected into an error list passed by the caller rather
    than being raised out of the finder.
    """


class RefPeptideNotFoundError(NonFatalError):
    """Reference peptide is missing for a gene declared in the gene map"""

    def __init__(self, gene_name: str):
        self.gene_name = gene_name
        super().__init__(
            f"When searching for private peptide mutations: reference peptide not found "
            f"for gene '{gene_name}'. This is likely due to a translation failure of the "
            f"reference sequence for this gene. Private mutations for this gene are not "
            f"reported."
        )
