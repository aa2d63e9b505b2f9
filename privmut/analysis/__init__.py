"""
Query analysis input
"""

from .analysis_result import AnalysisResult, analyze_aligned_sequence

__all__ = [
    'AnalysisResult',
    'analyze_aligned_sequence',
]
