"""Matching of theoretical fragment ions to observed peaks.

Core algorithms:
1. Binary search on m/z-sorted peak lists with an absolute tolerance (Da)
2. Element matching with an intensity floor
3. Match coverage statistics
"""

from .element_matching import (
    binary_search_mz_da,
    match_mz_to_spectrum,
    calculate_match_statistics,
    match_elements,
    match_statistics,
)

__all__ = [
    'binary_search_mz_da',
    'match_mz_to_spectrum',
    'calculate_match_statistics',
    'match_elements',
    'match_statistics',
]
