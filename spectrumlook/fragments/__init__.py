"""Theoretical fragment generation.

Numba-compiled b/y/c/z fragment m/z computation for peptides with
modification markers, wrapped into annotated Elements.
"""

from .generator import (
    encode_peptide_to_ord,
    strip_modifications,
    format_annotation,
    generate_ion_series,
    generate_theoretical_elements,
)

__all__ = [
    'encode_peptide_to_ord',
    'strip_modifications',
    'format_annotation',
    'generate_ion_series',
    'generate_theoretical_elements',
]
