"""SpectrumLook - fragment ladders for annotated MS/MS spectra.

This library builds the fragment ladder shown next to an annotated spectrum:
one row per ion series (b, b++, y-NH3, ...), one cell per residue position,
each cell holding the ion m/z and whether it was matched to an observed peak.

Theoretical ion generation and peak matching use Numba-compiled kernels on
ord()-encoded sequences; the ladder itself is plain Python over numpy arrays.
"""

__version__ = "0.1.0"

from spectrumlook import fragments
from spectrumlook import ladder
from spectrumlook import search
from spectrumlook.elements import Element
from spectrumlook.options import FragmentationMode, LadderOptions, MatchOptions

__all__ = [
    "fragments",
    "ladder",
    "search",
    "Element",
    "FragmentationMode",
    "LadderOptions",
    "MatchOptions",
]
