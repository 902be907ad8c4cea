"""Convenience wrapper functions for easy-to-use API.

This module chains the steps that turn a peptide and a peak list into a
fragment ladder:

    generate_theoretical_elements → match_elements → build_ladder → layout_ladder

Use these functions when you want a ladder from options without assembling
the pipeline yourself.

Examples
--------
>>> options = LadderOptions.for_mode(FragmentationMode.CID)
>>> ladder = ladder_for_spectrum("PEPTIDE", mz, intensity, options)
>>> layout = layout_for_spectrum("PEPTIDE", mz, intensity, options)
"""

from typing import List, Sequence, Tuple

import numpy as np

from .elements import Element
from .fragments.generator import generate_theoretical_elements
from .ladder.builder import LadderInstance, build_ladder
from .ladder.layout import LadderLayout, layout_ladder
from .options import LadderOptions, MatchOptions
from .search.element_matching import match_elements


# =============================================================================
# Series Selection
# =============================================================================

def series_requirements(
    checked_series: Sequence[str],
) -> Tuple[List[str], List[int], List[str]]:
    """Ion series letters, charges and neutral losses needed for a selection.

    Parameters
    ----------
    checked_series : sequence of str
        Series keys such as "b", "y++" or "b+++-H2O"

    Returns
    -------
    letters : list of str
        Series letters in order of first appearance
    charges : list of int
        Sorted charge states (1 for keys without "+")
    losses : list of str
        Neutral losses in order of first appearance

    Examples
    --------
    >>> series_requirements(["b", "b++", "y-NH3"])
    (['b', 'y'], [1, 2], ['NH3'])
    """
    letters: List[str] = []
    charges = set()
    losses: List[str] = []

    for key in checked_series:
        if not key:
            continue
        letter, rest = key[0], key[1:]
        ion_part, _, loss = rest.partition("-")
        if letter not in letters:
            letters.append(letter)
        charges.add(max(ion_part.count("+"), 1))
        if loss and loss not in losses:
            losses.append(loss)

    return letters, sorted(charges), losses


# =============================================================================
# Pipeline Wrappers
# =============================================================================

def matched_elements_for_spectrum(
    peptide: str,
    spectrum_mz: np.ndarray,
    spectrum_intensity: np.ndarray,
    ladder_options: LadderOptions = LadderOptions(),
    match_options: MatchOptions = MatchOptions(),
) -> List[Element]:
    """Theoretical ions for the selected series, flagged against a peak list."""
    letters, charges, losses = series_requirements(ladder_options.checked_series)
    theoretical = generate_theoretical_elements(
        peptide,
        ladder_options.modification_masses,
        series=letters,
        charges=charges,
        neutral_losses=losses,
    )
    return match_elements(theoretical, spectrum_mz, spectrum_intensity, match_options)


def ladder_for_spectrum(
    peptide: str,
    spectrum_mz: np.ndarray,
    spectrum_intensity: np.ndarray,
    ladder_options: LadderOptions = LadderOptions(),
    match_options: MatchOptions = MatchOptions(),
) -> LadderInstance:
    """Build the fragment ladder of a peptide against an observed peak list."""
    elements = matched_elements_for_spectrum(
        peptide, spectrum_mz, spectrum_intensity, ladder_options, match_options
    )
    return build_ladder(elements, peptide, ladder_options.modification_masses)


def layout_for_spectrum(
    peptide: str,
    spectrum_mz: np.ndarray,
    spectrum_intensity: np.ndarray,
    ladder_options: LadderOptions = LadderOptions(),
    match_options: MatchOptions = MatchOptions(),
) -> LadderLayout:
    """Ladder layout of the selected series, ready for display."""
    instance = ladder_for_spectrum(
        peptide, spectrum_mz, spectrum_intensity, ladder_options, match_options
    )
    return layout_ladder(
        instance, ladder_options.checked_series, ladder_options.modification_masses
    )
