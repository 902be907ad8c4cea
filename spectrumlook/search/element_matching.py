"""Match theoretical fragment elements against an observed peak list.

Core algorithms:
1. Binary search on the m/z-sorted peak list with an absolute tolerance (Da)
2. Per-ion matching with an intensity floor
3. Coverage statistics over the matched elements

The result is the Element sequence the fragment ladder is built from: every
theoretical ion is kept, flagged matched or unmatched.
"""

from typing import Dict, List, Sequence, Tuple

import numba
import numpy as np

from ..elements import Element
from ..options import MatchOptions


# =============================================================================
# Binary Search (Core Algorithm)
# =============================================================================

@numba.jit(nopython=True, cache=True)
def binary_search_mz_da(
    spectrum_mz: np.ndarray,
    target_mz: float,
    tol_da: float,
) -> int:
    """Find the closest peak within an absolute m/z tolerance.

    Parameters
    ----------
    spectrum_mz : np.ndarray (float64)
        Sorted m/z array (ascending, not validated)
    target_mz : float
        Theoretical m/z to search for
    tol_da : float
        Tolerance in Dalton (m/z units)

    Returns
    -------
    index : int
        Index of the closest peak within tolerance, -1 if there is none

    Examples
    --------
    >>> spectrum_mz = np.array([100.05, 200.10, 300.15])
    >>> binary_search_mz_da(spectrum_mz, 200.5, 0.7)
    1
    """
    n = len(spectrum_mz)
    if n == 0:
        return -1

    mz_min = target_mz - tol_da
    mz_max = target_mz + tol_da

    # Binary search for first m/z >= mz_min
    left, right = 0, n
    while left < right:
        mid = (left + right) // 2
        if spectrum_mz[mid] < mz_min:
            left = mid + 1
        else:
            right = mid
    start_idx = left

    if start_idx >= n or spectrum_mz[start_idx] > mz_max:
        return -1

    closest_idx = start_idx
    min_error = abs(spectrum_mz[start_idx] - target_mz)

    idx = start_idx + 1
    while idx < n and spectrum_mz[idx] <= mz_max:
        error = abs(spectrum_mz[idx] - target_mz)
        if error < min_error:
            min_error = error
            closest_idx = idx
        idx += 1

    return closest_idx


@numba.jit(nopython=True, cache=True)
def match_mz_to_spectrum(
    theoretical_mz: np.ndarray,
    spectrum_mz: np.ndarray,
    spectrum_intensity: np.ndarray,
    tol_da: float,
    min_intensity: float,
) -> np.ndarray:
    """Peak index matched by each theoretical m/z (-1 for no match).

    Peaks below ``min_intensity`` are skipped even when they are closest.
    """
    n_fragments = len(theoretical_mz)
    peak_indices = np.full(n_fragments, -1, dtype=np.int64)

    for i in range(n_fragments):
        match_idx = binary_search_mz_da(spectrum_mz, theoretical_mz[i], tol_da)
        if match_idx == -1:
            continue
        if spectrum_intensity[match_idx] < min_intensity:
            continue
        peak_indices[i] = match_idx

    return peak_indices


@numba.jit(nopython=True, cache=True)
def calculate_match_statistics(
    matched_intensities: np.ndarray,
    theoretical_count: int,
) -> Tuple[float, float, float]:
    """Coverage, total and mean intensity of matched fragments."""
    n_matched = len(matched_intensities)

    coverage = n_matched / theoretical_count if theoretical_count > 0 else 0.0
    total_intensity = np.sum(matched_intensities)
    mean_intensity = np.mean(matched_intensities) if n_matched > 0 else 0.0

    return coverage, total_intensity, mean_intensity


# =============================================================================
# Element Matching
# =============================================================================

def match_elements(
    theoretical: Sequence[Element],
    spectrum_mz: np.ndarray,
    spectrum_intensity: np.ndarray,
    options: MatchOptions = MatchOptions(),
) -> List[Element]:
    """Flag theoretical elements that have an observed peak within tolerance.

    Parameters
    ----------
    theoretical : sequence of Element
        Theoretical ions, e.g. from generate_theoretical_elements()
    spectrum_mz : np.ndarray
        Observed m/z values (sorted internally if needed)
    spectrum_intensity : np.ndarray
        Observed intensities, parallel to spectrum_mz
    options : MatchOptions
        Tolerance and intensity floor

    Returns
    -------
    List[Element]
        New elements in input order with ``matched`` set; matched elements
        carry the observed peak intensity, unmatched ones 0.0

    Raises
    ------
    ValueError
        If spectrum_mz and spectrum_intensity differ in length
    """
    spectrum_mz = np.asarray(spectrum_mz, dtype=np.float64)
    spectrum_intensity = np.asarray(spectrum_intensity, dtype=np.float64)
    if spectrum_mz.shape != spectrum_intensity.shape:
        raise ValueError(
            f"Spectrum arrays differ in length: {len(spectrum_mz)} m/z vs "
            f"{len(spectrum_intensity)} intensities"
        )

    if len(spectrum_mz) > 1 and np.any(np.diff(spectrum_mz) < 0):
        order = np.argsort(spectrum_mz, kind="stable")
        spectrum_mz = spectrum_mz[order]
        spectrum_intensity = spectrum_intensity[order]

    theoretical_mz = np.array([e.mz for e in theoretical], dtype=np.float64)
    peak_indices = match_mz_to_spectrum(
        theoretical_mz,
        spectrum_mz,
        spectrum_intensity,
        float(options.tolerance_da),
        float(options.min_intensity),
    )

    matched = []
    for element, peak_idx in zip(theoretical, peak_indices):
        if peak_idx == -1:
            matched.append(Element(element.annotation, element.mz, False, 0.0))
        else:
            intensity = float(spectrum_intensity[peak_idx])
            matched.append(Element(element.annotation, element.mz, True, intensity))
    return matched


def match_statistics(elements: Sequence[Element]) -> Dict[str, float]:
    """Summarize how many theoretical ions were matched.

    Returns
    -------
    dict
        n_theoretical, n_matched, coverage, total_intensity, mean_intensity
    """
    intensities = np.array([e.intensity for e in elements if e.matched], dtype=np.float64)
    coverage, total_intensity, mean_intensity = calculate_match_statistics(
        intensities, len(elements)
    )
    return {
        'n_theoretical': len(elements),
        'n_matched': len(intensities),
        'coverage': float(coverage),
        'total_intensity': float(total_intensity),
        'mean_intensity': float(mean_intensity),
    }
