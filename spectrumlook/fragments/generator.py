"""Theoretical fragment ions for marker-annotated peptides.

This module generates the theoretical b/y (CID) and c/z (ETD) fragment ions
that the fragment ladder displays. Peptides may carry modification markers
("PE*PTIDE"); the marker's mass delta is added to the residue before it.

Key steps:
1. Strip markers into a residue string plus per-residue mass deltas
2. ord() encoding for string-to-array conversion (no string operations in Numba)
3. Numba kernel computes m/z for every series, position and charge
4. Python wrapper turns the arrays into annotated Elements ("b3++-H2O")
"""

import logging
from typing import List, Mapping, Sequence, Tuple

import numba
import numpy as np

from ..constants import (
    AA_MASSES,
    H2O_MASS,
    NEUTRAL_LOSS_MASSES,
    NH2_MASS,
    NH3_MASS,
    PROTON_MASS,
    SERIES_CODES,
)
from ..elements import Element

logger = logging.getLogger(__name__)

_SERIES_LETTERS = {code: letter for letter, code in SERIES_CODES.items()}


# =============================================================================
# Helper Functions
# =============================================================================

def encode_peptide_to_ord(peptide: str) -> np.ndarray:
    """Encode peptide string to ord() array for Numba processing.

    Examples
    --------
    >>> encode_peptide_to_ord("PEPTIDE")
    array([80, 69, 80, 84, 73, 68, 69], dtype=uint8)
    """
    return np.array([ord(c) for c in peptide], dtype=np.uint8)


def strip_modifications(
    peptide: str, modification_masses: Mapping[str, float]
) -> Tuple[str, np.ndarray]:
    """Separate residues from modification markers.

    Parameters
    ----------
    peptide : str
        Peptide sequence with markers, e.g. "PE*PTIDE"
    modification_masses : Mapping[str, float]
        Marker character → mass delta (Da)

    Returns
    -------
    residues : str
        Sequence without markers
    deltas : np.ndarray (float64)
        Mass delta per residue. A marker modifies the residue before it;
        markers before the first residue modify the first residue.

    Examples
    --------
    >>> residues, deltas = strip_modifications("PE*PTIDE", {'*': 79.966331})
    >>> residues
    'PEPTIDE'
    >>> float(deltas[1])
    79.966331
    """
    residues = [c for c in peptide if c not in modification_masses]
    deltas = np.zeros(len(residues), dtype=np.float64)

    index = -1
    for c in peptide:
        if c in modification_masses:
            if residues:
                deltas[max(index, 0)] += modification_masses[c]
        else:
            index += 1

    return ''.join(residues), deltas


def format_annotation(series: str, position: int, charge: int = 1, loss: str = "") -> str:
    """Write an ion annotation as the ladder expects it.

    Examples
    --------
    >>> format_annotation("b", 3)
    'b3'
    >>> format_annotation("y", 7, charge=2, loss="NH3")
    'y7++-NH3'
    """
    annotation = f"{series}{position}"
    if charge > 1:
        annotation += "+" * charge
    if loss:
        annotation += f"-{loss}"
    return annotation


# =============================================================================
# Core Fragment Generation (Numba-Compiled)
# =============================================================================

@numba.jit(nopython=True, cache=True)
def generate_ion_series(
    residue_ord: np.ndarray,
    residue_deltas: np.ndarray,
    series_codes: np.ndarray,
    charges: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Generate theoretical fragment m/z values (Numba-compiled).

    Parameters
    ----------
    residue_ord : np.ndarray (uint8)
        Residues as ord() values, without modification markers
    residue_deltas : np.ndarray (float64)
        Modification mass delta per residue
    series_codes : np.ndarray (int64)
        Series to generate: 0=b, 1=y, 2=c, 3=z
    charges : np.ndarray (int64)
        Fragment charge states

    Returns
    -------
    fragment_mz : np.ndarray (float64)
    fragment_series : np.ndarray (uint8)
    fragment_position : np.ndarray (int32)
        Number of residues in the fragment (1 to length - 1)
    fragment_charge : np.ndarray (uint8)

    Notes
    -----
    Neutral fragment masses (Σ = summed residue masses incl. deltas):
    - b = Σ, c = Σ + NH3 (N-terminal, counted from the N-terminus)
    - y = Σ + H2O, z• = Σ + H2O - NH2 (C-terminal, counted from the C-terminus)
    """
    peptide_length = len(residue_ord)
    n_positions = peptide_length - 1
    if n_positions < 1:
        n_positions = 0

    max_fragments = n_positions * len(series_codes) * len(charges)

    fragment_mz = np.empty(max_fragments, dtype=np.float64)
    fragment_series = np.empty(max_fragments, dtype=np.uint8)
    fragment_position = np.empty(max_fragments, dtype=np.int32)
    fragment_charge = np.empty(max_fragments, dtype=np.uint8)

    # Forward cumulative sum for N-terminal ions
    cumsum_forward = np.zeros(peptide_length, dtype=np.float64)
    running = 0.0
    for i in range(peptide_length):
        running += AA_MASSES[residue_ord[i]] + residue_deltas[i]
        cumsum_forward[i] = running

    # Backward cumulative sum for C-terminal ions
    cumsum_backward = np.zeros(peptide_length, dtype=np.float64)
    running = 0.0
    for i in range(peptide_length - 1, -1, -1):
        running += AA_MASSES[residue_ord[i]] + residue_deltas[i]
        cumsum_backward[i] = running

    idx = 0
    for series in series_codes:
        for position in range(1, n_positions + 1):
            if series == 0:  # b
                neutral_mass = cumsum_forward[position - 1]
            elif series == 1:  # y
                neutral_mass = cumsum_backward[peptide_length - position] + H2O_MASS
            elif series == 2:  # c
                neutral_mass = cumsum_forward[position - 1] + NH3_MASS
            elif series == 3:  # z-dot
                neutral_mass = cumsum_backward[peptide_length - position] + H2O_MASS - NH2_MASS
            else:
                continue

            for charge in charges:
                fragment_mz[idx] = (neutral_mass + charge * PROTON_MASS) / charge
                fragment_series[idx] = series
                fragment_position[idx] = position
                fragment_charge[idx] = charge
                idx += 1

    return (
        fragment_mz[:idx],
        fragment_series[:idx],
        fragment_position[:idx],
        fragment_charge[:idx],
    )


# =============================================================================
# Element Generation
# =============================================================================

def generate_theoretical_elements(
    peptide: str,
    modification_masses: Mapping[str, float],
    series: Sequence[str] = ("b", "y"),
    charges: Sequence[int] = (1, 2),
    neutral_losses: Sequence[str] = (),
) -> List[Element]:
    """Generate unmatched theoretical Elements for a peptide.

    Parameters
    ----------
    peptide : str
        Peptide sequence, may contain modification markers
    modification_masses : Mapping[str, float]
        Marker character → mass delta (Da)
    series : sequence of str
        Ion series letters ("b", "y", "c", "z"), emitted in this order
    charges : sequence of int
        Fragment charge states
    neutral_losses : sequence of str
        Additional loss variants per ion ("H2O", "NH3")

    Returns
    -------
    List[Element]
        Elements grouped by series, then position, then charge; each ion
        is followed by its neutral-loss variants

    Raises
    ------
    ValueError
        For unknown series letters, neutral losses or residues

    Examples
    --------
    >>> elements = generate_theoretical_elements("PEPTIDE", {})
    >>> [e.annotation for e in elements[:3]]
    ['b1', 'b1++', 'b2']
    """
    for letter in series:
        if letter not in SERIES_CODES:
            raise ValueError(f"Unknown ion series: {letter}")
    for loss in neutral_losses:
        if loss not in NEUTRAL_LOSS_MASSES:
            raise ValueError(f"Unknown neutral loss: {loss}")

    residues, deltas = strip_modifications(peptide, modification_masses)
    for c in residues:
        if ord(c) >= len(AA_MASSES) or AA_MASSES[ord(c)] == 0.0:
            raise ValueError(f"Unknown residue: {c!r}")
    series_codes = np.array([SERIES_CODES[letter] for letter in series], dtype=np.int64)
    charge_array = np.array(charges, dtype=np.int64)

    mz, frag_series, positions, frag_charges = generate_ion_series(
        encode_peptide_to_ord(residues), deltas, series_codes, charge_array
    )

    elements = []
    for i in range(len(mz)):
        letter = _SERIES_LETTERS[int(frag_series[i])]
        position = int(positions[i])
        charge = int(frag_charges[i])
        elements.append(Element(format_annotation(letter, position, charge), float(mz[i])))
        for loss in neutral_losses:
            loss_mz = float(mz[i]) - NEUTRAL_LOSS_MASSES[loss] / charge
            elements.append(Element(format_annotation(letter, position, charge, loss), loss_mz))

    logger.debug(f"Generated {len(elements)} theoretical ions for {peptide!r}")
    return elements
