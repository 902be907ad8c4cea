"""Arrange a fragment ladder for display.

The ladder view shows, from left to right (or top to bottom):

    N-terminal series | 1..n | residues | n..1 | C-terminal series

This module computes that arrangement without drawing anything: which
series go on which side, the residue labels (each residue with its trailing
modification markers) and the two position index columns.
"""

from dataclasses import dataclass
from typing import List, Mapping, Sequence, Tuple

from ..constants import (
    CID_ION_SERIES,
    DEFAULT_CHECKED_INDICES,
    ETD_ION_SERIES,
    N_TERMINAL_SERIES,
)
from ..options import FragmentationMode
from .builder import LadderInstance


# =============================================================================
# Ion Series Presets
# =============================================================================

def ion_series_preset(mode: FragmentationMode) -> Tuple[str, ...]:
    """All selectable ion series for a fragmentation mode."""
    if mode == FragmentationMode.CID:
        return CID_ION_SERIES
    elif mode == FragmentationMode.ETD:
        return ETD_ION_SERIES
    else:
        raise ValueError(f"Unknown fragmentation mode: {mode}")


def default_checked_series(mode: FragmentationMode) -> Tuple[str, ...]:
    """Series selected by default: singly and doubly charged of both sides.

    Examples
    --------
    >>> default_checked_series(FragmentationMode.CID)
    ('b', 'b++', 'y', 'y++')
    """
    preset = ion_series_preset(mode)
    return tuple(preset[i] for i in DEFAULT_CHECKED_INDICES)


def split_series_by_terminus(
    series_keys: Sequence[str],
) -> Tuple[Tuple[str, ...], Tuple[str, ...]]:
    """Split selected series into the N-terminal block and the rest.

    The N-terminal block is the leading run of series whose first letter
    is an N-terminal ion type (a, b, c). Order is preserved on both sides.

    Examples
    --------
    >>> split_series_by_terminus(["b", "b++", "y", "y++"])
    (('b', 'b++'), ('y', 'y++'))
    """
    split = 0
    while split < len(series_keys) and series_keys[split][:1] in N_TERMINAL_SERIES:
        split += 1
    return tuple(series_keys[:split]), tuple(series_keys[split:])


# =============================================================================
# Residue Columns
# =============================================================================

def residue_labels(peptide: str, modification_masses: Mapping[str, float]) -> List[str]:
    """One label per residue, carrying the markers that trail it.

    Markers before the first residue are shown with the first residue.

    Examples
    --------
    >>> residue_labels("PE*PTIDE", {'*': 79.966331})
    ['P', 'E*', 'P', 'T', 'I', 'D', 'E']
    """
    labels: List[str] = []
    leading = ""
    for c in peptide:
        if c in modification_masses:
            if labels:
                labels[-1] += c
            else:
                leading += c
        else:
            labels.append(c)

    if labels and leading:
        labels[0] = labels[0] + leading
    return labels


def forward_positions(n_residues: int) -> List[int]:
    """Residue numbers counted from the N-terminus: 1..n."""
    return list(range(1, n_residues + 1))


def reverse_positions(n_residues: int) -> List[int]:
    """Residue numbers counted from the C-terminus: n..1."""
    return list(range(n_residues, 0, -1))


# =============================================================================
# Full Layout
# =============================================================================

@dataclass(frozen=True)
class LadderLayout:
    """Display arrangement of one ladder.

    ``n_terminal`` and ``c_terminal`` hold (series_key, cells) pairs in the
    order the series were selected.
    """

    n_terminal: Tuple[Tuple[str, Tuple[str, ...]], ...]
    forward_positions: Tuple[int, ...]
    residues: Tuple[str, ...]
    reverse_positions: Tuple[int, ...]
    c_terminal: Tuple[Tuple[str, Tuple[str, ...]], ...]


def _series_columns(instance: LadderInstance, series_keys: Sequence[str]):
    empty = ("",) * instance.effective_length
    columns = []
    for key in series_keys:
        row = instance.row_for(key)
        columns.append((key, row.cells if row is not None else empty))
    return tuple(columns)


def layout_ladder(
    instance: LadderInstance,
    checked_series: Sequence[str],
    modification_masses: Mapping[str, float],
) -> LadderLayout:
    """Arrange the selected series of a ladder around the residue columns.

    Parameters
    ----------
    instance : LadderInstance
        Ladder built by build_ladder()
    checked_series : sequence of str
        Series to show, in display order (N-terminal series first)
    modification_masses : Mapping[str, float]
        Marker table the ladder was built with

    Returns
    -------
    LadderLayout
        Series columns split by terminus plus residue and index columns.
        A selected series missing from the ladder yields an all-empty column.

    Raises
    ------
    ValueError
        If the marker table does not give the residue count the ladder was
        built with
    """
    n_residues = instance.effective_length
    residues = residue_labels(instance.peptide, modification_masses)
    if len(residues) != n_residues:
        raise ValueError(
            f"Marker table gives {len(residues)} residues for {instance.peptide!r}, "
            f"ladder has {n_residues}"
        )
    n_terminal, c_terminal = split_series_by_terminus(checked_series)

    return LadderLayout(
        n_terminal=_series_columns(instance, n_terminal),
        forward_positions=tuple(forward_positions(n_residues)),
        residues=tuple(residues),
        reverse_positions=tuple(reverse_positions(n_residues)),
        c_terminal=_series_columns(instance, c_terminal),
    )
