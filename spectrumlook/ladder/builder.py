"""Build fragment ladders from matched/unmatched fragment elements.

A ladder has one row per ion series (b, b++, y-NH3, ...) and one cell per
residue position of the peptide. Modification markers inside the peptide
string are not residues and do not get a cell.

Cells are stored as parallel numpy arrays (m/z, matched flag, present flag)
and serialized to the "<mz>|<true/false>" text form only on request.

Examples
--------
>>> elements = [Element("b1", 98.06, True), Element("y1", 148.06, True)]
>>> ladder = build_ladder(elements, "PEPTIDE", {})
>>> ladder.series_keys
('b', 'y')
>>> ladder.rows[0].cells[:2]
('98.06|true', '')
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..constants import LADDER_MZ_DECIMALS
from ..elements import Element
from .annotation import split_annotation

logger = logging.getLogger(__name__)


# =============================================================================
# Cells
# =============================================================================

@dataclass(frozen=True)
class LadderCell:
    """One ladder slot: m/z value, match flag and whether it is filled."""

    value: float
    matched: bool
    present: bool


EMPTY_CELL = LadderCell(value=float("nan"), matched=False, present=False)


def format_cell(mz: float, matched: bool) -> str:
    """Serialize a filled cell as "<mz to 2 decimals>|<true/false>".

    Uses Python fixed-point formatting, which rounds the binary value half
    to even (0.125 -> "0.12", 0.375 -> "0.38").
    """
    return f"{mz:.{LADDER_MZ_DECIMALS}f}|{'true' if matched else 'false'}"


def parse_cell(text: str) -> LadderCell:
    """Parse the text form of a cell back into a LadderCell.

    Raises
    ------
    ValueError
        If the text is neither empty nor "<number>|<true/false>"
    """
    if text == "":
        return EMPTY_CELL
    value, sep, flag = text.partition("|")
    if not sep or flag not in ("true", "false"):
        raise ValueError(f"Malformed ladder cell: {text!r}")
    return LadderCell(value=float(value), matched=flag == "true", present=True)


def _finite_mz(value) -> Optional[float]:
    try:
        mz = float(value)
    except (TypeError, ValueError):
        return None
    if not np.isfinite(mz):
        return None
    return mz


# =============================================================================
# Ladder Containers
# =============================================================================

@dataclass(frozen=True, eq=False)
class LadderRow:
    """All cells of one ion series, indexed by residue position - 1."""

    series_key: str
    mz: np.ndarray
    matched: np.ndarray
    present: np.ndarray

    def __len__(self) -> int:
        return len(self.mz)

    def cell(self, index: int) -> LadderCell:
        if not self.present[index]:
            return EMPTY_CELL
        return LadderCell(
            value=float(self.mz[index]),
            matched=bool(self.matched[index]),
            present=True,
        )

    @property
    def cells(self) -> Tuple[str, ...]:
        """Cells in text form, "" for empty slots."""
        return tuple(
            format_cell(float(mz), bool(matched)) if present else ""
            for mz, matched, present in zip(self.mz, self.matched, self.present)
        )


@dataclass(frozen=True, eq=False)
class LadderInstance:
    """A complete fragment ladder for one peptide.

    Rows are ordered by the first appearance of their series key in the
    input elements; ``series_keys`` is parallel to ``rows``.
    """

    rows: Tuple[LadderRow, ...]
    series_keys: Tuple[str, ...]
    peptide: str
    effective_length: int

    def row_for(self, series_key: str) -> Optional[LadderRow]:
        """Row of the given series, None if the ladder has no such series."""
        for key, row in zip(self.series_keys, self.rows):
            if key == series_key:
                return row
        return None

    def as_text_rows(self) -> List[List[str]]:
        """All rows in text form (one list of cell strings per series)."""
        return [list(row.cells) for row in self.rows]


# =============================================================================
# Ladder Construction
# =============================================================================

def effective_peptide_length(peptide: str, modification_masses: Mapping[str, float]) -> int:
    """Number of residues in a peptide, not counting modification markers.

    Examples
    --------
    >>> effective_peptide_length("PE*PTIDE", {'*': 79.966331})
    7
    """
    return sum(1 for c in peptide if c not in modification_masses)


class _RowBuffer:
    """Mutable cell storage for one series while the ladder is built."""

    def __init__(self, series_key: str, n_residues: int):
        self.series_key = series_key
        self.mz = np.full(n_residues, np.nan, dtype=np.float64)
        self.matched = np.zeros(n_residues, dtype=np.bool_)
        self.present = np.zeros(n_residues, dtype=np.bool_)

    def freeze(self) -> LadderRow:
        for array in (self.mz, self.matched, self.present):
            array.setflags(write=False)
        return LadderRow(self.series_key, self.mz, self.matched, self.present)


def build_ladder(
    elements: Iterable[Element],
    peptide: str,
    modification_masses: Mapping[str, float],
) -> LadderInstance:
    """Build a fragment ladder from fragment elements.

    Parameters
    ----------
    elements : iterable of Element
        Theoretical ions with match status, in display order
    peptide : str
        Peptide sequence, may contain modification markers
    modification_masses : Mapping[str, float]
        Marker character → mass delta; only the keys are used here

    Returns
    -------
    LadderInstance
        One row per distinct series key, each with one cell per residue

    Notes
    -----
    - Positions outside 1..effective_length are dropped silently
    - Elements whose m/z is not a finite number leave an empty cell
    - Repeated (series, position) pairs: last element wins
    """
    n_residues = effective_peptide_length(peptide, modification_masses)

    buffers: List[_RowBuffer] = []
    row_index: Dict[str, int] = {}
    n_dropped = 0

    for element in elements:
        series_key, position = split_annotation(element.annotation)

        if series_key not in row_index:
            row_index[series_key] = len(buffers)
            buffers.append(_RowBuffer(series_key, n_residues))
        row = buffers[row_index[series_key]]

        slot = position - 1
        if not 0 <= slot < n_residues:
            n_dropped += 1
            logger.debug(
                f"Dropping {element.annotation!r}: position {position} "
                f"outside 1..{n_residues}"
            )
            continue

        mz = _finite_mz(element.mz)
        if mz is None:
            logger.debug(f"Empty cell for {element.annotation!r}: m/z {element.mz!r}")
            row.mz[slot] = np.nan
            row.matched[slot] = False
            row.present[slot] = False
            continue

        row.mz[slot] = mz
        row.matched[slot] = bool(element.matched)
        row.present[slot] = True

    if n_dropped:
        logger.debug(f"{n_dropped} element(s) outside the ladder of {peptide!r}")

    return LadderInstance(
        rows=tuple(buffer.freeze() for buffer in buffers),
        series_keys=tuple(buffer.series_key for buffer in buffers),
        peptide=peptide,
        effective_length=n_residues,
    )


def build_ladder_batch(
    element_lists: Sequence[Iterable[Element]],
    peptides: Sequence[str],
    modification_masses: Mapping[str, float],
) -> List[LadderInstance]:
    """Build one ladder per peptide variant (e.g. unmodified and modified forms).

    Raises
    ------
    ValueError
        If the number of element lists and peptides differ
    """
    if len(element_lists) != len(peptides):
        raise ValueError(
            f"Got {len(element_lists)} element lists for {len(peptides)} peptides"
        )

    logger.info(f"Building {len(peptides):,} fragment ladders...")
    return [
        build_ladder(elements, peptide, modification_masses)
        for elements, peptide in zip(element_lists, peptides)
    ]
