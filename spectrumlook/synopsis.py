"""Tabular rows supplied by an external synopsis parser.

File formats are handled by the parser; this module only fixes the contract
and the header conventions:

- The first row a parser returns holds the column headers
- An empty row means there are no more rows
- A header ending in "_s" links synopsis rows to the experiment file
- A header ending in "_p" is the peptide column
"""

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Protocol, Sequence, Tuple

logger = logging.getLogger(__name__)

LINK_SUFFIX = "_s"
PEPTIDE_SUFFIX = "_p"


class SynopsisParser(Protocol):
    """Anything that returns one row of strings per call."""

    def get_next_row(self) -> Sequence[str]:
        ...


def peptide_column(headers: Sequence[str]) -> Optional[int]:
    """Index of the first peptide column ("_p" suffix), None if absent."""
    for i, header in enumerate(headers):
        if header.endswith(PEPTIDE_SUFFIX):
            return i
    return None


def link_columns(headers: Sequence[str]) -> List[int]:
    """Indices of the synopsis/experiment link columns ("_s" suffix)."""
    return [i for i, header in enumerate(headers) if header.endswith(LINK_SUFFIX)]


def display_header(header: str) -> str:
    """Header without its role suffix ("Peptide_p" -> "Peptide")."""
    for suffix in (LINK_SUFFIX, PEPTIDE_SUFFIX):
        if header.endswith(suffix):
            return header[:-len(suffix)]
    return header


@dataclass(frozen=True)
class SynopsisTable:
    """Headers and rows read from a synopsis parser."""

    headers: Tuple[str, ...]
    rows: Tuple[Tuple[str, ...], ...]

    def peptides(self) -> Iterator[str]:
        """Values of the peptide column (nothing if there is none)."""
        column = peptide_column(self.headers)
        if column is None:
            return
        for row in self.rows:
            yield row[column]


def read_synopsis(parser: SynopsisParser) -> SynopsisTable:
    """Read all rows of a parser into a SynopsisTable.

    Rows shorter than the header are padded with empty strings; longer rows
    are truncated to the header width.
    """
    headers = tuple(parser.get_next_row())
    rows = []
    if headers:
        width = len(headers)
        row = parser.get_next_row()
        while row:
            row = tuple(row)
            if len(row) > width:
                logger.warning(
                    f"Row {len(rows) + 1} has {len(row)} fields, "
                    f"truncating to {width} columns"
                )
                row = row[:width]
            elif len(row) < width:
                row = row + ("",) * (width - len(row))
            rows.append(row)
            row = parser.get_next_row()

    logger.info(f"Read {len(rows):,} synopsis rows with {len(headers)} columns")
    return SynopsisTable(headers=headers, rows=tuple(rows))
