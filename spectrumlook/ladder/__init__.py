"""Fragment ladder construction and layout.

The builder turns fragment elements into one row per ion series; the layout
arranges the selected rows around the residue columns for display.
"""

from .annotation import (
    split_annotation,
    parse_series_key,
    parse_residue_position,
)
from .builder import (
    LadderCell,
    LadderRow,
    LadderInstance,
    EMPTY_CELL,
    build_ladder,
    build_ladder_batch,
    effective_peptide_length,
    format_cell,
    parse_cell,
)
from .layout import (
    LadderLayout,
    ion_series_preset,
    default_checked_series,
    split_series_by_terminus,
    residue_labels,
    forward_positions,
    reverse_positions,
    layout_ladder,
)

__all__ = [
    # Annotation parsing
    'split_annotation',
    'parse_series_key',
    'parse_residue_position',
    # Ladder construction
    'LadderCell',
    'LadderRow',
    'LadderInstance',
    'EMPTY_CELL',
    'build_ladder',
    'build_ladder_batch',
    'effective_peptide_length',
    'format_cell',
    'parse_cell',
    # Layout
    'LadderLayout',
    'ion_series_preset',
    'default_checked_series',
    'split_series_by_terminus',
    'residue_labels',
    'forward_positions',
    'reverse_positions',
    'layout_ladder',
]
