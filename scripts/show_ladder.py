#!/usr/bin/env python
"""Print the fragment ladder of a peptide.

Generates the theoretical ions of the selected series, matches them against
an optional peak list and prints the ladder as text columns:

    N-terminal series | 1..n | residues | n..1 | C-terminal series

Matched cells are marked with "*".

Example:
    python scripts/show_ladder.py PE*PTIDE --peaks 98.06:1200 227.10:800
"""

import argparse
import logging

import numpy as np

from spectrumlook.convenience import layout_for_spectrum
from spectrumlook.ladder.builder import parse_cell
from spectrumlook.options import FragmentationMode, LadderOptions, MatchOptions


def parse_peaks(pairs):
    """Turn "mz:intensity" strings into (mz, intensity) arrays."""
    mz, intensity = [], []
    for pair in pairs:
        mz_text, _, intensity_text = pair.partition(":")
        mz.append(float(mz_text))
        intensity.append(float(intensity_text) if intensity_text else 1.0)
    return np.array(mz, dtype=np.float64), np.array(intensity, dtype=np.float64)


def format_column(cell_text):
    cell = parse_cell(cell_text)
    if not cell.present:
        return ""
    return f"{cell.value:.2f}{'*' if cell.matched else ''}"


def main():
    parser = argparse.ArgumentParser(description='Print the fragment ladder of a peptide')
    parser.add_argument('peptide', type=str,
                       help='Peptide sequence, may contain modification markers')
    parser.add_argument('--peaks', nargs='*', default=[],
                       help='Observed peaks as mz:intensity pairs')
    parser.add_argument('--mode', choices=[m.name for m in FragmentationMode], default='CID',
                       help='Fragmentation mode (selects b/y or c/z series)')
    parser.add_argument('--series', nargs='*', default=None,
                       help='Series to show (default: preset of the mode)')
    parser.add_argument('--tolerance', type=float, default=MatchOptions().tolerance_da,
                       help='Fragment tolerance in Da')
    parser.add_argument('--verbose', action='store_true',
                       help='Log skipped ladder cells')
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    ladder_options = LadderOptions.for_mode(FragmentationMode[args.mode])
    if args.series:
        ladder_options = LadderOptions(
            mode=ladder_options.mode,
            checked_series=tuple(args.series),
            modification_masses=ladder_options.modification_masses,
        )
    match_options = MatchOptions(tolerance_da=args.tolerance)

    spectrum_mz, spectrum_intensity = parse_peaks(args.peaks)
    layout = layout_for_spectrum(
        args.peptide, spectrum_mz, spectrum_intensity, ladder_options, match_options
    )

    headers = (
        [key for key, _ in layout.n_terminal]
        + ["#", "AA", "#"]
        + [key for key, _ in layout.c_terminal]
    )
    print("\t".join(headers))
    for i, residue in enumerate(layout.residues):
        forward = layout.forward_positions[i]
        reverse = layout.reverse_positions[i]
        # C-terminal ions are numbered from the C-terminus
        fields = [format_column(cells[forward - 1]) for _, cells in layout.n_terminal]
        fields += [str(forward), residue, str(reverse)]
        fields += [format_column(cells[reverse - 1]) for _, cells in layout.c_terminal]
        print("\t".join(fields))


if __name__ == '__main__':
    main()
