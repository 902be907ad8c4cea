"""Parse fragment ion annotations into series key and residue position.

An annotation is a series letter, the 1-based residue position, and an
optional charge/neutral-loss suffix:

    "b14++"  ->  series key "b++", position 14
    "y7-NH3" ->  series key "y-NH3", position 7

The first character always belongs to the series prefix. Only a digit run
starting at index 1 is read as the residue position; any other annotation
keeps its full text as series key and gets position 0.

Examples
--------
>>> split_annotation("b14++")
('b++', 14)
>>> split_annotation("bb14")
('bb14', 0)
"""

from typing import Tuple


def _digit_run_end(annotation: str) -> int:
    """Index one past the digit run starting at index 1 (1 if there is none)."""
    end = 1
    while end < len(annotation) and annotation[end] in "0123456789":
        end += 1
    return end


def split_annotation(annotation: str) -> Tuple[str, int]:
    """Split an annotation into (series_key, residue_position).

    Parameters
    ----------
    annotation : str
        Ion annotation, e.g. "b14++"

    Returns
    -------
    series_key : str
        Annotation with the residue digits removed, or the annotation
        unchanged if no digit run starts at index 1
    position : int
        1-based residue position, 0 if no digits follow index 0
    """
    end = _digit_run_end(annotation)
    if end == 1:
        return annotation, 0
    return annotation[:1] + annotation[end:], int(annotation[1:end])


def parse_series_key(annotation: str) -> str:
    """Return the ion series key of an annotation ("b14++" -> "b++")."""
    return split_annotation(annotation)[0]


def parse_residue_position(annotation: str) -> int:
    """Return the 1-based residue position of an annotation ("b14++" -> 14).

    Returns 0 when no digits immediately follow the first character.
    """
    return split_annotation(annotation)[1]
