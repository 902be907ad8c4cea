"""Fragment ion elements exchanged between matching and the ladder builder."""

from dataclasses import dataclass


@dataclass
class Element:
    """A theoretical fragment ion and its match status.

    Attributes
    ----------
    annotation : str
        Ion label, series letter + residue position + suffix (e.g. "b14++")
    mz : float
        Mass-to-charge value
    matched : bool
        Whether the ion was matched to an observed peak
    intensity : float
        Observed intensity of the matched peak (0.0 when unmatched)
    """

    annotation: str
    mz: float
    matched: bool = False
    intensity: float = 0.0
