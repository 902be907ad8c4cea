"""Options for ladder display and fragment matching.

Options are plain parameter objects passed explicitly to the functions that
need them. Changing an option means creating a new object; nothing in the
library reads global settings.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Tuple

from .constants import (
    CID_ION_SERIES,
    DEFAULT_CHECKED_INDICES,
    DEFAULT_FRAGMENT_TOLERANCE_DA,
    DEFAULT_MIN_INTENSITY,
    DEFAULT_MODIFICATION_MASSES,
    ETD_ION_SERIES,
    MODIFICATION_MARKERS,
)


class FragmentationMode(Enum):
    """Fragmentation modes with different ladder ion series."""
    CID = "cid"  # b/y ions
    ETD = "etd"  # c/z ions


def _preset_checks(series: Tuple[str, ...]) -> Tuple[str, ...]:
    return tuple(series[i] for i in DEFAULT_CHECKED_INDICES)


@dataclass(frozen=True)
class LadderOptions:
    """Fragment ladder settings.

    ``modification_masses`` maps each modification marker character to its
    mass delta. It is stored as a read-only mapping.
    """

    mode: FragmentationMode = FragmentationMode.CID
    checked_series: Tuple[str, ...] = _preset_checks(CID_ION_SERIES)
    modification_masses: Mapping[str, float] = field(
        default_factory=lambda: dict(DEFAULT_MODIFICATION_MASSES)
    )

    def __post_init__(self):
        for marker in self.modification_masses:
            _check_marker(marker)
        object.__setattr__(
            self, "modification_masses", MappingProxyType(dict(self.modification_masses))
        )
        object.__setattr__(self, "checked_series", tuple(self.checked_series))

    @classmethod
    def for_mode(cls, mode: FragmentationMode) -> 'LadderOptions':
        """Create options with the default series checks of a fragmentation mode.

        Args:
            mode: Fragmentation mode enum

        Returns:
            LadderOptions with the mode's preset series selected
        """
        if mode == FragmentationMode.CID:
            return cls(mode=mode, checked_series=_preset_checks(CID_ION_SERIES))
        elif mode == FragmentationMode.ETD:
            return cls(mode=mode, checked_series=_preset_checks(ETD_ION_SERIES))
        else:
            raise ValueError(f"Unknown fragmentation mode: {mode}")

    def with_modification(self, marker: str, mass: float) -> 'LadderOptions':
        """Copy of these options with a marker added or its mass replaced."""
        masses = dict(self.modification_masses)
        masses[marker] = float(mass)
        return replace(self, modification_masses=masses)

    def without_modification(self, marker: str) -> 'LadderOptions':
        """Copy of these options without the given marker."""
        masses = {m: v for m, v in self.modification_masses.items() if m != marker}
        return replace(self, modification_masses=masses)


def _check_marker(marker) -> None:
    if not isinstance(marker, str) or len(marker) != 1 or marker not in MODIFICATION_MARKERS:
        raise ValueError(f"Invalid modification marker: {marker!r}")


@dataclass(frozen=True)
class MatchOptions:
    """Parameters for matching theoretical ions to observed peaks."""

    # Absolute m/z tolerance (Da)
    tolerance_da: float = DEFAULT_FRAGMENT_TOLERANCE_DA

    # Peaks below this intensity are never matched
    min_intensity: float = DEFAULT_MIN_INTENSITY

    def __post_init__(self):
        if self.tolerance_da < 0.0:
            raise ValueError(f"Tolerance must be >= 0, got {self.tolerance_da}")
        if self.min_intensity < 0.0:
            raise ValueError(f"Minimum intensity must be >= 0, got {self.min_intensity}")
