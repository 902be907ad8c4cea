"""Physical constants, residue masses and ladder defaults.

This module provides the physical constants, amino acid masses, modification
marker table and ion series presets used throughout SpectrumLook.

Constants are provided in both dictionary and ord()-indexed array formats
for compatibility with both standard Python and Numba JIT-compiled code.

Sources
-------
- NIST physical constants: https://physics.nist.gov/cgi-bin/cuu/Value
- IUPAC amino acid masses: https://www.unimod.org/masses.html
- Unimod modification masses: https://www.unimod.org/modifications_list.php
"""

import numpy as np

# =============================================================================
# Fundamental Physical Constants (NIST values)
# =============================================================================

# Proton mass (NOT hydrogen atom mass!)
PROTON_MASS = 1.007276466622  # Da

# Water mass (H2O)
H2O_MASS = 18.010564684  # Da

# Ammonia mass (NH3)
NH3_MASS = 17.026549101  # Da

# Amino radical mass (NH2), z-dot ions = y - NH2
NH2_MASS = 16.018724  # Da

# =============================================================================
# Amino Acid Monoisotopic Masses (Da)
# =============================================================================

# Residue masses (not including N/C terminals)
AA_MASSES_DICT = {
    'A': 71.037114,   # Alanine
    'R': 156.101111,  # Arginine
    'N': 114.042927,  # Asparagine
    'D': 115.026943,  # Aspartic acid
    'C': 103.009185,  # Cysteine (unmodified)
    'E': 129.042593,  # Glutamic acid
    'Q': 128.058578,  # Glutamine
    'G': 57.021464,   # Glycine
    'H': 137.058912,  # Histidine
    'I': 113.084064,  # Isoleucine
    'L': 113.084064,  # Leucine
    'K': 128.094963,  # Lysine
    'M': 131.040485,  # Methionine
    'F': 147.068414,  # Phenylalanine
    'P': 97.052764,   # Proline
    'S': 87.032028,   # Serine
    'T': 101.047679,  # Threonine
    'W': 186.079313,  # Tryptophan
    'Y': 163.063320,  # Tyrosine
    'V': 99.068414,   # Valine
}

# Non-standard amino acids mapped to closest mass
AA_MASSES_NONSTANDARD = {
    'X': 113.084064,  # Unknown → Leu/Ile (most common)
    'Z': 128.058578,  # Glu/Gln → Gln
    'B': 114.042927,  # Asp/Asn → Asn
    'J': 113.084064,  # Leu/Ile → Leu
    'U': 103.009185,  # Selenocysteine → Cys (similar mass)
    'O': 131.040485,  # Pyrrolysine → Met (closest mass)
}

# ord()-indexed lookup array for Numba access
# Access via: AA_MASSES[ord('A')] → 71.037114
AA_MASSES = np.zeros(256, dtype=np.float64)

for aa, mass in AA_MASSES_DICT.items():
    AA_MASSES[ord(aa)] = mass

for aa, mass in AA_MASSES_NONSTANDARD.items():
    AA_MASSES[ord(aa)] = mass

# =============================================================================
# Modification Masses and Markers
# =============================================================================

# Phosphorylation (Unimod:21)
PHOSPHO_MASS = 79.966331

# Oxidation of Methionine (Unimod:35)
OXIDATION_MASS = 15.994915

# Carbamidomethylation of Cysteine (Unimod:4)
CARBAMIDOMETHYL_MASS = 57.021464

# Acetylation (Unimod:1)
ACETYL_MASS = 42.010565

# Deamidation (Unimod:7)
DEAMIDATION_MASS = 0.984016

# Characters reserved for modification markers inside a peptide string.
# A marker trails the residue it modifies, e.g. "PEPS*TIDE".
MODIFICATION_MARKERS = "*+@!&#$%~`"

# Marker masses preconfigured in the options dialog.
# The remaining markers are free for user-defined modifications.
DEFAULT_MODIFICATION_MASSES = {
    '*': PHOSPHO_MASS,
    '+': OXIDATION_MASS,
    '@': CARBAMIDOMETHYL_MASS,
    '!': ACETYL_MASS,
    '&': DEAMIDATION_MASS,
}

# =============================================================================
# Ion Series
# =============================================================================

# Series letter → code used by the Numba fragment kernels
SERIES_CODES = {
    'b': 0,
    'y': 1,
    'c': 2,
    'z': 3,
}

# Series that start at the N-terminus; everything else reads from the C-terminus
N_TERMINAL_SERIES = ('a', 'b', 'c')

# Neutral losses written as annotation suffixes
NEUTRAL_LOSS_MASSES = {
    'H2O': H2O_MASS,
    'NH3': NH3_MASS,
}

# Ion series selectable in the fragment ladder, per fragmentation mode.
# The N-terminal block always comes first and has the same length as the
# C-terminal block.
CID_ION_SERIES = (
    "b", "b++", "b+++", "b+++-H2O", "b+++-NH3", "b++-H2O", "b++-NH3", "b-H2O", "b-NH3",
    "y", "y++", "y+++", "y+++-H2O", "y+++-NH3", "y++-H2O", "y++-NH3", "y-H2O", "y-NH3",
)

ETD_ION_SERIES = (
    "c", "c++", "c+++", "c+++-H2O", "c+++-NH3", "c++-H2O", "c++-NH3", "c-H2O", "c-NH3",
    "z", "z++", "z+++", "z+++-H2O", "z+++-NH3", "z++-H2O", "z++-NH3", "z-H2O", "z-NH3",
)

# Preset indices checked when a fragmentation mode is selected
# (singly and doubly charged ions of both series)
DEFAULT_CHECKED_INDICES = (0, 1, 9, 10)

# =============================================================================
# Default Tolerance Settings
# =============================================================================

# Absolute fragment tolerance used when matching theoretical ions
DEFAULT_FRAGMENT_TOLERANCE_DA = 0.7  # Da

# Minimum observed intensity a peak needs to count as a match
DEFAULT_MIN_INTENSITY = 0.0

# Decimal places shown for m/z values in the ladder
LADDER_MZ_DECIMALS = 2
