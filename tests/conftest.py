"""Pytest configuration for SpectrumLook tests.

This module provides common fixtures for all tests. Everything under test
is pure computation, so no I/O fixtures are needed.
"""

import pytest

from spectrumlook.elements import Element


@pytest.fixture
def simple_peptide():
    """Simple peptide for basic tests."""
    return "PEPTIDE"


@pytest.fixture
def phospho_masses():
    """Marker table with a single phosphorylation marker."""
    return {'*': 79.9663}


@pytest.fixture
def peptide_elements():
    """Two b-ions and one y-ion of PEPTIDE, one of them unmatched."""
    return [
        Element("b1", 98.06, True),
        Element("b2", 227.10, False),
        Element("y1", 148.06, True),
    ]


@pytest.fixture
def residue_masses():
    """Amino acid masses dictionary."""
    from spectrumlook.constants import AA_MASSES_DICT
    return AA_MASSES_DICT
