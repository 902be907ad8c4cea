"""Tests for matching theoretical elements against observed peaks."""

import numpy as np
import pytest

from spectrumlook.elements import Element
from spectrumlook.options import MatchOptions
from spectrumlook.search.element_matching import (
    binary_search_mz_da,
    calculate_match_statistics,
    match_elements,
    match_mz_to_spectrum,
    match_statistics,
)


class TestBinarySearchMzDa:
    """Test binary search with an absolute tolerance."""

    def test_exact_match(self):
        spectrum_mz = np.array([100.0, 200.0, 300.0, 400.0])
        assert binary_search_mz_da(spectrum_mz, 200.0, 0.1) == 1

    def test_within_tolerance(self):
        spectrum_mz = np.array([100.0, 200.0, 300.0])
        assert binary_search_mz_da(spectrum_mz, 200.5, 0.7) == 1

    def test_outside_tolerance(self):
        spectrum_mz = np.array([100.0, 200.0, 300.0])
        assert binary_search_mz_da(spectrum_mz, 250.0, 0.7) == -1

    def test_closest_of_several(self):
        spectrum_mz = np.array([199.5, 199.9, 200.3])
        assert binary_search_mz_da(spectrum_mz, 200.0, 0.7) == 1

    def test_empty_spectrum(self):
        assert binary_search_mz_da(np.array([], dtype=np.float64), 200.0, 0.7) == -1

    def test_edges(self):
        spectrum_mz = np.array([100.0, 200.0, 300.0])
        assert binary_search_mz_da(spectrum_mz, 99.5, 0.7) == 0
        assert binary_search_mz_da(spectrum_mz, 300.6, 0.7) == 2
        assert binary_search_mz_da(spectrum_mz, 301.0, 0.7) == -1


class TestMatchMzToSpectrum:
    """Test the per-ion matching kernel."""

    def test_intensity_floor(self):
        spectrum_mz = np.array([100.0, 200.0])
        spectrum_intensity = np.array([5.0, 500.0])
        indices = match_mz_to_spectrum(
            np.array([100.0, 200.0, 300.0]), spectrum_mz, spectrum_intensity, 0.5, 10.0
        )
        assert indices.tolist() == [-1, 1, -1]


class TestMatchElements:
    """Test flagging of theoretical elements."""

    @pytest.fixture
    def theoretical(self):
        return [
            Element("b1", 98.06),
            Element("b2", 227.10),
            Element("y1", 148.06),
        ]

    def test_match_flags(self, theoretical):
        spectrum_mz = np.array([98.2, 148.5, 500.0])
        spectrum_intensity = np.array([1000.0, 250.0, 50.0])

        matched = match_elements(theoretical, spectrum_mz, spectrum_intensity)

        assert [e.annotation for e in matched] == ["b1", "b2", "y1"]
        assert [e.matched for e in matched] == [True, False, True]
        assert [e.intensity for e in matched] == [1000.0, 0.0, 250.0]
        # Theoretical m/z is kept
        assert matched[0].mz == 98.06

    def test_default_tolerance(self, theoretical):
        """Test the default 0.7 Da window."""
        matched = match_elements(theoretical, np.array([98.7, 227.9]), np.array([1.0, 1.0]))
        assert [e.matched for e in matched] == [True, False, False]

    def test_custom_tolerance(self, theoretical):
        options = MatchOptions(tolerance_da=0.01)
        matched = match_elements(
            theoretical, np.array([98.2, 227.10]), np.array([1.0, 1.0]), options
        )
        assert [e.matched for e in matched] == [False, True, False]

    def test_min_intensity(self, theoretical):
        options = MatchOptions(min_intensity=100.0)
        matched = match_elements(
            theoretical, np.array([98.06, 148.06]), np.array([50.0, 150.0]), options
        )
        assert [e.matched for e in matched] == [False, False, True]

    def test_unsorted_spectrum(self, theoretical):
        spectrum_mz = np.array([148.06, 98.06])
        spectrum_intensity = np.array([20.0, 10.0])
        matched = match_elements(theoretical, spectrum_mz, spectrum_intensity)
        assert [e.intensity for e in matched] == [10.0, 0.0, 20.0]

    def test_input_not_modified(self, theoretical):
        match_elements(theoretical, np.array([98.06]), np.array([1.0]))
        assert not any(e.matched for e in theoretical)

    def test_empty_inputs(self, theoretical):
        assert match_elements([], np.array([100.0]), np.array([1.0])) == []
        matched = match_elements(theoretical, np.array([]), np.array([]))
        assert not any(e.matched for e in matched)

    def test_length_mismatch(self, theoretical):
        with pytest.raises(ValueError):
            match_elements(theoretical, np.array([1.0, 2.0]), np.array([1.0]))


class TestMatchStatistics:
    """Test coverage statistics."""

    def test_statistics(self):
        elements = [
            Element("b1", 98.06, True, 100.0),
            Element("b2", 227.10, False),
            Element("y1", 148.06, True, 300.0),
            Element("y2", 263.09, False),
        ]
        stats = match_statistics(elements)
        assert stats['n_theoretical'] == 4
        assert stats['n_matched'] == 2
        assert stats['coverage'] == pytest.approx(0.5)
        assert stats['total_intensity'] == pytest.approx(400.0)
        assert stats['mean_intensity'] == pytest.approx(200.0)

    def test_no_elements(self):
        stats = match_statistics([])
        assert stats['coverage'] == 0.0
        assert stats['n_matched'] == 0

    def test_kernel(self):
        coverage, total, mean = calculate_match_statistics(np.array([1.0, 3.0]), 4)
        assert coverage == pytest.approx(0.5)
        assert total == pytest.approx(4.0)
        assert mean == pytest.approx(2.0)
