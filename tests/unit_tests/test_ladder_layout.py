"""Tests for ladder layout: presets, terminus split, residue columns."""

import pytest

from spectrumlook.constants import CID_ION_SERIES, ETD_ION_SERIES
from spectrumlook.elements import Element
from spectrumlook.ladder.builder import build_ladder
from spectrumlook.ladder.layout import (
    default_checked_series,
    forward_positions,
    ion_series_preset,
    layout_ladder,
    residue_labels,
    reverse_positions,
    split_series_by_terminus,
)
from spectrumlook.options import FragmentationMode


class TestIonSeriesPresets:
    """Test the selectable series per fragmentation mode."""

    def test_cid_preset(self):
        preset = ion_series_preset(FragmentationMode.CID)
        assert preset == CID_ION_SERIES
        assert len(preset) == 18
        assert all(key[0] == "b" for key in preset[:9])
        assert all(key[0] == "y" for key in preset[9:])

    def test_etd_preset(self):
        preset = ion_series_preset(FragmentationMode.ETD)
        assert preset == ETD_ION_SERIES
        assert all(key[0] == "c" for key in preset[:9])
        assert all(key[0] == "z" for key in preset[9:])

    def test_default_checks(self):
        assert default_checked_series(FragmentationMode.CID) == ("b", "b++", "y", "y++")
        assert default_checked_series(FragmentationMode.ETD) == ("c", "c++", "z", "z++")

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            ion_series_preset("HCD")


class TestSplitSeriesByTerminus:
    """Test N-terminal/C-terminal grouping of selected series."""

    def test_b_and_y(self):
        assert split_series_by_terminus(["b", "b++", "y", "y++"]) == (
            ("b", "b++"), ("y", "y++")
        )

    def test_only_n_terminal(self):
        assert split_series_by_terminus(["b", "b-H2O"]) == (("b", "b-H2O"), ())
        assert split_series_by_terminus(["c", "c++"]) == (("c", "c++"), ())

    def test_only_c_terminal(self):
        assert split_series_by_terminus(["y", "z"]) == ((), ("y", "z"))

    def test_order_preserved_after_split(self):
        """Test the split happens at the first C-terminal series."""
        assert split_series_by_terminus(["b", "y", "b++"]) == (("b",), ("y", "b++"))

    def test_empty(self):
        assert split_series_by_terminus([]) == ((), ())


class TestResidueColumns:
    """Test residue labels and position indices."""

    def test_plain_peptide(self):
        assert residue_labels("PEPTIDE", {}) == list("PEPTIDE")

    def test_marker_joins_previous_residue(self, phospho_masses):
        assert residue_labels("PE*PTIDE", phospho_masses) == [
            "P", "E*", "P", "T", "I", "D", "E"
        ]

    def test_consecutive_markers(self):
        masses = {'*': 79.966331, '+': 15.994915}
        assert residue_labels("PEM+*K", masses) == ["P", "E", "M+*", "K"]

    def test_leading_marker(self):
        assert residue_labels("!PEPTIDE", {'!': 42.010565})[0] == "P!"

    def test_label_count_matches_residues(self, phospho_masses):
        for peptide in ["PE*PTIDE", "*PEP*", "PEPTIDE", ""]:
            labels = residue_labels(peptide, phospho_masses)
            assert len(labels) == sum(1 for c in peptide if c != '*')

    def test_positions(self):
        assert forward_positions(4) == [1, 2, 3, 4]
        assert reverse_positions(4) == [4, 3, 2, 1]
        assert forward_positions(0) == []
        assert reverse_positions(0) == []


class TestLayoutLadder:
    """Test the full display arrangement."""

    @pytest.fixture
    def ladder(self, phospho_masses):
        elements = [
            Element("b1", 98.06, True),
            Element("b1++", 49.53, False),
            Element("y1", 148.06, True),
        ]
        return build_ladder(elements, "PE*PTIDE", phospho_masses)

    def test_columns(self, ladder, phospho_masses):
        layout = layout_ladder(ladder, ["b", "b++", "y", "y++"], phospho_masses)

        assert [key for key, _ in layout.n_terminal] == ["b", "b++"]
        assert [key for key, _ in layout.c_terminal] == ["y", "y++"]
        assert layout.n_terminal[0][1][0] == "98.06|true"
        assert layout.n_terminal[1][1][0] == "49.53|false"
        assert layout.c_terminal[0][1][0] == "148.06|true"

    def test_missing_series_is_empty(self, ladder, phospho_masses):
        layout = layout_ladder(ladder, ["b", "y++"], phospho_masses)
        assert layout.c_terminal == (("y++", ("",) * 7),)

    def test_residue_columns(self, ladder, phospho_masses):
        layout = layout_ladder(ladder, ["b", "y"], phospho_masses)
        assert layout.residues == ("P", "E*", "P", "T", "I", "D", "E")
        assert layout.forward_positions == (1, 2, 3, 4, 5, 6, 7)
        assert layout.reverse_positions == (7, 6, 5, 4, 3, 2, 1)

    def test_marker_table_mismatch(self, ladder):
        # Without '*' the marker would count as an eighth residue
        with pytest.raises(ValueError):
            layout_ladder(ladder, ["b", "y"], {})

    def test_positions_follow_ladder_length(self, ladder, phospho_masses):
        layout = layout_ladder(ladder, ["b"], phospho_masses)
        assert len(layout.residues) == ladder.effective_length
        assert len(layout.forward_positions) == len(layout.n_terminal[0][1])

    def test_unselected_series_hidden(self, ladder, phospho_masses):
        layout = layout_ladder(ladder, ["y"], phospho_masses)
        assert layout.n_terminal == ()
        assert [key for key, _ in layout.c_terminal] == ["y"]
