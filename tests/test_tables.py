"""
Tests for nearest-neighbor tables.
"""

import pytest
from mismatchtm.core.models import ThermoParams
from mismatchtm.thermo.tables import (
    MATCH_TABLE,
    MISMATCH_TABLE,
    COMPLEMENT,
    complement,
    match_params,
    mismatch_params,
)


class TestMatchTable:
    """Watson-Crick stack lookups."""

    def test_all_dinucleotides_present(self):
        assert len(MATCH_TABLE) == 16

    def test_aa_tt_same_stack(self):
        """AA and TT are the same stack read from either strand."""
        assert match_params("aa") == ThermoParams(-7.9, -22.2)
        assert match_params("tt") == ThermoParams(-7.9, -22.2)

    def test_ac_gt_same_stack(self):
        assert match_params("ac") == ThermoParams(-8.4, -22.4)
        assert match_params("gt") == ThermoParams(-8.4, -22.4)

    def test_self_complementary(self):
        assert match_params("cg") == ThermoParams(-10.6, -27.2)
        assert match_params("gc") == ThermoParams(-9.8, -24.4)

    def test_uppercase_lookup(self):
        assert match_params("GG") == match_params("cc")

    def test_unknown_dinucleotide(self):
        """Ambiguous bases have no parameters."""
        assert match_params("an") is None
        assert match_params("nn") is None

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            MATCH_TABLE["aa"] = ThermoParams(0.0, 0.0)


class TestMismatchTable:
    """Internal single-mismatch lookups."""

    def test_all_single_mismatches_present(self):
        """4 closing pairs x 12 ordered mismatches."""
        assert len(MISMATCH_TABLE) == 48

    def test_keys_have_mismatch_second(self):
        for key in MISMATCH_TABLE:
            top, bottom = key.split(",")
            assert COMPLEMENT[top[0]] == bottom[0]
            assert COMPLEMENT[top[1]] != bottom[1]

    def test_known_values(self):
        assert mismatch_params("aa", "ta") == ThermoParams(1.2, 1.7)
        assert mismatch_params("ta", "aa") == ThermoParams(4.7, 12.9)
        assert mismatch_params("ag", "tt") == ThermoParams(1.0, 0.9)

    def test_uppercase_lookup(self):
        assert mismatch_params("AA", "TA") == mismatch_params("aa", "ta")

    def test_missing_key_raises(self):
        """A fully paired stack is not a mismatch."""
        with pytest.raises(KeyError):
            mismatch_params("aa", "tt")


class TestComplement:

    def test_pairs(self):
        assert complement("a") == "t"
        assert complement("t") == "a"
        assert complement("c") == "g"
        assert complement("G") == "c"
