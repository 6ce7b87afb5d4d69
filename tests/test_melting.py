"""
Tests for mismatch Tm evaluation.
"""

import math

import pytest
from mismatchtm.core.models import ThermoParams
from mismatchtm.thermo.configurations import build_configurations
from mismatchtm.thermo.kmers import index_kmers
from mismatchtm.thermo.melting import (
    Conditions,
    build_kmer_thermo_index,
    concentration_term,
    evaluate_configuration,
    evaluate_configurations,
    kmer_thermo,
    melting_temperature,
    salt_scaled_entropy,
)
from mismatchtm.thermo.tables import R_GAS

TEMPLATE_CONC = 1e-17
PRIMER_CONC = 6e-10


@pytest.fixture(scope="module")
def config_set():
    return build_configurations(legacy_entropy=True)


def make_conditions(primer_length=4, cation_concs=(0.008, 0.8)):
    return Conditions(
        primer_length=primer_length,
        template_conc=TEMPLATE_CONC,
        primer_conc=PRIMER_CONC,
        cation_concs=tuple(cation_concs),
    )


def expected_delta(kmer_h, kmer_s, match, mismatch, conc, k):
    """Tm delta written out term by term."""
    strand = R_GAS * k * math.log((TEMPLATE_CONC + PRIMER_CONC) / 2)
    salt = 0.368 * math.log(conc)
    delta_s = mismatch.entropy * salt - match.entropy * salt
    delta_h = mismatch.enthalpy - match.enthalpy
    tm_match = 1000 * kmer_h / (kmer_s + strand)
    tm_mismatch = 1000 * (kmer_h + delta_h) / (kmer_s + delta_s + strand)
    return tm_mismatch - tm_match


class TestSaltScaledEntropy:

    def test_scaling(self):
        assert salt_scaled_entropy(-44.4, 0.008) == pytest.approx(-44.4 * 0.368 * math.log(0.008))

    def test_unit_concentration_zeroes(self):
        """ln(1) = 0 removes the entropy entirely."""
        assert salt_scaled_entropy(-44.4, 1.0) == 0.0

    def test_non_positive_concentration(self):
        with pytest.raises(ValueError):
            salt_scaled_entropy(-44.4, 0.0)


class TestKmerThermo:

    def test_homopolymer(self):
        params, skipped = kmer_thermo("aaaa")
        assert params.enthalpy == pytest.approx(-23.7)
        assert params.entropy == pytest.approx(-66.6)
        assert skipped == 0

    def test_unknown_dinucleotides_skipped(self):
        params, skipped = kmer_thermo("aana")
        assert params == ThermoParams(-7.9, -22.2)
        assert skipped == 2

    def test_single_base(self):
        params, skipped = kmer_thermo("a")
        assert params == ThermoParams(0.0, 0.0)
        assert skipped == 0


class TestMeltingTemperature:

    def test_formula(self):
        term = concentration_term(4, TEMPLATE_CONC, PRIMER_CONC)
        assert term == pytest.approx(1.987 * 4 * math.log(3.00000005e-10))
        tm = melting_temperature(-23.7, -66.6, term)
        assert tm == pytest.approx(-23700 / (-66.6 + term))

    def test_conditions_term(self):
        conditions = make_conditions(primer_length=20)
        assert conditions.strand_term == pytest.approx(
            concentration_term(20, TEMPLATE_CONC, PRIMER_CONC)
        )

    def test_conditions_reject_bad_values(self):
        with pytest.raises(ValueError):
            make_conditions(primer_length=0)
        with pytest.raises(ValueError):
            make_conditions(cation_concs=(0.008, -1.0))


class TestKmerThermoIndex:

    def test_groups_by_fragment(self):
        index = index_kmers(["aaaacg"], 4)
        grouped = build_kmer_thermo_index(index, ["aaa", "aac", "acg", "ggg"])
        assert grouped["aaa"].kmers == ("aaaa", "aaac")
        assert grouped["acg"].kmers == ("aacg",)
        assert "ggg" not in grouped
        assert grouped["aaa"].enthalpy[0] == pytest.approx(-23.7)

    def test_partial_kmers_logged(self, caplog):
        index = index_kmers(["aaanaaa"], 4)
        with caplog.at_level("WARNING"):
            grouped = build_kmer_thermo_index(index, ["aaa"])
        assert grouped["aaa"].kmers == ("aaan", "naaa")
        assert "unknown dinucleotides" in caplog.text


class TestEvaluateConfiguration:
    """Per-configuration deltas against a poly-A genome."""

    def test_matches_hand_calculation(self, config_set):
        conditions = make_conditions()
        kmer_index = build_kmer_thermo_index(index_kmers(["aaaaaa"], 4), config_set.matches)
        result = evaluate_configuration("aaa,tat", config_set, kmer_index, conditions)

        match = config_set.matches["aaa"]
        mismatch = config_set.mismatches["aaa,tat"]
        for value, conc in zip(result.min_deltas, conditions.cation_concs):
            assert value == pytest.approx(expected_delta(-23.7, -66.6, match, mismatch, conc, 4))
        assert result.kmer_count == 1

    def test_concrete_values(self, config_set):
        conditions = make_conditions()
        kmer_index = build_kmer_thermo_index(index_kmers(["aaaaaa"], 4), config_set.matches)
        result = evaluate_configuration("aaa,tat", config_set, kmer_index, conditions)
        assert result.min_deltas[0] == pytest.approx(-92.35, abs=0.05)
        assert result.min_deltas[1] == pytest.approx(-90.23, abs=0.05)

    def test_delta_rises_with_cation_concentration(self, config_set):
        """Less negative salt-scaled ΔΔS at higher concentration raises Tm(mismatch)."""
        conditions = make_conditions(cation_concs=(0.008, 0.8))
        kmer_index = build_kmer_thermo_index(index_kmers(["aaaaaa"], 4), config_set.matches)
        result = evaluate_configuration("aaa,tat", config_set, kmer_index, conditions)
        low, high = result.min_deltas
        assert high > low

    def test_min_and_max_over_kmers(self, config_set):
        conditions = make_conditions(cation_concs=(0.05,))
        kmer_index = build_kmer_thermo_index(index_kmers(["aaaaccaaag"], 4), config_set.matches)
        result = evaluate_configuration("aaa,tat", config_set, kmer_index, conditions)

        match = config_set.matches["aaa"]
        mismatch = config_set.mismatches["aaa,tat"]
        deltas = []
        for kmer in kmer_index["aaa"].kmers:
            params, _ = kmer_thermo(kmer)
            deltas.append(expected_delta(params.enthalpy, params.entropy, match, mismatch, 0.05, 4))

        assert result.kmer_count == len(deltas) == 4
        assert result.min_deltas[0] == pytest.approx(min(deltas))
        assert result.max_deltas[0] == pytest.approx(max(deltas))

    def test_absent_fragment(self, config_set):
        conditions = make_conditions()
        kmer_index = build_kmer_thermo_index(index_kmers(["aaaaaa"], 4), config_set.matches)
        result = evaluate_configuration("ccc,ggg", config_set, kmer_index, conditions)
        assert all(math.isnan(v) for v in result.min_deltas)
        assert not result.has_values
        assert result.kmer_count == 0


class TestEvaluateConfigurations:

    def test_only_observed_contexts_have_values(self, config_set):
        results = evaluate_configurations(config_set, index_kmers(["aaaaaa"], 4), make_conditions())
        assert len(results) == 192
        observed = [r.key for r in results if r.has_values]
        assert observed == ["aaa,tat", "aaa,tct", "aaa,tgt"]

    def test_sorted_output(self, config_set):
        results = evaluate_configurations(config_set, index_kmers(["acgttgcaac"], 4), make_conditions())
        keys = [r.key for r in results]
        assert keys == sorted(keys)

    def test_idempotent(self, config_set):
        index = index_kmers(["acgttgcaacggtaccatg"], 5)
        first = evaluate_configurations(config_set, index, make_conditions(5))
        second = evaluate_configurations(config_set, index, make_conditions(5))
        assert [r.key for r in first] == [r.key for r in second]
        for a, b in zip(first, second):
            assert a.kmer_count == b.kmer_count
            assert str(a.min_deltas) == str(b.min_deltas)

    def test_parallel_matches_serial(self, config_set):
        index = index_kmers(["acgttgcaacggtaccatgaattcgcgatatccgg"], 6)
        conditions = make_conditions(6, (0.008, 0.08, 0.8))
        serial = evaluate_configurations(config_set, index, conditions, threads=1)
        parallel = evaluate_configurations(config_set, index, conditions, threads=2)
        assert [r.key for r in serial] == [r.key for r in parallel]
        for a, b in zip(serial, parallel):
            assert str(a.min_deltas) == str(b.min_deltas)
            assert str(a.max_deltas) == str(b.max_deltas)

    def test_primer_shorter_than_trinucleotide(self, config_set):
        results = evaluate_configurations(config_set, index_kmers(["acgtacgt"], 2), make_conditions(2))
        assert not any(r.has_values for r in results)
