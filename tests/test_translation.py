"""
Unit tests for the genetic code table, translation and ORF discovery.
"""

from itertools import product

import pytest

from helixscope.core.exceptions import InvalidCharactersError, InvalidRangeError
from helixscope.models.bio_models import Codon
from helixscope.tools.bio.translation import CodonTable, CodonTranslator

FILLER = "GCT"  # alanine, contains no start or stop codon in any frame when repeated


def _orf(codon_count: int) -> str:
    """ATG + alanine filler + TAA, totalling ``codon_count`` codons."""
    return "ATG" + FILLER * (codon_count - 2) + "TAA"


def test_codon_table_is_complete(codon_table):
    assert len(codon_table) == 64
    for bases in product("ATGC", repeat=3):
        codon = codon_table.lookup("".join(bases))
        assert len(codon.amino_acid) == 1
        assert codon.full_name


def test_start_and_stop_flags(codon_table):
    start = codon_table.lookup("ATG")
    assert (start.amino_acid, start.full_name, start.is_start_codon) == ("M", "Methionine", True)

    for triplet in ("TAA", "TAG", "TGA"):
        stop = codon_table.lookup(triplet)
        assert stop.amino_acid == "*"
        assert stop.is_stop_codon
        assert not stop.is_start_codon

    flagged_starts = [c.sequence for c in codon_table.codons() if c.is_start_codon]
    flagged_stops = sorted(c.sequence for c in codon_table.codons() if c.is_stop_codon)
    assert flagged_starts == ["ATG"]
    assert flagged_stops == ["TAA", "TAG", "TGA"]


@pytest.mark.parametrize(
    "triplet, amino_acid",
    [("TTT", "F"), ("TGG", "W"), ("AGA", "R"), ("GAT", "D"), ("CAG", "Q"), ("atg", "M")],
)
def test_standard_assignments(codon_table, triplet, amino_acid):
    assert codon_table.lookup(triplet).amino_acid == amino_acid


def test_codons_with_n_are_untranslatable(codon_table):
    codon = codon_table.lookup("ANG")
    assert codon.amino_acid == "X"
    assert not codon.is_start_codon and not codon.is_stop_codon
    assert "ANG" not in codon_table


def test_lookup_rejects_bad_codons(codon_table):
    with pytest.raises(InvalidCharactersError):
        codon_table.lookup("AZG")
    with pytest.raises(InvalidRangeError):
        codon_table.lookup("AT")


def test_custom_table_is_injected():
    table = CodonTable([Codon(sequence="AAA", amino_acid="K", full_name="Lysine")])
    translator = CodonTranslator(table)
    assert translator.translate_to_protein("AAAAAA") == "KK"


def test_translate_end_to_end_example(translator):
    codons = translator.translate("ATGGGATCCTAA")
    assert [(c.sequence, c.amino_acid) for c in codons] == [
        ("ATG", "M"),
        ("GGA", "G"),
        ("TCC", "S"),
        ("TAA", "*"),
    ]
    assert codons[0].is_start_codon
    assert codons[-1].is_stop_codon


def test_translate_drops_incomplete_codon(translator):
    assert [c.sequence for c in translator.translate("ATGGC")] == ["ATG"]
    assert translator.translate("AT") == []


def test_translate_with_frame_offset(translator):
    assert translator.translate_to_protein("CATGGGA", frame_offset=1) == "MG"
    assert translator.translate_to_protein("CCATGGGA", frame_offset=2) == "MG"
    with pytest.raises(InvalidRangeError):
        translator.translate("ATG", frame_offset=-1)


def test_translate_with_ambiguous_codon(translator):
    assert translator.translate_to_protein("ATGNNNTAA") == "MX*"


def test_find_orfs_minimum_length_boundary(translator):
    orfs = translator.find_orfs(_orf(25))
    assert len(orfs) == 1
    orf = orfs[0]
    assert (orf.frame, orf.start_position, orf.end_position, orf.length) == (0, 0, 75, 75)
    assert orf.protein_sequence == "M" + "A" * 23 + "*"

    assert translator.find_orfs(_orf(24)) == []


def test_find_orfs_reports_frame_and_coordinates(translator):
    orfs = translator.find_orfs("C" + _orf(30) + "GG")
    assert len(orfs) == 1
    assert (orfs[0].frame, orfs[0].start_position, orfs[0].end_position) == (1, 1, 91)
    assert orfs[0].sequence == _orf(30)


def test_find_orfs_uses_first_start_codon(translator):
    sequence = "ATG" + "ATG" + FILLER * 22 + "TAA"
    orfs = translator.find_orfs(sequence)
    assert [(o.start_position, o.length) for o in orfs] == [(0, 75)]
    assert orfs[0].protein_sequence.startswith("MM")


def test_find_orfs_multiple_per_frame_in_order(translator):
    sequence = _orf(26) + FILLER + _orf(25)
    orfs = translator.find_orfs(sequence)
    assert [(o.frame, o.start_position, o.end_position) for o in orfs] == [
        (0, 0, 78),
        (0, 81, 156),
    ]


def test_find_orfs_discards_short_and_keeps_scanning(translator):
    sequence = _orf(5) + _orf(25)
    orfs = translator.find_orfs(sequence)
    assert [(o.start_position, o.length) for o in orfs] == [(15, 75)]


def test_find_orfs_ignores_unterminated_frames(translator):
    assert translator.find_orfs("ATG" + FILLER * 40) == []


def test_find_orfs_custom_threshold(translator):
    assert len(translator.find_orfs(_orf(5), min_length=15)) == 1
    assert translator.find_orfs(_orf(5), min_length=16) == []


def test_find_orfs_concatenates_frames(translator):
    sequence = _orf(25) + "T" + _orf(25)
    orfs = translator.find_orfs(sequence)
    assert [o.frame for o in orfs] == [0, 1]
