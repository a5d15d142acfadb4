"""
Unit tests for the enzyme catalog, IUPAC site matching and digests.
"""

import pytest

from helixscope.core.exceptions import InvalidCharactersError
from helixscope.models.restriction_models import (
    Overhang,
    RestrictionEnzyme,
    RestrictionHit,
    RestrictionMap,
)
from helixscope.tools.restriction.enzyme_library import EnzymeLibrary, expand_pattern, expand_symbol
from helixscope.tools.restriction.site_finder import RestrictionSiteFinder


@pytest.fixture
def asymmetric_enzyme():
    return RestrictionEnzyme(
        name="AsyI", recognition_site="GGATG", cut_offset=5, overhang=Overhang.THREE_PRIME
    )


def test_from_caret_notation_infers_overhang():
    eco = RestrictionEnzyme.from_caret_notation("EcoRI", "G^AATTC")
    assert (eco.recognition_site, eco.cut_offset, eco.overhang) == ("GAATTC", 1, Overhang.FIVE_PRIME)
    assert eco.caret_notation == "G^AATTC"

    assert RestrictionEnzyme.from_caret_notation("PstI", "CTGCA^G").overhang == Overhang.THREE_PRIME
    assert RestrictionEnzyme.from_caret_notation("SmaI", "CCC^GGG").overhang == Overhang.BLUNT
    assert RestrictionEnzyme.from_caret_notation("lower", "g^aattc").recognition_site == "GAATTC"


@pytest.mark.parametrize("site", ["GAATTC", "G^AA^TTC"])
def test_from_caret_notation_requires_single_caret(site):
    with pytest.raises(ValueError):
        RestrictionEnzyme.from_caret_notation("Bad", site)


def test_enzyme_validation():
    assert RestrictionEnzyme("x", "gatc", 0, Overhang.FIVE_PRIME).recognition_site == "GATC"
    with pytest.raises(ValueError):
        RestrictionEnzyme("x", "GATC", 5, Overhang.FIVE_PRIME)
    with pytest.raises(ValueError):
        RestrictionEnzyme("x", "", 0, Overhang.BLUNT)
    with pytest.raises(ValueError):
        RestrictionEnzyme("", "GATC", 0, Overhang.BLUNT)


def test_palindrome_detection(enzyme_library, asymmetric_enzyme):
    assert enzyme_library["EcoRI"].is_palindromic
    assert enzyme_library["HinfI"].is_palindromic
    assert not asymmetric_enzyme.is_palindromic


def test_iupac_expansion():
    assert expand_symbol("R") == {"A", "G"}
    assert expand_symbol("y") == {"C", "T"}
    assert expand_symbol("N") == {"A", "C", "G", "T"}
    assert expand_pattern("GW") == [{"G"}, {"A", "T"}]
    with pytest.raises(InvalidCharactersError):
        expand_symbol("Z")


def test_default_library_contents(enzyme_library):
    assert len(enzyme_library) == 28
    assert enzyme_library.names()[:3] == ["EcoRI", "BamHI", "HindIII"]
    assert "NotI" in enzyme_library
    assert "Nonexistent" not in enzyme_library
    assert enzyme_library.get("Nonexistent") is None
    assert enzyme_library["NotI"].site_length == 8
    assert enzyme_library["MboI"].cut_offset == 0


def test_library_subset(enzyme_library):
    selected = enzyme_library.subset(name for name in ("BamHI", "EcoRI"))
    assert [enzyme.name for enzyme in selected] == ["BamHI", "EcoRI"]
    with pytest.raises(KeyError):
        enzyme_library.subset(["BamHI", "Nonexistent"])


def test_library_rejects_duplicates_and_bad_symbols():
    eco = RestrictionEnzyme.from_caret_notation("EcoRI", "G^AATTC")
    with pytest.raises(ValueError):
        EnzymeLibrary([eco, eco])
    with pytest.raises(InvalidCharactersError):
        EnzymeLibrary([RestrictionEnzyme.from_caret_notation("Bad", "G^ZATC")])


def test_literal_site_matching(site_finder, enzyme_library):
    assert site_finder.matches("GAATTCAAGAATTC", enzyme_library["EcoRI"]) == [0, 8]
    assert site_finder.matches("gaattc", enzyme_library["EcoRI"]) == [0]
    assert site_finder.matches("GAATT", enzyme_library["EcoRI"]) == []


def test_degenerate_site_matching(site_finder, enzyme_library):
    hinf = enzyme_library["HinfI"]
    assert site_finder.matches("GAATCTGACTCTGAGTCTGATTC", hinf) == [0, 6, 12, 18]
    # an N in the query is not a concrete base and never satisfies a pattern position
    assert site_finder.matches("GANTC", hinf) == []


def test_overlapping_sites_are_all_reported(site_finder, enzyme_library):
    assert site_finder.matches("GGCCC", enzyme_library["HaeIII"]) == [0]
    assert site_finder.matches("AGCTAGCT", enzyme_library["AluI"]) == [0, 4]
    assert site_finder.matches("GATCGATC", enzyme_library["MboI"]) == [0, 4]


def test_analyze_end_to_end_example(site_finder, enzyme_library):
    result = site_finder.analyze("ATGGGATCCTAA", enzyme_library.subset(["BamHI"]))
    assert list(result) == ["BamHI"]
    (hit,) = result["BamHI"]
    assert (hit.position, hit.strand, hit.cut_position) == (3, "+", 4)
    assert hit.hit_id == "BamHI-3+"


def test_analyze_default_library(site_finder):
    result = site_finder.analyze("ATGGGATCCTAA")
    assert set(result) == {"BamHI", "MboI"}
    assert [hit.position for hit in result["MboI"]] == [4]


def test_analyze_omits_enzymes_without_sites(site_finder, enzyme_library):
    assert site_finder.analyze("AAAAAAAA", enzyme_library.subset(["EcoRI"])) == {}


def test_reverse_strand_sites(site_finder, asymmetric_enzyme):
    sequence = "AAGGATGAACATCCAA"
    forward_only = site_finder.find_sites(sequence, asymmetric_enzyme)
    assert [(h.position, h.strand) for h in forward_only] == [(2, "+")]

    both = site_finder.find_sites(sequence, asymmetric_enzyme, both_strands=True)
    assert [(h.position, h.strand) for h in both] == [(2, "+"), (9, "-")]
    assert [h.cut_position for h in both] == [7, 9]


def test_palindromic_sites_are_not_doubled(site_finder, enzyme_library):
    hits = site_finder.find_sites("GAATTC", enzyme_library["EcoRI"], both_strands=True)
    assert [(h.position, h.strand) for h in hits] == [(0, "+")]


def test_restriction_map(site_finder, enzyme_library):
    enzymes = enzyme_library.subset(["EcoRI", "BamHI", "PstI"])
    restriction_map = site_finder.restriction_map("GAATTCGGATCCGAATTC", enzymes)

    assert restriction_map.sequence_length == 18
    assert restriction_map.total_sites == 3
    assert restriction_map.enzyme_names == ["BamHI", "EcoRI"]
    assert restriction_map.sites_for_enzyme("EcoRI") == 2
    assert restriction_map.sites_for_enzyme("PstI") == 0
    assert restriction_map.cutters(1) == ["BamHI"]


def test_empty_restriction_map():
    restriction_map = RestrictionMap(sequence_length=10)
    assert restriction_map.total_sites == 0
    assert restriction_map.enzyme_names == []


def test_digest(site_finder, enzyme_library):
    assert site_finder.digest("GAATTCAAGAATTC", enzyme_library["EcoRI"]) == ["G", "AATTCAAG", "AATTC"]
    # a cut at position 0 does not produce an empty fragment
    assert site_finder.digest("GATCAAGATC", enzyme_library["MboI"]) == ["GATCAA", "GATC"]
    assert site_finder.digest("AAAA", enzyme_library["EcoRI"]) == ["AAAA"]


def test_custom_library_injection(enzyme_library):
    finder = RestrictionSiteFinder(EnzymeLibrary(enzyme_library.subset(["EcoRI"])))
    assert list(finder.analyze("GAATTCGGATCC")) == ["EcoRI"]


def test_hit_cut_position_on_reverse_strand(asymmetric_enzyme):
    hit = RestrictionHit(enzyme=asymmetric_enzyme, position=10, strand="-")
    assert hit.cut_position == 10
