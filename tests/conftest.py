"""Shared fixtures for the helixscope test suite."""

import pytest

from helixscope.tools.bio.composition import CompositionAnalyzer
from helixscope.tools.bio.fasta_codec import FastaRecordCodec
from helixscope.tools.bio.translation import CodonTable, CodonTranslator
from helixscope.tools.mutation.mutation_simulator import MutationSimulator
from helixscope.tools.restriction.enzyme_library import EnzymeLibrary
from helixscope.tools.restriction.site_finder import RestrictionSiteFinder


@pytest.fixture(scope="session")
def codon_table():
    return CodonTable.standard()


@pytest.fixture(scope="session")
def enzyme_library():
    return EnzymeLibrary.default()


@pytest.fixture
def codec():
    return FastaRecordCodec()


@pytest.fixture
def analyzer():
    return CompositionAnalyzer()


@pytest.fixture
def translator(codon_table):
    return CodonTranslator(codon_table)


@pytest.fixture
def site_finder(enzyme_library):
    return RestrictionSiteFinder(enzyme_library)


@pytest.fixture
def simulator(codon_table):
    return MutationSimulator(codon_table)
