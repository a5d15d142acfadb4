import logging
from typing import Iterable, Iterator, Optional

from Bio.Data.IUPACData import ambiguous_dna_values

from ...constants.constants import *
from ...core.exceptions import InvalidCharactersError
from ...models.restriction_models import Overhang, RestrictionEnzyme

logger = logging.getLogger(__name__)

IUPAC_SYMBOLS = "ACGTRYWSKMBDHVN"

IUPAC_DNA: dict[str, frozenset[str]] = {
    symbol: frozenset(ambiguous_dna_values[symbol]) for symbol in IUPAC_SYMBOLS
}


def expand_symbol(symbol: str) -> frozenset[str]:
    try:
        return IUPAC_DNA[symbol.upper()]
    except KeyError:
        raise InvalidCharactersError(symbol, f"Unknown IUPAC nucleotide symbol: {symbol!r}") from None


def expand_pattern(pattern: str) -> list[frozenset[str]]:
    return [expand_symbol(symbol) for symbol in pattern]


# name, caret-marked site, overhang
DEFAULT_ENZYME_SITES: tuple[tuple[str, str, Overhang], ...] = (
    ("EcoRI", "G^AATTC", Overhang.FIVE_PRIME),
    ("BamHI", "G^GATCC", Overhang.FIVE_PRIME),
    ("HindIII", "A^AGCTT", Overhang.FIVE_PRIME),
    ("PstI", "CTGCA^G", Overhang.THREE_PRIME),
    ("SacI", "GAGCT^C", Overhang.THREE_PRIME),
    ("NotI", "GC^GGCCGC", Overhang.FIVE_PRIME),
    ("XbaI", "T^CTAGA", Overhang.FIVE_PRIME),
    ("SalI", "G^TCGAC", Overhang.FIVE_PRIME),
    ("XhoI", "C^TCGAG", Overhang.FIVE_PRIME),
    ("KpnI", "GGTAC^C", Overhang.THREE_PRIME),
    ("SmaI", "CCC^GGG", Overhang.BLUNT),
    ("EcoRV", "GAT^ATC", Overhang.BLUNT),
    ("DraI", "TTT^AAA", Overhang.BLUNT),
    ("ScaI", "AGT^ACT", Overhang.BLUNT),
    ("PvuII", "CAG^CTG", Overhang.BLUNT),
    ("NcoI", "C^CATGG", Overhang.FIVE_PRIME),
    ("NdeI", "CA^TATG", Overhang.FIVE_PRIME),
    ("BglII", "A^GATCT", Overhang.FIVE_PRIME),
    ("AluI", "AG^CT", Overhang.BLUNT),
    ("HaeIII", "GG^CC", Overhang.BLUNT),
    ("MboI", "^GATC", Overhang.FIVE_PRIME),
    ("TaqI", "T^CGA", Overhang.FIVE_PRIME),
    ("HinfI", "G^ANTC", Overhang.FIVE_PRIME),
    ("AvaI", "C^YCGRG", Overhang.FIVE_PRIME),
    ("StyI", "C^CWWGG", Overhang.FIVE_PRIME),
    ("AccI", "GT^MKAC", Overhang.FIVE_PRIME),
    ("HincII", "GTY^RAC", Overhang.BLUNT),
    ("BanI", "G^GYRCC", Overhang.FIVE_PRIME),
)


class EnzymeLibrary:
    """Read-only, explicitly constructed catalog of restriction enzymes."""

    def __init__(self, enzymes: Iterable[RestrictionEnzyme]):
        by_name: dict[str, RestrictionEnzyme] = {}
        for enzyme in enzymes:
            if enzyme.name in by_name:
                raise ValueError(f"Duplicate restriction enzyme name: {enzyme.name}")
            for symbol in enzyme.recognition_site:
                expand_symbol(symbol)
            by_name[enzyme.name] = enzyme

        self._enzymes: tuple[RestrictionEnzyme, ...] = tuple(by_name.values())
        self._by_name = by_name

    @classmethod
    def default(cls) -> "EnzymeLibrary":
        library = cls(
            RestrictionEnzyme.from_caret_notation(name, site, overhang)
            for name, site, overhang in DEFAULT_ENZYME_SITES
        )
        logger.debug(f"Built default enzyme library with {len(library)} enzymes")
        return library

    def get(self, name: str) -> Optional[RestrictionEnzyme]:
        return self._by_name.get(name)

    def names(self) -> list[str]:
        return [enzyme.name for enzyme in self._enzymes]

    def subset(self, names: Iterable[str]) -> list[RestrictionEnzyme]:
        names = list(names)
        missing = [name for name in names if name not in self._by_name]
        if missing:
            raise KeyError(f"Unknown restriction enzymes: {', '.join(missing)}")
        return [self._by_name[name] for name in names]

    def __getitem__(self, name: str) -> RestrictionEnzyme:
        return self._by_name[name]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[RestrictionEnzyme]:
        return iter(self._enzymes)

    def __len__(self) -> int:
        return len(self._enzymes)
