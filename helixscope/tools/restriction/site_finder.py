import logging
from typing import Iterable, Optional

import numpy as np
from Bio.Seq import reverse_complement

from ...constants.constants import *
from ...models.restriction_models import RestrictionEnzyme, RestrictionHit, RestrictionMap
from ..bio.sequence_validator import encode_sequence
from .enzyme_library import EnzymeLibrary, expand_symbol

logger = logging.getLogger(__name__)


def _symbol_lookup(symbol: str) -> np.ndarray:
    allowed = np.zeros(256, dtype=bool)
    for base in expand_symbol(symbol):
        allowed[ord(base)] = True
    return allowed


class RestrictionSiteFinder:
    def __init__(self, library: Optional[EnzymeLibrary] = None):
        self.library = library or EnzymeLibrary.default()

    def matches(self, sequence: str, enzyme: RestrictionEnzyme) -> list[int]:
        return self._match_pattern(encode_sequence(sequence), enzyme.recognition_site)

    def find_sites(
        self, sequence: str, enzyme: RestrictionEnzyme, both_strands: bool = False
    ) -> list[RestrictionHit]:
        codes = encode_sequence(sequence)
        hits = [
            RestrictionHit(enzyme=enzyme, position=position, strand=FORWARD_STRAND)
            for position in self._match_pattern(codes, enzyme.recognition_site)
        ]

        if both_strands and not enzyme.is_palindromic:
            reverse_site = reverse_complement(enzyme.recognition_site)
            hits.extend(
                RestrictionHit(enzyme=enzyme, position=position, strand=REVERSE_STRAND)
                for position in self._match_pattern(codes, reverse_site)
            )
            hits.sort(key=lambda hit: (hit.position, hit.strand != FORWARD_STRAND))

        return hits

    def analyze(
        self,
        sequence: str,
        enzymes: Optional[Iterable[RestrictionEnzyme]] = None,
        both_strands: bool = False,
    ) -> dict[str, list[RestrictionHit]]:
        """
        Scan ``sequence`` with each enzyme.

        Enzymes without any site are left out of the returned mapping, so a missing key
        means zero sites. ``enzymes`` defaults to the whole library.
        """
        selected = self.library if enzymes is None else enzymes
        result: dict[str, list[RestrictionHit]] = {}

        for enzyme in selected:
            hits = self.find_sites(sequence, enzyme, both_strands=both_strands)
            if hits:
                result[enzyme.name] = hits

        logger.debug(f"{len(result)} enzymes cut the {len(sequence):,} bp sequence")
        return result

    def restriction_map(
        self,
        sequence: str,
        enzymes: Optional[Iterable[RestrictionEnzyme]] = None,
        both_strands: bool = False,
    ) -> RestrictionMap:
        return RestrictionMap(
            sequence_length=len(sequence),
            hits=self.analyze(sequence, enzymes, both_strands=both_strands),
        )

    def digest(self, sequence: str, enzyme: RestrictionEnzyme) -> list[str]:
        cut_points = sorted(
            {
                hit.cut_position
                for hit in self.find_sites(sequence, enzyme)
                if 0 < hit.cut_position < len(sequence)
            }
        )
        if not cut_points:
            return [sequence]

        bounds = [0, *cut_points, len(sequence)]
        return [sequence[start:end] for start, end in zip(bounds, bounds[1:])]

    def _match_pattern(self, codes: np.ndarray, pattern: str) -> list[int]:
        site_length = len(pattern)
        span = len(codes) - site_length + 1
        if site_length == 0 or span <= 0:
            return []

        mask = np.ones(span, dtype=bool)
        for offset, symbol in enumerate(pattern):
            mask &= _symbol_lookup(symbol)[codes[offset : offset + span]]
            if not mask.any():
                return []

        return np.flatnonzero(mask).tolist()
