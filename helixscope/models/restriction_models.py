from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from Bio.Seq import reverse_complement

from ..constants.constants import *


class Overhang(Enum):
    FIVE_PRIME = "5' overhang"
    THREE_PRIME = "3' overhang"
    BLUNT = "Blunt"


@dataclass(frozen=True)
class RestrictionEnzyme:
    name: str
    recognition_site: str
    cut_offset: int
    overhang: Overhang

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Restriction enzyme requires a name")
        if not self.recognition_site:
            raise ValueError(f"{self.name}: recognition site must not be empty")
        if CUT_SITE_MARKER in self.recognition_site:
            raise ValueError(
                f"{self.name}: use RestrictionEnzyme.from_caret_notation for caret-marked sites"
            )
        if self.recognition_site != self.recognition_site.upper():
            object.__setattr__(self, "recognition_site", self.recognition_site.upper())
        if not 0 <= self.cut_offset <= len(self.recognition_site):
            raise ValueError(
                f"{self.name}: cut offset {self.cut_offset} outside site "
                f"{self.recognition_site} (length {len(self.recognition_site)})"
            )

    @classmethod
    def from_caret_notation(
        cls, name: str, site: str, overhang: Optional[Overhang] = None
    ) -> "RestrictionEnzyme":
        """
        Build an enzyme from a caret-marked site such as ``G^AATTC``.

        The caret index is the top-strand cut offset. When ``overhang`` is omitted it is
        inferred from the cut geometry, assuming the bottom strand is cut symmetrically
        (at ``site_length - cut_offset``), which holds for palindromic sites.
        """
        if site.count(CUT_SITE_MARKER) != 1:
            raise ValueError(f"{name}: expected exactly one '{CUT_SITE_MARKER}' in {site!r}")

        cut_offset = site.index(CUT_SITE_MARKER)
        pattern = site.replace(CUT_SITE_MARKER, "").upper()

        if overhang is None:
            bottom_cut = len(pattern) - cut_offset
            if cut_offset < bottom_cut:
                overhang = Overhang.FIVE_PRIME
            elif cut_offset > bottom_cut:
                overhang = Overhang.THREE_PRIME
            else:
                overhang = Overhang.BLUNT

        return cls(name=name, recognition_site=pattern, cut_offset=cut_offset, overhang=overhang)

    @property
    def site_length(self) -> int:
        return len(self.recognition_site)

    @property
    def is_palindromic(self) -> bool:
        return reverse_complement(self.recognition_site) == self.recognition_site

    @property
    def caret_notation(self) -> str:
        site = self.recognition_site
        return f"{site[: self.cut_offset]}{CUT_SITE_MARKER}{site[self.cut_offset :]}"


@dataclass(frozen=True)
class RestrictionHit:
    enzyme: RestrictionEnzyme
    position: int
    strand: str = FORWARD_STRAND

    @property
    def cut_position(self) -> int:
        if self.strand == REVERSE_STRAND:
            return self.position + self.enzyme.site_length - self.enzyme.cut_offset
        return self.position + self.enzyme.cut_offset

    @property
    def hit_id(self) -> str:
        return f"{self.enzyme.name}-{self.position}{self.strand}"


@dataclass(frozen=True)
class RestrictionMap:
    sequence_length: int
    hits: dict[str, list[RestrictionHit]] = field(default_factory=dict)

    @property
    def total_sites(self) -> int:
        return sum(len(enzyme_hits) for enzyme_hits in self.hits.values())

    @property
    def enzyme_names(self) -> list[str]:
        return sorted(self.hits)

    def sites_for_enzyme(self, name: str) -> int:
        return len(self.hits.get(name, []))

    def cutters(self, site_count: int) -> list[str]:
        return sorted(name for name, enzyme_hits in self.hits.items() if len(enzyme_hits) == site_count)
