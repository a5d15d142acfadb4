from dataclasses import dataclass, field
from typing import Optional

from .bio_models import ORF, CompositionWindow, CpGIsland, SequenceComposition
from .restriction_models import RestrictionMap


@dataclass(frozen=True)
class SequenceReport:
    sequence_length: int
    composition: SequenceComposition
    gc_windows: list[CompositionWindow]
    cpg_islands: list[CpGIsland]
    orfs: list[ORF]
    restriction_map: RestrictionMap

    @property
    def longest_orf(self) -> Optional[ORF]:
        return max(self.orfs, key=lambda orf: orf.length, default=None)


@dataclass(frozen=True)
class AnalysisResult:
    success: bool
    sequence_length: int
    method: str
    message: str
    header: Optional[str] = None
    accession: Optional[str] = None
    report: Optional[SequenceReport] = None
    error: Optional[str] = None
    error_type: Optional[str] = None
    warnings: list[str] = field(default_factory=list)
