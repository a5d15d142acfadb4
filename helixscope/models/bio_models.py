from dataclasses import dataclass


@dataclass(frozen=True)
class Codon:
    sequence: str
    amino_acid: str
    full_name: str
    is_start_codon: bool = False
    is_stop_codon: bool = False


@dataclass(frozen=True)
class ORF:
    frame: int
    start_position: int
    end_position: int
    sequence: str
    protein_sequence: str

    @property
    def length(self) -> int:
        return self.end_position - self.start_position

    @property
    def orf_id(self) -> str:
        return f"ORF_{self.frame}_{self.start_position}_{self.end_position}"


@dataclass(frozen=True)
class CompositionWindow:
    position: int
    gc_content: float


@dataclass(frozen=True)
class CpGIsland:
    start_position: int
    end_position: int
    gc_content: float
    cpg_ratio: float

    @property
    def length(self) -> int:
        return self.end_position - self.start_position


@dataclass(frozen=True)
class SequenceComposition:
    length: int
    gc_content: float
    nucleotide_counts: dict[str, int]
    nucleotide_percentages: dict[str, float]
    gc_assessment: str
