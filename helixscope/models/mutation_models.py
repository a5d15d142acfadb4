from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MutationType(Enum):
    SUBSTITUTION = "Substitution"
    INSERTION = "Insertion"
    DELETION = "Deletion"
    INVERSION = "Inversion"
    DUPLICATION = "Duplication"


class MutationResult(Enum):
    SYNONYMOUS = "synonymous"
    MISSENSE = "missense"
    NONSENSE = "nonsense"
    FRAMESHIFT = "frameshift"
    NO_CHANGE = "noChange"

    @property
    def description(self) -> str:
        return _RESULT_DESCRIPTIONS[self]


_RESULT_DESCRIPTIONS = {
    MutationResult.SYNONYMOUS: "Synonymous (silent mutation)",
    MutationResult.MISSENSE: "Missense (amino acid change)",
    MutationResult.NONSENSE: "Nonsense (premature stop)",
    MutationResult.FRAMESHIFT: "Frameshift (reading frame shift)",
    MutationResult.NO_CHANGE: "No effect",
}


@dataclass(frozen=True)
class MutationEffect:
    original_sequence: str
    mutated_sequence: str
    original_protein: Optional[str]
    mutated_protein: Optional[str]
    mutation_type: MutationType
    result: MutationResult
    position: int
    description: str

    @property
    def length_change(self) -> int:
        return len(self.mutated_sequence) - len(self.original_sequence)
