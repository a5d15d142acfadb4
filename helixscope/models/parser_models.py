from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class FastaRecord:
    header: str
    sequence: str
    accession: Optional[str] = None
    description: Optional[str] = None

    @property
    def length(self) -> int:
        return len(self.sequence)

    @property
    def record_id(self) -> Optional[str]:
        tokens = self.header.split()
        return tokens[0] if tokens else None


@dataclass(frozen=True)
class FastaParseResult:
    success: bool
    records: list[FastaRecord] = field(default_factory=list)
    count: int = 0
    error: Optional[str] = None
