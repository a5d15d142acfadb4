import logging
from itertools import product
from typing import Iterable, Optional

from Bio.Data.CodonTable import unambiguous_dna_by_id

from ...constants.constants import *
from ...core.exceptions import InvalidCharactersError, InvalidRangeError
from ...models.bio_models import ORF, Codon
from ...settings import settings

logger = logging.getLogger(__name__)


class CodonTable:
    """Immutable codon -> amino acid lookup shared by translators and simulators."""

    def __init__(self, codons: Iterable[Codon]):
        self._codons: dict[str, Codon] = {}
        for codon in codons:
            if len(codon.sequence) != BIO_CODON_LENGTH:
                raise ValueError(f"Codon {codon.sequence!r} is not a triplet")
            self._codons[codon.sequence.upper()] = codon

    @classmethod
    def standard(cls) -> "CodonTable":
        ncbi_table = unambiguous_dna_by_id[BIO_STANDARD_TABLE_ID]
        codons = []
        for bases in product(DNA_BASES, repeat=BIO_CODON_LENGTH):
            triplet = "".join(bases)
            if triplet in ncbi_table.stop_codons:
                amino_acid, full_name = BIO_STOP_SYMBOL, BIO_STOP_NAME
            else:
                amino_acid = ncbi_table.forward_table[triplet]
                full_name = AMINO_ACID_NAMES[amino_acid]
            codons.append(
                Codon(
                    sequence=triplet,
                    amino_acid=amino_acid,
                    full_name=full_name,
                    is_start_codon=triplet in BIO_START_CODONS,
                    is_stop_codon=triplet in BIO_STOP_CODONS,
                )
            )
        return cls(codons)

    def lookup(self, triplet: str) -> Codon:
        key = triplet.upper()
        if len(key) != BIO_CODON_LENGTH:
            raise InvalidRangeError(f"Codon must have {BIO_CODON_LENGTH} bases, got {triplet!r}")

        codon = self._codons.get(key)
        if codon is not None:
            return codon

        invalid = set(key) - VALID_DNA_CHARACTERS
        if invalid:
            raise InvalidCharactersError(invalid)

        return Codon(
            sequence=key,
            amino_acid=BIO_UNKNOWN_AMINO_ACID,
            full_name=BIO_UNKNOWN_AMINO_ACID_NAME,
        )

    def codons(self) -> list[Codon]:
        return sorted(self._codons.values(), key=lambda c: c.sequence)

    def __len__(self) -> int:
        return len(self._codons)

    def __contains__(self, triplet: str) -> bool:
        return triplet.upper() in self._codons


class CodonTranslator:
    def __init__(self, codon_table: Optional[CodonTable] = None):
        self.codon_table = codon_table or CodonTable.standard()

    def translate(self, sequence: str, frame_offset: int = 0) -> list[Codon]:
        """
        Split ``sequence`` into codons starting at ``frame_offset``.

        A trailing group of fewer than three bases is discarded. Codons containing N
        translate to ``X``.
        """
        if frame_offset < 0:
            raise InvalidRangeError(f"Frame offset must be non-negative, got {frame_offset}")

        seq = sequence.upper()
        last_start = len(seq) - BIO_CODON_LENGTH
        return [
            self.codon_table.lookup(seq[i : i + BIO_CODON_LENGTH])
            for i in range(frame_offset, last_start + 1, BIO_CODON_LENGTH)
        ]

    def translate_to_protein(self, sequence: str, frame_offset: int = 0) -> str:
        return "".join(codon.amino_acid for codon in self.translate(sequence, frame_offset))

    def find_orfs(self, sequence: str, min_length: int = None) -> list[ORF]:
        """
        Find forward-strand open reading frames in frames 0, 1 and 2.

        Args:
            sequence: Validated nucleotide sequence
            min_length: Minimum ORF length in base pairs, stop codon included

        Returns:
            ORFs of frame 0, then frame 1, then frame 2, each ordered by position
        """
        threshold = settings.min_orf_length if min_length is None else min_length
        seq = sequence.upper()

        orfs = []
        for frame in BIO_READING_FRAMES:
            orfs.extend(self._find_orfs_in_frame(seq, frame, threshold))

        logger.debug(f"Found {len(orfs)} ORFs >= {threshold} bp in {len(seq):,} bp")
        return orfs

    def _find_orfs_in_frame(self, seq: str, frame: int, min_length: int) -> list[ORF]:
        orfs = []
        orf_start: Optional[int] = None

        for i in range(frame, len(seq) - BIO_CODON_LENGTH + 1, BIO_CODON_LENGTH):
            codon = self.codon_table.lookup(seq[i : i + BIO_CODON_LENGTH])

            # later in-frame ATGs are internal methionines of the open ORF
            if codon.is_start_codon and orf_start is None:
                orf_start = i
            elif codon.is_stop_codon and orf_start is not None:
                end = i + BIO_CODON_LENGTH
                if end - orf_start >= min_length:
                    orfs.append(self._create_orf(seq, frame, orf_start, end))
                orf_start = None

        return orfs

    def _create_orf(self, seq: str, frame: int, start: int, end: int) -> ORF:
        orf_sequence = seq[start:end]
        return ORF(
            frame=frame,
            start_position=start,
            end_position=end,
            sequence=orf_sequence,
            protein_sequence=self.translate_to_protein(orf_sequence),
        )
