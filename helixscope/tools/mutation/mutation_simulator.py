import logging
from typing import Any, Optional

from ...constants.constants import *
from ...core.exceptions import (
    InvalidCharactersError,
    InvalidPositionError,
    InvalidRangeError,
)
from ...models.mutation_models import MutationEffect, MutationResult, MutationType
from ..bio.translation import CodonTable, CodonTranslator

logger = logging.getLogger(__name__)


class MutationSimulator:
    def __init__(self, codon_table: Optional[CodonTable] = None):
        self.translator = CodonTranslator(codon_table)

    def substitute(self, sequence: str, position: int, new_base: str) -> MutationEffect:
        self._check_position(position, len(sequence))
        base = new_base.upper()
        if len(base) != 1:
            raise InvalidRangeError(f"Substitution takes exactly one base, got {new_base!r}")
        self._check_bases(base)

        original_base = sequence[position]
        mutated = f"{sequence[:position]}{base}{sequence[position + 1 :]}"
        return self._build_effect(
            sequence,
            mutated,
            MutationType.SUBSTITUTION,
            position,
            f"{original_base} → {base} at position {position}",
        )

    def insert(self, sequence: str, position: int, bases: str) -> MutationEffect:
        if not 0 <= position <= len(sequence):
            raise InvalidPositionError(position, len(sequence))
        inserted = bases.upper()
        if not inserted:
            raise InvalidRangeError("Insertion requires at least one base")
        self._check_bases(inserted)

        mutated = f"{sequence[:position]}{inserted}{sequence[position:]}"
        return self._build_effect(
            sequence,
            mutated,
            MutationType.INSERTION,
            position,
            f"Inserted {inserted} at position {position}",
        )

    def delete(self, sequence: str, position: int, length: int) -> MutationEffect:
        self._check_position(position, len(sequence))
        if length < 1:
            raise InvalidRangeError(f"Deletion length must be positive, got {length}")

        end = min(position + length, len(sequence))
        deleted = sequence[position:end]
        if end - position < length:
            logger.debug(f"Deletion of {length} bp at {position} clamped to {end - position} bp")

        mutated = f"{sequence[:position]}{sequence[end:]}"
        return self._build_effect(
            sequence,
            mutated,
            MutationType.DELETION,
            position,
            f"Deleted {deleted} at position {position}",
        )

    def invert(self, sequence: str, start_position: int, end_position: int) -> MutationEffect:
        self._check_range(start_position, end_position, len(sequence))

        segment = sequence[start_position:end_position]
        mutated = f"{sequence[:start_position]}{segment[::-1]}{sequence[end_position:]}"
        return self._build_effect(
            sequence,
            mutated,
            MutationType.INVERSION,
            start_position,
            f"Inverted bases from {start_position} to {end_position}",
        )

    def duplicate(self, sequence: str, start_position: int, end_position: int) -> MutationEffect:
        self._check_range(start_position, end_position, len(sequence))

        segment = sequence[start_position:end_position]
        mutated = f"{sequence[:end_position]}{segment}{sequence[end_position:]}"
        return self._build_effect(
            sequence,
            mutated,
            MutationType.DUPLICATION,
            start_position,
            f"Duplicated {segment} from {start_position} to {end_position}",
        )

    def apply(self, mutation_type: MutationType, sequence: str, **params: Any) -> MutationEffect:
        handlers = {
            MutationType.SUBSTITUTION: self.substitute,
            MutationType.INSERTION: self.insert,
            MutationType.DELETION: self.delete,
            MutationType.INVERSION: self.invert,
            MutationType.DUPLICATION: self.duplicate,
        }
        return handlers[mutation_type](sequence, **params)

    def classify(self, original: str, mutated: str) -> MutationResult:
        """
        Classify the protein-level consequence of turning ``original`` into ``mutated``.

        Both sequences are read in frame 0. Precedence: frameshift, no change, nonsense,
        missense, synonymous. Nonsense means the mutation introduces an additional stop
        codon ahead of the original's first stop; an in-frame indel that only moves the
        existing stop, or shortens a protein without one, is missense.
        """
        if (len(mutated) - len(original)) % BIO_CODON_LENGTH:
            return MutationResult.FRAMESHIFT

        original_codons = [c.sequence for c in self.translator.translate(original)]
        mutated_codons = [c.sequence for c in self.translator.translate(mutated)]
        if original_codons == mutated_codons or not original_codons or not mutated_codons:
            return MutationResult.NO_CHANGE

        original_protein = self.translator.translate_to_protein(original)
        mutated_protein = self.translator.translate_to_protein(mutated)

        if self._introduces_stop(original_protein, mutated_protein):
            return MutationResult.NONSENSE
        if original_protein != mutated_protein:
            return MutationResult.MISSENSE
        return MutationResult.SYNONYMOUS

    def _build_effect(
        self,
        original: str,
        mutated: str,
        mutation_type: MutationType,
        position: int,
        description: str,
    ) -> MutationEffect:
        result = self.classify(original, mutated)
        logger.debug(f"{mutation_type.value} at {position}: {result.value}")
        return MutationEffect(
            original_sequence=original,
            mutated_sequence=mutated,
            original_protein=self._protein_or_none(original),
            mutated_protein=self._protein_or_none(mutated),
            mutation_type=mutation_type,
            result=result,
            position=position,
            description=description,
        )

    def _protein_or_none(self, sequence: str) -> Optional[str]:
        protein = self.translator.translate_to_protein(sequence)
        return protein or None

    def _first_stop(self, protein: str) -> int:
        index = protein.find(BIO_STOP_SYMBOL)
        return len(protein) if index == -1 else index

    def _introduces_stop(self, original_protein: str, mutated_protein: str) -> bool:
        if mutated_protein.count(BIO_STOP_SYMBOL) <= original_protein.count(BIO_STOP_SYMBOL):
            return False
        return self._first_stop(mutated_protein) < self._first_stop(original_protein)

    def _check_position(self, position: int, length: int) -> None:
        if not 0 <= position < length:
            raise InvalidPositionError(position, length)

    def _check_range(self, start: int, end: int, length: int) -> None:
        if end <= start:
            raise InvalidRangeError(f"End position {end} must be greater than start position {start}")
        if start < 0 or end > length:
            raise InvalidPositionError(
                start if start < 0 else end,
                length,
                f"Range [{start}, {end}) is outside sequence of length {length}",
            )

    def _check_bases(self, bases: str) -> None:
        invalid = set(bases) - VALID_DNA_CHARACTERS
        if invalid:
            raise InvalidCharactersError(invalid)
