import logging

import numpy as np
from Bio.Seq import complement as _bio_complement
from Bio.Seq import reverse_complement as _bio_reverse_complement

from ...constants.constants import *
from ...core.exceptions import EmptySequenceError, InvalidCharactersError

logger = logging.getLogger(__name__)

_WHITESPACE_TABLE = str.maketrans("", "", WHITESPACE_CHARACTERS)


class SequenceValidator:
    def clean(self, sequence: str) -> str:
        return sequence.translate(_WHITESPACE_TABLE).upper()

    def invalid_characters(self, sequence: str) -> set[str]:
        return set(sequence) - VALID_DNA_CHARACTERS

    def is_valid(self, sequence: str) -> bool:
        return bool(sequence) and not self.invalid_characters(sequence.upper())

    def validate(self, sequence: str) -> str:
        """
        Clean and check a raw nucleotide string.

        Args:
            sequence: Raw input, possibly lowercase or wrapped over several lines

        Returns:
            Uppercase sequence over A, T, G, C and N

        Raises:
            EmptySequenceError: Nothing remains after removing whitespace
            InvalidCharactersError: Characters outside the ATGCN alphabet are present
        """
        clean_sequence = self.clean(sequence or "")
        if not clean_sequence:
            raise EmptySequenceError("Empty sequence provided")

        invalid = self.invalid_characters(clean_sequence)
        if invalid:
            raise InvalidCharactersError(invalid)

        logger.debug(f"Validated sequence of {len(clean_sequence):,} bp")
        return clean_sequence

    def complement(self, sequence: str) -> str:
        return _bio_complement(sequence)

    def reverse_complement(self, sequence: str) -> str:
        return _bio_reverse_complement(sequence)


def reverse_complement(sequence: str) -> str:
    return _bio_reverse_complement(sequence)


def encode_sequence(sequence: str) -> np.ndarray:
    """Return the uppercase sequence as a uint8 array of ASCII codes."""
    try:
        raw = sequence.upper().encode("ascii")
    except UnicodeEncodeError as e:
        raise InvalidCharactersError({ch for ch in sequence if ord(ch) > 127}) from e
    return np.frombuffer(raw, dtype=np.uint8)
