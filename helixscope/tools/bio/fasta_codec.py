import logging
import re
from typing import Iterable, Optional

from ...constants.constants import *
from ...core.exceptions import (
    EmptySequenceError,
    InvalidCharactersError,
    InvalidFormatError,
    InvalidRangeError,
    SequenceEngineError,
)
from ...models.parser_models import FastaParseResult, FastaRecord
from ...settings import settings

logger = logging.getLogger(__name__)

_ACCESSION_REGEX = re.compile(FASTA_ACCESSION_PATTERN)


class FastaRecordCodec:
    def __init__(self, line_width: Optional[int] = None):
        self.line_width = line_width

    def parse_one(self, text: str) -> FastaRecord:
        """
        Parse a single FASTA record.

        Every line is trimmed and blank lines are dropped. The first remaining line is the
        header; all following lines are joined into the sequence, so a second '>' line is
        treated as sequence data and rejected by the alphabet check.

        Raises:
            InvalidFormatError: The first non-empty line is not a '>' header
            EmptySequenceError: No sequence lines follow the header
            InvalidCharactersError: The sequence has characters outside ATGCN
        """
        lines = [line.strip() for line in text.splitlines()]
        lines = [line for line in lines if line]

        if not lines or not lines[0].startswith(FASTA_HEADER_PREFIX):
            raise InvalidFormatError("FASTA text must start with a '>' header line")

        header = lines[0][len(FASTA_HEADER_PREFIX) :]
        sequence = "".join(lines[1:]).upper()

        if not sequence:
            raise EmptySequenceError(f"No sequence found for header {header!r}")

        return self._build_record(header, sequence)

    def parse_many(self, text: str) -> list[FastaRecord]:
        records: list[FastaRecord] = []
        header: Optional[str] = None
        sequence_lines: list[str] = []

        for raw_line in text.splitlines():
            line = raw_line.strip()
            if line.startswith(FASTA_HEADER_PREFIX):
                if header is not None and sequence_lines:
                    records.append(self._build_record(header, "".join(sequence_lines).upper()))
                header = line[len(FASTA_HEADER_PREFIX) :]
                sequence_lines = []
            elif line and header is not None:
                sequence_lines.append(line)

        if header is not None and sequence_lines:
            records.append(self._build_record(header, "".join(sequence_lines).upper()))

        if not records:
            raise InvalidFormatError("No FASTA records found")

        logger.debug(f"Parsed {len(records)} FASTA records")
        return records

    def try_parse_many(self, text: str) -> FastaParseResult:
        try:
            records = self.parse_many(text)
        except SequenceEngineError as e:
            return FastaParseResult(success=False, error=str(e))
        return FastaParseResult(success=True, records=records, count=len(records))

    def format(self, header: str, sequence: str, line_width: int = None) -> str:
        """
        Serialize a sequence as FASTA text wrapped at ``line_width`` characters.

        The output always ends with a newline. An empty sequence produces only the
        header line.
        """
        width = line_width if line_width is not None else self._default_line_width()
        if width < 1:
            raise InvalidRangeError(f"Line width must be positive, got {width}")
        if "\n" in header or "\r" in header:
            raise InvalidFormatError("FASTA header must not contain line breaks")

        lines = [f"{FASTA_HEADER_PREFIX}{header}"]
        lines.extend(sequence[i : i + width] for i in range(0, len(sequence), width))
        return "\n".join(lines) + "\n"

    def format_many(self, records: Iterable[FastaRecord], line_width: int = None) -> str:
        return "".join(self.format(r.header, r.sequence, line_width) for r in records)

    def extract_accession(self, header: str) -> Optional[str]:
        match = _ACCESSION_REGEX.search(header)
        if match:
            return match.group(0)

        fields = header.split(FASTA_FIELD_SEPARATOR)
        if len(fields) > 1 and fields[1].strip():
            return fields[1].strip()

        return None

    def _default_line_width(self) -> int:
        return settings.fasta_line_width if self.line_width is None else self.line_width

    def _build_record(self, header: str, sequence: str) -> FastaRecord:
        invalid = set(sequence) - VALID_DNA_CHARACTERS
        if invalid:
            raise InvalidCharactersError(
                invalid,
                f"Record {header!r} contains invalid characters: {''.join(sorted(invalid))!r}",
            )

        return FastaRecord(
            header=header,
            sequence=sequence,
            accession=self.extract_accession(header),
            description=header or None,
        )
