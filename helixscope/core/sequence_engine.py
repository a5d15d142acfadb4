import logging
from typing import Optional

from ..constants.constants import *
from ..models.app_models import AnalysisResult, SequenceReport
from ..models.parser_models import FastaRecord
from ..settings import Settings, settings as default_settings
from ..tools.bio.composition import CompositionAnalyzer
from ..tools.bio.fasta_codec import FastaRecordCodec
from ..tools.bio.sequence_validator import SequenceValidator
from ..tools.bio.translation import CodonTable, CodonTranslator
from ..tools.mutation.mutation_simulator import MutationSimulator
from ..tools.restriction.enzyme_library import EnzymeLibrary
from ..tools.restriction.site_finder import RestrictionSiteFinder
from .exceptions import SequenceEngineError

logger = logging.getLogger(__name__)


class SequenceEngine:
    def __init__(
        self,
        codon_table: Optional[CodonTable] = None,
        enzyme_library: Optional[EnzymeLibrary] = None,
        settings: Optional[Settings] = None,
    ) -> None:
        self.settings = settings or default_settings
        self.codon_table = codon_table or CodonTable.standard()
        self.enzyme_library = enzyme_library or EnzymeLibrary.default()

        self.validator = SequenceValidator()
        self.codec = FastaRecordCodec(self.settings.fasta_line_width)
        self.composition = CompositionAnalyzer()
        self.translator = CodonTranslator(self.codon_table)
        self.site_finder = RestrictionSiteFinder(self.enzyme_library)
        self.mutations = MutationSimulator(self.codon_table)

    def report(self, sequence: str, both_strands: bool = False) -> SequenceReport:
        seq = self.validator.validate(sequence)

        return SequenceReport(
            sequence_length=len(seq),
            composition=self.composition.summarize(seq),
            gc_windows=self.composition.sliding_gc_windows(seq, self.settings.gc_window_size),
            cpg_islands=self.composition.find_cpg_islands(
                seq,
                window_size=self.settings.cpg_window_size,
                step=self.settings.cpg_step,
                min_gc=self.settings.cpg_min_gc,
                min_cpg_ratio=self.settings.cpg_min_ratio,
            ),
            orfs=self.translator.find_orfs(seq, self.settings.min_orf_length),
            restriction_map=self.site_finder.restriction_map(seq, both_strands=both_strands),
        )

    def analyze_sequence(self, sequence: str) -> AnalysisResult:
        try:
            report = self.report(sequence)
        except SequenceEngineError as e:
            logger.warning(f"Sequence analysis failed: {e}")
            return self._error_result(e, len(sequence or ""))

        return AnalysisResult(
            success=True,
            sequence_length=report.sequence_length,
            method=ENGINE_METHOD_LABEL,
            message=self._summary_message(report),
            report=report,
            warnings=self._collect_warnings(report),
        )

    def analyze_fasta(self, text: str) -> list[AnalysisResult]:
        try:
            records = self.codec.parse_many(text)
        except SequenceEngineError as e:
            logger.warning(f"FASTA parsing failed: {e}")
            return [self._error_result(e, 0)]

        results = [self._analyze_record(record) for record in records]
        logger.info(f"Analyzed {len(results)} FASTA records")
        return results

    def _analyze_record(self, record: FastaRecord) -> AnalysisResult:
        result = self.analyze_sequence(record.sequence)
        return AnalysisResult(
            success=result.success,
            sequence_length=result.sequence_length,
            method=result.method,
            message=result.message,
            header=record.header,
            accession=record.accession,
            report=result.report,
            error=result.error,
            error_type=result.error_type,
            warnings=result.warnings,
        )

    def _error_result(self, error: SequenceEngineError, sequence_length: int) -> AnalysisResult:
        return AnalysisResult(
            success=False,
            sequence_length=sequence_length,
            method=ENGINE_METHOD_LABEL,
            message="Analysis failed",
            error=str(error),
            error_type=type(error).__name__,
        )

    def _summary_message(self, report: SequenceReport) -> str:
        return (
            f"{report.sequence_length:,} bp, GC {report.composition.gc_content:.2f}%, "
            f"{len(report.orfs)} ORFs, {len(report.cpg_islands)} CpG islands, "
            f"{report.restriction_map.total_sites} restriction sites"
        )

    def _collect_warnings(self, report: SequenceReport) -> list[str]:
        warnings = []

        known_bases = sum(report.composition.nucleotide_counts.values())
        ambiguous = report.sequence_length - known_bases
        if ambiguous:
            warnings.append(f"{ambiguous} ambiguous (N) bases excluded from base counts")

        remainder = report.sequence_length % self.settings.gc_window_size
        if remainder:
            warnings.append(
                f"Last {remainder} bases not covered by {self.settings.gc_window_size} bp GC windows"
            )

        return warnings
