import logging
from collections import Counter

import numpy as np

from ...constants.constants import *
from ...core.exceptions import InvalidRangeError
from ...models.bio_models import CompositionWindow, CpGIsland, SequenceComposition
from ...settings import settings
from .sequence_validator import encode_sequence

logger = logging.getLogger(__name__)

_C, _G = ord("C"), ord("G")


class CompositionAnalyzer:
    def base_composition(self, sequence: str) -> dict[str, int]:
        counts = Counter(sequence.upper())
        return {base: counts.get(base, 0) for base in DNA_BASES}

    def gc_content(self, sequence: str) -> float:
        if not sequence:
            return 0.0
        counts = self.base_composition(sequence)
        return (counts["G"] + counts["C"]) * PERCENTAGE_MULTIPLIER / len(sequence)

    def cpg_observed_expected(self, sequence: str) -> float:
        seq = sequence.upper()
        length = len(seq)
        c_count = seq.count("C")
        g_count = seq.count("G")
        if not length or not c_count or not g_count:
            return 0.0
        expected = c_count * g_count / length
        return seq.count(CPG_DINUCLEOTIDE) / expected

    def sliding_gc_windows(
        self, sequence: str, window_size: int = None, step: int = None
    ) -> list[CompositionWindow]:
        """
        GC% of fixed-size windows starting at 0.

        Windows advance by ``step`` (``window_size`` when omitted, i.e. non-overlapping)
        while ``position + window_size <= len(sequence)``. Trailing bases that do not
        fill a whole window are dropped, not padded.
        """
        window = settings.gc_window_size if window_size is None else window_size
        stride = window if step is None else step
        if window < 1 or stride < 1:
            raise InvalidRangeError(f"Window size and step must be positive (got {window}, {stride})")

        if len(sequence) < window:
            return []

        gc_prefix = self._prefix_counts(np.isin(encode_sequence(sequence), (_C, _G)))
        starts = np.arange(0, len(sequence) - window + 1, stride)
        gc_values = (gc_prefix[starts + window] - gc_prefix[starts]) * PERCENTAGE_MULTIPLIER / window

        dropped = len(sequence) - (int(starts[-1]) + window)
        if dropped:
            logger.debug(f"Dropped {dropped} trailing bases outside the last full {window} bp window")

        return [
            CompositionWindow(position=int(position), gc_content=float(gc))
            for position, gc in zip(starts, gc_values)
        ]

    def find_cpg_islands(
        self,
        sequence: str,
        window_size: int = None,
        step: int = None,
        min_gc: float = None,
        min_cpg_ratio: float = None,
    ) -> list[CpGIsland]:
        window = settings.cpg_window_size if window_size is None else window_size
        stride = settings.cpg_step if step is None else step
        gc_threshold = settings.cpg_min_gc if min_gc is None else min_gc
        ratio_threshold = settings.cpg_min_ratio if min_cpg_ratio is None else min_cpg_ratio

        if window < 1 or stride < 1:
            raise InvalidRangeError(f"Window size and step must be positive (got {window}, {stride})")

        length = len(sequence)
        if length < window:
            return []

        prefixes = self._cpg_prefixes(encode_sequence(sequence))
        starts = np.arange(0, length - window + 1, stride)
        gc_values, ratios = self._region_stats(prefixes, starts, starts + window)
        qualifying = starts[(gc_values >= gc_threshold) & (ratios >= ratio_threshold)]

        islands = []
        for start, end in self._merge_windows(qualifying, window):
            gc_value, ratio = self._region_stats(prefixes, np.array([start]), np.array([end]))
            islands.append(
                CpGIsland(
                    start_position=start,
                    end_position=end,
                    gc_content=float(gc_value[0]),
                    cpg_ratio=float(ratio[0]),
                )
            )

        logger.debug(f"Found {len(islands)} CpG islands in {length:,} bp ({len(qualifying)} qualifying windows)")
        return islands

    def summarize(self, sequence: str) -> SequenceComposition:
        seq = sequence.upper()
        nucleotide_counts = self.base_composition(seq)
        gc_content = round(self.gc_content(seq), 2)

        total = len(seq)
        nucleotide_percentages = {
            base: round(count / total * PERCENTAGE_MULTIPLIER, 2) if total else 0.0
            for base, count in nucleotide_counts.items()
        }

        if gc_content < BIO_GC_LOW_THRESHOLD:
            gc_assessment = GC_LOW_LABEL
        elif gc_content > BIO_GC_HIGH_THRESHOLD:
            gc_assessment = GC_HIGH_LABEL
        else:
            gc_assessment = GC_OPTIMAL_LABEL

        return SequenceComposition(
            length=total,
            gc_content=gc_content,
            nucleotide_counts=nucleotide_counts,
            nucleotide_percentages=nucleotide_percentages,
            gc_assessment=gc_assessment,
        )

    def _prefix_counts(self, mask: np.ndarray) -> np.ndarray:
        prefix = np.zeros(len(mask) + 1, dtype=np.int64)
        np.cumsum(mask, dtype=np.int64, out=prefix[1:])
        return prefix

    def _cpg_prefixes(self, codes: np.ndarray) -> dict[str, np.ndarray]:
        is_c = codes == _C
        is_g = codes == _G
        # cg[i] marks a C at i followed by a G at i + 1
        cg = np.zeros(len(codes), dtype=bool)
        cg[:-1] = is_c[:-1] & is_g[1:]
        return {
            "c": self._prefix_counts(is_c),
            "g": self._prefix_counts(is_g),
            "cg": self._prefix_counts(cg),
        }

    def _region_stats(
        self, prefixes: dict[str, np.ndarray], starts: np.ndarray, ends: np.ndarray
    ) -> tuple[np.ndarray, np.ndarray]:
        lengths = (ends - starts).astype(float)
        c_counts = (prefixes["c"][ends] - prefixes["c"][starts]).astype(float)
        g_counts = (prefixes["g"][ends] - prefixes["g"][starts]).astype(float)
        # a CG pair must start at or before end - 2 to lie inside the region
        cg_counts = (prefixes["cg"][ends - 1] - prefixes["cg"][starts]).astype(float)

        gc_values = (c_counts + g_counts) * PERCENTAGE_MULTIPLIER / lengths
        expected = c_counts * g_counts / lengths
        ratios = np.divide(cg_counts, expected, out=np.zeros_like(expected), where=expected > 0)
        return gc_values, ratios

    def _merge_windows(self, starts: np.ndarray, window: int) -> list[tuple[int, int]]:
        merged: list[tuple[int, int]] = []
        for start in starts.tolist():
            end = start + window
            if merged and start <= merged[-1][1]:
                merged[-1] = (merged[-1][0], max(merged[-1][1], end))
            else:
                merged.append((start, end))
        return merged
