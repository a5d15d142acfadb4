import logging

from pydantic_settings import BaseSettings

from .constants.constants import *

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    # FASTA serialization
    fasta_line_width: int = DEFAULT_FASTA_LINE_WIDTH

    # Composition
    gc_window_size: int = DEFAULT_GC_WINDOW_SIZE
    cpg_window_size: int = DEFAULT_CPG_WINDOW_SIZE
    cpg_step: int = DEFAULT_CPG_STEP
    cpg_min_gc: float = DEFAULT_CPG_MIN_GC
    cpg_min_ratio: float = DEFAULT_CPG_MIN_RATIO

    # Translation
    min_orf_length: int = BIO_MIN_ORF_LENGTH

    log_level: str = "INFO"

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        if self.fasta_line_width < 1:
            raise ValueError("HELIXSCOPE_FASTA_LINE_WIDTH must be a positive integer.")

        if self.gc_window_size < 1 or self.cpg_window_size < 1 or self.cpg_step < 1:
            raise ValueError("Window sizes and the CpG scan step must be positive integers.")

        if not 0.0 <= self.cpg_min_gc <= PERCENTAGE_MULTIPLIER:
            raise ValueError("HELIXSCOPE_CPG_MIN_GC must be a percentage between 0 and 100.")

    model_config = {
        "env_file": ".env",
        "env_prefix": "HELIXSCOPE_",
        "case_sensitive": False,
        "extra": "allow",
    }


def configure_logging(level: str = None) -> None:
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format="%(levelname)s:%(name)s:%(message)s",
    )
    logger.debug(f"Logging configured at {(level or settings.log_level).upper()}")


settings = Settings()
