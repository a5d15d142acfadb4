# Nucleotide alphabets
DNA_BASES = "ATGC"
VALID_DNA_CHARACTERS = frozenset("ATGCN")
AMBIGUOUS_BASE = "N"
WHITESPACE_CHARACTERS = " \t\r\n"

# Genetic code
BIO_CODON_LENGTH = 3
BIO_START_CODONS = ("ATG",)
BIO_STOP_CODONS = ("TAA", "TAG", "TGA")
BIO_STOP_SYMBOL = "*"
BIO_UNKNOWN_AMINO_ACID = "X"
BIO_UNKNOWN_AMINO_ACID_NAME = "Unknown"
BIO_STOP_NAME = "Stop"
BIO_STANDARD_TABLE_ID = 1
BIO_READING_FRAMES = (0, 1, 2)
AMINO_ACID_NAMES = {
    "A": "Alanine",
    "R": "Arginine",
    "N": "Asparagine",
    "D": "Aspartic acid",
    "C": "Cysteine",
    "Q": "Glutamine",
    "E": "Glutamic acid",
    "G": "Glycine",
    "H": "Histidine",
    "I": "Isoleucine",
    "L": "Leucine",
    "K": "Lysine",
    "M": "Methionine",
    "F": "Phenylalanine",
    "P": "Proline",
    "S": "Serine",
    "T": "Threonine",
    "W": "Tryptophan",
    "Y": "Tyrosine",
    "V": "Valine",
}
BIO_MIN_ORF_LENGTH = 75

# Composition
PERCENTAGE_MULTIPLIER = 100.0
BIO_GC_LOW_THRESHOLD = 40.0
BIO_GC_HIGH_THRESHOLD = 60.0
GC_LOW_LABEL = "Low GC content"
GC_HIGH_LABEL = "High GC content"
GC_OPTIMAL_LABEL = "Optimal GC content"
DEFAULT_GC_WINDOW_SIZE = 100

# CpG islands
CPG_DINUCLEOTIDE = "CG"
DEFAULT_CPG_WINDOW_SIZE = 200
DEFAULT_CPG_STEP = 1
DEFAULT_CPG_MIN_GC = 50.0
DEFAULT_CPG_MIN_RATIO = 0.6

# FASTA
FASTA_HEADER_PREFIX = ">"
FASTA_FIELD_SEPARATOR = "|"
FASTA_ACCESSION_PATTERN = r"[A-Z]{2}_\d+\.\d+"
DEFAULT_FASTA_LINE_WIDTH = 80

# Restriction enzymes
CUT_SITE_MARKER = "^"
FORWARD_STRAND = "+"
REVERSE_STRAND = "-"

# Labels
UNKNOWN_LABEL = "Unknown"
ENGINE_METHOD_LABEL = "helixscope sequence engine"
