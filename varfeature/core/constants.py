"""
Constants shared by the allele, reference and notation modules.
"""

# Gap marker used in allele strings for "no sequence"
GAP = '-'

# Separator between alleles in an allele string
ALLELE_SEPARATOR = '/'

# Alleles longer than this are replaced by the "<N>_base_deletion" form
MAX_ALLELE_LENGTH = 4000

# Alleles longer than this are stored in symbolic form
STORED_ALLELE_MAX_LENGTH = 100

SYMBOLIC_DELETION_SUFFIX = '_base_deletion'

NUCLEOTIDES = frozenset('ACGT')

# Base URI for RDF output
DEFAULT_BASE_URI = "http://example.org/genomics/"
