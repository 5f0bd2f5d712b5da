"""
Data models for variant annotation.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, Flag, IntEnum
from typing import List, Optional, Tuple, Union

from varfeature.core.consequences import ConsequenceType
from varfeature.core.constants import ALLELE_SEPARATOR


class ValidationState(Flag):
    """Validation states of a variant, in their fixed storage order."""
    CLUSTER = 1
    FREQ = 2
    SUBMITTER = 4
    DOUBLEHIT = 8
    HAPMAP = 16
    THOUSAND_GENOMES = 32
    FAILED = 64
    PRECIOUS = 128


# Textual names in bit order
VALIDATION_STATE_NAMES = (
    (ValidationState.CLUSTER, 'cluster'),
    (ValidationState.FREQ, 'freq'),
    (ValidationState.SUBMITTER, 'submitter'),
    (ValidationState.DOUBLEHIT, 'doublehit'),
    (ValidationState.HAPMAP, 'hapmap'),
    (ValidationState.THOUSAND_GENOMES, '1000Genome'),
    (ValidationState.FAILED, 'failed'),
    (ValidationState.PRECIOUS, 'precious'),
)


class ReferenceFrame(Enum):
    """Coordinate space a notation is expressed in."""
    GENOMIC = "g"
    CDNA = "c"
    PROTEIN = "p"


class NotationType(Enum):
    """Enumeration of notation types."""
    SUBSTITUTION = ">"
    DELETION = "del"
    INSERTION = "ins"
    DELINS = "delins"
    DUPLICATION = "dup"
    INVERSION = "inv"


class QcFailure(IntEnum):
    """Stable QC failure codes."""
    REFERENCE_MISMATCH = 2
    ANY_BASE = 3
    AMBIGUOUS_ALLELE = 14
    COORDINATE_ERROR = 15


@dataclass
class Variant:
    """Represents a genomic variant."""
    start: int
    end: int
    allele_string: str
    strand: int = 1
    name: Optional[str] = None
    source: Optional[str] = None
    seq_region_name: Optional[str] = None
    label: Optional[str] = None
    validation_states: ValidationState = ValidationState(0)

    def __post_init__(self):
        if self.strand not in (1, -1):
            raise ValueError(f"Strand must be 1 or -1, got {self.strand}")
        if self.end < self.start - 1:
            raise ValueError(f"Variant end {self.end} is before start {self.start} - 1")

    @property
    def alleles(self) -> List[str]:
        return self.allele_string.split(ALLELE_SEPARATOR)

    @property
    def is_insertion(self) -> bool:
        return self.end == self.start - 1

    def ref_allele_string(self) -> str:
        """Get the reference allele, always the first one."""
        return self.allele_string.replace('|', '/').replace('\\', '/').split('/')[0]

    def add_validation_state(self, state: str) -> None:
        """
        Add a validation state to this variant.

        Args:
            state: Textual state name, e.g. 'cluster' or 'hapmap'
        """
        for flag, name in VALIDATION_STATE_NAMES:
            if name.lower() == state.lower():
                self.validation_states |= flag
                return
        logging.warning(f"{state} is not a recognised validation status. Recognised validation states are: "
                        f"{' '.join(name for _, name in VALIDATION_STATE_NAMES)}")

    def get_all_validation_states(self) -> List[str]:
        """Get all validation states, in storage order."""
        return [name for flag, name in VALIDATION_STATE_NAMES if flag & self.validation_states]


@dataclass
class Exon:
    """An exon interval in genomic coordinates."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start + 1


@dataclass
class ExonMap:
    """
    Exon structure of a transcript.

    Exons are kept in ascending genomic order whatever the transcript strand.
    Coding boundaries are in cDNA numbering; no coding_start means the
    transcript is non-coding.
    """
    exons: List[Exon]
    strand: int = 1
    coding_start: Optional[int] = None
    coding_end: Optional[int] = None
    _cdna_starts: List[int] = field(init=False, repr=False, default_factory=list)

    def __post_init__(self):
        if not self.exons:
            raise ValueError("An exon map needs at least one exon")
        if self.strand not in (1, -1):
            raise ValueError(f"Strand must be 1 or -1, got {self.strand}")
        if self.coding_start is None and self.coding_end is not None:
            raise ValueError("coding_end given without coding_start")
        if self.coding_start is not None and self.coding_end is not None and self.coding_end < self.coding_start:
            raise ValueError(f"coding_end {self.coding_end} is before coding_start {self.coding_start}")

        self.exons = sorted((e if isinstance(e, Exon) else Exon(*e) for e in self.exons),
                            key=lambda e: e.start)

        # cDNA numbering runs 5'->3' along the spliced transcript
        ordered = self.exons if self.strand > 0 else list(reversed(self.exons))
        starts = []
        position = 1
        for exon in ordered:
            starts.append(position)
            position += exon.length
        self._cdna_starts = starts if self.strand > 0 else list(reversed(starts))

    @property
    def start(self) -> int:
        return self.exons[0].start

    @property
    def end(self) -> int:
        return self.exons[-1].end

    @property
    def length(self) -> int:
        return self.end - self.start + 1

    @property
    def is_coding(self) -> bool:
        return self.coding_start is not None

    def cdna_start(self, index: int) -> int:
        """cDNA coordinate of the 5' base of exon `index` (genomic order)."""
        return self._cdna_starts[index]

    def cdna_end(self, index: int) -> int:
        """cDNA coordinate of the 3' base of exon `index` (genomic order)."""
        return self._cdna_starts[index] + self.exons[index].length - 1


@dataclass
class Transcript:
    """A transcript with its exon map, as supplied by the caller."""
    name: str
    seq_region_name: str
    exon_map: ExonMap
    gene_name: Optional[str] = None

    def overlaps(self, variant: Variant) -> bool:
        if variant.seq_region_name != self.seq_region_name:
            return False
        # An insertion has end == start - 1, so test against its start
        return variant.start <= self.exon_map.end and max(variant.start, variant.end) >= self.exon_map.start


@dataclass(frozen=True)
class CdnaPosition:
    """A cDNA coordinate: exonic, intronic (with offset), 5'UTR (negative) or 3'UTR (*)."""
    coord: int
    offset: int = 0
    utr3: bool = False

    @property
    def sort_key(self) -> Tuple[int, int, int]:
        return (1 if self.utr3 else 0, self.coord, self.offset)

    def __str__(self):
        text = f"*{self.coord}" if self.utr3 else str(self.coord)
        if self.offset > 0:
            text += f"+{self.offset}"
        elif self.offset < 0:
            text += str(self.offset)
        return text


Position = Union[int, CdnaPosition]


@dataclass
class HgvsNotation:
    """HGVS-style notation of one allele in one reference frame."""
    reference_name: str
    numbering: str
    start: Position
    end: Position
    type: NotationType
    ref: str = ""
    alt: str = ""
    allele: str = ""
    hgvs: str = ""

    def render(self) -> str:
        """Build the notation string and store it in `hgvs`."""
        text = f"{self.reference_name}:"
        if self.numbering:
            text += f"{self.numbering}."
        text += str(self.start)
        if str(self.end) != str(self.start):
            text += f"_{self.end}"

        if self.type == NotationType.SUBSTITUTION:
            text += f"{self.ref}>{self.alt}"
        elif self.type == NotationType.DELINS:
            text += f"del{self.ref}ins{self.alt}"
        elif self.type == NotationType.INSERTION:
            text += f"ins{self.alt}"
        else:
            # del, dup and inv all report the reference sequence
            text += f"{self.type.value}{self.ref}"

        self.hgvs = text
        return text

    def __str__(self):
        return self.hgvs or self.render()


@dataclass
class TranscriptConsequence:
    """Consequence types of a variant on one transcript."""
    transcript_name: str
    consequence_types: List[ConsequenceType] = field(default_factory=list)
    gene_name: Optional[str] = None


@dataclass
class MatchOutcome:
    """Result of comparing a declared reference allele against the reference."""
    expected: str
    observed: str
    compared: bool = True
    matches: bool = True


@dataclass
class AnnotationResult:
    """Everything computed for one variant."""
    variant: Variant
    allele_string: str
    qc_failures: frozenset = frozenset()
    notations: List[HgvsNotation] = field(default_factory=list)
    consequences: List[ConsequenceType] = field(default_factory=list)
    display_consequence: Optional[ConsequenceType] = None
    variation_class: Optional[str] = None
    ambiguity_code: Optional[str] = None
    errors: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def hgvs(self) -> List[str]:
        return [notation.hgvs for notation in self.notations]
