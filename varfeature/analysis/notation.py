"""
HGVS-style notation for the alleles of a variant.
"""

import logging
import re
from typing import Iterator, List, Optional, Tuple, Union

from varfeature.analysis.alleles import trim_alleles
from varfeature.analysis.coordinates import CoordinateMapper
from varfeature.core.constants import GAP
from varfeature.core.exceptions import CoordinateError, MalformedAllele, UnsupportedFrame
from varfeature.core.models import ExonMap, HgvsNotation, NotationType, ReferenceFrame, Variant
from varfeature.core.utils import reverse_complement

_CLEAN_ALLELE_RE = re.compile(r'^([ACGT]*|-)$', re.IGNORECASE)


def hgvs_variant_notation(ref: str, alt: str, start: int, end: int,
                          upstream: Optional[str] = None) -> Optional[HgvsNotation]:
    """
    Describe the change from one allele to another.

    Args:
        ref: Reference allele ('' or '-' for an insertion)
        alt: Alternate allele ('' or '-' for a deletion)
        start: First reference base
        end: Last reference base (start - 1 for an insertion)
        upstream: Reference sequence immediately 5' of start, used to
            recognise an insertion as a duplication

    Returns:
        HgvsNotation without reference name or numbering, or None when the
        alleles are identical
    """
    ref = '' if ref == GAP else ref
    alt = '' if alt == GAP else alt

    if ref == alt:
        return None

    if not ref:
        if upstream and len(upstream) >= len(alt) and upstream[-len(alt):].upper() == alt.upper():
            return HgvsNotation('', '', start - len(alt), start - 1, NotationType.DUPLICATION,
                                ref=upstream[-len(alt):].upper(), alt=alt)
        # Inserted between the two flanking bases
        return HgvsNotation('', '', start - 1, start, NotationType.INSERTION, ref='', alt=alt)

    if not alt:
        return HgvsNotation('', '', start, end, NotationType.DELETION, ref=ref, alt='')

    if len(ref) == 1 and len(alt) == 1:
        return HgvsNotation('', '', start, end, NotationType.SUBSTITUTION, ref=ref, alt=alt)

    if len(ref) == len(alt) and ref.upper() == reverse_complement(alt).upper():
        return HgvsNotation('', '', start, end, NotationType.INVERSION, ref=ref, alt=alt)

    return HgvsNotation('', '', start, end, NotationType.DELINS, ref=ref, alt=alt)


class _ReferenceFeature:
    """Span and orientation of the feature a notation is relative to."""

    def __init__(self, start: int, end: Optional[int], strand: int):
        self.start = start
        self.end = end
        self.strand = strand

    @property
    def length(self) -> Optional[int]:
        return None if self.end is None else self.end - self.start + 1

    def to_relative(self, start: int, end: int) -> Tuple[int, int]:
        if self.strand > 0:
            return start - self.start + 1, end - self.start + 1
        return self.end - end + 1, self.end - start + 1

    def to_genomic(self, position: int) -> int:
        if self.strand > 0:
            return self.start + position - 1
        return self.end - position + 1


class NotationBuilder:
    """Build HGVS notations for the alleles of a variant in a reference frame."""

    def __init__(self, sequence_provider=None):
        """
        Initialize the notation builder.

        Args:
            sequence_provider: Object with fetch(region, start, end) and
                region_length(region), used for duplication checks and to bound
                genomic notation by the region; without one insertions are never
                reported as duplications
        """
        self.sequence_provider = sequence_provider

    def build_notations(self, variant: Variant, reference_frame: ReferenceFrame = ReferenceFrame.GENOMIC,
                        reference_name: Optional[str] = None,
                        exon_map: Optional[ExonMap] = None) -> List[HgvsNotation]:
        """
        Get the notation of every distinct allele of a variant.

        Alleles that cannot be described are logged and left out. An empty
        list means the variant is not describable in this frame.

        Args:
            variant: Variant to describe
            reference_frame: GENOMIC or CDNA
            reference_name: Name to use for the reference (default: sequence region)
            exon_map: Transcript exon map, required for CDNA

        Returns:
            List of HgvsNotation, one per distinct allele
        """
        notations = []
        for allele, outcome in self.iter_notations(variant, reference_frame, reference_name, exon_map):
            if isinstance(outcome, HgvsNotation):
                notations.append(outcome)
            else:
                logging.warning(f"Skipping allele {allele} of {variant.name}: {outcome}")
        return notations

    def iter_notations(self, variant: Variant, reference_frame: ReferenceFrame = ReferenceFrame.GENOMIC,
                       reference_name: Optional[str] = None, exon_map: Optional[ExonMap] = None
                       ) -> Iterator[Tuple[str, Union[HgvsNotation, Exception]]]:
        """
        Yield (allele, notation) pairs, or (allele, error) for alleles that fail.

        Errors are MalformedAllele or CoordinateError instances; they are
        yielded rather than raised so the other alleles are still described.

        Raises:
            UnsupportedFrame: protein numbering, or cDNA numbering without an exon map
        """
        if reference_frame == ReferenceFrame.PROTEIN:
            raise UnsupportedFrame("HGVS protein notation is not supported")

        if reference_frame == ReferenceFrame.CDNA:
            if exon_map is None:
                raise UnsupportedFrame("HGVS cDNA notation needs a transcript exon map")
            feature = _ReferenceFeature(exon_map.start, exon_map.end, exon_map.strand)
            mapper = CoordinateMapper(exon_map)
        else:
            region_end = None
            if self.sequence_provider is not None:
                try:
                    region_end = self.sequence_provider.region_length(variant.seq_region_name)
                except CoordinateError as e:
                    logging.debug(f"Variant {variant.name} has no reference region: {e}")
                    return
            feature = _ReferenceFeature(1, region_end, 1)
            mapper = None

        reference_name = reference_name or variant.seq_region_name or ''

        rel_start, rel_end = feature.to_relative(variant.start, variant.end)
        if rel_start < 1 or (feature.length is not None and rel_end > feature.length):
            logging.debug(f"Variant {variant.name} does not fall within the reference feature")
            return

        # Notations are always given on the reference feature's strand
        revcomp = variant.strand * feature.strand < 0

        ref_allele = variant.ref_allele_string()
        if not _CLEAN_ALLELE_RE.match(ref_allele):
            yield ref_allele, MalformedAllele(ref_allele, "reference allele is not nucleotide sequence")
            return
        ref_allele = ref_allele.upper()
        if revcomp:
            ref_allele = reverse_complement(ref_allele)

        seen = set()
        for allele in variant.alleles:
            if not _CLEAN_ALLELE_RE.match(allele):
                yield allele, MalformedAllele(allele, "contains characters other than A, C, G, T or -")
                continue

            allele = allele.upper()
            if revcomp:
                allele = reverse_complement(allele)

            if allele in seen:
                continue
            seen.add(allele)

            ref, alt, start, end = trim_alleles(ref_allele, allele, rel_start, rel_end)

            upstream = None
            if not ref and alt:
                upstream = self._upstream_sequence(variant, feature, start, len(alt))

            notation = hgvs_variant_notation(ref, alt, start, end, upstream)

            # Identical to the reference
            if notation is None:
                continue

            notation.reference_name = reference_name
            notation.numbering = reference_frame.value
            notation.allele = allele

            if mapper is not None:
                if not exon_map.is_coding:
                    notation.numbering = ''
                try:
                    cdna_start = mapper.to_cdna(feature.to_genomic(notation.start))
                    cdna_end = mapper.to_cdna(feature.to_genomic(notation.end))
                except CoordinateError as e:
                    yield allele, e
                    continue

                # Keep start before end along the transcript
                if cdna_start.sort_key > cdna_end.sort_key:
                    cdna_start, cdna_end = cdna_end, cdna_start
                notation.start = cdna_start
                notation.end = cdna_end

            notation.render()
            yield allele, notation

    def _upstream_sequence(self, variant: Variant, feature: _ReferenceFeature,
                           start: int, length: int) -> Optional[str]:
        """Get `length` bases 5' of relative position `start`, in feature orientation."""
        if self.sequence_provider is None or start - length < 1:
            return None

        first = feature.to_genomic(start - length)
        last = feature.to_genomic(start - 1)
        try:
            sequence = self.sequence_provider.fetch(variant.seq_region_name, min(first, last), max(first, last))
        except CoordinateError as e:
            logging.debug(f"No upstream sequence for {variant.name}: {e}")
            return None

        if feature.strand < 0:
            sequence = reverse_complement(sequence)
        return sequence.upper()


def build_notations(variant: Variant, reference_frame: ReferenceFrame = ReferenceFrame.GENOMIC,
                    reference_name: Optional[str] = None, exon_map: Optional[ExonMap] = None,
                    sequence_provider=None) -> List[HgvsNotation]:
    """Build notations for a variant with a one-off NotationBuilder."""
    builder = NotationBuilder(sequence_provider)
    return builder.build_notations(variant, reference_frame, reference_name, exon_map)
