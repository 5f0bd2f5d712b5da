"""
Genomic to cDNA coordinate conversion.
"""

from varfeature.core.exceptions import OutOfTranscriptBounds
from varfeature.core.models import CdnaPosition, ExonMap


class CoordinateMapper:
    """Convert genomic positions to exon/intron-aware cDNA positions on one transcript."""

    def __init__(self, exon_map: ExonMap):
        """
        Initialize the coordinate mapper.

        Args:
            exon_map: Exon structure and coding boundaries of the transcript
        """
        self.exon_map = exon_map

    def to_cdna(self, position: int) -> CdnaPosition:
        """
        Convert a genomic position to a cDNA position.

        Intronic positions are reported against the closest exon boundary
        with a +/- offset into the intron. Positions 5' of the start codon
        are negative (-1 is the base before the A of ATG), positions 3' of
        the stop codon carry a '*' prefix.

        Args:
            position: 1-based genomic position

        Returns:
            CdnaPosition

        Raises:
            OutOfTranscriptBounds: position is outside the transcript span
        """
        exon_map = self.exon_map
        if position < exon_map.start or position > exon_map.end:
            raise OutOfTranscriptBounds(position, exon_map.start, exon_map.end)

        coord, offset = self._exon_intron_position(position)
        return self._rebase(coord, offset)

    def _exon_intron_position(self, position: int):
        exons = self.exon_map.exons
        strand = self.exon_map.strand

        for i, exon in enumerate(exons):
            # Skip if the position is beyond this exon
            if position > exon.end:
                continue

            if position >= exon.start:
                if strand > 0:
                    return self.exon_map.cdna_start(i) + (position - exon.start), 0
                return self.exon_map.cdna_start(i) + (exon.end - position), 0

            # Between this exon and the previous one
            updist = position - exons[i - 1].end
            downdist = exon.start - position

            # Ties go upstream only on the forward strand
            if updist < downdist or (updist == downdist and strand >= 0):
                if strand >= 0:
                    return self.exon_map.cdna_end(i - 1), updist
                return self.exon_map.cdna_start(i - 1), -updist

            if strand >= 0:
                return self.exon_map.cdna_start(i), -downdist
            return self.exon_map.cdna_end(i), downdist

        raise OutOfTranscriptBounds(position, self.exon_map.start, self.exon_map.end)

    def _rebase(self, coord: int, offset: int) -> CdnaPosition:
        start_codon = self.exon_map.coding_start
        stop_codon = self.exon_map.coding_end

        if start_codon is None:
            return CdnaPosition(coord, offset)

        if stop_codon is not None and coord > stop_codon:
            return CdnaPosition(coord - stop_codon, offset, utr3=True)

        # There is no position 0
        coord += 1 if coord >= start_codon else 0
        return CdnaPosition(coord - start_codon, offset)


def to_cdna(position: int, exon_map: ExonMap) -> CdnaPosition:
    """Convert a genomic position to a cDNA position on the given exon map."""
    return CoordinateMapper(exon_map).to_cdna(position)
