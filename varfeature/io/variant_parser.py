"""
Parser for tab-delimited variant record files.

Columns: name, allele_string, seq_region, start, end, strand, label, source.
The last two are optional. When the allele string is '.' or empty the alleles
are taken from the HGVS label, and insertion or duplication labels move the
record to the insertion convention (end = start - 1).
"""

import logging
import re
import time
from typing import List, Optional, Tuple

from varfeature.analysis.alleles import normalize
from varfeature.core.constants import GAP
from varfeature.core.exceptions import CoordinateError
from varfeature.core.models import Variant
from varfeature.core.utils import reverse_complement

_HGVS_RE = re.compile(r'(?:^|:)(?P<scheme>[gc])\.(?P<position>[0-9_+\-*?]+)(?P<change>\D.*)$')

_SUBSTITUTION_RE = re.compile(r'^(?P<ref>[ACGTN]+)>(?P<alt>[ACGTN]+)$', re.IGNORECASE)
_DELINS_RE = re.compile(r'^del(?P<ref>[ACGTN]*)ins(?P<alt>[ACGTN]*)$', re.IGNORECASE)
_DEL_RE = re.compile(r'^del(?P<ref>[ACGTN]*)$', re.IGNORECASE)
_INS_RE = re.compile(r'^ins(?P<alt>[ACGTN]*)$', re.IGNORECASE)
_DUP_RE = re.compile(r'^dup(?P<alt>[ACGTN]*)$', re.IGNORECASE)

_STRANDS = {'1': 1, '+1': 1, '+': 1, '-1': -1, '-': -1}


def hgvs_change(label: str) -> str:
    """Get the lower-cased change part of an HGVS label ('g.100_101insTT' -> 'instt')."""
    match = _HGVS_RE.search(label.strip())
    if not match:
        raise ValueError(f"Not a genomic or cDNA HGVS label: {label}")
    return match.group('change').lower()


def parse_hgvs_alleles(label: str) -> Tuple[Optional[str], Optional[str]]:
    """
    Get the reference and alternate alleles from a genomic or cDNA HGVS label.

    Sequence the label leaves out (e.g. 'g.100_102del') comes back as None.

    Args:
        label: HGVS label such as 'NC_000011.9:g.5248232T>A'

    Returns:
        Tuple of (ref, alt), '-' standing for no sequence

    Raises:
        ValueError: The label is not a DNA-level HGVS description
    """
    match = _HGVS_RE.search(label.strip())
    if not match:
        raise ValueError(f"Not a genomic or cDNA HGVS label: {label}")
    change = match.group('change')

    m = _SUBSTITUTION_RE.match(change)
    if m:
        return m.group('ref').upper(), m.group('alt').upper()

    m = _DELINS_RE.match(change)
    if m:
        return m.group('ref').upper() or None, m.group('alt').upper() or None

    m = _DEL_RE.match(change)
    if m:
        return m.group('ref').upper() or None, GAP

    m = _INS_RE.match(change)
    if m:
        return GAP, m.group('alt').upper() or None

    m = _DUP_RE.match(change)
    if m:
        return GAP, m.group('alt').upper() or None

    raise ValueError(f"Unsupported HGVS change '{change}' in {label}")


class VariantParser:
    """Parser for tab-delimited variant records."""

    def __init__(self, sequence_provider=None):
        """
        Initialize the variant parser.

        Args:
            sequence_provider: Optional provider used to read deleted bases
                that an HGVS label leaves out
        """
        self.sequence_provider = sequence_provider
        self.variants = []
        self.skipped = 0

    def parse(self, variant_file: str) -> List[Variant]:
        """
        Parse a variant record file.

        Args:
            variant_file: Path to the variant file

        Returns:
            List of Variant objects
        """
        start_time = time.time()
        logging.info(f"Parsing variant file: {variant_file}")

        with open(variant_file, 'r') as f:
            for line_num, line in enumerate(f, 1):
                line = line.rstrip('\n')
                if not line.strip() or line.startswith('#'):
                    continue

                variant = self.parse_line(line, line_num)
                if variant is None:
                    self.skipped += 1
                    continue
                self.variants.append(variant)

        elapsed = time.time() - start_time
        logging.info(f"Finished parsing variants in {elapsed:.2f}s: {len(self.variants)} variants, "
                     f"{self.skipped} skipped")

        return self.variants

    def parse_line(self, line: str, line_num: int = 0) -> Optional[Variant]:
        """Parse one record, returning None (and logging why) when it is unusable."""
        fields = line.split('\t')

        if len(fields) < 6:
            logging.warning(f"Line {line_num}: Invalid variant record, missing fields")
            return None

        name, allele_string, seq_region = fields[0], fields[1].strip(), re.sub(r'^chr', '', fields[2])
        label = fields[6] if len(fields) > 6 and fields[6] else None
        source = fields[7] if len(fields) > 7 and fields[7] else None

        try:
            start = int(fields[3])
            end = int(fields[4])
        except ValueError:
            logging.warning(f"Line {line_num}: Invalid coordinates {fields[3]}-{fields[4]}")
            return None

        strand = _STRANDS.get(fields[5].strip())
        if strand is None:
            logging.warning(f"Line {line_num}: Unknown strand: {fields[5]}")
            return None

        if allele_string in ('', '.'):
            if not label:
                logging.warning(f"Line {line_num}: No alleles and no HGVS label for {name}")
                return None
            try:
                ref, alt = parse_hgvs_alleles(label)
            except ValueError as e:
                logging.warning(f"Line {line_num}: skipping {label} - {e}")
                return None

            change = hgvs_change(label)
            if 'del' in change and ref is None:
                ref = self._deleted_bases(seq_region, start, end, strand)
            if ref is None or alt is None:
                logging.warning(f"Line {line_num}: Skipping {label} as could not determine alleles")
                return None
            # Only collapses over-long alleles; label alleles are already on the record strand
            allele_string = normalize(f"{ref}/{alt}", strand=1)

            # Insertions and duplications go between two bases: end = start - 1
            if 'ins' in change and 'del' not in change and end > start:
                start, end = end, start
            if 'dup' in change:
                start = end + 1

        try:
            return Variant(
                start=start,
                end=end,
                allele_string=allele_string,
                strand=strand,
                name=name,
                source=source,
                seq_region_name=seq_region,
                label=label
            )
        except ValueError as e:
            logging.warning(f"Line {line_num}: {e}")
            return None

    def _deleted_bases(self, seq_region: str, start: int, end: int, strand: int) -> Optional[str]:
        """Read the bases a deletion removes from the reference, on the record strand."""
        if self.sequence_provider is None:
            return None
        try:
            sequence = self.sequence_provider.fetch(seq_region, start, end).upper()
        except CoordinateError as e:
            logging.warning(f"Cannot read deleted bases at {seq_region}:{start}-{end}: {e}")
            return None
        return reverse_complement(sequence) if strand < 0 else sequence
