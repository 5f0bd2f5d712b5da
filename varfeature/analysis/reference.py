"""
Reference allele checks against a sequence provider.
"""

import logging
import re

from varfeature.analysis.alleles import is_symbolic, symbolic_length
from varfeature.core.constants import GAP
from varfeature.core.exceptions import CoordinateError
from varfeature.core.models import MatchOutcome, Variant
from varfeature.core.utils import reverse_complement


def get_reference_base(variant: Variant, sequence_provider) -> str:
    """
    Get the reference sequence covered by a variant, on the variant's strand.

    Args:
        variant: Variant to look up
        sequence_provider: Object with fetch(region, start, end)

    Returns:
        Reference sequence, or '-' for an insertion

    Raises:
        CoordinateError: The coordinates are inconsistent or the provider
            cannot supply the span
    """
    if variant.end + 1 == variant.start:
        return GAP

    if variant.end < variant.start:
        raise CoordinateError(
            f"Incorrect coordinates {variant.start}-{variant.end} for {variant.name}",
            region=variant.seq_region_name, start=variant.start, end=variant.end
        )

    ref_seq = sequence_provider.fetch(variant.seq_region_name, variant.start, variant.end)
    if not ref_seq:
        raise CoordinateError(
            f"No sequence for {variant.seq_region_name}:{variant.start}-{variant.end}",
            region=variant.seq_region_name, start=variant.start, end=variant.end
        )

    if variant.strand == -1:
        ref_seq = reverse_complement(ref_seq)
    return ref_seq


def check_reference(variant: Variant, sequence_provider) -> MatchOutcome:
    """
    Compare the declared reference allele of a variant to the reference sequence.

    A mismatch is reported, never corrected. Symbolic reference alleles are
    not compared.

    Raises:
        CoordinateError: Reference sequence is unavailable for the variant span
    """
    observed = get_reference_base(variant, sequence_provider)
    expected = variant.ref_allele_string()

    if is_symbolic(expected):
        return MatchOutcome(expected=expected, observed=observed, compared=False, matches=True)

    matches = expected.upper() == observed.upper()
    if not matches:
        logging.debug(f"Reference mismatch for {variant.name}: declared {expected}, found {observed}")
    return MatchOutcome(expected=expected, observed=observed, compared=True, matches=matches)


def check_variant_size(start: int, end: int, ref_allele: str) -> bool:
    """
    Check the reference allele length agrees with the coordinates.

    Args:
        start: Variant start
        end: Variant end (start - 1 for insertions)
        ref_allele: Declared reference allele

    Returns:
        True when consistent
    """
    ref_length = end - start + 1

    # insertion - ref allele is '-'
    if ref_allele == GAP and start == end + 1:
        return True

    # repeat forms such as (CA)12 are not checked
    if re.search(r'\(\w+\)', ref_allele):
        return True

    length = symbolic_length(ref_allele)
    if length is None:
        length = len(ref_allele)

    return length == ref_length
