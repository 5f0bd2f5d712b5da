"""
QC classification of variant records.
"""

import logging
from typing import FrozenSet, Iterable

from varfeature.analysis.alleles import check_for_ambiguous_alleles, check_four_bases
from varfeature.analysis.reference import check_reference, check_variant_size
from varfeature.core.exceptions import CoordinateError
from varfeature.core.models import QcFailure, Variant


class QcClassifier:
    """Run the QC checks of a variant against a reference sequence."""

    def __init__(self, sequence_provider):
        """
        Initialize the QC classifier.

        Args:
            sequence_provider: Object with fetch(region, start, end)
        """
        self.sequence_provider = sequence_provider

    def classify(self, variant: Variant) -> FrozenSet[QcFailure]:
        """
        Get the QC failure codes of a variant.

        The reference is retrieved first; when that fails only
        COORDINATE_ERROR is reported. Otherwise every check runs and the codes
        are combined.

        Args:
            variant: Variant to check

        Returns:
            Frozen set of QcFailure codes, empty when all checks pass
        """
        try:
            outcome = check_reference(variant, self.sequence_provider)
        except CoordinateError as e:
            logging.info(f"Variant {variant.name} failed reference lookup: {e}")
            return frozenset({QcFailure.COORDINATE_ERROR})

        failures = set()

        if check_four_bases(variant.allele_string):
            failures.add(QcFailure.ANY_BASE)

        if check_for_ambiguous_alleles(variant.allele_string):
            failures.add(QcFailure.AMBIGUOUS_ALLELE)

        if outcome.compared and not outcome.matches:
            failures.add(QcFailure.REFERENCE_MISMATCH)

        if not check_variant_size(variant.start, variant.end, variant.ref_allele_string()):
            failures.add(QcFailure.COORDINATE_ERROR)

        if failures:
            logging.debug(f"Variant {variant.name} failed QC: {format_fail_reasons(failures)}")
        return frozenset(failures)


def classify(variant: Variant, sequence_provider) -> FrozenSet[QcFailure]:
    """Get the QC failure codes of a variant."""
    return QcClassifier(sequence_provider).classify(variant)


def format_fail_reasons(failures: Iterable[QcFailure]) -> str:
    """Render failure codes as a sorted comma-separated list, e.g. '2,15'."""
    return ','.join(str(int(code)) for code in sorted(failures))


def parse_fail_reasons(text: str) -> FrozenSet[QcFailure]:
    """Parse a comma-separated list of failure codes."""
    return frozenset(QcFailure(int(code)) for code in text.split(',') if code.strip())
