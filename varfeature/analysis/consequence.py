"""
Resolution of per-transcript consequence types into the consequences to report.
"""

import logging
from typing import Iterable, List, Optional, Union

from varfeature.core.consequences import (
    RANKS,
    REGULATORY_RANKS,
    SPLICE_SITE_RANKS,
    ConsequenceType,
    to_consequence_type,
)
from varfeature.core.models import TranscriptConsequence

Tag = Union[str, ConsequenceType]


def _known_tags(annotations: Iterable[Iterable[Tag]]) -> Iterable[ConsequenceType]:
    for annotation in annotations:
        for tag in annotation:
            try:
                yield to_consequence_type(tag)
            except ValueError:
                logging.warning(f"Ignoring unknown consequence type: {tag}")


def resolve(annotations: Iterable[Iterable[Tag]]) -> List[ConsequenceType]:
    """
    Fold per-transcript consequence sets into the consequences to report.

    Regulatory and splice-site tags each keep their own slot and are reported
    ahead of the most severe remaining type, which defaults to INTERGENIC.

    Args:
        annotations: One collection of consequence tags per transcript

    Returns:
        [regulatory tag if any, splice tag if any, most severe type]
    """
    highest_regulatory = None
    highest_splice = None
    highest_type = ConsequenceType.INTERGENIC

    for consequence in _known_tags(annotations):
        if consequence in SPLICE_SITE_RANKS:
            if highest_splice is None or SPLICE_SITE_RANKS[consequence] < SPLICE_SITE_RANKS[highest_splice]:
                highest_splice = consequence
        elif consequence in REGULATORY_RANKS:
            if highest_regulatory is None or REGULATORY_RANKS[consequence] < REGULATORY_RANKS[highest_regulatory]:
                highest_regulatory = consequence
        elif RANKS[consequence] < RANKS[highest_type]:
            highest_type = consequence

    resolved = []
    if highest_regulatory is not None:
        resolved.append(highest_regulatory)
    if highest_splice is not None:
        resolved.append(highest_splice)
    resolved.append(highest_type)
    return resolved


def display_consequence(annotations: Iterable[Iterable[Tag]]) -> ConsequenceType:
    """Get the single most severe consequence over the full rank table."""
    highest = ConsequenceType.INTERGENIC
    for consequence in _known_tags(annotations):
        if RANKS[consequence] < RANKS[highest]:
            highest = consequence
    return highest


def highest_splice_site(annotations: Iterable[Iterable[Tag]]) -> Optional[ConsequenceType]:
    """Get the most severe splice-site tag, if any."""
    resolved = resolve(annotations)
    return next((c for c in resolved if c in SPLICE_SITE_RANKS), None)


def first_regulatory_region(annotations: Iterable[Iterable[Tag]]) -> Optional[ConsequenceType]:
    """Get the regulatory-region tag, if any transcript has one."""
    resolved = resolve(annotations)
    return next((c for c in resolved if c in REGULATORY_RANKS), None)


def resolve_for_gene(transcript_consequences: Iterable[TranscriptConsequence],
                     gene_name: str) -> List[ConsequenceType]:
    """Resolve consequences using only the transcripts of one gene."""
    return resolve(tc.consequence_types for tc in transcript_consequences if tc.gene_name == gene_name)


def validate_consequence_type(tag: Tag) -> ConsequenceType:
    """
    Check a tag belongs to the consequence vocabulary.

    Raises:
        ValueError: The tag is not an allowed consequence type
    """
    try:
        return to_consequence_type(tag)
    except ValueError:
        allowed = ', '.join(c.value for c in ConsequenceType)
        raise ValueError(f"{tag} is not an allowed consequence type. The allowed types are: {allowed}") from None
