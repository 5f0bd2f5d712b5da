"""
Closed vocabulary of consequence types and their severity ranks.

Lower rank means more severe. The ranks are data, shipped with the package
and versioned; comparison code looks them up here instead of hardcoding them.
"""

from enum import Enum
from types import MappingProxyType
from typing import Mapping, Union


VOCABULARY_VERSION = "1"


class ConsequenceType(Enum):
    """Enumeration of consequence types."""
    ESSENTIAL_SPLICE_SITE = "ESSENTIAL_SPLICE_SITE"
    STOP_GAINED = "STOP_GAINED"
    STOP_LOST = "STOP_LOST"
    FRAMESHIFT_CODING = "FRAMESHIFT_CODING"
    NON_SYNONYMOUS_CODING = "NON_SYNONYMOUS_CODING"
    SPLICE_SITE = "SPLICE_SITE"
    SYNONYMOUS_CODING = "SYNONYMOUS_CODING"
    REGULATORY_REGION = "REGULATORY_REGION"
    FIVE_PRIME_UTR = "5PRIME_UTR"
    THREE_PRIME_UTR = "3PRIME_UTR"
    INTRONIC = "INTRONIC"
    UPSTREAM = "UPSTREAM"
    DOWNSTREAM = "DOWNSTREAM"
    INTERGENIC = "INTERGENIC"

    def __str__(self):
        return self.value


RANKS: Mapping[ConsequenceType, int] = MappingProxyType({
    ConsequenceType.ESSENTIAL_SPLICE_SITE: 1,
    ConsequenceType.STOP_GAINED: 2,
    ConsequenceType.STOP_LOST: 3,
    ConsequenceType.FRAMESHIFT_CODING: 4,
    ConsequenceType.NON_SYNONYMOUS_CODING: 5,
    ConsequenceType.SPLICE_SITE: 6,
    ConsequenceType.SYNONYMOUS_CODING: 7,
    ConsequenceType.REGULATORY_REGION: 8,
    ConsequenceType.FIVE_PRIME_UTR: 9,
    ConsequenceType.THREE_PRIME_UTR: 10,
    ConsequenceType.INTRONIC: 11,
    ConsequenceType.UPSTREAM: 12,
    ConsequenceType.DOWNSTREAM: 13,
    ConsequenceType.INTERGENIC: 14,
})

# Splice-site tags are ranked among themselves and reported in their own slot
SPLICE_SITE_RANKS: Mapping[ConsequenceType, int] = MappingProxyType({
    ConsequenceType.ESSENTIAL_SPLICE_SITE: 1,
    ConsequenceType.SPLICE_SITE: 2,
})

REGULATORY_RANKS: Mapping[ConsequenceType, int] = MappingProxyType({
    ConsequenceType.REGULATORY_REGION: 1,
})


def to_consequence_type(tag: Union[str, ConsequenceType]) -> ConsequenceType:
    """
    Convert a tag to a ConsequenceType.

    Accepts enum members, their values ('5PRIME_UTR') or their names
    ('FIVE_PRIME_UTR'). Raises ValueError for anything outside the vocabulary.
    """
    if isinstance(tag, ConsequenceType):
        return tag
    try:
        return ConsequenceType(tag)
    except ValueError:
        if tag in ConsequenceType.__members__:
            return ConsequenceType[tag]
        raise
