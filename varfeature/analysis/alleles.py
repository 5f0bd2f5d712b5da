"""
Allele string normalization and allele-level checks.
"""

import logging
import re
from typing import List, Optional, Tuple

from Bio.Data.IUPACData import ambiguous_dna_values

from varfeature.core.constants import (
    ALLELE_SEPARATOR,
    GAP,
    MAX_ALLELE_LENGTH,
    NUCLEOTIDES,
    STORED_ALLELE_MAX_LENGTH,
    SYMBOLIC_DELETION_SUFFIX,
)
from varfeature.core.utils import reverse_complement

# IUPAC DNA letters that stand for more than one base
AMBIGUITY_SYMBOLS = frozenset(ambiguous_dna_values) - NUCLEOTIDES

# Sorted base set -> IUPAC code; X duplicates N so it is left out
_CODE_FOR_BASES = {''.join(sorted(bases)): code
                   for code, bases in ambiguous_dna_values.items() if code != 'X'}

_SEQUENCE_RE = re.compile(f"^[{''.join(sorted(ambiguous_dna_values))}]+$", re.IGNORECASE)
_SYMBOLIC_RE = re.compile(r'^(\d+)' + SYMBOLIC_DELETION_SUFFIX + '$')


def split_alleles(allele_string: str) -> List[str]:
    """Split an allele string into its alleles."""
    return allele_string.split(ALLELE_SEPARATOR)


def is_nucleotide(allele: str) -> bool:
    """True for non-empty alleles made only of A, C, G and T."""
    return bool(allele) and set(allele.upper()) <= NUCLEOTIDES


def is_symbolic(allele: str) -> bool:
    """True for the size-tagged "<N>_base_deletion" form."""
    return bool(_SYMBOLIC_RE.match(allele))


def symbolic_length(allele: str) -> Optional[int]:
    """Recorded length of a symbolic allele, None for anything else."""
    match = _SYMBOLIC_RE.match(allele)
    return int(match.group(1)) if match else None


def symbolic_deletion(length: int) -> str:
    return f"{length}{SYMBOLIC_DELETION_SUFFIX}"


def normalize(allele_string: str, strand: int = 1, max_length: int = MAX_ALLELE_LENGTH) -> str:
    """
    Canonicalize an allele string to the forward strand.

    On the reverse strand each sequence allele is reverse complemented in
    place, so the ref/alt order is kept. Gap and named alleles are left as they
    are. Alleles longer than max_length are replaced by their symbolic form.

    Args:
        allele_string: '/'-separated alleles, reference first
        strand: Strand the alleles are reported on (1 or -1)
        max_length: Longest allele kept as literal sequence

    Returns:
        Normalized allele string
    """
    alleles = []
    for allele in split_alleles(allele_string):
        if strand < 0 and _SEQUENCE_RE.match(allele):
            allele = reverse_complement(allele)
        if len(allele) > max_length:
            logging.debug(f"Replacing {len(allele)} bp allele with symbolic form")
            allele = symbolic_deletion(len(allele))
        alleles.append(allele)
    return ALLELE_SEPARATOR.join(alleles)


def check_four_bases(allele_string: str) -> bool:
    """True when the alleles cover all of A, C, G and T (an "any base" call)."""
    alleles = {allele.upper() for allele in split_alleles(allele_string)}
    return NUCLEOTIDES <= alleles


def find_ambiguous_alleles(allele_string: str) -> List[str]:
    """Get the alleles that contain an IUPAC ambiguity symbol."""
    ambiguous = []
    for allele in split_alleles(allele_string):
        if is_symbolic(allele):
            continue
        if set(allele.upper()) & AMBIGUITY_SYMBOLS:
            ambiguous.append(allele)
    return ambiguous


def check_for_ambiguous_alleles(allele_string: str) -> bool:
    """True when any allele contains an IUPAC ambiguity symbol."""
    return len(find_ambiguous_alleles(allele_string)) > 0


def remove_ambiguous_alleles(allele_string: str) -> str:
    """Drop ambiguous alleles from an allele string, keeping the order of the rest."""
    ambiguous = set(find_ambiguous_alleles(allele_string))
    return ALLELE_SEPARATOR.join(a for a in split_alleles(allele_string) if a not in ambiguous)


def trim_alleles(ref: str, alt: str, start: int, end: int) -> Tuple[str, str, int, int]:
    """
    Remove the bases shared by the start, then the end, of two alleles.

    Coordinates follow the trimmed reference allele; an empty reference
    allele ends up with end == start - 1, the insertion convention.

    Args:
        ref: Reference allele ('-' for none)
        alt: Alternate allele ('-' for none)
        start: First reference base
        end: Last reference base

    Returns:
        Tuple of (ref, alt, start, end) with '' for empty alleles
    """
    ref = '' if ref == GAP else ref
    alt = '' if alt == GAP else alt

    while ref and alt and ref[0] == alt[0]:
        ref, alt = ref[1:], alt[1:]
        start += 1

    while ref and alt and ref[-1] == alt[-1]:
        ref, alt = ref[:-1], alt[:-1]
        end -= 1

    return ref, alt, start, end


def ambiguity_code(allele_string: str) -> Optional[str]:
    """
    Get the IUPAC ambiguity code for a set of single-base alleles.

    Args:
        allele_string: '/'-separated alleles

    Returns:
        IUPAC code ('A/G' -> 'R'), or None when any allele is not a single base
    """
    bases = set()
    for allele in split_alleles(allele_string):
        allele = allele.upper()
        if len(allele) != 1 or allele not in NUCLEOTIDES:
            return None
        bases.add(allele)
    return _CODE_FOR_BASES.get(''.join(sorted(bases)))


def variation_class(allele_string: str) -> str:
    """
    Classify an allele string the way dbSNP does.

    Returns one of 'snp', 'cnv', 'cnv probe', 'hgmd_mutation', 'named',
    'in-del', 'substitution', 'microsat', 'mixed' or 'unknown'.
    """
    if re.match(r'^[ACGTN]([|\\/][ACGTN])+$', allele_string, re.IGNORECASE):
        return 'snp'
    if allele_string == 'cnv':
        return 'cnv'
    if re.search(r'CNV_PROBE', allele_string, re.IGNORECASE):
        return 'cnv probe'
    if re.search(r'HGMD_MUTATION', allele_string, re.IGNORECASE):
        return 'hgmd_mutation'

    alleles = re.split(r'[|\\/]', allele_string)

    if len(alleles) == 1:
        return 'named'

    if len(alleles) == 2:
        first, second = alleles
        if (re.fullmatch(r'[ACGTN]+', first) and second == GAP) or \
                (first == GAP and re.fullmatch(r'[ACGTN]+', second)):
            return 'in-del'
        if re.search(r'LARGE|INS|DEL', first) or re.search(r'LARGE|INS|DEL', second):
            return 'named'
        if sum(first.count(b) for b in 'ACGT') > 1 or sum(second.count(b) for b in 'ACGT') > 1:
            return 'substitution'
        logging.warning(f"Can't determine the class for alleles {allele_string}")
        return 'unknown'

    if re.search(r'\d+', alleles[0]):
        return 'microsat'
    if any(GAP in allele for allele in alleles):
        return 'mixed'
    logging.warning(f"Can't determine the class for alleles {allele_string}")
    return 'unknown'


def storage_alleles(allele_string: str, max_length: int = STORED_ALLELE_MAX_LENGTH) -> List[str]:
    """
    Get the alleles as a store would record them.

    Long alleles become "<N>_base_deletion", named deletion/insertion alleles
    are kept verbatim and everything else is upper-cased.
    """
    stored = []
    for allele in split_alleles(allele_string):
        if len(allele) > max_length:
            stored.append(symbolic_deletion(len(allele)))
        elif re.search(r'deletion|insertion', allele):
            stored.append(allele)
        else:
            stored.append(allele.upper())
    return stored
