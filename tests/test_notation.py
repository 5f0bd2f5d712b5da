#!/usr/bin/env python3
"""
Tests for HGVS notation of variant alleles.
"""

import unittest
from varfeature.analysis.notation import NotationBuilder, build_notations, hgvs_variant_notation
from varfeature.core.exceptions import MalformedAllele, UnsupportedFrame
from varfeature.core.models import Exon, ExonMap, NotationType, ReferenceFrame, Variant
from varfeature.io.sequence_provider import InMemorySequenceProvider

# Position p holds 'ACGT'[(p - 1) % 4]: 97=A 98=C 99=G 100=T
REFERENCE = 'ACGT' * 25


def make_variant(start, end, allele_string, strand=1, name='var1'):
    return Variant(start=start, end=end, allele_string=allele_string, strand=strand,
                   name=name, seq_region_name='1')


class VariantNotationTests(unittest.TestCase):
    """Test cases for describing a single allele change."""

    def test_identical_alleles(self):
        self.assertIsNone(hgvs_variant_notation('A', 'A', 10, 10))
        self.assertIsNone(hgvs_variant_notation('-', '', 10, 9))

    def test_substitution(self):
        notation = hgvs_variant_notation('A', 'G', 10, 10)
        self.assertEqual(notation.type, NotationType.SUBSTITUTION)
        self.assertEqual((notation.start, notation.end), (10, 10))

    def test_deletion(self):
        notation = hgvs_variant_notation('AC', '-', 10, 11)
        self.assertEqual(notation.type, NotationType.DELETION)
        self.assertEqual(notation.ref, 'AC')

    def test_insertion_uses_flanking_bases(self):
        notation = hgvs_variant_notation('', 'TT', 11, 10)
        self.assertEqual(notation.type, NotationType.INSERTION)
        self.assertEqual((notation.start, notation.end), (10, 11))

    def test_duplication(self):
        """An insertion repeating the bases before it is a duplication."""
        notation = hgvs_variant_notation('', 'GT', 11, 10, upstream='ACGT')
        self.assertEqual(notation.type, NotationType.DUPLICATION)
        self.assertEqual((notation.start, notation.end), (9, 10))
        self.assertEqual(notation.ref, 'GT')

    def test_inversion(self):
        notation = hgvs_variant_notation('AAC', 'GTT', 10, 12)
        self.assertEqual(notation.type, NotationType.INVERSION)

    def test_delins(self):
        notation = hgvs_variant_notation('AC', 'TTT', 10, 11)
        self.assertEqual(notation.type, NotationType.DELINS)


class GenomicNotationTests(unittest.TestCase):
    """Test cases for genomic (g.) notation."""

    def setUp(self):
        self.provider = InMemorySequenceProvider({'1': REFERENCE})
        self.builder = NotationBuilder(self.provider)

    def hgvs(self, variant, builder=None):
        builder = builder or self.builder
        return [n.hgvs for n in builder.build_notations(variant)]

    def test_substitution(self):
        self.assertEqual(self.hgvs(make_variant(100, 100, 'A/G')), ['1:g.100A>G'])

    def test_one_notation_per_alternate_allele(self):
        self.assertEqual(self.hgvs(make_variant(100, 100, 'T/G/C')), ['1:g.100T>G', '1:g.100T>C'])

    def test_duplicate_alleles(self):
        """Alleles that only differ in case are described once."""
        self.assertEqual(self.hgvs(make_variant(100, 100, 'T/G/g')), ['1:g.100T>G'])

    def test_reference_allele_skipped(self):
        self.assertEqual(self.hgvs(make_variant(100, 100, 'T/T')), [])

    def test_deletion(self):
        self.assertEqual(self.hgvs(make_variant(98, 99, 'CG/-')), ['1:g.98_99delCG'])

    def test_outside_region(self):
        """Variants past the end of the sequence region are not describable."""
        self.assertEqual(self.hgvs(make_variant(200, 200, 'A/G')), [])
        self.assertEqual(self.hgvs(make_variant(100, 101, 'TA/-')), [])
        self.assertEqual(self.hgvs(Variant(start=5, end=5, allele_string='A/G', name='var2',
                                           seq_region_name='2')), [])
        self.assertEqual(self.hgvs(make_variant(200, 200, 'A/G'), NotationBuilder()), ['1:g.200A>G'])

    def test_insertion(self):
        self.assertEqual(self.hgvs(make_variant(101, 100, '-/A')), ['1:g.100_101insA'])

    def test_insertion_without_provider(self):
        """Without a sequence provider an insertion is never a duplication."""
        builder = NotationBuilder()
        self.assertEqual(self.hgvs(make_variant(101, 100, '-/T'), builder), ['1:g.100_101insT'])

    def test_duplication(self):
        self.assertEqual(self.hgvs(make_variant(101, 100, '-/T')), ['1:g.100dupT'])
        self.assertEqual(self.hgvs(make_variant(101, 100, '-/GT')), ['1:g.99_100dupGT'])

    def test_delins(self):
        self.assertEqual(self.hgvs(make_variant(97, 98, 'AC/TTT')), ['1:g.97_98delACinsTTT'])

    def test_inversion(self):
        self.assertEqual(self.hgvs(make_variant(97, 98, 'AC/GT')), ['1:g.97_98invAC'])

    def test_shared_bases_trimmed(self):
        self.assertEqual(self.hgvs(make_variant(97, 98, 'AC/AG')), ['1:g.98C>G'])

    def test_reverse_strand_variant(self):
        """Alleles of a reverse-strand variant are given on the forward strand."""
        self.assertEqual(self.hgvs(make_variant(100, 100, 'A/C', strand=-1)), ['1:g.100T>G'])

    def test_reference_name(self):
        notations = self.builder.build_notations(make_variant(100, 100, 'T/G'), reference_name='NC_000001.10')
        self.assertEqual(notations[0].hgvs, 'NC_000001.10:g.100T>G')

    def test_malformed_alternate_allele(self):
        """A malformed allele is reported and the others are still described."""
        variant = make_variant(100, 100, 'T/R/G')
        outcomes = list(self.builder.iter_notations(variant))
        self.assertEqual(len(outcomes), 2)
        self.assertEqual(outcomes[0][0], 'R')
        self.assertIsInstance(outcomes[0][1], MalformedAllele)
        self.assertEqual(outcomes[1][1].hgvs, '1:g.100T>G')

        with self.assertLogs(level='WARNING'):
            self.assertEqual(self.hgvs(variant), ['1:g.100T>G'])

    def test_malformed_reference_allele(self):
        """Nothing is described when the reference allele is not sequence."""
        outcomes = list(self.builder.iter_notations(make_variant(100, 100, 'N/A')))
        self.assertEqual(len(outcomes), 1)
        self.assertIsInstance(outcomes[0][1], MalformedAllele)

    def test_unsupported_frames(self):
        variant = make_variant(100, 100, 'T/G')
        with self.assertRaises(UnsupportedFrame):
            self.builder.build_notations(variant, ReferenceFrame.PROTEIN)
        with self.assertRaises(UnsupportedFrame):
            self.builder.build_notations(variant, ReferenceFrame.CDNA)


class CdnaNotationTests(unittest.TestCase):
    """Test cases for cDNA (c.) notation.

    Exons 10-20 and 31-40 give cDNA 1-11 and 12-21.
    """

    def setUp(self):
        self.coding = ExonMap(exons=[Exon(10, 20), Exon(31, 40)], strand=1, coding_start=3, coding_end=15)
        self.non_coding = ExonMap(exons=[Exon(10, 20), Exon(31, 40)], strand=1)
        self.reverse = ExonMap(exons=[Exon(10, 20), Exon(31, 40)], strand=-1)

    def hgvs(self, variant, name, exon_map):
        return [n.hgvs for n in build_notations(variant, ReferenceFrame.CDNA, name, exon_map)]

    def test_coding_start(self):
        self.assertEqual(self.hgvs(make_variant(12, 12, 'T/C'), 'T1', self.coding), ['T1:c.1T>C'])

    def test_intronic(self):
        self.assertEqual(self.hgvs(make_variant(22, 22, 'G/A'), 'T1', self.coding), ['T1:c.9+2G>A'])

    def test_five_prime_utr(self):
        self.assertEqual(self.hgvs(make_variant(10, 10, 'A/G'), 'T1', self.coding), ['T1:c.-2A>G'])

    def test_three_prime_utr(self):
        self.assertEqual(self.hgvs(make_variant(40, 40, 'T/A'), 'T1', self.coding), ['T1:c.*6T>A'])

    def test_non_coding(self):
        """Non-coding transcripts carry no numbering prefix."""
        self.assertEqual(self.hgvs(make_variant(12, 12, 'T/C'), 'T1', self.non_coding), ['T1:3T>C'])

    def test_non_coding_insertion(self):
        self.assertEqual(self.hgvs(make_variant(13, 12, '-/A'), 'T1', self.non_coding), ['T1:3_4insA'])

    def test_reverse_strand_transcript(self):
        """Alleles are complemented onto the transcript strand."""
        self.assertEqual(self.hgvs(make_variant(40, 40, 'A/G'), 'T2', self.reverse), ['T2:1T>C'])

    def test_reverse_strand_deletion(self):
        self.assertEqual(self.hgvs(make_variant(38, 39, 'AC/-'), 'T2', self.reverse), ['T2:2_3delGT'])

    def test_reverse_strand_variant_on_reverse_transcript(self):
        """Variant and transcript on the same strand need no complementing."""
        self.assertEqual(self.hgvs(make_variant(40, 40, 'A/G', strand=-1), 'T2', self.reverse), ['T2:1A>G'])

    def test_outside_transcript(self):
        self.assertEqual(self.hgvs(make_variant(50, 50, 'A/G'), 'T1', self.coding), [])
        self.assertEqual(self.hgvs(make_variant(9, 10, 'AA/-'), 'T1', self.coding), [])


if __name__ == '__main__':
    unittest.main()
