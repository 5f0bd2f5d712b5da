#!/usr/bin/env python3
"""
Tests for consequence resolution.
"""

import itertools
import unittest
from varfeature.analysis import consequence
from varfeature.core.consequences import RANKS, ConsequenceType, to_consequence_type
from varfeature.core.models import TranscriptConsequence


class ResolveTests(unittest.TestCase):
    """Test cases for folding per-transcript consequences."""

    def test_no_annotations(self):
        """A variant with no transcript consequences is intergenic."""
        self.assertEqual(consequence.resolve([]), [ConsequenceType.INTERGENIC])
        self.assertEqual(consequence.resolve([[]]), [ConsequenceType.INTERGENIC])

    def test_most_severe_type(self):
        resolved = consequence.resolve([['INTRONIC'], ['STOP_GAINED'], ['SYNONYMOUS_CODING']])
        self.assertEqual(resolved, [ConsequenceType.STOP_GAINED])

    def test_separate_slots(self):
        """Regulatory and splice tags are reported ahead of the most severe type."""
        annotations = [
            ['SPLICE_SITE', 'INTRONIC'],
            ['ESSENTIAL_SPLICE_SITE'],
            ['REGULATORY_REGION', 'UPSTREAM'],
        ]
        self.assertEqual(consequence.resolve(annotations), [
            ConsequenceType.REGULATORY_REGION,
            ConsequenceType.ESSENTIAL_SPLICE_SITE,
            ConsequenceType.INTRONIC,
        ])

    def test_splice_only(self):
        """Splice tags never fill the type slot."""
        resolved = consequence.resolve([[ConsequenceType.SPLICE_SITE]])
        self.assertEqual(resolved, [ConsequenceType.SPLICE_SITE, ConsequenceType.INTERGENIC])

    def test_order_independent(self):
        """The result does not depend on transcript or tag order."""
        annotations = [
            ['5PRIME_UTR', 'SPLICE_SITE'],
            ['NON_SYNONYMOUS_CODING'],
            ['REGULATORY_REGION'],
            ['DOWNSTREAM', 'ESSENTIAL_SPLICE_SITE'],
        ]
        expected = consequence.resolve(annotations)
        for permutation in itertools.permutations(annotations):
            self.assertEqual(consequence.resolve(list(permutation)), expected)
        flattened = [[tag] for annotation in annotations for tag in reversed(annotation)]
        self.assertEqual(consequence.resolve(flattened), expected)

    def test_unknown_tags_ignored(self):
        with self.assertLogs(level='WARNING') as logs:
            resolved = consequence.resolve([['NOT_A_TYPE', 'INTRONIC']])
        self.assertEqual(resolved, [ConsequenceType.INTRONIC])
        self.assertIn('NOT_A_TYPE', logs.output[0])


class ConsequenceHelperTests(unittest.TestCase):
    """Test cases for the other consequence queries."""

    def test_display_consequence(self):
        """The display consequence ranks every tag together."""
        annotations = [['SPLICE_SITE'], ['STOP_GAINED'], ['REGULATORY_REGION']]
        self.assertEqual(consequence.display_consequence(annotations), ConsequenceType.STOP_GAINED)
        self.assertEqual(consequence.display_consequence([['ESSENTIAL_SPLICE_SITE'], ['STOP_GAINED']]),
                         ConsequenceType.ESSENTIAL_SPLICE_SITE)
        self.assertEqual(consequence.display_consequence([]), ConsequenceType.INTERGENIC)

    def test_highest_splice_site(self):
        annotations = [['SPLICE_SITE'], ['ESSENTIAL_SPLICE_SITE']]
        self.assertEqual(consequence.highest_splice_site(annotations), ConsequenceType.ESSENTIAL_SPLICE_SITE)
        self.assertIsNone(consequence.highest_splice_site([['INTRONIC']]))

    def test_first_regulatory_region(self):
        self.assertEqual(consequence.first_regulatory_region([['REGULATORY_REGION']]),
                         ConsequenceType.REGULATORY_REGION)
        self.assertIsNone(consequence.first_regulatory_region([['INTRONIC']]))

    def test_resolve_for_gene(self):
        transcript_consequences = [
            TranscriptConsequence('T1', [ConsequenceType.STOP_GAINED], 'GENE1'),
            TranscriptConsequence('T2', [ConsequenceType.INTRONIC], 'GENE2'),
            TranscriptConsequence('T3', [ConsequenceType.THREE_PRIME_UTR], 'GENE2'),
        ]
        self.assertEqual(consequence.resolve_for_gene(transcript_consequences, 'GENE2'),
                         [ConsequenceType.THREE_PRIME_UTR])
        self.assertEqual(consequence.resolve_for_gene(transcript_consequences, 'GENE3'),
                         [ConsequenceType.INTERGENIC])

    def test_validate_consequence_type(self):
        self.assertEqual(consequence.validate_consequence_type('5PRIME_UTR'), ConsequenceType.FIVE_PRIME_UTR)
        self.assertEqual(consequence.validate_consequence_type('FIVE_PRIME_UTR'), ConsequenceType.FIVE_PRIME_UTR)
        with self.assertRaises(ValueError) as context:
            consequence.validate_consequence_type('MISSENSE')
        self.assertIn('allowed types', str(context.exception))


class VocabularyTests(unittest.TestCase):
    """Test cases for the consequence vocabulary."""

    def test_every_type_ranked(self):
        self.assertEqual(set(RANKS), set(ConsequenceType))
        self.assertEqual(sorted(RANKS.values()), list(range(1, 15)))

    def test_ranks_read_only(self):
        with self.assertRaises(TypeError):
            RANKS[ConsequenceType.INTERGENIC] = 0

    def test_to_consequence_type(self):
        self.assertEqual(to_consequence_type(ConsequenceType.UPSTREAM), ConsequenceType.UPSTREAM)
        self.assertEqual(str(ConsequenceType.THREE_PRIME_UTR), '3PRIME_UTR')
        with self.assertRaises(ValueError):
            to_consequence_type('upstream')


if __name__ == '__main__':
    unittest.main()
