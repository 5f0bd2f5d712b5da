"""
Core annotation functionality: QC, notation and consequences for batches of variants.
"""

import logging
import multiprocessing as mp
import time
from typing import Dict, Iterable, List, Optional

from varfeature.analysis.alleles import ambiguity_code, normalize, variation_class
from varfeature.analysis.consequence import display_consequence, resolve
from varfeature.analysis.notation import NotationBuilder
from varfeature.analysis.qc import QcClassifier, format_fail_reasons
from varfeature.core.exceptions import VarfeatureError
from varfeature.core.models import (
    AnnotationResult,
    ExonMap,
    ReferenceFrame,
    Transcript,
    TranscriptConsequence,
    Variant,
)


class VariantAnnotator:
    """Main annotation class."""

    def __init__(self, sequence_provider, transcripts: Optional[List[Transcript]] = None, workers: int = 1):
        """
        Initialize the variant annotator.

        Args:
            sequence_provider: Object with fetch(region, start, end)
            transcripts: Transcripts to give cDNA notation against
            workers: Number of processes for annotate_all
        """
        self.sequence_provider = sequence_provider
        self.transcripts = transcripts or []
        self.workers = workers
        self.qc_classifier = QcClassifier(sequence_provider)
        self.notation_builder = NotationBuilder(sequence_provider)

    def annotate(self, variant: Variant,
                 consequences: Optional[Iterable[TranscriptConsequence]] = None) -> AnnotationResult:
        """
        Annotate a single variant.

        Failures for single alleles or transcripts are recorded on the result.

        Args:
            variant: Variant to annotate
            consequences: Per-transcript consequences of the variant

        Returns:
            AnnotationResult
        """
        result = AnnotationResult(
            variant=variant,
            allele_string=normalize(variant.allele_string, variant.strand)
        )

        result.qc_failures = self.qc_classifier.classify(variant)
        result.variation_class = variation_class(variant.allele_string)
        result.ambiguity_code = ambiguity_code(result.allele_string)

        self._add_notations(result, ReferenceFrame.GENOMIC, variant.seq_region_name)
        for transcript in self.transcripts:
            if transcript.overlaps(variant):
                self._add_notations(result, ReferenceFrame.CDNA, transcript.name, transcript.exon_map)

        consequence_sets = [tc.consequence_types for tc in consequences or []]
        result.consequences = resolve(consequence_sets)
        result.display_consequence = display_consequence(consequence_sets)

        return result

    def annotate_all(self, variants: List[Variant],
                     consequences: Optional[Dict[str, List[TranscriptConsequence]]] = None
                     ) -> List[AnnotationResult]:
        """
        Annotate a batch of variants, in parallel when workers > 1.

        Args:
            variants: Variants to annotate
            consequences: Dictionary of variant name to its transcript consequences

        Returns:
            List of AnnotationResult in input order
        """
        start_time = time.time()
        consequences = consequences or {}
        tasks = [(variant, consequences.get(variant.name, [])) for variant in variants]

        if self.workers > 1 and len(tasks) > 1:
            logging.info(f"Annotating {len(tasks)} variants in parallel")
            with mp.Pool(processes=min(self.workers, mp.cpu_count(), len(tasks))) as pool:
                results = pool.starmap(self._annotate_safely, tasks)
        else:
            results = [self._annotate_safely(variant, variant_consequences)
                       for variant, variant_consequences in tasks]

        failed = sum(1 for result in results if result.qc_failures)
        elapsed = time.time() - start_time
        logging.info(f"Annotated {len(results)} variants in {elapsed:.2f}s, {failed} failed QC")

        return results

    def _annotate_safely(self, variant: Variant, consequences: List[TranscriptConsequence]) -> AnnotationResult:
        try:
            result = self.annotate(variant, consequences)
        except VarfeatureError as e:
            logging.warning(f"Could not annotate {variant.name}: {e}")
            result = AnnotationResult(variant=variant, allele_string=variant.allele_string)
            result.errors.append((variant.name or '', str(e)))
            return result

        if result.qc_failures:
            logging.info(f"Variant {variant.name} QC failures: {format_fail_reasons(result.qc_failures)}")
        return result

    def _add_notations(self, result: AnnotationResult, frame: ReferenceFrame, reference_name: str,
                       exon_map: Optional[ExonMap] = None) -> None:
        """Add notations in one frame to the result, recording failed alleles."""
        variant = result.variant
        for allele, outcome in self.notation_builder.iter_notations(variant, frame, reference_name, exon_map):
            if isinstance(outcome, VarfeatureError):
                logging.warning(f"{variant.name} allele {allele} on {reference_name}: {outcome}")
                result.errors.append((f"{reference_name}:{allele}", str(outcome)))
            else:
                result.notations.append(outcome)
