"""
Report generation for variant annotation.
"""

import sys
from collections import Counter
from typing import List

from varfeature.analysis.qc import format_fail_reasons
from varfeature.core.constants import DEFAULT_BASE_URI
from varfeature.core.models import AnnotationResult, QcFailure
from varfeature.rdf.converter import RDFConverter

TEXT_COLUMNS = [
    'name', 'allele_string', 'seq_region', 'start', 'end', 'strand',
    'label', 'source', 'failed', 'hgvs', 'consequences'
]


class ReportWriter:
    """Base class for report generation."""

    def __init__(self, output=None):
        """
        Initialize the report writer.

        Args:
            output: Output file path or None for stdout
        """
        self.output = output
        self.out = None

    def open(self):
        """Open the output file."""
        self.out = open(self.output, 'w') if self.output else sys.stdout

    def close(self):
        """Close the output file if it was opened."""
        if self.out and self.out != sys.stdout:
            self.out.close()

    def write_report(self, results: List[AnnotationResult]):
        """
        Write a report.

        Args:
            results: Annotation results, one per variant
        """
        raise NotImplementedError("Subclasses must implement write_report")


class TextReportWriter(ReportWriter):
    """Generate tab-delimited text reports."""

    def write_report(self, results: List[AnnotationResult]):
        """
        Write one tab-delimited line per variant followed by a QC summary.

        Args:
            results: Annotation results, one per variant
        """
        self.open()
        try:
            self.out.write("# Variant Annotation Report\n")
            self.out.write("#" + "\t".join(TEXT_COLUMNS) + "\n")

            for result in results:
                self.out.write("\t".join(self.format_result(result)) + "\n")

            self._write_summary(results)
        finally:
            self.close()

    @staticmethod
    def format_result(result: AnnotationResult) -> List[str]:
        """Format an annotation result as report columns."""
        variant = result.variant
        return [
            variant.name or '',
            result.allele_string,
            variant.seq_region_name or '',
            str(variant.start),
            str(variant.end),
            str(variant.strand),
            variant.label or '',
            variant.source or '',
            format_fail_reasons(result.qc_failures),
            ";".join(result.hgvs),
            ",".join(str(c) for c in result.consequences)
        ]

    def _write_summary(self, results: List[AnnotationResult]):
        counts = Counter(code for result in results for code in result.qc_failures)
        failed = sum(1 for result in results if result.qc_failures)

        self.out.write(f"# Variants: {len(results)}, failed QC: {failed}\n")
        for code in sorted(counts):
            self.out.write(f"#   {int(code)} {QcFailure(code).name}: {counts[code]}\n")


class RDFReportWriter(ReportWriter):
    """Generate RDF reports."""

    def __init__(self, output=None, format='turtle', base_uri=DEFAULT_BASE_URI):
        """
        Initialize the RDF report writer.

        Args:
            output: Output file path or None for stdout
            format: RDF serialization format
            base_uri: Base URI for the RDF graph
        """
        super().__init__(output)
        self.format = format
        self.base_uri = base_uri
        self.converter = RDFConverter(base_uri=base_uri)

    def write_report(self, results: List[AnnotationResult]):
        """
        Write an RDF report.

        Args:
            results: Annotation results, one per variant
        """
        graph = self.converter.create_annotation_report(results)
        self.converter.output_report(graph, self.output, self.format)


def get_report_writer(format='text', output=None, rdf_format='turtle', base_uri=DEFAULT_BASE_URI) -> ReportWriter:
    """Create the report writer for an output format."""
    if format == 'rdf':
        return RDFReportWriter(output, format=rdf_format, base_uri=base_uri)
    return TextReportWriter(output)
