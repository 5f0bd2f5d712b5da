#!/usr/bin/env python3
"""
Command-line interface for variant annotation: QC, HGVS notation and consequences.
"""

import argparse
import logging
import sys

from varfeature.core.annotator import VariantAnnotator
from varfeature.core.constants import DEFAULT_BASE_URI
from varfeature.core.utils import setup_logging
from varfeature.io.report_writer import get_report_writer
from varfeature.io.sequence_provider import FastaSequenceProvider
from varfeature.io.transcript_parser import ConsequenceParser, TranscriptParser
from varfeature.io.variant_parser import VariantParser


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description='Check variant records against a reference and describe them in HGVS notation.')
    parser.add_argument('variant_file', help='Tab-delimited variant records')

    # Input options
    input_group = parser.add_argument_group('Input Options')
    input_group.add_argument('--fasta', required=True, help='Reference genome FASTA file')
    input_group.add_argument('--transcripts', help='JSON transcript models for cDNA notation')
    input_group.add_argument('--consequences', help='Tab-delimited per-transcript consequence types')

    # Output options
    output_group = parser.add_argument_group('Output Options')
    output_group.add_argument('--output', '-o', help='Output file (default: stdout)')
    output_group.add_argument('--format', '-f', choices=['text', 'rdf'], default='text',
                              help='Output format: text (default) or RDF')
    output_group.add_argument('--rdf-format', choices=['turtle', 'n3', 'xml', 'json-ld', 'ntriples'],
                              default='turtle', help='RDF serialization format (default: turtle)')
    output_group.add_argument('--base-uri', default=DEFAULT_BASE_URI,
                              help=f'Base URI for RDF output (default: {DEFAULT_BASE_URI})')

    # Processing options
    processing_group = parser.add_argument_group('Processing Options')
    processing_group.add_argument('--workers', type=int, default=1,
                                  help='Number of worker processes (default: 1)')

    # Debug and logging options
    debug_group = parser.add_argument_group('Debug Options')
    debug_group.add_argument('--debug', action='store_true', help='Enable debug output')
    debug_group.add_argument('--verbose', action='store_true', help='Enable verbose output without full debug')
    debug_group.add_argument('--log-file', help='Write log to this file')

    return parser.parse_args(argv)


def main(argv=None):
    """Main function to run variant annotation."""
    args = parse_args(argv)

    setup_logging(debug=args.debug, log_file=args.log_file, verbose=args.verbose)

    if args.workers < 1:
        logging.error("--workers must be at least 1")
        return 1

    sequence_provider = None
    try:
        sequence_provider = FastaSequenceProvider(args.fasta)

        variants = VariantParser(sequence_provider).parse(args.variant_file)
        transcripts = TranscriptParser().parse(args.transcripts) if args.transcripts else []
        consequences = ConsequenceParser().parse(args.consequences) if args.consequences else {}

        annotator = VariantAnnotator(sequence_provider, transcripts=transcripts, workers=args.workers)
        results = annotator.annotate_all(variants, consequences)

        writer = get_report_writer(
            format=args.format,
            output=args.output,
            rdf_format=args.rdf_format,
            base_uri=args.base_uri
        )
        writer.write_report(results)

        return 0

    except Exception as e:
        logging.error(f"Error during annotation: {e}")
        if args.debug:
            import traceback
            logging.error(traceback.format_exc())
        return 1

    finally:
        if sequence_provider is not None:
            sequence_provider.close()


if __name__ == "__main__":
    sys.exit(main())
