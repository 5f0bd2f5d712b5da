"""
Logging setup and small sequence helpers.
"""

import logging
import sys
from typing import Optional
from Bio.Seq import Seq

from varfeature.core.constants import GAP

DETAILED_FORMAT = '%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s'
INFO_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
PLAIN_FORMAT = '%(levelname)s: %(message)s'


def setup_logging(debug: bool = False, log_file: Optional[str] = None, verbose: bool = False) -> logging.Logger:
    """
    Configure the root logger for a run.

    Console output goes to stderr so that a report written to stdout stays
    clean. A log file, when given, always gets the detailed format.

    Args:
        debug: Log everything, with source locations
        log_file: Also write log records to this file
        verbose: Log progress messages without full debug output

    Returns:
        The root logger
    """
    if debug:
        log_level, log_format = logging.DEBUG, DETAILED_FORMAT
    elif verbose:
        log_level, log_format = logging.INFO, INFO_FORMAT
    else:
        log_level, log_format = logging.WARNING, PLAIN_FORMAT

    logger = logging.getLogger()
    logger.setLevel(log_level)
    logger.handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(logging.Formatter(log_format))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(log_level)
        file_handler.setFormatter(logging.Formatter(DETAILED_FORMAT))
        logger.addHandler(file_handler)

    # rdflib is chatty at INFO when serializing
    if not debug:
        logging.getLogger('rdflib').setLevel(logging.WARNING)

    return logger


def reverse_complement(sequence: str) -> str:
    """Reverse complement a nucleotide sequence; the gap allele is returned unchanged."""
    if sequence == GAP:
        return sequence
    return str(Seq(sequence).reverse_complement())
