"""
Parsers for transcript-level inputs: exon maps and per-transcript consequences.
"""

import json
import logging
import re
import time
from collections import defaultdict
from typing import Dict, List

from varfeature.core.models import Exon, ExonMap, Transcript, TranscriptConsequence
from varfeature.analysis.consequence import validate_consequence_type


class TranscriptParser:
    """
    Parser for transcript model files.

    The file is a JSON list of objects:
    {"name": ..., "seq_region": ..., "strand": 1, "exons": [[start, end], ...],
     "coding_start": ..., "coding_end": ..., "gene": ...}
    """

    def parse(self, transcript_file: str) -> List[Transcript]:
        """
        Parse a transcript model file.

        Args:
            transcript_file: Path to the JSON file

        Returns:
            List of Transcript objects
        """
        start_time = time.time()
        logging.info(f"Parsing transcript file: {transcript_file}")

        with open(transcript_file, 'r') as f:
            records = json.load(f)

        transcripts = []
        for i, record in enumerate(records, 1):
            try:
                exon_map = ExonMap(
                    exons=[Exon(int(start), int(end)) for start, end in record['exons']],
                    strand=int(record.get('strand', 1)),
                    coding_start=record.get('coding_start'),
                    coding_end=record.get('coding_end')
                )
                transcripts.append(Transcript(
                    name=record['name'],
                    seq_region_name=re.sub(r'^chr', '', str(record['seq_region'])),
                    exon_map=exon_map,
                    gene_name=record.get('gene')
                ))
            except (KeyError, TypeError, ValueError) as e:
                logging.warning(f"Record {i}: Invalid transcript model, skipping: {e}")

        elapsed = time.time() - start_time
        logging.info(f"Finished parsing transcripts in {elapsed:.2f}s: {len(transcripts)} transcripts")

        return transcripts


class ConsequenceParser:
    """
    Parser for per-transcript consequence files.

    Tab-delimited columns: variant name, transcript name, gene name,
    comma-separated consequence types.
    """

    def parse(self, consequence_file: str) -> Dict[str, List[TranscriptConsequence]]:
        """
        Parse a consequence file.

        Args:
            consequence_file: Path to the consequence file

        Returns:
            Dictionary of variant name to its transcript consequences
        """
        consequences = defaultdict(list)

        with open(consequence_file, 'r') as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line or line.startswith('#'):
                    continue

                fields = line.split('\t')
                if len(fields) < 4:
                    logging.warning(f"Line {line_num}: Invalid consequence record, missing fields")
                    continue

                try:
                    types = [validate_consequence_type(tag.strip()) for tag in fields[3].split(',') if tag.strip()]
                except ValueError as e:
                    logging.warning(f"Line {line_num}: {e}")
                    continue

                consequences[fields[0]].append(TranscriptConsequence(
                    transcript_name=fields[1],
                    consequence_types=types,
                    gene_name=fields[2] or None
                ))

        logging.info(f"Read consequences for {len(consequences)} variants")
        return dict(consequences)
