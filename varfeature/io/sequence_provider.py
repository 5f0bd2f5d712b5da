"""
Sequence providers: look up forward-strand reference sequence by region and span.
"""

import logging
import time
from typing import Dict

from pyfaidx import Fasta

from varfeature.core.exceptions import CoordinateError


class SequenceProvider:
    """Base class for sequence providers."""

    def fetch(self, region_name: str, start: int, end: int) -> str:
        """
        Get the forward-strand sequence of region_name from start to end.

        Args:
            region_name: Sequence region (chromosome, contig) name
            start: 1-based first base
            end: 1-based last base, inclusive

        Returns:
            Sequence string

        Raises:
            CoordinateError: Unknown region or span outside the region
        """
        length = self.region_length(region_name)
        if start < 1 or end < start or end > length:
            raise CoordinateError(
                f"Span {start}-{end} is outside {region_name} (length {length})",
                region=region_name, start=start, end=end
            )
        return self._subsequence(self._resolve_name(region_name), start, end)

    def region_length(self, region_name: str) -> int:
        raise NotImplementedError("Subclasses must implement region_length")

    def _subsequence(self, region_name: str, start: int, end: int) -> str:
        raise NotImplementedError("Subclasses must implement _subsequence")

    def _has_region(self, region_name: str) -> bool:
        raise NotImplementedError("Subclasses must implement _has_region")

    def _resolve_name(self, region_name: str) -> str:
        """Find the stored name of a region, allowing for a 'chr' prefix on either side."""
        if region_name is not None:
            candidates = [region_name]
            if region_name.startswith('chr'):
                candidates.append(region_name[3:])
            else:
                candidates.append(f"chr{region_name}")
            for candidate in candidates:
                if self._has_region(candidate):
                    return candidate
        raise CoordinateError(f"Unknown sequence region: {region_name}", region=region_name)


class InMemorySequenceProvider(SequenceProvider):
    """Sequence provider backed by a dictionary of region name to sequence."""

    def __init__(self, sequences: Dict[str, str]):
        self.sequences = dict(sequences)

    def region_length(self, region_name: str) -> int:
        return len(self.sequences[self._resolve_name(region_name)])

    def _has_region(self, region_name: str) -> bool:
        return region_name in self.sequences

    def _subsequence(self, region_name: str, start: int, end: int) -> str:
        return self.sequences[region_name][start - 1:end]


class FastaSequenceProvider(SequenceProvider):
    """Sequence provider with random access to a FASTA file through its .fai index."""

    def __init__(self, fasta_file: str):
        """
        Initialize the FASTA sequence provider.

        The index is built next to the FASTA file on first use if it does not
        exist yet. Lookups read only the requested span from disk.

        Args:
            fasta_file: Path to the FASTA file
        """
        self.fasta_file = fasta_file
        self._index = None

    @property
    def index(self) -> Fasta:
        if self._index is None:
            start_time = time.time()
            logging.info(f"Opening FASTA file: {self.fasta_file}")
            self._index = Fasta(self.fasta_file, as_raw=True, sequence_always_upper=True)
            elapsed = time.time() - start_time
            logging.info(f"Indexed {len(self._index.keys())} sequences in {elapsed:.2f}s")
        return self._index

    def region_length(self, region_name: str) -> int:
        return len(self.index[self._resolve_name(region_name)])

    def _has_region(self, region_name: str) -> bool:
        return region_name in self.index.keys()

    def _subsequence(self, region_name: str, start: int, end: int) -> str:
        return str(self.index[region_name][start - 1:end])

    def close(self) -> None:
        if self._index is not None:
            self._index.close()
            self._index = None

    def __getstate__(self):
        # The open file handle cannot be pickled; workers re-open it on first use
        state = self.__dict__.copy()
        state['_index'] = None
        return state
