"""
Exceptions raised by the annotation core.

None of these abort a batch: the annotator records them against the
variant or allele they concern and moves on.
"""


class VarfeatureError(Exception):
    """Base class for all varfeature errors."""


class CoordinateError(VarfeatureError):
    """Sequence is unavailable for a span, or a span is inconsistent."""

    def __init__(self, message, region=None, start=None, end=None):
        super().__init__(message)
        self.region = region
        self.start = start
        self.end = end


class OutOfTranscriptBounds(CoordinateError):
    """A genomic position lies upstream or downstream of the whole transcript."""

    def __init__(self, position, transcript_start, transcript_end):
        super().__init__(
            f"Position {position} is outside the transcript span "
            f"{transcript_start}-{transcript_end}",
            start=transcript_start,
            end=transcript_end
        )
        self.position = position


class UnsupportedFrame(VarfeatureError):
    """Notation was requested in a reference frame that cannot be built."""


class MalformedAllele(VarfeatureError):
    """An allele contains characters a stage needs to be clean nucleotide text."""

    def __init__(self, allele, reason):
        super().__init__(f"Allele '{allele}': {reason}")
        self.allele = allele
        self.reason = reason
