"""
varfeature - HGVS notation, consequence and QC annotation for sequence variants.
"""

__version__ = "0.1.0"
