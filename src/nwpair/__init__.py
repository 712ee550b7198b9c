"""
Global pairwise sequence alignment (Needleman-Wunsch) for nucleotide and protein sequences.

Examples:
    >>> from nwpair.align import align
    >>> result = align('GATTACA', 'GCATGCU')
    >>> result.score
    -1
"""
from importlib.metadata import version, PackageNotFoundError


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class NwpairWarning(Warning): pass


# Imports --------------------------------------------------------------------------------------------------------------
from nwpair.core.seq import Seq, Record, SeqError, EmptySequenceError
from nwpair.align import (ScoringPolicy, SubstitutionTable, ScoringError, AlignmentMatrix, Direction, Traceback,
                          traceback, Aligner, AlignmentResult, ScoreDivergenceError, accumulate_score, GAP,
                          GAP_PENALTY)

try: __version__ = version(__name__)
except PackageNotFoundError: __version__ = '0.0.0'
