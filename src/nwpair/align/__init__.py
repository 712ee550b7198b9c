"""
Needleman-Wunsch global pairwise alignment.
"""
from nwpair.align.scoring import ScoringPolicy, SubstitutionTable, ScoringError, GAP, GAP_PENALTY
from nwpair.align.matrix import AlignmentMatrix, Direction
from nwpair.align.trace import Traceback, traceback
from nwpair.align.alignment import Aligner, AlignmentResult, ScoreDivergenceError, accumulate_score, align

__all__ = [
    'ScoringPolicy', 'SubstitutionTable', 'ScoringError', 'GAP', 'GAP_PENALTY',
    'AlignmentMatrix', 'Direction',
    'Traceback', 'traceback',
    'Aligner', 'AlignmentResult', 'ScoreDivergenceError', 'accumulate_score', 'align'
]
