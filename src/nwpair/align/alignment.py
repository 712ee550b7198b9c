"""
Global pairwise alignment of two sequences: fill, traceback and independent rescoring.
"""
from dataclasses import dataclass
from typing import Union

import numpy as np

from nwpair.core.seq import Seq
from nwpair.align.scoring import ScoringPolicy, SubstitutionTable, GAP, GAP_PENALTY
from nwpair.align.matrix import AlignmentMatrix, check_residues
from nwpair.align.trace import traceback, MATCH_MARK


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class ScoreDivergenceError(AssertionError):
    """Raised in strict mode when the rescanned score disagrees with the matrix's terminal cell."""


# Classes --------------------------------------------------------------------------------------------------------------
@dataclass(slots=True, frozen=True)
class AlignmentResult:
    """
    Outcome of one global alignment run.

    Attributes:
        aligned_a: Column sequence with gaps inserted.
        aligned_b: Row sequence with gaps inserted.
        indicator: ``|`` where the aligned residues are identical, a space elsewhere.
        score: Total score recomputed from the aligned strings.
        diagonal_count: Number of diagonal traceback steps (matched or mismatched).
        matrix_score: Score read from the bottom-right cell of the score table.
    """
    aligned_a: str
    aligned_b: str
    indicator: str
    score: int
    diagonal_count: int
    matrix_score: int

    def __len__(self) -> int: return len(self.aligned_a)
    def __str__(self) -> str: return '\n'.join((self.aligned_a, self.indicator, self.aligned_b))

    @property
    def is_consistent(self) -> bool: return self.score == self.matrix_score
    @property
    def n_matches(self) -> int: return self.indicator.count(MATCH_MARK)
    @property
    def n_gaps(self) -> int: return self.aligned_a.count(GAP) + self.aligned_b.count(GAP)


class Aligner:
    """
    Needleman-Wunsch global aligner with a linear gap penalty.

    Each call to ``align`` allocates fresh tables; an ``Aligner`` holds only its configuration and can be reused.

    Args:
        scoring: Residue scoring policy, a ``SubstitutionTable`` or a plain ``{pair: score}`` mapping.
            Defaults to fixed +1/-1 scoring.
        gap_penalty: Score added per gap position (negative).
        strict: Raise ``ScoreDivergenceError`` if the rescanned score differs from the matrix score.

    Examples:
        >>> result = Aligner().align('ACGT', 'ACGT')
        >>> result.indicator
        '||||'
        >>> result.score
        4
    """
    __slots__ = ('scoring', 'gap_penalty', 'strict')
    def __init__(self, scoring: Union[ScoringPolicy, SubstitutionTable, dict] = None, gap_penalty: int = GAP_PENALTY,
                 strict: bool = False):
        if scoring is None: scoring = ScoringPolicy()
        elif not isinstance(scoring, ScoringPolicy): scoring = ScoringPolicy.from_table(scoring)
        self.scoring = scoring
        self.gap_penalty = gap_penalty
        self.strict = strict

    def __repr__(self): return f"Aligner({self.scoring!r}, gap_penalty={self.gap_penalty})"

    def align(self, seq_a: Union[Seq, str], seq_b: Union[Seq, str]) -> AlignmentResult:
        """
        Aligns ``seq_a`` (matrix columns) against ``seq_b`` (matrix rows).

        Raises:
            EmptySequenceError: If either sequence is empty.
            SeqError: If either sequence contains the gap character.
            ScoreDivergenceError: In strict mode, if the two score computations disagree.
        """
        seq_a, seq_b = check_residues(seq_a, seq_b)
        matrix = AlignmentMatrix.fill(seq_a, seq_b, self.scoring, self.gap_penalty)
        aligned_a, aligned_b, indicator, diagonal_count = traceback(matrix.directions, seq_a, seq_b)
        score = accumulate_score(aligned_a, aligned_b, self.scoring, self.gap_penalty)
        if self.strict and score != matrix.score:
            raise ScoreDivergenceError(f'Rescanned score {score} differs from matrix score {matrix.score}')
        return AlignmentResult(aligned_a, aligned_b, indicator, score, diagonal_count, matrix.score)


# Functions ------------------------------------------------------------------------------------------------------------
def accumulate_score(aligned_a: str, aligned_b: str, scoring: ScoringPolicy = None,
                     gap_penalty: int = GAP_PENALTY) -> int:
    """
    Recomputes the total score of a finished alignment column by column.

    A column with a gap in either sequence scores ``gap_penalty``; any other column scores
    ``scoring.score(a, b)``.

    Examples:
        >>> accumulate_score('ACGT', 'A-GT')
        1
    """
    if len(aligned_a) != len(aligned_b): raise ValueError('Aligned sequences must have the same length')
    if scoring is None: scoring = ScoringPolicy()
    a, b = Seq(aligned_a).encoded, Seq(aligned_b).encoded
    gaps = (a == ord(GAP)) | (b == ord(GAP))
    residues = ~gaps
    return int(np.count_nonzero(gaps)) * gap_penalty + int(scoring.matrix[a[residues], b[residues]].sum())


def align(seq_a: Union[Seq, str], seq_b: Union[Seq, str], scoring: Union[ScoringPolicy, SubstitutionTable, dict] = None,
          gap_penalty: int = GAP_PENALTY) -> AlignmentResult:
    """Shortcut for ``Aligner(scoring, gap_penalty).align(seq_a, seq_b)``."""
    return Aligner(scoring, gap_penalty).align(seq_a, seq_b)
