"""Needleman-Wunsch dynamic-programming score and direction tables."""
from enum import IntEnum
from typing import Union

import numpy as np

from nwpair.core.seq import Seq, SeqError, EmptySequenceError
from nwpair.align.scoring import ScoringPolicy, GAP, GAP_PENALTY
from nwpair.utils.resources import jit


# Constants ------------------------------------------------------------------------------------------------------------
class Direction(IntEnum):
    """Predecessor of a cell on its optimal path, listed in tie-break priority order."""
    DIAGONAL = 0
    LEFT = 1
    UP = 2


# Plain ints for the compiled kernels
_DIAGONAL = int(Direction.DIAGONAL)
_LEFT = int(Direction.LEFT)
_UP = int(Direction.UP)


# Classes --------------------------------------------------------------------------------------------------------------
class AlignmentMatrix:
    """
    The filled ``(len(seq_b) + 1) x (len(seq_a) + 1)`` score table and its same-shaped direction table.

    ``seq_a`` runs along the columns and ``seq_b`` along the rows. Row 0 points ``LEFT`` and column 0 points ``UP``,
    so a traceback that reaches an edge walks straight to the origin.

    Attributes:
        scores (np.ndarray): ``int64`` cell scores.
        directions (np.ndarray): ``int8`` ``Direction`` codes.

    Examples:
        >>> m = AlignmentMatrix.fill('ACGT', 'AGT', ScoringPolicy())
        >>> m.shape
        (4, 5)
        >>> m.score
        1
    """
    __slots__ = ('scores', 'directions', 'gap_penalty')
    SCORE_DTYPE = np.int64
    DIRECTION_DTYPE = np.int8

    def __init__(self, scores: np.ndarray, directions: np.ndarray, gap_penalty: int = GAP_PENALTY):
        if scores.shape != directions.shape: raise ValueError('Score and direction tables must have the same shape')
        self.scores = scores
        self.directions = directions
        self.gap_penalty = gap_penalty

    def __repr__(self): return f"AlignmentMatrix{self.shape}"

    @property
    def shape(self) -> tuple[int, int]: return self.scores.shape
    @property
    def height(self) -> int: return self.scores.shape[0]
    @property
    def width(self) -> int: return self.scores.shape[1]
    @property
    def score(self) -> int:
        """Optimal global alignment score, read from the bottom-right cell."""
        return int(self.scores[-1, -1])

    @classmethod
    def fill(cls, seq_a: Union[Seq, str], seq_b: Union[Seq, str], scoring: ScoringPolicy = None,
             gap_penalty: int = GAP_PENALTY) -> 'AlignmentMatrix':
        """
        Builds and fills the tables for ``seq_a`` (columns) against ``seq_b`` (rows).

        Each cell takes the best of the diagonal (substitution), left and up (gap) candidates. Ties resolve
        ``DIAGONAL`` over ``LEFT`` over ``UP``.

        Args:
            seq_a: Column sequence.
            seq_b: Row sequence.
            scoring: Residue scoring policy (fixed +1/-1 if omitted).
            gap_penalty: Score added for each gap position.

        Returns:
            The filled ``AlignmentMatrix``.

        Raises:
            EmptySequenceError: If either sequence is empty.
            SeqError: If either sequence contains the gap character.
        """
        seq_a, seq_b = check_residues(seq_a, seq_b)
        if scoring is None: scoring = ScoringPolicy()
        shape = (len(seq_b) + 1, len(seq_a) + 1)
        scores = np.empty(shape, dtype=cls.SCORE_DTYPE)
        directions = np.empty(shape, dtype=cls.DIRECTION_DTYPE)
        _fill_kernel(seq_a.encoded, seq_b.encoded, scoring.matrix, gap_penalty, scores, directions)
        return cls(scores, directions, gap_penalty)


# Functions ------------------------------------------------------------------------------------------------------------
def check_residues(seq_a: Union[Seq, str], seq_b: Union[Seq, str]) -> tuple[Seq, Seq]:
    """
    Converts both inputs to ``Seq`` and rejects pairs that cannot be aligned.

    The gap character is reserved for aligned output; a residue spelled that way would be rescored as a gap.

    Raises:
        EmptySequenceError: If either sequence is empty.
        SeqError: If either sequence contains the gap character.
    """
    seq_a, seq_b = Seq(seq_a), Seq(seq_b)
    if not seq_a or not seq_b: raise EmptySequenceError("Cannot align an empty sequence")
    for seq in (seq_a, seq_b):
        if GAP in str(seq): raise SeqError(f"Sequence {seq!r} contains the gap character {GAP!r}")
    return seq_a, seq_b


# Kernels --------------------------------------------------------------------------------------------------------------
@jit(nopython=True, cache=True, nogil=True)
def _fill_kernel(seq_a, seq_b, matrix, gap_penalty, scores, directions):
    height, width = scores.shape

    # Edges
    for c in range(width):
        scores[0, c] = c * gap_penalty
        directions[0, c] = _LEFT
    for r in range(1, height):
        scores[r, 0] = r * gap_penalty
        directions[r, 0] = _UP

    # Row-major: every cell reads the finished row above and the cell to its left
    for r in range(1, height):
        char_b = seq_b[r - 1]
        for c in range(1, width):
            best = scores[r - 1, c - 1] + matrix[seq_a[c - 1], char_b]
            source = _DIAGONAL
            left = scores[r, c - 1] + gap_penalty
            if left > best:
                best = left
                source = _LEFT
            up = scores[r - 1, c] + gap_penalty
            if up > best:
                best = up
                source = _UP
            scores[r, c] = best
            directions[r, c] = source
