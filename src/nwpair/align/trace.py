"""Reconstruction of the gapped alignment from a filled direction table."""
from typing import NamedTuple, Union

import numpy as np

from nwpair.core.seq import Seq
from nwpair.align.matrix import Direction, _DIAGONAL, _LEFT, _UP
from nwpair.align.scoring import GAP
from nwpair.utils.resources import jit


# Constants ------------------------------------------------------------------------------------------------------------
MATCH_MARK = '|'
_GAP_BYTE = ord(GAP)
_MATCH_BYTE = ord(MATCH_MARK)
_SPACE_BYTE = ord(' ')


# Classes --------------------------------------------------------------------------------------------------------------
class Traceback(NamedTuple):
    """The two gapped sequences, the match indicator line, and the number of diagonal steps."""
    aligned_a: str
    aligned_b: str
    indicator: str
    diagonal_count: int


# Functions ------------------------------------------------------------------------------------------------------------
def traceback(directions: np.ndarray, seq_a: Union[Seq, str], seq_b: Union[Seq, str]) -> Traceback:
    """
    Walks the direction table from the bottom-right cell back to the origin.

    * ``UP`` consumes a residue of ``seq_b`` against a gap in ``seq_a``.
    * ``LEFT`` consumes a residue of ``seq_a`` against a gap in ``seq_b``.
    * ``DIAGONAL`` consumes one residue of each; the indicator shows ``|`` when they are the same character.

    Args:
        directions: Direction table from ``AlignmentMatrix.fill``.
        seq_a: Column sequence used for the fill.
        seq_b: Row sequence used for the fill.

    Returns:
        A ``Traceback`` tuple. ``diagonal_count`` counts every diagonal step, matched or not.

    Examples:
        >>> from nwpair.align.matrix import AlignmentMatrix
        >>> m = AlignmentMatrix.fill('ACGT', 'AGT')
        >>> traceback(m.directions, 'ACGT', 'AGT')
        Traceback(aligned_a='ACGT', aligned_b='A-GT', indicator='| ||', diagonal_count=3)
    """
    seq_a, seq_b = Seq(seq_a), Seq(seq_b)
    if directions.shape != (len(seq_b) + 1, len(seq_a) + 1):
        raise ValueError(f'Direction table of shape {directions.shape} does not fit sequences of length '
                         f'{len(seq_a)} and {len(seq_b)}')
    path = _traceback_kernel(directions)
    diagonal = path == Direction.DIAGONAL

    # A global path consumes every residue exactly once, in order
    aligned_a = np.full(len(path), _GAP_BYTE, dtype=np.uint8)
    aligned_a[path != Direction.UP] = seq_a.encoded
    aligned_b = np.full(len(path), _GAP_BYTE, dtype=np.uint8)
    aligned_b[path != Direction.LEFT] = seq_b.encoded

    indicator = np.full(len(path), _SPACE_BYTE, dtype=np.uint8)
    indicator[diagonal & (aligned_a == aligned_b)] = _MATCH_BYTE

    return Traceback(
        aligned_a.tobytes().decode(Seq.ENCODING),
        aligned_b.tobytes().decode(Seq.ENCODING),
        indicator.tobytes().decode(Seq.ENCODING),
        int(np.count_nonzero(diagonal))
    )


# Kernels --------------------------------------------------------------------------------------------------------------
@jit(nopython=True, cache=True, nogil=True)
def _traceback_kernel(directions):
    r = directions.shape[0] - 1
    c = directions.shape[1] - 1
    path = np.empty(r + c, dtype=np.int8)
    k = 0
    while r > 0 or c > 0:
        if r == 0: step = _LEFT
        elif c == 0: step = _UP
        else: step = directions[r, c]
        path[k] = step
        k += 1
        if step == _DIAGONAL:
            r -= 1
            c -= 1
        elif step == _LEFT:
            c -= 1
        else:
            r -= 1
    # Steps were collected end to start
    return path[:k][::-1].copy()
