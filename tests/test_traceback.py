import numpy as np
import pytest
from nwpair.align.matrix import AlignmentMatrix, Direction
from nwpair.align.scoring import ScoringPolicy
from nwpair.align.trace import traceback, Traceback


def _run(a, b, scoring=None, gap_penalty=-2):
    return traceback(AlignmentMatrix.fill(a, b, scoring, gap_penalty).directions, a, b)


class TestTraceback:
    def test_identical(self):
        assert _run('ACGT', 'ACGT') == Traceback('ACGT', 'ACGT', '||||', 4)

    def test_gap_in_row_sequence(self):
        assert _run('ACGT', 'AGT') == Traceback('ACGT', 'A-GT', '| ||', 3)

    def test_gap_in_column_sequence(self):
        assert _run('A', 'AC') == Traceback('A-', 'AC', '| ', 1)

    def test_leading_gaps_follow_edge(self):
        # Ties send the path diagonally first, then along row 0 to the origin
        assert _run('AAAA', 'A') == Traceback('AAAA', '---A', '   |', 1)

    def test_mismatches_count_as_diagonal(self):
        result = _run('GATTACA', 'GCATGCU')
        assert result.aligned_a == 'GATTACA'
        assert result.aligned_b == 'GCATGCU'
        assert result.indicator == '|  | | '
        assert result.diagonal_count == 7

    def test_indicator_is_case_sensitive(self):
        result = _run('a', 'A', ScoringPolicy.from_table({'AA': 4}))
        assert result == Traceback('a', 'A', ' ', 1)

    def test_hand_built_table(self):
        # LEFT out of (1, 1), then UP along column 0
        directions = np.array([
            [Direction.LEFT, Direction.LEFT],
            [Direction.UP, Direction.LEFT],
        ], dtype=np.int8)
        assert traceback(directions, 'A', 'C') == Traceback('-A', 'C-', '  ', 0)

    def test_shape_mismatch(self):
        m = AlignmentMatrix.fill('ACGT', 'AGT')
        with pytest.raises(ValueError, match="does not fit"):
            traceback(m.directions, 'ACG', 'AGT')

    def test_accepts_seq(self):
        from nwpair.core.seq import Seq
        m = AlignmentMatrix.fill(Seq('ACGT'), Seq('AGT'))
        assert traceback(m.directions, Seq('ACGT'), Seq('AGT')).aligned_b == 'A-GT'
