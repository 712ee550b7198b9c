import numpy as np
import pytest
from types import ModuleType
import nwpair.align.alignment as alignment_module
from nwpair.align import align
from nwpair.core.seq import Seq, SeqError, EmptySequenceError
from nwpair.align.alignment import Aligner, AlignmentResult, ScoreDivergenceError, accumulate_score
from nwpair.align.matrix import AlignmentMatrix, check_residues
from nwpair.align.scoring import ScoringPolicy, SubstitutionTable, GAP


def _random_pairs(alphabet, n, seed, max_len=30):
    rng = np.random.default_rng(seed)
    symbols = np.array(list(alphabet))
    for _ in range(n):
        la, lb = rng.integers(1, max_len, size=2)
        yield ''.join(rng.choice(symbols, la)), ''.join(rng.choice(symbols, lb))


PAIRS = [
    ('ACGT', 'ACGT'), ('GATTACA', 'GCATGCU'), ('ACGT', 'AGT'), ('A', 'AC'), ('AAAA', 'A'), ('A', 'G'),
    ('acgt', 'ACGT'), ('TTTTTTTT', 'GG'), ('HEAGAWGHEE', 'PAWHEAE'), ('N', 'NNNNNNNN'),
    *_random_pairs('ACGT', 15, seed=1), *_random_pairs('acgtACGT', 5, seed=2)
]
PROTEIN_PAIRS = [
    ('HEAGAWGHEE', 'PAWHEAE'), ('MKTAYIAKQR', 'MKTAYIAKQRQISFVKSHFSRQ'), ('WWWW', 'wwYw'),
    *_random_pairs('ACDEFGHIKLMNPQRSTVWYBXZ', 10, seed=3)
]
POLICIES = [ScoringPolicy(), ScoringPolicy.fixed(2, -3), ScoringPolicy(SubstitutionTable.blosum62())]


class TestScenarios:
    def test_identical_sequences(self):
        result = Aligner().align('ACGT', 'ACGT')
        assert result.aligned_a == 'ACGT'
        assert result.aligned_b == 'ACGT'
        assert result.indicator == '||||'
        assert result.diagonal_count == 4
        assert result.score == 4

    def test_gattaca(self):
        result = Aligner().align('GATTACA', 'GCATGCU')
        assert (result.aligned_a, result.indicator, result.aligned_b) == ('GATTACA', '|  | | ', 'GCATGCU')
        assert result.diagonal_count == 7
        assert result.score == result.matrix_score == -1

    @pytest.mark.parametrize('a, b', [('', 'ACGT'), ('ACGT', ''), (Seq(''), 'A')])
    def test_empty_sequence(self, a, b, monkeypatch):
        def no_fill(*args, **kwargs): raise AssertionError('tables allocated for empty input')
        monkeypatch.setattr(AlignmentMatrix, 'fill', no_fill)
        with pytest.raises(EmptySequenceError):
            Aligner().align(a, b)

    def test_ordered_table_lookup(self):
        aligner = Aligner({'AG': 5})
        forward = aligner.align('A', 'G')
        assert forward.score == 5
        assert forward.diagonal_count == 1
        assert forward.indicator == ' '
        reverse = aligner.align('G', 'A')
        assert reverse.score == 0
        assert reverse.diagonal_count == 1


class TestAlignmentProperties:
    @pytest.mark.parametrize('scoring', POLICIES, ids=['fixed', 'fixed-2-3', 'blosum62'])
    @pytest.mark.parametrize('a, b', PAIRS + PROTEIN_PAIRS)
    def test_properties(self, a, b, scoring):
        result = Aligner(scoring).align(a, b)
        # Equal lengths
        assert len(result.aligned_a) == len(result.aligned_b) == len(result.indicator) == len(result)
        # Gap removal restores the inputs
        assert result.aligned_a.replace(GAP, '') == a
        assert result.aligned_b.replace(GAP, '') == b
        # Diagonal steps are exactly the gap-free columns
        columns = list(zip(result.aligned_a, result.aligned_b))
        assert result.diagonal_count == sum(x != GAP and y != GAP for x, y in columns)
        # Indicator marks identical residue columns only
        for (x, y), mark in zip(columns, result.indicator):
            assert (mark == '|') == (x == y and x != GAP)
            assert mark in '| '
        # No column pairs two gaps
        assert all(x != GAP or y != GAP for x, y in columns)
        # Rescan agrees with the terminal cell
        assert result.score == result.matrix_score
        assert result.is_consistent

    @pytest.mark.parametrize('gap_penalty', [-1, -2, -5, 0])
    @pytest.mark.parametrize('a, b', PAIRS[:10])
    def test_scores_agree_for_any_gap_penalty(self, a, b, gap_penalty):
        result = Aligner(gap_penalty=gap_penalty).align(a, b)
        assert result.score == result.matrix_score

    def test_deterministic(self):
        aligner = Aligner(SubstitutionTable.blosum62())
        first = aligner.align('HEAGAWGHEE', 'PAWHEAE')
        assert all(aligner.align('HEAGAWGHEE', 'PAWHEAE') == first for _ in range(5))


class TestAligner:
    def test_defaults(self):
        aligner = Aligner()
        assert aligner.gap_penalty == -2
        assert not aligner.scoring.uses_table
        assert not aligner.strict

    def test_accepts_mapping_and_table(self):
        assert Aligner({'AA': 3}).scoring.uses_table
        assert Aligner(SubstitutionTable({'AA': 3})).align('A', 'A').score == 3

    def test_accepts_seq(self):
        result = Aligner().align(Seq('ACGT'), Seq('AGT'))
        assert result.aligned_b == 'A-GT'

    def test_table_missing_pairs_score_zero(self):
        # Only the identity pair is listed; everything else is neutral
        result = Aligner({'CC': 2}).align('ACA', 'GCG')
        assert result.score == 2
        assert result.indicator == ' | '

    def test_table_is_case_insensitive(self):
        result = Aligner({'FY': 3}).align('f', 'y')
        assert result.score == 3

    def test_strict_raises_on_divergence(self, monkeypatch):
        monkeypatch.setattr(alignment_module, 'accumulate_score', lambda *args, **kwargs: 999)
        with pytest.raises(ScoreDivergenceError, match="999"):
            Aligner(strict=True).align('ACGT', 'ACGT')
        # Non-strict runs report the disagreement instead
        result = Aligner().align('ACGT', 'ACGT')
        assert not result.is_consistent

    def test_strict_passes(self):
        assert Aligner(strict=True).align('GATTACA', 'GCATGCU').score == -1

    def test_align_shortcut(self):
        assert align('ACGT', 'AGT').score == 1
        assert align('A', 'G', {'AG': 5}).score == 5

    @pytest.mark.parametrize('a, b', [('A-C', 'AXC'), ('ACGT', '-'), (Seq('AC-'), 'AC')])
    def test_gap_character_rejected(self, a, b):
        with pytest.raises(SeqError, match="gap character"):
            Aligner().align(a, b)
        with pytest.raises(SeqError, match="gap character"):
            Aligner(strict=True).align(a, b)
        with pytest.raises(SeqError, match="gap character"):
            AlignmentMatrix.fill(a, b)

    def test_check_residues(self):
        seq_a, seq_b = check_residues('ACGT', Seq('AGT'))
        assert (seq_a, seq_b) == (Seq('ACGT'), Seq('AGT'))
        with pytest.raises(EmptySequenceError):
            check_residues('', '-')


class TestAccumulateScore:
    def test_fixed(self):
        assert accumulate_score('ACGT', 'A-GT') == 1
        assert accumulate_score('GATTACA', 'GCATGCU') == -1

    def test_gap_penalty(self):
        assert accumulate_score('A--', 'ACG', gap_penalty=-3) == -5

    def test_gap_in_both_strings_counts_once(self):
        assert accumulate_score('-', '-') == -2

    def test_table(self):
        policy = ScoringPolicy.from_table({'AG': 5})
        assert accumulate_score('AG', 'GA', policy) == 5
        assert accumulate_score('ag', 'ga', policy) == 5

    def test_length_mismatch(self):
        with pytest.raises(ValueError, match="same length"):
            accumulate_score('ACGT', 'ACG')


class TestAlignmentResult:
    def test_fields_and_helpers(self):
        result = AlignmentResult('ACGT', 'A-GT', '| ||', 1, 3, 1)
        assert len(result) == 4
        assert result.n_matches == 3
        assert result.n_gaps == 1
        assert str(result) == 'ACGT\n| ||\nA-GT'

    def test_frozen(self):
        result = align('A', 'A')
        with pytest.raises(AttributeError):
            result.score = 10


class TestPackageLayout:
    def test_subpackages_are_importable(self):
        import nwpair
        import nwpair.align.alignment as module
        import nwpair.align.trace as trace_module
        assert isinstance(nwpair.align, ModuleType)
        assert module.Aligner is nwpair.Aligner
        assert trace_module.traceback is nwpair.traceback
        assert nwpair.align.align is module.align
