import numpy as np
import pytest
from nwpair.align.scoring import ScoringPolicy, SubstitutionTable, ScoringError, GAP_PENALTY


class TestSubstitutionTable:
    def test_keys_are_case_insensitive(self):
        table = SubstitutionTable({'fy': 3})
        assert table.get('F', 'Y') == 3
        assert table.get('f', 'y') == 3
        assert 'Fy' in table

    def test_lookup_is_ordered(self):
        table = SubstitutionTable({'AG': 5})
        assert table.get('A', 'G') == 5
        assert table.get('G', 'A') is None

    def test_missing_pair_returns_none(self):
        assert SubstitutionTable().get('A', 'A') is None

    def test_from_pairs(self):
        table = SubstitutionTable([('AA', 4), ('AC', 0)])
        assert len(table) == 2
        assert table.get('A', 'C') == 0

    def test_later_duplicates_override(self):
        table = SubstitutionTable([('AG', 1), ('ag', 2)])
        assert len(table) == 1
        assert table.get('A', 'G') == 2

    @pytest.mark.parametrize('pair', ['A', 'ABC', '', 'Aé'])
    def test_invalid_pair(self, pair):
        with pytest.raises(ScoringError, match="two ASCII residues"):
            SubstitutionTable({pair: 1})

    def test_blosum62(self):
        table = SubstitutionTable.blosum62()
        assert len(table) == 400
        assert table.get('F', 'Y') == 3
        assert table.get('W', 'W') == 11
        assert table.get('A', 'R') == table.get('R', 'A') == -1


class TestScoringPolicyFixed:
    def test_match_mismatch(self):
        policy = ScoringPolicy()
        assert policy.score('A', 'A') == 1
        assert policy.score('A', 'C') == -1
        assert not policy.uses_table

    def test_case_sensitive(self):
        # Fixed scoring compares characters exactly
        assert ScoringPolicy().score('a', 'A') == -1

    def test_custom_scores(self):
        policy = ScoringPolicy.fixed(match=2, mismatch=-3)
        assert policy.score('G', 'G') == 2
        assert policy.score('G', 'T') == -3

    def test_matrix(self):
        m = ScoringPolicy().matrix
        assert m.shape == (256, 256)
        assert m[ord('A'), ord('A')] == 1
        assert m[ord('A'), ord('a')] == -1
        assert not m.flags.writeable


class TestScoringPolicyTable:
    def test_missing_pair_scores_zero(self):
        policy = ScoringPolicy.from_table({'AG': 5})
        assert policy.score('A', 'G') == 5
        assert policy.score('G', 'A') == 0
        assert policy.score('A', 'A') == 0

    def test_case_insensitive(self):
        policy = ScoringPolicy.from_table({'AG': 5})
        assert policy.score('a', 'g') == 5
        assert policy.score('A', 'g') == 5

    def test_accepts_table_instance(self):
        table = SubstitutionTable.blosum62()
        policy = ScoringPolicy(table)
        assert policy.table is table
        assert policy.uses_table

    def test_matrix_agrees_with_score(self):
        policy = ScoringPolicy.from_table({'AG': 5, 'FY': 3, 'WW': 11, '*A': -4})
        residues = 'AGFYWagfyw*XZ'
        for a in residues:
            for b in residues:
                assert policy.matrix[ord(a), ord(b)] == policy.score(a, b), (a, b)

    def test_blosum_matrix_symmetric_on_residues(self):
        m = ScoringPolicy(SubstitutionTable.blosum62()).matrix
        idx = np.frombuffer(b'ACDEFGHIKLMNPQRSTVWY', dtype=np.uint8)
        sub = m[np.ix_(idx, idx)]
        np.testing.assert_array_equal(sub, sub.T)


def test_default_gap_penalty():
    assert GAP_PENALTY == -2
