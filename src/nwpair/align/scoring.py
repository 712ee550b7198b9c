"""
Residue substitution scoring: fixed match/mismatch or an ordered-pair lookup table.
"""
from typing import Final, Iterable, Mapping, Optional, Union

import numpy as np


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class ScoringError(ValueError):
    """Raised when a substitution table or scoring policy is malformed."""


# Constants ------------------------------------------------------------------------------------------------------------
GAP: Final = '-'
GAP_PENALTY: Final = -2
MATCH: Final = 1
MISMATCH: Final = -1

_AMINO: Final = 'ACDEFGHIKLMNPQRSTVWY'
_BLOSUM62: Final = (
    4, 0, -2, -1, -2, 0, -2, -1, -1, -1, -1, -2, -1, -1, -1, 1, 0, 0, -3, -2,
    0, 9, -3, -4, -2, -3, -3, -1, -3, -1, -1, -3, -3, -3, -3, -1, -1, -1, -2, -2,
    -2, -3, 6, 2, -3, -1, -1, -3, -1, -4, -3, 1, -1, 0, -2, 0, -1, -3, -4, -3,
    -1, -4, 2, 5, -3, -2, 0, -3, 1, -3, -2, 0, -1, 2, 0, 0, -1, -2, -3, -2,
    -2, -2, -3, -3, 6, -3, -1, 0, -3, 0, 0, -3, -4, -3, -3, -2, -2, -1, 1, 3,
    0, -3, -1, -2, -3, 6, -2, -4, -2, -4, -3, 0, -2, -2, -2, 0, -2, -3, -2, -3,
    -2, -3, -1, 0, -1, -2, 8, -3, -1, -3, -2, 1, -2, 0, 0, -1, -2, -3, -2, 2,
    -1, -1, -3, -3, 0, -4, -3, 4, -3, 2, 1, -3, -3, -3, -3, -2, -1, 3, -3, -1,
    -1, -3, -1, 1, -3, -2, -1, -3, 5, -2, -3, 2, 0, -3, -3, 1, 0, -3, -1, 2,
    -1, -1, -4, -3, 0, -4, -3, 2, -2, 4, 2, -3, -3, -2, -2, -2, -1, 1, -2, -1,
    -1, -1, -3, -2, 0, -3, -2, 1, -3, 2, 5, -2, -2, 0, -1, -1, -1, 1, -1, -1,
    -2, -3, 1, 0, -3, 0, 1, -3, 2, -3, -2, 6, -2, -4, -4, -1, 0, -3, -1, -3,
    -1, -3, -1, -1, -4, -2, -2, -3, 0, -3, -2, -2, 7, -1, -2, -1, -1, -2, -4, -3,
    -1, -3, 0, 2, -3, -2, 0, -3, -3, -2, 0, -4, -1, 5, 1, 0, -1, -2, -2, -1,
    -1, -3, -2, 0, -3, -2, 0, -3, -3, -2, -1, -4, -2, 1, 5, -1, -1, -3, -3, -2,
    1, -1, 0, 0, -2, 0, -1, -2, 1, -2, -1, -1, -1, 0, -1, 4, 1, -2, -3, -2,
    0, -1, -1, -1, -2, -2, -2, -1, 0, -1, -1, 0, -1, -1, -1, 1, 5, 0, -2, -2,
    0, -1, -3, -2, -1, -3, -3, 3, -3, 1, 1, -3, -2, -2, -3, -2, 0, 4, -3, -1,
    -3, -2, -4, -3, 1, -2, -2, -3, -1, -2, -1, -1, -4, -2, -3, -3, -2, -3, 11, 2,
    -2, -2, -3, -2, 3, -3, 2, -1, 2, -1, -1, -3, -3, -1, -2, -2, -2, -1, 2, 7
)


# Classes --------------------------------------------------------------------------------------------------------------
class SubstitutionTable:
    """
    Maps an ordered residue pair to an integer score.

    Keys are two-character strings (first residue from the column sequence, second from the row sequence) and are
    stored upper-cased, so lookups are case-insensitive. The order matters: ``'AG'`` and ``'GA'`` are distinct keys.

    Args:
        entries: Mapping or iterable of ``(pair, score)`` items.

    Raises:
        ScoringError: If a pair is not exactly two ASCII characters.

    Examples:
        >>> table = SubstitutionTable({'FY': 3})
        >>> table.get('f', 'y')
        3
        >>> table.get('Y', 'F') is None
        True
    """
    __slots__ = ('_data',)
    def __init__(self, entries: Union[Mapping[str, int], Iterable[tuple[str, int]]] = ()):
        self._data: dict[str, int] = {}
        for pair, score in (entries.items() if isinstance(entries, Mapping) else entries):
            self[pair] = score

    def __len__(self) -> int: return len(self._data)
    def __iter__(self): return iter(self._data)
    def __contains__(self, pair) -> bool: return isinstance(pair, str) and pair.upper() in self._data
    def __repr__(self) -> str: return f"SubstitutionTable({len(self)} pairs)"
    def __eq__(self, other) -> bool:
        return self._data == other._data if isinstance(other, SubstitutionTable) else NotImplemented

    def __setitem__(self, pair: str, score: int):
        if not isinstance(pair, str) or len(pair) != 2 or not pair.isascii():
            raise ScoringError(f'Substitution pair must be two ASCII residues, got {pair!r}')
        self._data[pair.upper()] = int(score)

    def items(self): return self._data.items()

    def get(self, a: str, b: str) -> Optional[int]:
        """
        Looks up the ordered pair ``(a, b)``.

        Returns:
            The score, or ``None`` if the pair is absent.
        """
        return self._data.get((a + b).upper())

    @classmethod
    def blosum62(cls) -> 'SubstitutionTable':
        """Returns the BLOSUM62 amino acid table (symmetric, 20 standard residues)."""
        n = len(_AMINO)
        return cls((_AMINO[i] + _AMINO[j], _BLOSUM62[i * n + j]) for i in range(n) for j in range(n))


class ScoringPolicy:
    """
    Scores a pair of residues under exactly one mode, fixed at construction.

    * Fixed mode: ``match`` if the residues are identical (case-sensitive), else ``mismatch``.
    * Table mode: ordered, case-insensitive lookup in a ``SubstitutionTable``; absent pairs score 0.

    The substitution matrix used by the alignment kernels is derived from ``score``, so the two always agree.

    Examples:
        >>> ScoringPolicy().score('A', 'A')
        1
        >>> ScoringPolicy.from_table({'AG': 5}).score('G', 'A')
        0
    """
    __slots__ = ('_table', 'match', 'mismatch', '_matrix')
    _SIZE: Final = 256

    def __init__(self, table: Union[SubstitutionTable, Mapping[str, int]] = None, match: int = MATCH,
                 mismatch: int = MISMATCH):
        if table is not None and not isinstance(table, SubstitutionTable): table = SubstitutionTable(table)
        self._table: Optional[SubstitutionTable] = table
        self.match = match
        self.mismatch = mismatch
        self._matrix: Optional[np.ndarray] = None

    def __repr__(self):
        if self._table is None: return f"ScoringPolicy(match={self.match}, mismatch={self.mismatch})"
        return f"ScoringPolicy({self._table!r})"

    @classmethod
    def fixed(cls, match: int = MATCH, mismatch: int = MISMATCH) -> 'ScoringPolicy':
        return cls(match=match, mismatch=mismatch)

    @classmethod
    def from_table(cls, table: Union[SubstitutionTable, Mapping[str, int]]) -> 'ScoringPolicy':
        return cls(table=table)

    @property
    def table(self) -> Optional[SubstitutionTable]: return self._table
    @property
    def uses_table(self) -> bool: return self._table is not None

    def score(self, a: str, b: str) -> int:
        """
        Scores residue ``a`` (column sequence) against residue ``b`` (row sequence).
        """
        if self._table is None: return self.match if a == b else self.mismatch
        value = self._table.get(a, b)
        # Pairs missing from the table are neutral
        return 0 if value is None else value

    @property
    def matrix(self) -> np.ndarray:
        """
        A read-only 256x256 ``int32`` matrix indexed by residue byte values.

        Built lazily once per policy. In table mode only letters are case-folded, matching ``str.upper`` on ASCII.
        """
        if self._matrix is None:
            if self._table is None:
                matrix = np.full((self._SIZE, self._SIZE), self.mismatch, dtype=np.int32)
                np.fill_diagonal(matrix, self.match)
            else:
                matrix = np.zeros((self._SIZE, self._SIZE), dtype=np.int32)
                for pair, value in self._table.items():
                    rows = {ord(pair[0]), ord(pair[0].lower())}
                    cols = {ord(pair[1]), ord(pair[1].lower())}
                    for r in rows:
                        for c in cols: matrix[r, c] = value
            matrix.flags.writeable = False
            self._matrix = matrix
        return self._matrix
