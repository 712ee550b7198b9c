"""
Module for representing residue sequences and named sequence records.
"""
from typing import Final, Union

import numpy as np

# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class SeqError(ValueError):
    """Raised when residue text cannot be represented as a sequence."""

class EmptySequenceError(SeqError):
    """Raised when a zero-length sequence is supplied where residues are required."""

# Classes --------------------------------------------------------------------------------------------------------------
class Seq:
    """
    An immutable sequence of ASCII residue characters (nucleotides or amino acids).

    Case is preserved; scoring decides whether it matters.

    Args:
        data: Residue text as ``str``, ``bytes`` or another ``Seq``.

    Raises:
        SeqError: If the text contains non-ASCII characters.

    Examples:
        >>> s = Seq('GATTACA')
        >>> len(s)
        7
        >>> s[1]
        'A'
        >>> s.encoded[:2]
        array([71, 65], dtype=uint8)
    """
    __slots__ = ('_data',)
    DTYPE: Final = np.uint8
    ENCODING: Final = 'ascii'

    def __init__(self, data: Union[str, bytes, 'Seq']):
        if isinstance(data, Seq): data = data._data
        elif isinstance(data, str):
            try: data = data.encode(self.ENCODING)
            except UnicodeEncodeError as e: raise SeqError(f'Sequence contains non-ASCII residues: {e.object[e.start:e.end]!r}')
        elif not isinstance(data, bytes): data = bytes(data)
        if not data.isascii(): raise SeqError('Sequence contains non-ASCII residues')
        self._data: bytes = data

    def __len__(self) -> int: return len(self._data)
    def __bool__(self) -> bool: return len(self._data) > 0
    def __str__(self) -> str: return self._data.decode(self.ENCODING)
    def __bytes__(self) -> bytes: return self._data
    def __repr__(self) -> str:
        text = str(self)
        return f"Seq({text if len(text) <= 20 else text[:17] + '...'!r}, length={len(self)})"
    def __hash__(self) -> int: return hash(self._data)
    def __iter__(self): return iter(str(self))

    def __eq__(self, other) -> bool:
        if isinstance(other, Seq): return self._data == other._data
        if isinstance(other, str): return str(self) == other
        if isinstance(other, bytes): return self._data == other
        return NotImplemented

    def __getitem__(self, item: Union[int, slice]) -> Union[str, 'Seq']:
        if isinstance(item, slice): return Seq(self._data[item])
        return chr(self._data[item])

    @property
    def encoded(self) -> np.ndarray:
        """Read-only ``uint8`` view of the residue bytes (one code per residue)."""
        return np.frombuffer(self._data, dtype=self.DTYPE)

class Record:
    """
    A named sequence, as read from a FASTA-like file.

    Args:
        seq: The residue sequence.
        name: Display name taken from the header line.

    Examples:
        >>> rec = Record(Seq('ACGT'), 'seq_1')
        >>> len(rec)
        4
    """
    __slots__ = ('_seq', 'name')
    def __init__(self, seq: Union[Seq, str, bytes], name: str = ''):
        self._seq = seq if isinstance(seq, Seq) else Seq(seq)
        self.name = name
    def __str__(self): return self.name
    def __repr__(self) -> str: return f'Record({self.name!r}, {self._seq!r})'
    def __len__(self) -> int: return len(self._seq)
    def __eq__(self, other) -> bool:
        return (self.name, self._seq) == (other.name, other._seq) if isinstance(other, Record) else False
    def __hash__(self) -> int: return hash((self.name, self._seq))

    @property
    def seq(self) -> Seq: return self._seq
