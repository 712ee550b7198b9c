from pathlib import Path
from typing import Union, Generator, BinaryIO
from warnings import warn

from nwpair.core.seq import Record
from nwpair.io import BaseReader, ParserError, ExtraSequenceWarning


# Classes --------------------------------------------------------------------------------------------------------------
class FastaReader(BaseReader):
    """
    Reader for FASTA-like files of named sequences.

    Any line containing ``>`` starts a new record whose name is the line with that first ``>`` removed. Every other
    line is appended to the current record's sequence with whitespace removed. Sequence text seen before the first
    header becomes an unnamed record.

    Examples:
        >>> with FastaReader("sequences.fasta") as reader:
        ...     for record in reader:
        ...         print(record.name)
    """
    __slots__ = ()
    def __iter__(self) -> Generator[Record, None, None]:
        """
        Iterates over records.

        Yields:
            Record objects.
        """
        name = None
        parts = []
        for line in self.lines():
            if (gt_pos := line.find('>')) != -1:
                if name is not None or any(parts): yield self._make_record(name, parts)
                name = (line[:gt_pos] + line[gt_pos + 1:]).strip()
                parts = []
            else:
                parts.append(''.join(line.split()))
        if name is not None or any(parts): yield self._make_record(name, parts)

    @staticmethod
    def _make_record(name, parts: list[str]) -> Record: return Record(''.join(parts), name or '')


# Functions ------------------------------------------------------------------------------------------------------------
def read_pair(file: Union[str, Path, BinaryIO]) -> tuple[Record, Record]:
    """
    Reads the first two records of a FASTA-like file.

    Args:
        file: Path, ``-`` for stdin, or an open binary handle.

    Returns:
        The first two records.

    Raises:
        ParserError: If fewer than two records are present.
    """
    with FastaReader(file) as reader: records = list(reader)
    if len(records) < 2: raise ParserError(f'Expected two sequences in {file}, found {len(records)}')
    if len(records) > 2:
        warn(f'{file} contains {len(records)} sequences; only the first two will be aligned', ExtraSequenceWarning)
    return records[0], records[1]
