from pathlib import Path
from typing import Union, Generator, BinaryIO
from warnings import warn

from nwpair.align.scoring import SubstitutionTable
from nwpair.io import BaseReader, ScoringTableWarning


# Classes --------------------------------------------------------------------------------------------------------------
class SubstitutionTableReader(BaseReader):
    """
    Reader for whitespace-separated substitution tables, one ``PAIR SCORE`` entry per line.

    Blank lines and ``#`` comments are skipped. A line whose score is missing or not an integer keeps its pair with a
    score of 0; a pair token that is not exactly two characters is skipped. Both cases issue a
    ``ScoringTableWarning``.

    Examples:
        >>> with SubstitutionTableReader("BLOSUM62.txt") as reader:
        ...     table = reader.read()
    """
    __slots__ = ()
    def __iter__(self) -> Generator[tuple[str, int], None, None]:
        """
        Yields:
            ``(pair, score)`` tuples in file order.
        """
        for n, line in enumerate(self.lines(), start=1):
            fields = line.split()
            if not fields or fields[0].startswith('#'): continue
            pair = fields[0]
            if len(pair) != 2 or not pair.isascii():
                warn(f'Line {n}: skipping malformed residue pair {pair!r}', ScoringTableWarning)
                continue
            try: score = int(fields[1])
            except (IndexError, ValueError):
                warn(f'Line {n}: missing or invalid score for {pair!r}, using 0', ScoringTableWarning)
                score = 0
            yield pair, score

    def read(self) -> SubstitutionTable:
        """Reads every entry into a ``SubstitutionTable``; later duplicates override earlier ones."""
        return SubstitutionTable(self)


# Functions ------------------------------------------------------------------------------------------------------------
def read_substitution_table(file: Union[str, Path, BinaryIO]) -> SubstitutionTable:
    """
    Loads a substitution table from a path, ``-`` (stdin) or an open binary handle.

    Examples:
        >>> table = read_substitution_table("BLOSUM62.txt")
        >>> table.get('F', 'Y')
        3
    """
    with SubstitutionTableReader(file) as reader: return reader.read()
