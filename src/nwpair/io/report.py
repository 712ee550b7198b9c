from pathlib import Path
from typing import Union, BinaryIO, Generator

from nwpair.align.alignment import AlignmentResult
from nwpair.io import Xopen


# Constants ------------------------------------------------------------------------------------------------------------
LINE_LENGTH = 50
DEFAULT_OUTPUT = 'PWA_output.txt'


# Classes --------------------------------------------------------------------------------------------------------------
class ReportWriter:
    """
    Writes human-readable alignment reports.

    Examples:
        >>> with ReportWriter("my_alignment.txt") as w:
        ...     w.write(result, "seq_1", "seq_2")
    """
    ENCODING = 'ascii'
    __slots__ = ('_opener', '_handle', 'line_length')
    def __init__(self, file: Union[str, Path, BinaryIO] = DEFAULT_OUTPUT, line_length: int = LINE_LENGTH):
        """
        Args:
            file: Output path (overwritten if it exists), ``-`` for stdout, or an open binary handle.
            line_length: Residues per line before wrapping; 0 disables wrapping.
        """
        self._opener = Xopen(file, 'wb')
        self._handle = None
        self.line_length = line_length

    def __enter__(self):
        self._handle = self._opener.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._handle is not None:
            self._handle.flush()
            self._opener.__exit__(exc_type, exc_val, exc_tb)
            self._handle = None

    def write(self, result: AlignmentResult, name_a: str = '', name_b: str = ''):
        """Writes one report for ``result``."""
        if self._handle is None: raise ValueError('Writer is not open; use it as a context manager')
        self._handle.write(format_report(result, name_a, name_b, self.line_length).encode(self.ENCODING, 'replace'))


# Functions ------------------------------------------------------------------------------------------------------------
def format_report(result: AlignmentResult, name_a: str = '', name_b: str = '', line_length: int = LINE_LENGTH) -> str:
    """
    Formats an alignment report: names, wrapped alignment blocks and a two-line footer.

    Examples:
        >>> from nwpair.align import align
        >>> print(format_report(align('ACGT', 'AGT'), 'one', 'two'), end='')
        Alignment results for:
        1. one
        2. two
        <BLANKLINE>
        ACGT
        | ||
        A-GT
        <BLANKLINE>
        Total number alignments: 3
        Total alignment score:   1
        <BLANKLINE>
    """
    lines = ['Alignment results for:', f'1. {name_a}', f'2. {name_b}', '']
    for block in _blocks(result, line_length):
        lines.extend(block)
        lines.append('')
    lines.append(f'Total number alignments: {result.diagonal_count}')
    # Non-negative scores get an extra space so the digits line up with negative ones
    lines.append(f"Total alignment score:  {' ' if result.score >= 0 else ''}{result.score}")
    lines.append('')
    return '\n'.join(lines) + '\n'


def _blocks(result: AlignmentResult, line_length: int) -> Generator[tuple[str, str, str], None, None]:
    rows = (result.aligned_a, result.indicator, result.aligned_b)
    if line_length <= 0 or len(result) <= line_length:
        yield rows
        return
    for start in range(0, len(result), line_length):
        yield tuple(row[start:start + line_length] for row in rows)
