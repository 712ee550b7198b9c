"""
Module for reading sequence and scoring files and writing alignment reports.
"""
from abc import ABC, abstractmethod
from importlib import import_module
from io import IOBase
from pathlib import Path
import sys
from typing import Union, BinaryIO, Generator, Optional

from nwpair import NwpairWarning


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class SeqFileError(IOError):
    """Raised when an input file cannot be read as sequences or scores."""


class ParserError(SeqFileError):
    """Raised when a file does not contain what the parser expects."""


class ExtraSequenceWarning(NwpairWarning):
    """Issued when an input holds more than two sequences; only the first two are used."""


class ScoringTableWarning(NwpairWarning):
    """Issued for substitution table lines that are malformed but tolerated."""


# Classes --------------------------------------------------------------------------------------------------------------
class Xopen:
    """
    Opens paths, ``-`` (stdin/stdout) or existing handles, with transparent compression.

    Reading sniffs gzip, bz2 and xz magic bytes; writing picks the codec from the file extension.

    Examples:
        >>> with Xopen("sequences.fasta.gz", "rb") as f:
        ...     content = f.read()
    """
    _MAGIC = {
        b'\x1f\x8b': 'gzip',
        b'\x42\x5a\x68': 'bz2',
        b'\xfd7zXZ\x00': 'lzma',
    }
    _EXT_TO_PKG = {'gz': 'gzip', 'bz2': 'bz2', 'xz': 'lzma'}
    _MIN_N_BYTES = max(len(i) for i in _MAGIC.keys())
    _OPEN_FUNCS = {}

    def __init__(self, file: Union[str, Path, BinaryIO], mode: str = 'rb'):
        """
        Prepares the opener; nothing is opened until the context is entered.

        Args:
            file: File path (str or Path), ``-`` for stdin/stdout, or an existing file object.
            mode: File opening mode, ``'rb'`` or ``'wb'``.
        """
        self.file = file
        self.mode = mode
        self._handle: Optional[BinaryIO] = None
        self._raw: Optional[BinaryIO] = None
        self._close_on_exit = False

    def __enter__(self) -> BinaryIO:
        self._handle = self._open()
        return self._handle

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._close_on_exit and self._handle: self._handle.close()
        # Decompressors do not close the file object they wrap
        if self._raw is not None and self._raw is not self._handle: self._raw.close()

    def _get_opener(self, pkg_name: str):
        if pkg_name not in self._OPEN_FUNCS: self._OPEN_FUNCS[pkg_name] = import_module(pkg_name).open
        return self._OPEN_FUNCS[pkg_name]

    def _open(self) -> BinaryIO:
        writing = 'w' in self.mode or 'a' in self.mode
        if isinstance(self.file, IOBase): raw_stream = self.file
        elif str(self.file) in {'-', 'stdin'} and not writing: raw_stream = sys.stdin.buffer
        elif str(self.file) in {'-', 'stdout'} and writing: raw_stream = sys.stdout.buffer
        else:
            path = Path(self.file).expanduser()
            self._close_on_exit = True
            if writing:
                if pkg := self._EXT_TO_PKG.get(path.suffix.lower().lstrip('.')):
                    return self._get_opener(pkg)(path, mode=self.mode)
                return open(path, mode=self.mode)
            raw_stream = self._raw = open(path, mode='rb')

        if writing: return raw_stream

        # Sniff compression without consuming the stream
        if hasattr(raw_stream, 'peek'): start = raw_stream.peek(self._MIN_N_BYTES)[:self._MIN_N_BYTES]
        elif raw_stream.seekable():
            start = raw_stream.read(self._MIN_N_BYTES)
            raw_stream.seek(0)
        else: return raw_stream

        for magic, pkg in self._MAGIC.items():
            if start.startswith(magic):
                self._close_on_exit = True
                return self._get_opener(pkg)(raw_stream, mode='rb')
        return raw_stream


class BaseReader(ABC):
    """Abstract base class for line-oriented text file readers."""
    ENCODING = 'ascii'
    __slots__ = ('_opener', '_handle', '_iterator')
    def __init__(self, file: Union[str, Path, BinaryIO]):
        """
        Initializes the reader.

        Args:
            file: Path, ``-`` for stdin, or an open binary handle.
        """
        self._opener = Xopen(file, 'rb')
        self._handle = None
        self._iterator = None

    @abstractmethod
    def __iter__(self) -> Generator: ...

    def __enter__(self):
        self._handle = self._opener.__enter__()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb): self.close()

    def __next__(self):
        if self._iterator is None: self._iterator = self.__iter__()
        return next(self._iterator)

    def close(self):
        """Closes the underlying handle if this reader opened it."""
        if self._handle is not None:
            self._opener.__exit__(None, None, None)
            self._handle = None

    def lines(self) -> Generator[str, None, None]:
        """
        Yields decoded lines with trailing line-break characters removed.

        Stray carriage returns left by Windows editors are stripped as well.
        """
        if self._handle is None:
            with self: yield from self.lines()
            return
        for line in self._handle:
            yield line.rstrip(b'\r\n').decode(self.ENCODING, 'replace')


from nwpair.io.fasta import FastaReader, read_pair
from nwpair.io.scoring import SubstitutionTableReader, read_substitution_table
from nwpair.io.report import ReportWriter, format_report
