"""
Command-line interface: align the first two sequences of a FASTA-like file and write a report.
"""
from argparse import ArgumentParser, Action, RawDescriptionHelpFormatter, Namespace
from dataclasses import dataclass
from pathlib import Path
import sys
from typing import IO, Optional, Sequence
from warnings import warn

from nwpair import NwpairWarning, __version__
from nwpair.core.seq import SeqError
from nwpair.align import Aligner, ScoringPolicy, SubstitutionTable, ScoringError, ScoreDivergenceError, GAP_PENALTY
from nwpair.align.scoring import MATCH, MISMATCH
from nwpair.io import read_pair, read_substitution_table, ReportWriter
from nwpair.io.report import LINE_LENGTH, DEFAULT_OUTPUT
from nwpair.utils import Config, Stopwatch


# Exceptions and Warnings ----------------------------------------------------------------------------------------------
class OptionWarning(NwpairWarning):
    """Issued when a command-line option is repeated or does not apply and is ignored."""


# Constants ------------------------------------------------------------------------------------------------------------
_RULE = '=' * 64
_BUILTIN_TABLES = {'BLOSUM62': SubstitutionTable.blosum62}
_DESCRIPTION = """\
Performs the Needleman-Wunsch global alignment of two nucleotide or protein
sequences. If the input file contains more than two sequences, only the first
two are aligned."""
_EPILOG = f"""\
examples:
  nwpair -n DNA_sequences.txt -o my_alignment.txt
  nwpair -p protein_sequences.txt -s BLOSUM.txt
  nwpair -p protein_sequences.txt -s BLOSUM62

Default output is saved to ./{DEFAULT_OUTPUT} (existing files are overwritten)."""


# Classes --------------------------------------------------------------------------------------------------------------
@dataclass(slots=True, frozen=True, kw_only=True)
class AlignConfig(Config):
    """Alignment and report settings collected from the command line."""
    gap_penalty: int = GAP_PENALTY
    match: int = MATCH
    mismatch: int = MISMATCH
    line_length: int = LINE_LENGTH
    strict: bool = False


class _InputAction(Action):
    """Stores ``(kind, file)`` for the first of ``-n``/``-p``; later ones are ignored with a warning."""
    def __init__(self, option_strings, dest, kind: str = None, **kwargs):
        self.kind = kind
        super().__init__(option_strings, dest, **kwargs)

    def __call__(self, parser, namespace, values, option_string=None):
        if getattr(namespace, self.dest, None) is not None:
            warn(f'Extra option {option_string} {values} ignored; only the first input is aligned', OptionWarning)
            return
        setattr(namespace, self.dest, (self.kind, values))


class Messenger:
    """
    Writes progress messages for a command-line run.

    Args:
        file: Destination stream (stderr if omitted).
        quiet: Suppress everything except errors.
    """
    __slots__ = ('_file', 'quiet')
    def __init__(self, file: IO = None, quiet: bool = False):
        self._file = file
        self.quiet = quiet

    def _print(self, *lines: str):
        if not self.quiet: print(*lines, sep="\n", file=self._file or sys.stderr)

    def banner(self): self._print('', f"{'=' * 18} PAIRWISE SEQUENCE ALIGNMENT {'=' * 18}", '')

    def selected(self, kind: str, file: str):
        self._print(f'{kind.capitalize()} sequences selected!', f'Commencing {kind} PWA of {file} ...', '')

    def finished(self, output: str, stopwatch: Stopwatch):
        self._print('', f'Finished output to file {output}.', '',
                    f'Start: {stopwatch.start_date}',
                    f'End:   {stopwatch.end_date()}',
                    f'TOTAL CPU TIME = {stopwatch.cpu_time_string()}', '',
                    'Thank you! Exiting program.', _RULE, '')

    def error(self, message: str): print(f"ERROR: {message}", file=self._file or sys.stderr)


# Functions ------------------------------------------------------------------------------------------------------------
def build_parser() -> ArgumentParser:
    parser = ArgumentParser(prog='nwpair', description=_DESCRIPTION, epilog=_EPILOG,
                            formatter_class=RawDescriptionHelpFormatter)
    inputs = parser.add_argument_group('input')
    inputs.add_argument('-n', metavar='FILE', dest='input', action=_InputAction, kind='nucleotide',
                        help='align the nucleotide sequences in FILE')
    inputs.add_argument('-p', metavar='FILE', dest='input', action=_InputAction, kind='protein',
                        help='align the protein sequences in FILE')
    inputs.add_argument('-s', metavar='FILE', dest='scoring',
                        help="score protein pairs with the substitution table in FILE, or the built-in "
                             f"{', '.join(_BUILTIN_TABLES)} table when FILE is that name and does not exist "
                             "(default: +1 match / -1 mismatch)")
    output = parser.add_argument_group('output')
    output.add_argument('-o', metavar='FILE', dest='output', default=DEFAULT_OUTPUT,
                        help=f'write the report to FILE, or - for stdout (default: {DEFAULT_OUTPUT})')
    output.add_argument('-w', '--line-length', metavar='INT', type=int,
                        help=f'residues per report line, 0 for no wrapping (default: {LINE_LENGTH})')
    output.add_argument('-q', '--quiet', action='store_true', help='suppress progress messages')
    scoring = parser.add_argument_group('scoring')
    scoring.add_argument('-g', '--gap-penalty', metavar='INT', type=int,
                         help=f'score added per gap position (default: {GAP_PENALTY})')
    scoring.add_argument('--match', metavar='INT', type=int, help=f'fixed match score (default: {MATCH})')
    scoring.add_argument('--mismatch', metavar='INT', type=int, help=f'fixed mismatch score (default: {MISMATCH})')
    scoring.add_argument('--strict', action='store_true', default=None,
                         help='fail if the rescanned score differs from the matrix score')
    parser.add_argument('-v', '--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def load_scoring(args: Namespace, config: AlignConfig, kind: str) -> ScoringPolicy:
    """
    Selects table scoring for protein runs given ``-s``, otherwise fixed match/mismatch scoring.

    ``-s`` names a table file; a built-in table name such as ``BLOSUM62`` is used when no file of that name exists.
    """
    if args.scoring is None: return ScoringPolicy.fixed(config.match, config.mismatch)
    if kind != 'protein':
        warn(f'Substitution table {args.scoring} ignored for {kind} alignment', OptionWarning)
        return ScoringPolicy.fixed(config.match, config.mismatch)
    builtin = _BUILTIN_TABLES.get(args.scoring.upper())
    if builtin is not None and not Path(args.scoring).exists(): return ScoringPolicy.from_table(builtin())
    return ScoringPolicy.from_table(read_substitution_table(args.scoring))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.input is None: parser.error('one of the arguments -n or -p is required')

    stopwatch = Stopwatch()
    messenger = Messenger(quiet=args.quiet)
    config = AlignConfig.from_obj(args)
    kind, input_file = args.input

    messenger.banner()
    messenger.selected(kind, input_file)
    try:
        scoring = load_scoring(args, config, kind)
        record_a, record_b = read_pair(input_file)
        result = Aligner(scoring, config.gap_penalty, config.strict).align(record_a.seq, record_b.seq)
        with ReportWriter(args.output, config.line_length) as writer: writer.write(result, record_a.name, record_b.name)
    except (SeqError, ScoringError, ScoreDivergenceError, OSError) as e:
        messenger.error(str(e))
        return 1
    messenger.finished(args.output, stopwatch)
    return 0
