"""
Configuration and run-timing helpers shared by the command line.
"""
from dataclasses import dataclass, fields
from time import process_time, time, ctime
from typing import Any


# Classes --------------------------------------------------------------------------------------------------------------
@dataclass(slots=True, frozen=True, kw_only=True)
class Config:
    """
    Base for settings dataclasses that are filled from parsed command-line arguments.
    """
    @classmethod
    def from_obj(cls, obj: Any) -> 'Config':
        return cls(**{f.name: val for f in fields(cls) if (val := getattr(obj, f.name, None)) is not None})


class Stopwatch:
    """
    Records the wall-clock start date and CPU time of a run.

    Nothing is printed; callers decide when and where to report.

    Examples:
        >>> watch = Stopwatch()
        >>> elapsed = watch.cpu_time_string()  # e.g. '0:00:01'
    """
    __slots__ = ('_start', '_start_cpu')
    def __init__(self):
        self._start = time()
        self._start_cpu = process_time()

    @property
    def start_date(self) -> str: return ctime(self._start)
    @property
    def cpu_time(self) -> float: return process_time() - self._start_cpu
    @staticmethod
    def end_date() -> str: return ctime()

    def cpu_time_string(self) -> str:
        """Formats the CPU time elapsed since construction as ``H:MM:SS``."""
        return format_duration(self.cpu_time)


# Functions ------------------------------------------------------------------------------------------------------------
def format_duration(seconds: float) -> str:
    """
    Formats a duration as ``H:MM:SS``, truncating fractional seconds.

    Examples:
        >>> format_duration(3725.9)
        '1:02:05'
    """
    total = int(seconds)
    hours, rem = divmod(total, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{hours}:{minutes:02d}:{secs:02d}"
