import logging
import sys
from typing import Iterable, List, Optional

from ..mutations.mutation import SymbolRange


def setup_logging(log_file: Optional[str] = None, log_level=logging.INFO, name: str = "privmut"):
    """Setup logging for the privmut package logger (console, plus file if given)."""
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s',
                                  datefmt='%Y-%m-%d %H:%M:%S')

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w')
        file_handler.setLevel(log_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger


def find_symbol_ranges(seq: str, symbols: Iterable[str]) -> List[SymbolRange]:
    """
    Find runs of the given symbols in a sequence.
    Returns half-open SymbolRange objects; adjacent runs of different symbols are kept apart.
    """
    wanted = set(symbols)
    ranges = []
    begin = None
    for i, char in enumerate(seq):
        if begin is not None and char != seq[begin]:
            ranges.append(SymbolRange(begin=begin, end=i, symbol=seq[begin]))
            begin = None
        if begin is None and char in wanted:
            begin = i
    if begin is not None:
        ranges.append(SymbolRange(begin=begin, end=len(seq), symbol=seq[begin]))
    return ranges
