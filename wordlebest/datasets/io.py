from __future__ import annotations
import logging
from pathlib import Path
from typing import Iterable, List

from wordlebest.engine import InvalidWordFormat, Word

log = logging.getLogger(__name__)


def read_lines(p: Path | str) -> List[str]:
    """
    Read a UTF-8 text file into a list of lines, stripping trailing CR/LF.
    Raises FileNotFoundError if the path doesn't exist, and InvalidWordFormat
    naming `path:lineno` for a line that isn't valid UTF-8.
    """
    p = Path(p)
    if not p.exists():
        raise FileNotFoundError(p)
    lines: List[str] = []
    for lineno, raw in enumerate(p.read_bytes().splitlines(), start=1):
        try:
            lines.append(raw.decode("utf-8"))
        except UnicodeDecodeError as e:
            raise InvalidWordFormat(raw.decode("utf-8", errors="replace"),
                                    source=f"{p}:{lineno}") from e
    return lines


def parse_lines(lines: Iterable[str], source: str = "<input>") -> List[Word]:
    """
    One word per line -> list of Words, order preserved.

    Surrounding whitespace is stripped and blank lines are skipped; anything
    else that isn't 5 lowercase letters raises InvalidWordFormat naming
    `source:lineno`.
    """
    words: List[Word] = []
    for lineno, raw in enumerate(lines, start=1):
        text = raw.strip()
        if not text:
            continue
        words.append(Word.parse(text, source=f"{source}:{lineno}"))
    return words


def load_words(p: Path | str) -> List[Word]:
    """Load and parse a word list file (see parse_lines)."""
    words = parse_lines(read_lines(p), source=str(p))
    log.info("loaded %d words from %s", len(words), p)
    return words
