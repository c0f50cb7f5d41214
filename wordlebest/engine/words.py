"""
Word value type.

A Word is exactly WORD_LENGTH lowercase letters a–z. It is immutable, and
equality/hashing go by the letter sequence, so Words can be dict keys and
set members.

Letters are also exposed as bit indices (a=0 … z=25) because the constraint
layer stores letter sets as 26-bit masks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Tuple

from .errors import InvalidWordFormat

WORD_LENGTH = 5
ALPHABET = "abcdefghijklmnopqrstuvwxyz"
FULL_MASK = (1 << len(ALPHABET)) - 1


def letter_bit(letter: str) -> int:
    """Return the single-bit mask for `letter`; InvalidWordFormat if not a–z."""
    if len(letter) != 1 or not ("a" <= letter <= "z"):
        raise InvalidWordFormat(letter)
    return 1 << (ord(letter) - ord("a"))


def mask_letters(mask: int) -> str:
    """Letters set in `mask`, alphabetical."""
    return "".join(ch for i, ch in enumerate(ALPHABET) if mask >> i & 1)


def mask_of(letters) -> int:
    m = 0
    for ch in letters:
        m |= letter_bit(ch)
    return m


@dataclass(frozen=True)
class Word:
    letters: Tuple[str, ...]
    # derived, excluded from eq/hash: per-position letter bits and the distinct-letter mask
    bits: Tuple[int, ...] = field(default=(), compare=False, repr=False)
    letter_mask: int = field(default=0, compare=False, repr=False)

    def __post_init__(self):
        text = "".join(self.letters)
        if len(self.letters) != WORD_LENGTH or not all(
                len(ch) == 1 and "a" <= ch <= "z" for ch in self.letters):
            raise InvalidWordFormat(text)
        object.__setattr__(self, "letters", tuple(self.letters))
        bits = tuple(letter_bit(ch) for ch in self.letters)
        object.__setattr__(self, "bits", bits)
        object.__setattr__(self, "letter_mask", mask_of(self.letters))

    @classmethod
    def parse(cls, text: str, source: str | None = None) -> "Word":
        """
        Build a Word from text such as "crane".

        No normalization happens here: "Crane", " crane" and "cran" are all
        rejected with InvalidWordFormat. `source` (e.g. "answers.txt:12") is
        carried into the error message.
        """
        if not isinstance(text, str) or len(text) != WORD_LENGTH or not all(
                "a" <= ch <= "z" for ch in text):
            raise InvalidWordFormat(text, source)
        return cls(tuple(text))

    def letter_at(self, i: int) -> str:
        if not 0 <= i < WORD_LENGTH:
            raise IndexError(f"position {i} out of range 0..{WORD_LENGTH - 1}")
        return self.letters[i]

    def contains_letter(self, letter: str) -> bool:
        return letter in self.letters

    def __str__(self) -> str:
        return "".join(self.letters)

    def __repr__(self) -> str:
        return f"Word({str(self)!r})"


def parse_words(texts, source: str | None = None):
    """Parse an iterable of strings into a list of Words (order kept)."""
    return [Word.parse(t, source) for t in texts]
