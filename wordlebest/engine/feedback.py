"""
Accumulated feedback (greens / yellows / greys) and its text encodings.

This is the boundary between what the user types and the constraint layer:

  greens  : 5 characters, a letter or '?'/'.'/'_' for unknown, e.g. "??a?k"
  yellows : 5 comma-separated groups, one per position, e.g. ",,a,tn,t"
  greys   : letters known to be absent, e.g. "roecli"
  history : guess:pattern pairs, pattern marks g=green, y=yellow, -=grey,
            e.g. "crane:--yg-"

Everything is validated here so malformed input fails before any search runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, List, Optional, Tuple

from .constraints import ConstraintState
from .errors import ContradictoryFeedback, InvalidFeedback, InvalidWordFormat
from .words import WORD_LENGTH, Word

UNKNOWN_MARKS = "?._"
GREEN_MARKS = "gG"
YELLOW_MARKS = "yY"
GREY_MARKS = "-.xXbB"


def _is_letter(ch: str) -> bool:
    return "a" <= ch <= "z"


def _empty_yellows() -> Tuple[FrozenSet[str], ...]:
    return tuple(frozenset() for _ in range(WORD_LENGTH))


@dataclass(frozen=True)
class Feedback:
    greens: Tuple[Optional[str], ...] = (None,) * WORD_LENGTH
    yellows: Tuple[FrozenSet[str], ...] = field(default_factory=_empty_yellows)
    greys: FrozenSet[str] = frozenset()
    # (position, kept letter, dropped letter) for greens that disagreed while combining
    green_conflicts: Tuple[Tuple[int, str, str], ...] = ()

    def __post_init__(self):
        if len(self.greens) != WORD_LENGTH:
            raise InvalidFeedback("greens", self.greens, f"need {WORD_LENGTH} entries")
        if len(self.yellows) != WORD_LENGTH:
            raise InvalidFeedback("yellows", self.yellows, f"need {WORD_LENGTH} groups")
        for g in self.greens:
            if g is not None and not (len(g) == 1 and _is_letter(g)):
                raise InvalidFeedback("greens", self.greens, f"bad letter {g!r}")
        for group in self.yellows:
            for y in group:
                if not (len(y) == 1 and _is_letter(y)):
                    raise InvalidFeedback("yellows", self.yellows, f"bad letter {y!r}")
        for g in self.greys:
            if not (len(g) == 1 and _is_letter(g)):
                raise InvalidFeedback("greys", sorted(self.greys), f"bad letter {g!r}")

    # -----------------------------
    # Parsing
    # -----------------------------

    @classmethod
    def parse(cls, greens: str = "", yellows: str = "", greys: str = "") -> "Feedback":
        """Build Feedback from the three command-line strings (empty = nothing known)."""
        return cls(parse_greens(greens), parse_yellows(yellows), parse_greys(greys))

    @classmethod
    def from_history(cls, history: Iterable[Tuple[str, str]]) -> "Feedback":
        """
        Fold played (guess, pattern) pairs into one Feedback.

        A grey mark on a letter that is green or yellow elsewhere in the same
        guess only says "not here", so it is recorded as a yellow at that
        position instead of a grey. If two guesses show different greens at the
        same position, the first one is kept and the clash is recorded for
        contradictions().
        """
        greens: List[Optional[str]] = [None] * WORD_LENGTH
        conflicts: List[Tuple[int, str, str]] = []
        yellows = [set() for _ in range(WORD_LENGTH)]
        greys = set()

        for guess, pattern in history:
            try:
                word = Word.parse(guess)
            except InvalidWordFormat as e:
                raise InvalidFeedback("history guess", guess, str(e)) from e
            if len(pattern) != WORD_LENGTH:
                raise InvalidFeedback("history pattern", pattern,
                                      f"need {WORD_LENGTH} marks")
            present = {ch for ch, m in zip(word.letters, pattern)
                       if m in GREEN_MARKS + YELLOW_MARKS}
            for i, (ch, m) in enumerate(zip(word.letters, pattern)):
                if m in GREEN_MARKS:
                    if greens[i] is None:
                        greens[i] = ch
                    elif greens[i] != ch:
                        conflicts.append((i, greens[i], ch))
                elif m in YELLOW_MARKS:
                    yellows[i].add(ch)
                elif m in GREY_MARKS:
                    if ch in present:
                        yellows[i].add(ch)
                    else:
                        greys.add(ch)
                else:
                    raise InvalidFeedback("history pattern", pattern, f"unknown mark {m!r}")

        return cls(tuple(greens), tuple(frozenset(s) for s in yellows), frozenset(greys),
                   tuple(conflicts))

    # -----------------------------
    # Combining / checking
    # -----------------------------

    def merge(self, other: "Feedback") -> "Feedback":
        """
        Union of two feedbacks. Where both have a green at the same position
        and they differ, this one's green is kept and the clash is recorded.
        """
        conflicts = list(self.green_conflicts) + list(other.green_conflicts)
        greens = []
        for i, (a, b) in enumerate(zip(self.greens, other.greens)):
            if a is not None and b is not None and a != b:
                conflicts.append((i, a, b))
            greens.append(a if a is not None else b)
        yellows = tuple(a | b for a, b in zip(self.yellows, other.yellows))
        return Feedback(tuple(greens), yellows, self.greys | other.greys, tuple(conflicts))

    def contradictions(self) -> List[str]:
        """
        Human-readable list of conflicts; empty when the feedback is coherent.

        Conflicts are reported, not resolved: to_state() still applies
        greens, then yellows, then greys.
        """
        issues: List[str] = [
            f"position {i + 1} is green {kept!r} and also green {dropped!r}"
            for i, kept, dropped in self.green_conflicts
        ]
        present = {g for g in self.greens if g is not None}
        for group in self.yellows:
            present |= group
        for ch in sorted(self.greys & present):
            issues.append(f"letter {ch!r} is marked grey but also green/yellow")
        for i, (g, group) in enumerate(zip(self.greens, self.yellows)):
            if g is not None and g in group:
                issues.append(f"letter {g!r} is both green and yellow at position {i + 1}")
        return issues

    def check(self, strict: bool = False) -> List[str]:
        """Return contradictions, or raise ContradictoryFeedback if `strict`."""
        issues = self.contradictions()
        if strict and issues:
            raise ContradictoryFeedback(issues)
        return issues

    def to_state(self) -> ConstraintState:
        return ConstraintState.from_feedback(self.greens, self.yellows, self.greys)

    def as_dict(self) -> dict:
        """JSON-friendly form (used by the run manifest)."""
        return {
            "greens": "".join(g or "?" for g in self.greens),
            "yellows": ",".join("".join(sorted(s)) for s in self.yellows),
            "greys": "".join(sorted(self.greys)),
        }


def parse_greens(text: str) -> Tuple[Optional[str], ...]:
    """'??a?k' -> (None, None, 'a', None, 'k'). Empty string = nothing known."""
    if not text:
        return (None,) * WORD_LENGTH
    if len(text) != WORD_LENGTH:
        raise InvalidFeedback("greens", text, f"need exactly {WORD_LENGTH} characters")
    out: List[Optional[str]] = []
    for ch in text:
        if ch in UNKNOWN_MARKS:
            out.append(None)
        elif _is_letter(ch):
            out.append(ch)
        else:
            raise InvalidFeedback("greens", text, f"unexpected character {ch!r}")
    return tuple(out)


def parse_yellows(text: str) -> Tuple[FrozenSet[str], ...]:
    """',,a,tn,t' -> one frozenset per position. Empty string = nothing known."""
    if not text:
        return _empty_yellows()
    groups = text.split(",")
    if len(groups) != WORD_LENGTH:
        raise InvalidFeedback("yellows", text,
                              f"need {WORD_LENGTH} comma-separated groups, got {len(groups)}")
    out = []
    for group in groups:
        group = group.strip()
        bad = [ch for ch in group if not _is_letter(ch)]
        if bad:
            raise InvalidFeedback("yellows", text, f"unexpected character {bad[0]!r}")
        out.append(frozenset(group))
    return tuple(out)


def parse_greys(text: str) -> FrozenSet[str]:
    """'roecli' -> frozenset of letters (commas/spaces ignored)."""
    letters = [ch for ch in text if ch not in ", "]
    bad = [ch for ch in letters if not _is_letter(ch)]
    if bad:
        raise InvalidFeedback("greys", text, f"unexpected character {bad[0]!r}")
    return frozenset(letters)


def parse_history_item(item: str) -> Tuple[str, str]:
    """'crane:--yg-' -> ('crane', '--yg-')."""
    guess, sep, pattern = item.partition(":")
    if not sep:
        raise InvalidFeedback("history", item, "expected GUESS:PATTERN")
    return guess.strip(), pattern.strip()
