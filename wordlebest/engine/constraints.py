"""
Constraint state and candidate filtering.

Given:
  - what is known about the hidden answer (per-position letter sets plus the
    letters that must appear somewhere)
  - a pool of words (usually the answers list)

Return:
  - the words that are still consistent with that knowledge.

Letter sets are 26-bit masks (bit 0 = 'a'). Both PositionConstraint and
ConstraintState are frozen, so equality/hash are structural over the masks;
the guess evaluator relies on that to memoize candidate counts per state.

Along one derivation chain, position sets only shrink and the must-contain
set only grows.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

from .words import FULL_MASK, WORD_LENGTH, Word, letter_bit, mask_letters, mask_of


@dataclass(frozen=True)
class PositionConstraint:
    """Letters still possible at one position."""
    mask: int = FULL_MASK

    @classmethod
    def full(cls) -> "PositionConstraint":
        return cls(FULL_MASK)

    def restrict_to_single(self, letter: str) -> "PositionConstraint":
        # green: the position is pinned
        return PositionConstraint(letter_bit(letter))

    def exclude(self, letter: str) -> "PositionConstraint":
        return PositionConstraint(self.mask & ~letter_bit(letter))

    def contains(self, letter: str) -> bool:
        return bool(self.mask & letter_bit(letter))

    __contains__ = contains

    def letters(self) -> str:
        return mask_letters(self.mask)

    def __len__(self) -> int:
        return bin(self.mask).count("1")


_FULL_POSITIONS = tuple(PositionConstraint.full() for _ in range(WORD_LENGTH))


@dataclass(frozen=True)
class ConstraintState:
    """Five PositionConstraints plus the must-contain letter mask."""
    positions: Tuple[PositionConstraint, ...] = _FULL_POSITIONS
    must_contain: int = 0

    def __post_init__(self):
        if len(self.positions) != WORD_LENGTH:
            raise ValueError(f"need {WORD_LENGTH} positions, got {len(self.positions)}")

    @classmethod
    def initial(cls) -> "ConstraintState":
        """Nothing known yet: every letter possible everywhere."""
        return cls()

    @classmethod
    def from_feedback(
            cls,
            greens: Sequence[Optional[str]],
            yellows: Sequence[Iterable[str]],
            greys: Iterable[str],
    ) -> "ConstraintState":
        """
        Build the state from accumulated feedback.

        Applied in a fixed order: greens pin their position, then each yellow
        letter is excluded from its own position and added to must-contain,
        then each grey letter is excluded from all positions. A letter that is
        both green and grey therefore ends up excluded everywhere, including at
        its green position (no reconciliation; see Feedback.contradictions()).
        """
        if len(greens) != WORD_LENGTH or len(yellows) != WORD_LENGTH:
            raise ValueError(f"greens and yellows need {WORD_LENGTH} entries each")

        positions = list(_FULL_POSITIONS)
        must = 0
        for i, g in enumerate(greens):
            if g is not None:
                positions[i] = positions[i].restrict_to_single(g)
        for i, letters in enumerate(yellows):
            for y in letters:
                positions[i] = positions[i].exclude(y)
                must |= letter_bit(y)
        grey_mask = mask_of(greys)
        if grey_mask:
            positions = [PositionConstraint(p.mask & ~grey_mask) for p in positions]
        return cls(tuple(positions), must)

    def derive_from_guess(self, guess: Word, answer: Word) -> "ConstraintState":
        """
        The state after playing `guess` when the hidden word is `answer`.

        Each position is judged on its own:
          - same letter as the answer there -> pin (green)
          - letter elsewhere in the answer  -> exclude here, must-contain (yellow)
          - otherwise                       -> exclude everywhere (grey)

        Repeated guess letters are not arbitrated the way the real game does
        it (yellow/grey counts capped by the answer's letter counts), so a
        guess like "geese" may be credited with slightly sharper feedback than
        the game would actually show. The derived state always admits `answer`.
        """
        masks = [p.mask for p in self.positions]
        must = self.must_contain
        grey = 0
        amask = answer.letter_mask
        for i, (bit, abit) in enumerate(zip(guess.bits, answer.bits)):
            if bit == abit:
                masks[i] = bit
            elif amask & bit:
                masks[i] &= ~bit
                must |= bit
            else:
                grey |= bit
        if grey:
            masks = [m & ~grey for m in masks]
        return ConstraintState(tuple(PositionConstraint(m) for m in masks), must)

    def matches(self, word: Word) -> bool:
        """True iff `word` has every must-contain letter and fits each position."""
        if self.must_contain & ~word.letter_mask:
            return False
        for p, bit in zip(self.positions, word.bits):
            if not p.mask & bit:
                return False
        return True

    def describe(self) -> str:
        """Multi-line summary, one line per position plus must-contain."""
        lines = []
        for i, p in enumerate(self.positions):
            n = len(p)
            shown = "any" if n == 26 else (p.letters() or "(none)")
            lines.append(f"  pos {i + 1}: {shown}")
        lines.append(f"  must contain: {mask_letters(self.must_contain) or '-'}")
        return "\n".join(lines)


def filter_answers(state: ConstraintState, candidates: Iterable[Word]) -> List[Word]:
    """
    Keep the candidates consistent with `state`.

    Returns a new list; relative order of `candidates` is preserved and
    nothing is duplicated or reordered.
    """
    return [w for w in candidates if state.matches(w)]
