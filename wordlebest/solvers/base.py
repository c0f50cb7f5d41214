from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Type

from wordlebest.engine import ConstraintState, Word

log = logging.getLogger(__name__)

# ---- Global solver registry ----
REGISTRY: Dict[str, Type["BaseSolver"]] = {}

# Wraps the guess iterable, e.g. functools.partial(tqdm, unit="guess")
Progress = Callable[[Iterable[Word]], Iterable[Word]]


def register(cls: Type["BaseSolver"]) -> Type["BaseSolver"]:
    """
    Decorator: @register on a solver class adds it to REGISTRY by its `id`.
    """
    sid = getattr(cls, "id", None)
    if not sid:
        raise ValueError(f"{cls.__name__} must define a non-empty `id`")
    if sid in REGISTRY:
        raise ValueError(f"Duplicate solver id: {sid}")
    REGISTRY[sid] = cls
    return cls


@dataclass
class SearchResult:
    """
    Outcome of one best-guess search.

    `score` is None and `scores` empty when the search was short-circuited
    (fewer than three candidates left, so the first one is simply played).
    """
    guess: Word
    score: Optional[float]
    possible_answers: List[Word]
    scores: Dict[Word, float] = field(default_factory=dict)
    shortcut: bool = False
    cache_hits: int = 0
    cache_misses: int = 0

    def ranked(self, top: int | None = None) -> List[tuple]:
        """(guess, score) sorted by score, ties in original guess order."""
        items = sorted(self.scores.items(), key=lambda kv: kv[1])
        return items[:top] if top is not None else items


# ---- Base class that solvers inherit ----
class BaseSolver:
    id = "base"
    name = "Base"
    version = "0.0.0"

    def __init__(self):
        self.allowed: List[Word] = []
        self.answers: List[Word] = []

    def reset(self, *, allowed: Iterable[Word], answers: Iterable[Word]) -> None:
        """
        Store the word lists. Repeated guesses are dropped (first occurrence
        kept) so every guess is scored, and reported, exactly once.
        """
        allowed = list(allowed)
        self.allowed = list(dict.fromkeys(allowed))
        if len(self.allowed) != len(allowed):
            log.info("dropped %d duplicate guess(es) from the allowed list",
                     len(allowed) - len(self.allowed))
        self.answers = list(answers)

    def evaluate(self, state: ConstraintState, *,
                 progress: Progress | None = None) -> SearchResult:
        raise NotImplementedError("Override in subclass")

    def next_guess(self, state: ConstraintState) -> Word:
        return self.evaluate(state).guess
