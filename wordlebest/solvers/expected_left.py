"""
Expected Remaining Candidates (ERC), one ply ahead.

Idea:
  For guess g and every still-possible answer a, derive the constraint state
  that playing g against a would leave, and count how many possible answers
  survive it. Each answer contributes (survivors - 1): the answer itself is
  known once it has been hit, so it is not "left over".
      score(g) = (1/n) * sum_a ( |filter(state.derive(g, a), possible)| - 1 )
  Lower is better. Ties go to the earliest guess in the allowed list.

Shortcut:
  With fewer than 3 possible answers, just play the first one.

Cache:
  Different (guess, answer) pairs very often derive the same state, so
  survivor counts are memoized per call, keyed by the ConstraintState value.
  The cache lives only for one evaluate() call.
"""

from __future__ import annotations

import logging
from typing import Dict, Sequence

import numpy as np

from wordlebest.engine import ConstraintState, NoCandidates, Word, filter_answers
from .base import BaseSolver, Progress, SearchResult, register

log = logging.getLogger(__name__)

# Below this many candidates we stop scoring and play the first one.
SHORTCUT_BELOW = 3


@register
class ExpectedLeftSolver(BaseSolver):
    id = "expected_left"
    name = "Expected Remaining Candidates"
    version = "2.0.0"

    def evaluate(self, state: ConstraintState, *,
                 progress: Progress | None = None) -> SearchResult:
        possible = filter_answers(state, self.answers)
        if not possible:
            raise NoCandidates(state, len(self.answers))

        if len(possible) < SHORTCUT_BELOW:
            log.info("only %d candidate(s) left, playing %s", len(possible), possible[0])
            return SearchResult(guess=possible[0], score=None,
                                possible_answers=possible, shortcut=True)

        guesses: Sequence[Word] = self.allowed
        if not guesses:
            raise ValueError("no allowed guesses to score")

        n = len(possible)
        cache: Dict[ConstraintState, int] = {}
        hits = 0
        # integer totals keep ties exact; argmin returns the first minimum
        totals = np.empty(len(guesses), dtype=np.int64)

        iterable = progress(guesses) if progress is not None else guesses
        for idx, guess in enumerate(iterable):
            total = 0
            derive = state.derive_from_guess
            for answer in possible:
                post = derive(guess, answer)
                left = cache.get(post)
                if left is None:
                    left = len(filter_answers(post, possible))
                    cache[post] = left
                else:
                    hits += 1
                total += left - 1
            totals[idx] = total
            log.debug("%s: %.4f", guess, total / n)

        scores = totals / n
        best = int(np.argmin(totals))
        result = SearchResult(
            guess=guesses[best],
            score=float(scores[best]),
            possible_answers=possible,
            scores={g: float(s) for g, s in zip(guesses, scores)},
            cache_hits=hits,
            cache_misses=len(cache),
        )
        log.info("best guess %s (score %.4f) over %d guesses x %d answers; cache %d hits / %d states",
                 result.guess, result.score, len(guesses), n, hits, len(cache))
        return result


def select_best_guess(state: ConstraintState, allowed_guesses: Sequence[Word],
                      allowed_answers: Sequence[Word], *,
                      progress: Progress | None = None) -> SearchResult:
    """One-shot helper: fresh solver, fresh cache, one search."""
    solver = ExpectedLeftSolver()
    solver.reset(allowed=allowed_guesses, answers=allowed_answers)
    return solver.evaluate(state, progress=progress)
