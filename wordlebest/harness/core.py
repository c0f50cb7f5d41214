"""
Orchestration: feedback + word lists -> best guess.

- suggest: build the constraint state, run the chosen solver, return its
  SearchResult (best guess, score, per-guess scores, remaining answers).

UI-agnostic so it can be reused by the CLI, a notebook or tests. Errors
(NoCandidates, InvalidFeedback, ...) propagate to the caller.
"""

from __future__ import annotations
import logging
import time
from typing import Sequence

from wordlebest.engine import ConstraintState, Feedback, Word
from wordlebest.solvers import SearchResult, create_solver
from wordlebest.solvers.base import Progress

log = logging.getLogger(__name__)

DEFAULT_SOLVER = "expected_left"


def suggest(
        knowledge: Feedback | ConstraintState | None,
        *,
        allowed: Sequence[Word],
        answers: Sequence[Word],
        solver_id: str = DEFAULT_SOLVER,
        strict: bool = False,
        progress: Progress | None = None,
) -> SearchResult:
    """
    Pick the next guess.

    Args:
        knowledge: Feedback (checked for contradictions first), a ready
                   ConstraintState, or None for an opening guess
        allowed:   every word that may be played
        answers:   every word that may be the hidden answer
        solver_id: registered solver to use
        strict:    raise ContradictoryFeedback instead of only logging it
        progress:  optional wrapper around the guess loop (e.g. tqdm)
    """
    if knowledge is None:
        state = ConstraintState.initial()
    elif isinstance(knowledge, Feedback):
        for issue in knowledge.check(strict=strict):
            log.warning("feedback: %s", issue)
        state = knowledge.to_state()
    else:
        state = knowledge
    log.debug("constraint state:\n%s", state.describe())

    solver = create_solver(solver_id)
    solver.reset(allowed=allowed, answers=answers)

    t0 = time.perf_counter()
    result = solver.evaluate(state, progress=progress)
    log.info("%s search took %.2fs", solver.id, time.perf_counter() - t0)
    return result
