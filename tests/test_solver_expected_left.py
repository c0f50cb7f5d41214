import logging

import pytest
from wordlebest.engine import ConstraintState, NoCandidates, Word, filter_answers, parse_words
from wordlebest.solvers import create_solver, get_solver_ids, select_best_guess
from wordlebest.solvers import expected_left  # registers

ANSWERS = parse_words(["crane", "stank", "blimp"])


def _explode(_guesses):
    raise AssertionError("scoring loop should not run")


def test_registry():
    assert "expected_left" in get_solver_ids()
    assert isinstance(create_solver("expected_left"), expected_left.ExpectedLeftSolver)
    with pytest.raises(ValueError):
        create_solver("nope")


def test_shortcut_with_two_candidates():
    answers = parse_words(["stank", "blank"])
    allowed = parse_words(["crane", "stank", "blank"])
    r = select_best_guess(ConstraintState.initial(), allowed, answers, progress=_explode)
    assert r.guess == answers[0]
    assert r.shortcut and r.score is None and r.scores == {}
    assert r.possible_answers == answers


def test_perfect_splitter_scores_zero():
    allowed = parse_words(["fuzzy", "crane"])
    r = select_best_guess(ConstraintState.initial(), allowed, ANSWERS)
    assert r.guess == Word.parse("crane")
    assert r.score == 0.0
    # fuzzy shares no letter with any answer: every answer leaves all 3
    assert r.scores[Word.parse("fuzzy")] == pytest.approx(2.0)


def test_ties_go_to_first_in_list():
    a, b = parse_words(["fuzzy", "wuzzy"])
    assert select_best_guess(ConstraintState.initial(), [a, b], ANSWERS).guess == a
    assert select_best_guess(ConstraintState.initial(), [b, a], ANSWERS).guess == b


def test_score_matches_definition():
    answers = parse_words(["crane", "crate", "trace", "react", "caret"])
    allowed = parse_words(["crane", "trace", "cater", "fuzzy"])
    state = ConstraintState.initial()
    r = select_best_guess(state, allowed, answers)
    possible = filter_answers(state, answers)
    for g in allowed:
        costs = [len(filter_answers(state.derive_from_guess(g, a), possible)) - 1
                 for a in possible]
        assert r.scores[g] == pytest.approx(sum(costs) / len(costs))
    assert r.score == min(r.scores.values())
    assert r.ranked()[0] == (r.guess, r.score)
    # fuzzy's five derived states are identical
    assert r.cache_hits >= 4


def test_deterministic():
    answers = parse_words(["crane", "crate", "trace", "react", "caret", "stank", "tansy"])
    allowed = answers + parse_words(["fuzzy", "salet"])
    r1 = select_best_guess(ConstraintState.initial(), allowed, answers)
    r2 = select_best_guess(ConstraintState.initial(), allowed, answers)
    assert (r1.guess, r1.score, r1.scores) == (r2.guess, r2.score, r2.scores)


def test_no_candidates():
    state = ConstraintState.from_feedback([None] * 5, [set()] * 5, "abcdefghijklmnopqrstuvwxyz")
    with pytest.raises(NoCandidates):
        select_best_guess(state, ANSWERS, ANSWERS)


def test_empty_guess_list_is_an_error():
    with pytest.raises(ValueError):
        select_best_guess(ConstraintState.initial(), [], ANSWERS)


def test_progress_wrapper_sees_every_guess():
    seen = []

    def progress(guesses):
        for g in guesses:
            seen.append(g)
            yield g

    allowed = parse_words(["fuzzy", "crane"])
    select_best_guess(ConstraintState.initial(), allowed, ANSWERS, progress=progress)
    assert seen == allowed


def test_debug_log_per_guess(caplog):
    with caplog.at_level(logging.DEBUG, logger="wordlebest.solvers.expected_left"):
        select_best_guess(ConstraintState.initial(), parse_words(["fuzzy", "crane"]), ANSWERS)
    assert "fuzzy: 2.0000" in caplog.text
    assert "best guess crane" in caplog.text


def test_duplicate_guesses_scored_once(caplog):
    allowed = parse_words(["fuzzy", "crane", "fuzzy"])
    with caplog.at_level(logging.INFO, logger="wordlebest.solvers.base"):
        r = select_best_guess(ConstraintState.initial(), allowed, ANSWERS)
    assert list(r.scores) == parse_words(["fuzzy", "crane"])
    assert len(r.ranked()) == 2
    assert "dropped 1 duplicate" in caplog.text
