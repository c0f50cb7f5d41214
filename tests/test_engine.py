import pytest
from wordlebest.engine import (
    ConstraintState, Feedback, InvalidWordFormat, PositionConstraint, Word, filter_answers,
    parse_words,
)

WORDS = parse_words(["crane", "stank", "blimp", "geese", "eerie", "level", "speed", "abbey",
                     "tansy", "antsy", "thank"])


# --- Word ---
@pytest.mark.parametrize("text", ["abcd", "abcdef", "Crane", "cran3", "crane ", "", "cr-ne"])
def test_word_rejects_malformed(text):
    with pytest.raises(InvalidWordFormat):
        Word.parse(text)


def test_word_value_semantics():
    a, b = Word.parse("level"), Word.parse("level")
    assert a == b and hash(a) == hash(b)
    assert len({a, b, Word.parse("lever")}) == 2
    assert str(a) == "level"
    assert a.letter_at(0) == "l" and a.letter_at(4) == "l"
    assert a.contains_letter("v") and not a.contains_letter("x")
    with pytest.raises(IndexError):
        a.letter_at(5)


# --- PositionConstraint ---
def test_position_constraint_ops():
    p = PositionConstraint.full()
    assert len(p) == 26 and p.contains("q")
    p2 = p.exclude("q")
    assert not p2.contains("q") and len(p2) == 25
    assert p2.exclude("q") == p2  # no-op when absent
    s = p2.restrict_to_single("a")
    assert s.letters() == "a" and "a" in s and "b" not in s


# --- ConstraintState.from_feedback ---
def test_from_feedback_scenario():
    state = ConstraintState.from_feedback(
        [None] * 5,
        [[], [], ["a"], ["t", "n"], ["t"]],
        ["r", "o", "e", "c", "l", "i"],
    )
    # 'a' is excluded at position 2 (0-indexed), so "stank" is out
    assert not state.matches(Word.parse("stank"))
    assert not state.matches(Word.parse("thank"))
    assert state.matches(Word.parse("tansy"))
    assert state.matches(Word.parse("antsy"))
    # must contain a, t, n
    assert not state.matches(Word.parse("bumpy"))


def test_from_feedback_green_and_grey_same_letter_is_order_dependent():
    # greys are applied last, so they wipe out the green pin
    state = ConstraintState.from_feedback(["a", None, None, None, None], [set()] * 5, ["a"])
    assert len(state.positions[0]) == 0
    assert filter_answers(state, WORDS) == []


def test_state_equality_is_structural():
    a = ConstraintState.from_feedback([None] * 5, [[], ["x", "y"], [], [], []], ["q"])
    b = ConstraintState.from_feedback([None] * 5, [[], ["y", "x"], [], [], []], ["q"])
    assert a == b and hash(a) == hash(b)
    assert a != ConstraintState.initial()


# --- derive_from_guess ---
def test_derive_green_yellow_grey():
    s = ConstraintState.initial().derive_from_guess(Word.parse("crane"), Word.parse("stank"))
    assert s.positions[2].letters() == "a"
    assert s.positions[3].letters() == "n"
    for p in s.positions:
        assert not p.contains("c") and not p.contains("r") and not p.contains("e")
    assert s.must_contain == 0  # no yellows here

    s = ConstraintState.initial().derive_from_guess(Word.parse("stank"), Word.parse("antsy"))
    assert not s.positions[0].contains("s") and s.positions[1].contains("s")
    assert s.matches(Word.parse("antsy"))


def test_derive_always_admits_answer():
    for g in WORDS:
        for a in WORDS:
            assert ConstraintState.initial().derive_from_guess(g, a).matches(a), (g, a)


def test_derive_is_idempotent():
    g, a = Word.parse("geese"), Word.parse("eerie")
    s = ConstraintState.initial()
    assert s.derive_from_guess(g, a) == s.derive_from_guess(g, a)


def test_guessing_the_answer_leaves_only_it():
    for a in WORDS:
        post = ConstraintState.initial().derive_from_guess(a, a)
        assert filter_answers(post, WORDS) == [a]


def test_candidates_only_shrink():
    base = Feedback.parse(greys="o").to_state()
    before = filter_answers(base, WORDS)
    for g in WORDS:
        for a in before:
            after = filter_answers(base.derive_from_guess(g, a), WORDS)
            assert set(after) <= set(before)


# --- filter_answers ---
def test_filter_preserves_order_subsequence():
    state = Feedback.parse(yellows="a,,,,").to_state()
    out = filter_answers(state, WORDS)
    assert out == [w for w in WORDS if w.contains_letter("a") and w.letter_at(0) != "a"]
    it = iter(WORDS)
    assert all(w in it for w in out)  # subsequence


def test_layering_feedback_only_narrows():
    fb1 = Feedback.parse("", ",,a,,", "o")
    fb2 = fb1.merge(Feedback.parse("t????", ",n,,,", "lq"))
    s1, s2 = fb1.to_state(), fb2.to_state()

    for p1, p2 in zip(s1.positions, s2.positions):
        assert p2.mask & ~p1.mask == 0
    assert s1.must_contain & ~s2.must_contain == 0
    assert set(filter_answers(s2, WORDS)) <= set(filter_answers(s1, WORDS))
    assert filter_answers(s1, WORDS) == parse_words(["abbey", "tansy", "antsy"])
    assert filter_answers(s2, WORDS) == [Word.parse("tansy")]
