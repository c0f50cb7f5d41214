import pytest
from wordlebest.engine import ContradictoryFeedback, Feedback, InvalidFeedback, Word
from wordlebest.engine.feedback import (
    parse_greens, parse_greys, parse_history_item, parse_yellows,
)


def test_parse_fields():
    assert parse_greens("??a?k") == (None, None, "a", None, "k")
    assert parse_greens("") == (None,) * 5
    assert parse_yellows(",,a,tn,t") == (frozenset(), frozenset(), {"a"}, {"t", "n"}, {"t"})
    assert parse_greys("roe, cli") == frozenset("roecli")


@pytest.mark.parametrize("fn,text", [
    (parse_greens, "ab"),
    (parse_greens, "??A?k"),
    (parse_yellows, ",a"),
    (parse_yellows, ",,a,t1,"),
    (parse_greys, "ab3"),
    (parse_history_item, "crane"),
])
def test_parse_rejects_malformed(fn, text):
    with pytest.raises(InvalidFeedback):
        fn(text)


def test_feedback_matches_raw_state():
    fb = Feedback.parse("", ",,a,tn,t", "roecli")
    assert fb.contradictions() == []
    state = fb.to_state()
    assert state.matches(Word.parse("tansy"))
    assert not state.matches(Word.parse("stank"))


def test_from_history():
    fb = Feedback.from_history([("crane", "--yg-")])
    assert fb.greens == (None, None, None, "n", None)
    assert fb.yellows[2] == {"a"}
    assert fb.greys == {"c", "r", "e"}


def test_from_history_repeated_letter_grey_means_not_here():
    # second 'e' is grey but the first is green: 'e' is not absent
    fb = Feedback.from_history([("speed", "--g-y")])
    assert fb.greens[2] == "e"
    assert fb.yellows[3] == {"e"}
    assert fb.yellows[4] == {"d"}
    assert fb.greys == {"s", "p"}
    assert fb.contradictions() == []


def test_from_history_rejects_bad_entries():
    with pytest.raises(InvalidFeedback):
        Feedback.from_history([("cran", "--yg-")])
    with pytest.raises(InvalidFeedback):
        Feedback.from_history([("crane", "--yq-")])
    with pytest.raises(InvalidFeedback):
        Feedback.from_history([("crane", "--y")])


def test_merge():
    a = Feedback.parse("a????", "", "z")
    b = Feedback.parse("b???e", ",x,,,", "q")
    m = a.merge(b)
    assert m.greens == ("a", None, None, None, "e")
    assert m.yellows[1] == {"x"}
    assert m.greys == {"z", "q"}


def test_contradictions_reported_and_strict():
    fb = Feedback.parse("a????", "", "a")
    issues = fb.contradictions()
    assert issues and "'a'" in issues[0]
    assert fb.check() == issues
    with pytest.raises(ContradictoryFeedback):
        fb.check(strict=True)

    fb = Feedback.parse("a????", "a,,,,", "")
    assert any("position 1" in i for i in fb.contradictions())


def test_as_dict():
    fb = Feedback.parse("??a?k", ",,a,tn,t", "roecli")
    assert fb.as_dict() == {"greens": "??a?k", "yellows": ",,a,nt,t", "greys": "ceilor"}


def test_merge_reports_clashing_greens():
    m = Feedback.parse("a????").merge(Feedback.parse("b????"))
    assert m.greens[0] == "a"
    assert m.contradictions() == ["position 1 is green 'a' and also green 'b'"]
    with pytest.raises(ContradictoryFeedback):
        m.check(strict=True)
    # clashes survive further merging
    assert m.merge(Feedback.parse(greys="z")).contradictions() == m.contradictions()


def test_from_history_reports_clashing_greens():
    fb = Feedback.from_history([("crane", "g----"), ("blimp", "g----")])
    assert fb.greens[0] == "c"
    assert "position 1 is green 'c' and also green 'b'" in fb.contradictions()


def test_from_history_same_green_twice_is_fine():
    fb = Feedback.from_history([("crane", "g----"), ("clump", "g----")])
    assert fb.green_conflicts == ()
    assert not any("also green" in i for i in fb.contradictions())
