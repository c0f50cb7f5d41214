from .errors import (
    WordlebestError, InvalidWordFormat, InvalidFeedback, ContradictoryFeedback, NoCandidates,
)
from .words import Word, WORD_LENGTH, ALPHABET, parse_words
from .constraints import PositionConstraint, ConstraintState, filter_answers
from .feedback import Feedback

__all__ = [
    "WordlebestError", "InvalidWordFormat", "InvalidFeedback", "ContradictoryFeedback",
    "NoCandidates", "Word", "WORD_LENGTH", "ALPHABET", "parse_words",
    "PositionConstraint", "ConstraintState", "filter_answers", "Feedback",
]
