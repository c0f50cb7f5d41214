"""
Error types raised by wordlebest.

  - InvalidWordFormat     : a word is not exactly 5 letters a–z
  - InvalidFeedback       : a green/yellow/grey/history field can't be parsed
  - ContradictoryFeedback : feedback marks a letter both absent and present
  - NoCandidates          : nothing in the answer list fits the knowledge
"""

from __future__ import annotations


class WordlebestError(Exception):
    """Base class for every error this package raises on purpose."""


class InvalidWordFormat(WordlebestError, ValueError):
    def __init__(self, text: str, source: str | None = None):
        self.text = text
        self.source = source
        where = f"{source}: " if source else ""
        super().__init__(f"{where}invalid word {text!r} (need exactly 5 letters a-z)")


class InvalidFeedback(WordlebestError, ValueError):
    def __init__(self, field: str, value, reason: str):
        self.field = field
        self.value = value
        super().__init__(f"invalid {field} {value!r}: {reason}")


class ContradictoryFeedback(InvalidFeedback):
    def __init__(self, issues):
        self.issues = list(issues)
        WordlebestError.__init__(self, "contradictory feedback: " + "; ".join(self.issues))
        self.field = "feedback"
        self.value = None


class NoCandidates(WordlebestError, LookupError):
    """Raised when zero answers are consistent with the current knowledge."""

    def __init__(self, state=None, pool_size: int = 0):
        self.state = state
        self.pool_size = pool_size
        super().__init__(
            f"no candidate answers left out of {pool_size} "
            "(feedback is contradictory or too restrictive)"
        )
