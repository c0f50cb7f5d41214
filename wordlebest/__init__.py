"""Next-best-guess finder for Wordle-style puzzles."""

__version__ = "0.1.0"
