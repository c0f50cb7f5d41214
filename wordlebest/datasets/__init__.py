from .validator import validate_wordlists, pretty_summary
from .io import read_lines, parse_lines, load_words

__all__ = ["validate_wordlists", "pretty_summary", "read_lines", "parse_lines", "load_words"]
