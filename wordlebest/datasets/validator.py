"""
Word-list validator.

What this module does:
- Check a pair of word lists: the answers list (possible hidden words) and
  the allowed list (every word that may be played as a guess).
- Enforce formatting rules (5 lowercase letters a–z, one per line).
- Count duplicates and invalid lines (with the first few line numbers),
  compute SHA-256 of the raw files.
- Check that answers ⊆ allowed.
- Return a machine-readable dict (for the run manifest) and a one-line summary.

Typical use:
    from wordlebest.datasets import validate_wordlists, pretty_summary
    rep = validate_wordlists("data/answers.txt", "data/allowed.txt")
    print(pretty_summary(rep))

Unlike load_words(), this never raises on bad lines; it reports them.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict, field
from pathlib import Path
from typing import Dict, List, Tuple
import hashlib

from wordlebest.engine import InvalidWordFormat, Word, WORD_LENGTH

# How many offending line numbers to keep per file
MAX_REPORTED_LINES = 5


@dataclass
class FileReport:
    """Per-file diagnostics and metadata."""
    path: str
    exists: bool
    count: int               # valid words
    sha256: str              # raw bytes; empty if missing
    unique_count: int
    invalid_lines: int
    invalid_examples: List[str] = field(default_factory=list)   # "lineno: text"


@dataclass
class ValidationReport:
    """Validation result for the (answers, allowed) pair."""
    N: int
    answers: FileReport
    allowed: FileReport
    answers_subset_allowed: bool
    passed: bool
    issues: List[str]


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def _load_and_check(path: Path) -> Tuple[List[str], int, List[str]]:
    """
    Returns (valid_words, invalid_count, invalid_examples).

    Blank lines are skipped, like load_words() does. A line that isn't
    valid UTF-8 counts as invalid.
    """
    valid: List[str] = []
    invalid = 0
    examples: List[str] = []

    with path.open("rb") as f:
        for lineno, raw in enumerate(f, start=1):
            try:
                w = raw.decode("utf-8").strip()
                if not w:
                    continue
                valid.append(str(Word.parse(w)))
            except (UnicodeDecodeError, InvalidWordFormat):
                invalid += 1
                if len(examples) < MAX_REPORTED_LINES:
                    examples.append(f"{lineno}: {raw.strip()!r}")

    return valid, invalid, examples


def _file_report(path: Path) -> Tuple[FileReport, set]:
    words, invalid, examples = _load_and_check(path)
    uniq = set(words)
    rep = FileReport(
        path=str(path),
        exists=True,
        count=len(words),
        sha256=_sha256_file(path),
        unique_count=len(uniq),
        invalid_lines=invalid,
        invalid_examples=examples,
    )
    return rep, uniq


def validate_wordlists(answers_path: str, allowed_path: str) -> Dict:
    """
    Validate the answers/allowed word lists.

    Returns a JSON-serializable dict (ValidationReport schema). `passed` is
    strict: both files present and non-empty, no invalid lines, answers ⊆
    allowed. Duplicates are reported in `issues` but do not fail the check.
    """
    issues: List[str] = []

    ans_p = Path(answers_path)
    all_p = Path(allowed_path)

    if not ans_p.exists() or not all_p.exists():
        if not ans_p.exists():
            issues.append(f"answers file not found: {answers_path}")
        if not all_p.exists():
            issues.append(f"allowed file not found: {allowed_path}")
        rep = ValidationReport(
            N=WORD_LENGTH,
            answers=FileReport(str(answers_path), ans_p.exists(), 0, "", 0, 0),
            allowed=FileReport(str(allowed_path), all_p.exists(), 0, "", 0, 0),
            answers_subset_allowed=False,
            passed=False,
            issues=issues,
        )
        return asdict(rep)

    ans_report, answers_set = _file_report(ans_p)
    all_report, allowed_set = _file_report(all_p)

    subset_ok = answers_set.issubset(allowed_set)
    if not subset_ok:
        missing = sorted(answers_set - allowed_set)[:5]
        issues.append(f"answers not subset of allowed (e.g., {missing})")

    for label, r in (("answers", ans_report), ("allowed", all_report)):
        if r.count == 0:
            issues.append(f"{label} file contains 0 valid words")
        if r.invalid_lines:
            issues.append(f"{label} has {r.invalid_lines} invalid line(s), first: "
                          + ", ".join(r.invalid_examples))
        if r.count != r.unique_count:
            issues.append(f"{label} contains {r.count - r.unique_count} duplicate line(s)")

    passed = (
            subset_ok
            and ans_report.invalid_lines == 0
            and all_report.invalid_lines == 0
            and ans_report.count > 0
            and all_report.count > 0
    )

    rep = ValidationReport(
        N=WORD_LENGTH,
        answers=ans_report,
        allowed=all_report,
        answers_subset_allowed=subset_ok,
        passed=passed,
        issues=issues,
    )
    return asdict(rep)


def pretty_summary(report: Dict) -> str:
    """
    One-liner for the console, e.g.
        answers=2315 (uniq=2315, sha=abc123...) | allowed=12972 (uniq=12972, sha=def456...) | answers⊆allowed=True | OK
    """
    a = report["answers"]
    b = report["allowed"]
    status = "OK" if report["passed"] else "FAIL"
    a_sha = (a.get("sha256") or "")[:12]
    b_sha = (b.get("sha256") or "")[:12]
    return (
        f"answers={a['count']} (uniq={a['unique_count']}, sha={a_sha}) "
        f"| allowed={b['count']} (uniq={b['unique_count']}, sha={b_sha}) "
        f"| answers⊆allowed={report['answers_subset_allowed']} | {status}"
    )
