"""
Output utilities for a search run.

Responsibilities:
- result_to_dict:   JSON-friendly summary of a SearchResult.
- write_scores_csv: per-guess diagnostics, one row per scored guess.
- write_manifest:   JSON manifest with config, feedback, result and word-list report.
- timestamp_id:     stable UTC run ID string.
- git_commit_or_unknown: short commit hash for reproducibility, if any.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict
import csv
import json
import subprocess
import datetime as dt

from wordlebest.solvers import SearchResult


def result_to_dict(result: SearchResult, top: int | None = 10) -> Dict:
    """
    Summary of a search; `top` limits how many ranked guesses are included
    (None = all).
    """
    return {
        "guess": str(result.guess),
        "score": result.score,
        "shortcut": result.shortcut,
        "num_possible": len(result.possible_answers),
        "possible_answers": [str(w) for w in result.possible_answers],
        "cache": {"hits": result.cache_hits, "misses": result.cache_misses},
        "top_guesses": [
            {"guess": str(g), "score": s} for g, s in result.ranked(top)
        ],
    }


def write_scores_csv(result: SearchResult, path: str) -> str:
    """
    Serialize per-guess scores to CSV.

    Schema (columns): rank, guess, score
    Sorted by score; equal scores keep the allowed-list order, so rank 1 is
    always the chosen guess. Empty (header only) when the search was
    short-circuited.
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    with p.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=["rank", "guess", "score"])
        w.writeheader()
        for rank, (g, s) in enumerate(result.ranked(), start=1):
            w.writerow({"rank": rank, "guess": str(g), "score": round(s, 6)})

    return str(p)


def write_manifest(manifest: Dict, path: str) -> str:
    """
    Write a JSON manifest.

    Typical keys:
      - run_id, git_commit
      - config: CLI args
      - feedback: Feedback.as_dict()
      - wordlists: output of datasets.validate_wordlists(...)
      - result: result_to_dict(...)
    """
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    with p.open("w", encoding="utf-8") as f:
        json.dump(manifest, f, indent=2)
    return str(p)


def timestamp_id() -> str:
    """
    Compact UTC timestamp suitable for filenames, e.g. 20250820T024121Z.
    """
    return dt.datetime.now(dt.timezone.utc).strftime("%Y%m%dT%H%M%SZ")


def git_commit_or_unknown() -> str:
    """
    Short git hash of the current repo state, or 'unknown' when git is
    missing or this isn't a checkout.
    """
    try:
        return (
            subprocess.check_output(
                ["git", "rev-parse", "--short", "HEAD"],
                stderr=subprocess.DEVNULL,
            )
            .decode()
            .strip()
        )
    except (OSError, subprocess.CalledProcessError):
        return "unknown"
