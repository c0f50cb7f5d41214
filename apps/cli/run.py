# apps/cli/run.py
"""
CLI entry point: suggest the next Wordle guess.

This script:
  1) Validates the word lists (prints counts + SHA, checks answers ⊆ allowed).
  2) Loads the lists (any malformed line is an error, reported with its line number).
  3) Builds the feedback from --green/--yellow/--grey and/or --history.
  4) Runs the solver with an optional progress bar over the guess loop and prints
     the best guess, its score and the remaining possible answers.
  5) Optionally writes the per-guess scores (CSV) and a JSON manifest.

Example:
    wordlebest --allowed allowed.txt --answers answers.txt \
        --yellow ",,a,tn,t" --grey roecli --top 5

Exit codes: 0 ok, 1 no candidate answers left, 2 bad input.
"""

from __future__ import annotations

import argparse
import functools
import logging
import sys
import time
from pathlib import Path

from tqdm import tqdm

from wordlebest.datasets import load_words, pretty_summary, validate_wordlists
from wordlebest.engine import Feedback, InvalidFeedback, InvalidWordFormat, NoCandidates
from wordlebest.engine.feedback import parse_history_item
from wordlebest.harness import result_to_dict, suggest, write_manifest, write_scores_csv
from wordlebest.harness.io import git_commit_or_unknown, timestamp_id
from wordlebest.solvers import get_solver_ids

log = logging.getLogger("wordlebest")

EXIT_NO_CANDIDATES = 1
EXIT_BAD_INPUT = 2

# How many remaining answers to print before eliding
MAX_LISTED = 50


def _build_parser() -> argparse.ArgumentParser:
    solver_choices = ", ".join(get_solver_ids())

    ap = argparse.ArgumentParser(description="wordlebest — suggest the next Wordle guess")
    ap.add_argument("--allowed", default="wordlebest/datasets/data/allowed_5.txt",
                    help="allowed guesses, one word per line")
    ap.add_argument("--answers", default="wordlebest/datasets/data/answers_5.txt",
                    help="possible answers, one word per line")
    ap.add_argument("--green", default="",
                    help="known letters by position, '?' for unknown (e.g. '??a?k')")
    ap.add_argument("--yellow", default="",
                    help="5 comma-separated groups of yellow letters per position (e.g. ',,a,tn,t')")
    ap.add_argument("--grey", default="", help="letters known to be absent (e.g. 'roecli')")
    ap.add_argument("--history", nargs="*", default=[], metavar="GUESS:PATTERN",
                    help="played guesses with marks g/y/- (e.g. 'crane:--yg-')")
    ap.add_argument("--solver", default="expected_left",
                    help=f"solver id (one of: {solver_choices})")
    ap.add_argument("--strict", action="store_true",
                    help="reject contradictory feedback instead of warning")
    ap.add_argument("--top", type=int, default=0,
                    help="also print the K best-scoring guesses")
    ap.add_argument("--scores-csv", help="write every guess's score to this CSV")
    ap.add_argument("--manifest", help="write a JSON run manifest to this path")
    ap.add_argument(
        "--progress",
        choices=["auto", "bar", "plain", "off"],
        default="auto",
        help="progress over the guess loop (auto=bar when stderr is a terminal, else plain text)",
    )
    ap.add_argument("-v", "--verbose", action="count", default=0,
                    help="-v for info, -vv for per-guess debug scores")
    return ap


def _feedback_from_args(args) -> Feedback:
    fb = Feedback.parse(args.green, args.yellow, args.grey)
    if args.history:
        fb = fb.merge(Feedback.from_history(parse_history_item(h) for h in args.history))
    return fb


def _plain_progress(guesses, every: float = 1.0):
    """Pass guesses through, writing a status line to stderr at most every `every` seconds."""
    total = len(guesses)
    start = time.time()
    last_print = 0.0
    for idx, guess in enumerate(guesses, 1):
        yield guess
        now = time.time()
        if (now - last_print >= every) or (idx == total):
            elapsed = now - start
            rate = (idx / elapsed) if elapsed > 0 else 0.0
            remaining = (total - idx) / rate if rate > 0 else 0.0
            pct = 100.0 * idx / max(1, total)
            sys.stderr.write(
                f"\rscored {idx}/{total} guesses {pct:5.1f}% | elapsed {elapsed:6.1f}s | ETA {remaining:5.1f}s"
            )
            sys.stderr.flush()
            last_print = now
    sys.stderr.write("\n")
    sys.stderr.flush()


def _progress(mode: str):
    if mode == "auto":
        mode = "bar" if sys.stderr.isatty() else "plain"
    if mode == "bar":
        return functools.partial(tqdm, ncols=80, desc="Scoring", unit="guess")
    if mode == "plain":
        return _plain_progress
    return None


def main(argv=None) -> int:
    args = _build_parser().parse_args(argv)

    level = {0: logging.WARNING, 1: logging.INFO}.get(args.verbose, logging.DEBUG)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    try:
        # 1) word-list report (informational; load_words below is the hard check)
        rep = validate_wordlists(args.answers, args.allowed)
        log.info(pretty_summary(rep))
        for issue in rep["issues"]:
            log.warning("wordlists: %s", issue)

        # 2) + 3) boundary parsing: fail fast on bad input
        allowed = load_words(args.allowed)
        answers = load_words(args.answers)
        feedback = _feedback_from_args(args)

        # 4) search
        result = suggest(feedback, allowed=allowed, answers=answers,
                         solver_id=args.solver, strict=args.strict,
                         progress=_progress(args.progress))
    except FileNotFoundError as e:
        print(f"error: file not found: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except (InvalidWordFormat, InvalidFeedback) as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except ValueError as e:
        # unknown solver id, empty guess list
        print(f"error: {e}", file=sys.stderr)
        return EXIT_BAD_INPUT
    except NoCandidates as e:
        print(f"error: {e}", file=sys.stderr)
        return EXIT_NO_CANDIDATES

    score = "n/a (fewer than 3 candidates)" if result.score is None else f"{result.score:.4f}"
    print(f"Best guess: {result.guess}")
    print(f"Expected remaining candidates: {score}")
    remaining = [str(w) for w in result.possible_answers]
    shown = ", ".join(remaining[:MAX_LISTED])
    if len(remaining) > MAX_LISTED:
        shown += f", ... (+{len(remaining) - MAX_LISTED} more)"
    print(f"Remaining possible answers ({len(remaining)}): {shown}")

    if args.top and result.scores:
        print(f"Top {args.top} guesses:")
        for rank, (g, s) in enumerate(result.ranked(args.top), start=1):
            print(f"  {rank:>3}. {g}  {s:.4f}")

    # 5) optional outputs
    if args.scores_csv:
        print(f"Wrote: {write_scores_csv(result, args.scores_csv)}")
    if args.manifest:
        manifest = {
            "run_id": timestamp_id(),
            "git_commit": git_commit_or_unknown(),
            "config": vars(args),
            "feedback": feedback.as_dict(),
            "wordlists": rep,
            "result": result_to_dict(result, top=args.top or 10),
        }
        print(f"Wrote: {write_manifest(manifest, str(Path(args.manifest)))}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
